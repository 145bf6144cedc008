"""
Logging configuration for the stock metadata tool.
"""

import datetime
import logging
import os
import sys
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# Third-party loggers that are chatty at INFO and DEBUG
NOISY_LOGGERS = ('PIL', 'urllib3', 'requests', 'exiftool')


def _resolve_log_file(config, log_prefix: Optional[str]) -> Optional[str]:
    if config.log_file:
        return config.log_file
    if log_prefix:
        timestamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
        return f"{log_prefix}_{timestamp}.log"
    return None


def _build_handlers(config, log_file: Optional[str]) -> List[logging.Handler]:
    if not log_file:
        return [logging.StreamHandler()]

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    handlers = [logging.FileHandler(log_file)]
    # Mirror to the console in debug mode
    if config.debug_mode:
        handlers.append(logging.StreamHandler(sys.stdout))
    return handlers


def _log_config_summary(config) -> None:
    logging.debug("Debug mode enabled")
    logging.debug(f"Python version: {sys.version}")
    logging.debug(f"Platform: {sys.platform}")
    logging.debug("Configuration summary:")
    logging.debug(f"  Metadata language: {config.metadata_language}")
    logging.debug(f"  Max retries: {config.max_retries}")
    logging.debug(f"  Request interval: {config.request_interval_ms} ms")
    logging.debug(f"  Request timeout: {config.request_timeout_ms} ms")
    logging.debug(f"  Max preview resolution: {config.preview_max_resolution}")
    logging.debug(f"  Backups: {'enabled' if config.backup_enabled else 'disabled'}")


def setup_logging(config, log_prefix: Optional[str] = None) -> None:
    """
    Configure logging based on settings.

    Logs go to ``config.log_file`` when set, to a timestamped file when only
    a prefix is given, and to the console otherwise. Debug mode adds a
    console handler next to a log file.

    Args:
        config: Application configuration
        log_prefix: Optional prefix for the log file name
    """
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    log_file = _resolve_log_file(config, log_prefix)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=_build_handlers(config, log_file)
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"Logging initialized. Using model: {config.provider.model}")
    if log_file:
        logging.info(f"Writing log to {log_file}")

    if config.debug_mode:
        _log_config_summary(config)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name."""
    return logging.getLogger(name)
