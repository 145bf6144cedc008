"""
Configuration handling for the stock metadata tool.
"""

import json
import os
import re
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any

from .constants import (
    DEFAULT_MODEL,
    DEFAULT_LANGUAGE,
    OPENROUTER_API_URL,
    MAX_PREVIEW_RESOLUTION,
    MAX_RETRY_COUNT,
    PREVIEW_CONCURRENCY,
    REQUEST_INTERVAL_MS,
    REQUEST_TIMEOUT_MS,
    THUMBNAIL_SIZE,
)
from .logging_setup import get_logger
from .prompt_templates import DEFAULT_SYSTEM_PROMPT

API_KEY_ENV_VAR = "OPENROUTER_API_KEY"
ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

logger = get_logger(__name__)


@dataclass
class OpenRouterConfig:
    """OpenRouter API configuration."""
    provider_type: str = "openrouter"
    api_key: str = ""
    api_url: str = OPENROUTER_API_URL
    model: str = DEFAULT_MODEL
    site_url: str = "https://stockmetadata.pro"
    title: str = "StockMetadata Pro"


@dataclass
class AppConfig:
    """Main application configuration."""
    provider: OpenRouterConfig = field(default_factory=OpenRouterConfig)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    metadata_language: str = DEFAULT_LANGUAGE
    backup_enabled: bool = True
    backup_path: str = ""
    max_retries: int = MAX_RETRY_COUNT
    request_interval_ms: int = REQUEST_INTERVAL_MS
    request_timeout_ms: int = REQUEST_TIMEOUT_MS
    preview_max_resolution: int = MAX_PREVIEW_RESOLUTION
    thumbnail_size: int = THUMBNAIL_SIZE
    preview_concurrency: int = PREVIEW_CONCURRENCY
    log_level: str = "INFO"
    log_file: Optional[str] = None
    debug_mode: bool = False


def _expand_env_vars(value: Any) -> Any:
    """
    Replace ``${NAME}`` references with environment values, recursively.

    Unset variables expand to an empty string.

    Args:
        value: A string, or a dict or list containing strings

    Returns:
        The value with every reference expanded
    """
    if isinstance(value, dict):
        return {key: _expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    def lookup(match):
        name = match.group(1)
        if name not in os.environ:
            logger.warning(f"Environment variable {name} not found")
        return os.environ.get(name, "")

    return ENV_VAR_PATTERN.sub(lookup, value)


def config_from_dict(config_dict: Dict[str, Any]) -> AppConfig:
    """
    Build an AppConfig from a flattened settings dictionary.

    Args:
        config_dict: Settings using ``openrouter_*`` keys for the provider

    Returns:
        AppConfig object

    Raises:
        ValueError: If the provider is unsupported
    """
    config_dict = _expand_env_vars(dict(config_dict))

    provider_type = config_dict.pop('provider', 'openrouter')
    if provider_type != 'openrouter':
        raise ValueError(f"Unsupported AI provider: {provider_type}")

    provider_config = OpenRouterConfig(
        api_key=config_dict.pop('openrouter_api_key', '') or os.environ.get(API_KEY_ENV_VAR, ''),
        api_url=config_dict.pop('openrouter_api_url', OPENROUTER_API_URL),
        model=config_dict.pop('openrouter_model', DEFAULT_MODEL),
        site_url=config_dict.pop('openrouter_site_url', "https://stockmetadata.pro"),
        title=config_dict.pop('openrouter_title', "StockMetadata Pro")
    )

    known_fields = set(AppConfig.__dataclass_fields__) - {'provider'}
    unknown = set(config_dict) - known_fields
    if unknown:
        raise ValueError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")

    # An empty prompt in the settings file means "use the default"
    if not config_dict.get('system_prompt'):
        config_dict.pop('system_prompt', None)

    return AppConfig(provider=provider_config, **config_dict)


def load_config(config_path: str, required: bool = True) -> AppConfig:
    """
    Load and validate configuration from JSON file.

    Args:
        config_path: Path to the configuration JSON file
        required: When False, a missing file yields the default configuration

    Returns:
        AppConfig object

    Raises:
        ValueError: If the configuration is invalid
        RuntimeError: If the configuration file cannot be loaded
    """
    config_path = os.path.abspath(os.path.expanduser(config_path))

    if not required and not os.path.exists(config_path):
        return config_from_dict({})

    try:
        with open(config_path, 'r') as cfg:
            config_dict = json.load(cfg)
    except (json.JSONDecodeError, IOError) as e:
        raise RuntimeError(f"Failed to load configuration from {config_path}: {str(e)}")

    if not isinstance(config_dict, dict):
        raise ValueError("Configuration file must contain a JSON object")

    return config_from_dict(config_dict)


def save_config(config: AppConfig, config_path: str) -> None:
    """
    Save configuration to JSON file.

    Args:
        config: AppConfig object
        config_path: Path to save the configuration

    Raises:
        RuntimeError: If the configuration cannot be saved
    """
    try:
        config_dict = asdict(config)

        provider_config = config_dict.pop('provider', {})
        config_dict['provider'] = provider_config.pop('provider_type', 'openrouter')
        for key, value in provider_config.items():
            config_dict[f'openrouter_{key}'] = value

        config_dir = os.path.dirname(os.path.abspath(config_path))
        os.makedirs(config_dir, exist_ok=True)

        with open(config_path, 'w') as f:
            json.dump(config_dict, f, indent=2)
    except (IOError, TypeError) as e:
        raise RuntimeError(f"Failed to save configuration: {str(e)}")
