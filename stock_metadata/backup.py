"""
Backup copies of image files taken before their metadata is changed.
"""

import os
import shutil
import time
from typing import Optional

from .logging_setup import get_logger

logger = get_logger(__name__)


def get_default_backup_path() -> str:
    """Get the default backup directory."""
    return os.path.join(os.path.expanduser("~"), ".stock_metadata", "backups")


def create_backup_file(file_path: str, backup_dir: Optional[str] = None) -> str:
    """
    Copy a file into the backup directory.

    The copy is named ``<epoch milliseconds>_<file name>``.

    Args:
        file_path: File to back up
        backup_dir: Target directory, the default directory if empty

    Returns:
        Path of the backup copy
    """
    backup_dir = backup_dir or get_default_backup_path()
    os.makedirs(backup_dir, exist_ok=True)

    timestamp = int(time.time() * 1000)
    backup_path = os.path.join(backup_dir, f"{timestamp}_{os.path.basename(file_path)}")

    shutil.copy2(file_path, backup_path)
    logger.info(f"Backup created: {backup_path}")
    return backup_path
