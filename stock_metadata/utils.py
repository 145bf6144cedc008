"""
Utility functions for stock metadata processing.
"""

import json
import ntpath
import os
import random
import re
import string
import time
from typing import Any, Dict, Optional

from .logging_setup import get_logger

logger = get_logger(__name__)


def extract_json(response_text: str, debug_mode: bool = False) -> Optional[Dict[str, Any]]:
    """
    Extract a JSON object from an AI response.

    Models asked for a JSON object sometimes wrap it in a code block or
    surround it with prose, so those forms are accepted too.

    Args:
        response_text: Text containing JSON
        debug_mode: Whether to log debug information

    Returns:
        Extracted JSON object or None if no object could be parsed
    """
    if not response_text:
        return None

    candidates = [response_text]

    # JSON inside code blocks
    json_pattern = r'```(?:json)?\s*([\s\S]*?)\s*```'
    candidates.extend(re.findall(json_pattern, response_text))

    # Outermost curly braces
    start = response_text.find("{")
    end = response_text.rfind("}")
    if start != -1 and end > start:
        candidates.append(response_text[start:end + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            if debug_mode:
                logger.debug(f"JSON parsing failed for: {candidate[:100]}...")
            continue
        if isinstance(parsed, dict):
            return parsed

    logger.error("Failed to extract JSON object from AI response")
    if debug_mode:
        logger.debug(f"Response text: {response_text[:500]}...")

    return None


def generate_id() -> str:
    """Generate a unique id for a file item."""
    suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{int(time.time() * 1000)}-{suffix}"


def get_file_name(file_path: str) -> str:
    """Get the file name from a path with either separator."""
    return ntpath.basename(file_path) or file_path


def get_extension(file_path: str) -> str:
    """Lowercased extension including the dot."""
    return os.path.splitext(file_path)[1].lower()


def format_file_size(size_bytes: int) -> str:
    """Format a byte count in human readable form."""
    if size_bytes <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB"]
    value = float(size_bytes)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 1):g} {units[index]}"


def truncate(text: str, max_length: int) -> str:
    """Truncate text with an ellipsis."""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."
