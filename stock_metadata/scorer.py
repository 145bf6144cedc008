"""
Quality scoring of stock metadata.
"""

from .constants import (
    TITLE_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    KEYWORDS_MIN_COUNT,
)
from .models import Metadata

MAX_SCORE = 100


def _score_title(length: int) -> int:
    if TITLE_MIN_LENGTH <= length <= TITLE_MAX_LENGTH:
        points = 20
        if 80 <= length <= 150:  # optimal range
            points += 10
        return points
    if length >= 30:
        return 10
    return 0


def _score_description(length: int) -> int:
    if DESCRIPTION_MIN_LENGTH <= length <= DESCRIPTION_MAX_LENGTH:
        points = 20
        if length >= 120:
            points += 10
        return points
    if length >= 50:
        return 10
    return 0


def _score_keywords(count: int) -> int:
    if count >= 45:
        return 40
    if count >= KEYWORDS_MIN_COUNT:
        return 35
    if count >= 30:
        return 25
    return int(count * 0.5)


def calculate_score(metadata: Metadata) -> int:
    """
    Score metadata from 0 to 100.

    Title and description contribute up to 30 points each, keywords up to 40.

    Args:
        metadata: Normalized metadata

    Returns:
        Integer score in [0, 100]
    """
    score = (
        _score_title(len(metadata.title))
        + _score_description(len(metadata.description))
        + _score_keywords(len(metadata.keywords))
    )
    return min(MAX_SCORE, score)


def get_score_rating(score: int) -> str:
    """Map a score to a rating label."""
    if score >= 80:
        return "excellent"
    if score >= 60:
        return "good"
    if score >= 40:
        return "average"
    return "poor"
