"""
Cleaning of raw AI output into well-formed stock metadata.
"""

from typing import Any, List, Mapping, Union

from .blacklist import filter_blacklisted
from .constants import (
    TITLE_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    KEYWORDS_MIN_COUNT,
    KEYWORDS_MAX_COUNT,
)
from .models import Metadata, ValidationResult


def _clean_text(value: Any, max_length: int) -> str:
    if not isinstance(value, str):
        return ""
    text = value.strip()
    if len(text) > max_length:
        text = text[:max_length]
    return text


def _clean_keywords(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []

    keywords = [k.lower().strip() for k in value if isinstance(k, str)]
    keywords = [k for k in keywords if k]

    # dict preserves first-seen order
    keywords = list(dict.fromkeys(keywords))
    keywords = filter_blacklisted(keywords)

    # The AI emits the most relevant keywords first
    return keywords[:KEYWORDS_MAX_COUNT]


def normalize_metadata(raw: Union[Mapping[str, Any], Metadata, None]) -> Metadata:
    """
    Clean a raw AI response into a Metadata record.

    Missing or wrongly typed fields fall back to empty values, so this
    function accepts any input and never raises.

    Args:
        raw: Parsed response with optional title, description and keywords

    Returns:
        Normalized Metadata
    """
    if isinstance(raw, Metadata):
        raw = raw.to_dict()
    if not isinstance(raw, Mapping):
        raw = {}

    return Metadata(
        title=_clean_text(raw.get("title"), TITLE_MAX_LENGTH),
        description=_clean_text(raw.get("description"), DESCRIPTION_MAX_LENGTH),
        keywords=_clean_keywords(raw.get("keywords")),
    )


def validate_metadata(raw: Union[Mapping[str, Any], Metadata, None]) -> ValidationResult:
    """
    Normalize a record and report how it compares to stock platform limits.

    Empty fields are errors; values under the recommended minimums are
    warnings.
    """
    cleaned = normalize_metadata(raw)
    errors = []
    warnings = []

    if not cleaned.title:
        errors.append("Title is required")
    elif len(cleaned.title) < TITLE_MIN_LENGTH:
        warnings.append(
            f"Title is {len(cleaned.title)} characters, recommended minimum is {TITLE_MIN_LENGTH}"
        )

    if not cleaned.description:
        errors.append("Description is required")
    elif len(cleaned.description) < DESCRIPTION_MIN_LENGTH:
        warnings.append(
            f"Description is {len(cleaned.description)} characters, "
            f"recommended minimum is {DESCRIPTION_MIN_LENGTH}"
        )

    if not cleaned.keywords:
        errors.append("At least one keyword is required")
    elif len(cleaned.keywords) < KEYWORDS_MIN_COUNT:
        warnings.append(
            f"Only {len(cleaned.keywords)} keywords, recommended minimum is {KEYWORDS_MIN_COUNT}"
        )

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        cleaned_data=cleaned,
    )
