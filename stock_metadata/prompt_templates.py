"""
Prompt templates for stock metadata generation.
"""

from .constants import SUPPORTED_LANGUAGES, DEFAULT_LANGUAGE
from .logging_setup import get_logger

logger = get_logger(__name__)

LANGUAGE_PLACEHOLDER = "{{LANGUAGE}}"

DEFAULT_SYSTEM_PROMPT = """You are an expert stock photography metadata specialist. Your task is to analyze images and generate SEO-optimized metadata for microstock platforms (Shutterstock, Adobe Stock, iStock).

## OUTPUT FORMAT
Return a valid JSON object with this exact structure:
{
  "title": "string",
  "description": "string",
  "keywords": ["array", "of", "strings"]
}

## TITLE REQUIREMENTS
- Length: 50-200 characters
- Format: [Main Subject] + [Action/State] + [Context/Setting]
- Start with the main subject (noun)
- Use present tense for actions
- NO articles at the beginning (a, an, the)
- NO punctuation at the end
- NO brand names or trademarked terms

## DESCRIPTION REQUIREMENTS
- Length: 100-200 characters
- One or two complete sentences
- Expand on the title with additional context
- Include 2-3 important keywords naturally
- Describe mood, atmosphere, or use case when relevant

## KEYWORD REQUIREMENTS
- Count: exactly 45-50 keywords
- Format: single words or 2-word phrases, lowercase
- Sorting: by visual relevance (most prominent objects first)
- NO duplicates or near-duplicates
- NO plural forms if singular exists
- NO brand names

## LANGUAGE
Generate all content in: {{LANGUAGE}}

## BLACKLIST - NEVER USE THESE WORDS:
beautiful, gorgeous, stunning, amazing, awesome, perfect, best, nice, good, great,
4k, 8k, hd, high quality, professional, stock photo, royalty free,
wallpaper, background image, copy space, negative space,
copyright, watermark, logo"""


def get_language_name(language_code: str) -> str:
    """
    Resolve a metadata language code to the name used in the prompt.

    Unknown codes fall back to English.
    """
    name = SUPPORTED_LANGUAGES.get((language_code or "").lower())
    if name is None:
        logger.warning(f"Unknown metadata language '{language_code}', using English")
        return SUPPORTED_LANGUAGES[DEFAULT_LANGUAGE]
    return name


def render_system_prompt(template: str, language_code: str) -> str:
    """
    Fill the language placeholder of a system prompt.

    Args:
        template: Prompt text, empty for the default prompt
        language_code: Two-letter metadata language code

    Returns:
        Prompt ready to send to the AI
    """
    prompt = template or DEFAULT_SYSTEM_PROMPT
    return prompt.replace(LANGUAGE_PLACEHOLDER, get_language_name(language_code))
