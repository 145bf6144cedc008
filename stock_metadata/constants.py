"""
Product constants shared by the metadata pipeline.
"""

# Default AI model
DEFAULT_MODEL = "google/gemini-2.0-flash-001"
OPENROUTER_API_URL = "https://openrouter.ai/api/v1/chat/completions"

# File constraints
MAX_FILE_SIZE_MB = 50
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
MIN_RESOLUTION = 500
MAX_PREVIEW_RESOLUTION = 1024
THUMBNAIL_SIZE = 400
AI_JPEG_QUALITY = 75
THUMBNAIL_JPEG_QUALITY = 80
SUPPORTED_EXTENSIONS = [".jpg", ".jpeg", ".png"]
SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png"]

# Metadata constraints
TITLE_MIN_LENGTH = 50
TITLE_MAX_LENGTH = 200
DESCRIPTION_MIN_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 200
KEYWORDS_MIN_COUNT = 40
KEYWORDS_MAX_COUNT = 50

# API constraints
REQUEST_INTERVAL_MS = 500
REQUEST_TIMEOUT_MS = 60000
MAX_RETRY_COUNT = 2
PREVIEW_CONCURRENCY = 3

# Metadata languages
SUPPORTED_LANGUAGES = {
    "en": "English",
    "ru": "Russian",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
}
DEFAULT_LANGUAGE = "en"
