"""
Exception types raised by the metadata collaborators.
"""


class StockMetadataError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(StockMetadataError):
    """Raised when a required setting (such as the API key) is missing."""


class GenerationError(StockMetadataError):
    """Raised when the AI service fails or returns unusable content."""


class UnsupportedFormatError(StockMetadataError):
    """Raised for files whose extension has no registered processor."""


class MetadataIOError(StockMetadataError):
    """Raised when embedded metadata cannot be read, written or deleted."""
