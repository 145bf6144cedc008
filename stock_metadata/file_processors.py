"""
Per-format capabilities, looked up by file extension.

Each supported format supplies how stock metadata is mapped onto tags;
reading and preview extraction are shared by all formats.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .exiftool_service import ExifToolService
from .image_processor import ImageProcessor
from .models import Metadata
from .utils import get_extension


def _keyword_value(metadata: Metadata) -> Any:
    # An empty list writes nothing; an empty string deletes the tag
    return list(metadata.keywords) if metadata.keywords else ''


def jpeg_tags(metadata: Metadata) -> Dict[str, Any]:
    """Tags written to JPEG files (IPTC and XMP)."""
    return {
        'Title': metadata.title,
        'Description': metadata.description,
        'Keywords': _keyword_value(metadata),
        'Subject': _keyword_value(metadata),
    }


def png_tags(metadata: Metadata) -> Dict[str, Any]:
    """Tags written to PNG files. PNG has no IPTC block, only XMP."""
    return {
        'Title': metadata.title,
        'Description': metadata.description,
        'Subject': _keyword_value(metadata),
    }


@dataclass(frozen=True)
class FileProcessor:
    """Capabilities of one image format."""
    name: str
    extensions: Tuple[str, ...]
    mime_types: Tuple[str, ...]
    build_tags: Callable[[Metadata], Dict[str, Any]]

    def can_process(self, file_path: str) -> bool:
        return get_extension(file_path) in self.extensions

    def read_metadata(self, exiftool: ExifToolService, file_path: str) -> Metadata:
        return exiftool.read_metadata(file_path)

    def write_metadata(self, exiftool: ExifToolService, file_path: str, metadata: Metadata) -> None:
        exiftool.write_tags(file_path, self.build_tags(metadata))

    def extract_preview(self, image_processor: ImageProcessor, file_path: str) -> bytes:
        return image_processor.resize(file_path, image_processor.max_resolution)


PROCESSORS = {
    processor.name: processor
    for processor in (
        FileProcessor('jpeg', ('.jpg', '.jpeg'), ('image/jpeg',), jpeg_tags),
        FileProcessor('png', ('.png',), ('image/png',), png_tags),
    )
}

_BY_EXTENSION = {
    extension: processor
    for processor in PROCESSORS.values()
    for extension in processor.extensions
}


def get_processor(file_path: str) -> Optional[FileProcessor]:
    """Get the processor for a file, or None if its format is unsupported."""
    return _BY_EXTENSION.get(get_extension(file_path))


def get_supported_extensions() -> List[str]:
    """All extensions with a registered processor."""
    return [ext for processor in PROCESSORS.values() for ext in processor.extensions]


def get_supported_mime_types() -> List[str]:
    """All MIME types with a registered processor."""
    return [mime for processor in PROCESSORS.values() for mime in processor.mime_types]
