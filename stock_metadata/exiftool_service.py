"""
Reading, writing and deleting embedded metadata tags through ExifTool.
"""

import threading
from typing import Any, Dict, Iterable, List, Optional

from exiftool import ExifToolHelper
from exiftool.exceptions import ExifToolException

from .exceptions import MetadataIOError
from .logging_setup import get_logger
from .models import Metadata, RawMetadata, TechnicalMetadata

logger = get_logger(__name__)

TITLE_TAGS = ('Title', 'ObjectName')
DESCRIPTION_TAGS = ('Description', 'Caption-Abstract')
KEYWORD_TAGS = ('Keywords', 'Subject')
STOCK_TAGS = set(TITLE_TAGS + DESCRIPTION_TAGS + KEYWORD_TAGS)

TECHNICAL_TAGS = {
    'Make': 'make',
    'Model': 'model',
    'LensModel': 'lens_model',
    'ISO': 'iso',
    'FNumber': 'f_number',
    'ExposureTime': 'exposure_time',
    'FocalLength': 'focal_length',
    'ImageWidth': 'image_width',
    'ImageHeight': 'image_height',
    'DateTimeOriginal': 'date_time_original',
    'CreateDate': 'create_date',
    'ModifyDate': 'modify_date',
    'GPSLatitude': 'gps_latitude',
    'GPSLongitude': 'gps_longitude',
    'GPSAltitude': 'gps_altitude',
    'FileSize': 'file_size',
    'FileType': 'file_type',
    'MIMEType': 'mime_type',
}

# ExifTool bookkeeping that is not image metadata
IGNORED_TAGS = {
    'SourceFile', 'ExifToolVersion', 'Directory', 'FileName',
    'FilePermissions', 'FileAccessDate', 'FileInodeChangeDate',
    'FileModifyDate', 'FileTypeExtension', 'Warning', 'Error',
}

OVERWRITE_ORIGINAL = '-overwrite_original'


def _first_string(tags: Dict[str, Any], names: Iterable[str]) -> str:
    for name in names:
        value = tags.get(name)
        if isinstance(value, str):
            return value
    return ''


def _keywords(tags: Dict[str, Any]) -> List[str]:
    for name in KEYWORD_TAGS:
        value = tags.get(name)
        if not value:
            continue
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value if str(item).strip()]
        return [str(value)]
    return []


def parse_stock_metadata(tags: Dict[str, Any]) -> Metadata:
    """
    Extract title, description and keywords from a tag dictionary.

    Args:
        tags: Tags as returned by ExifTool

    Returns:
        Stock metadata found in the tags
    """
    return Metadata(
        title=_first_string(tags, TITLE_TAGS),
        description=_first_string(tags, DESCRIPTION_TAGS),
        keywords=_keywords(tags),
    )


def categorize_tags(tags: Dict[str, Any]) -> RawMetadata:
    """
    Group all tags of a file into stock, technical and other buckets.

    Args:
        tags: Tags as returned by ExifTool

    Returns:
        RawMetadata with the tag count of the file
    """
    technical = TechnicalMetadata()
    other = {}

    for name, value in tags.items():
        if name in IGNORED_TAGS or name in STOCK_TAGS:
            continue
        if name in TECHNICAL_TAGS:
            setattr(technical, TECHNICAL_TAGS[name], value)
        else:
            other[name] = value

    return RawMetadata(
        stock=parse_stock_metadata(tags),
        technical=technical,
        other=other,
        tag_count=len([name for name in tags if name != 'SourceFile']),
    )


class ExifToolService:
    """Wrapper around one persistent ExifTool process."""

    def __init__(self, executable: Optional[str] = None):
        """
        Initialize the service. The ExifTool process starts on first use.

        Args:
            executable: Path to the exiftool binary, None to search PATH
        """
        self.executable = executable
        self._helper = None
        # ExifTool talks over a single pipe
        self._lock = threading.Lock()

    def _get_helper(self) -> ExifToolHelper:
        if self._helper is None:
            kwargs = {'common_args': []}
            if self.executable:
                kwargs['executable'] = self.executable
            self._helper = ExifToolHelper(**kwargs)
            self._helper.run()
            logger.debug("Started ExifTool process")
        return self._helper

    def cleanup(self) -> None:
        """Terminate the ExifTool process if it is running."""
        with self._lock:
            if self._helper is not None:
                try:
                    self._helper.terminate()
                finally:
                    self._helper = None
                logger.debug("ExifTool process terminated")

    def read_tags(self, file_path: str) -> Dict[str, Any]:
        """
        Read every tag of a file.

        Args:
            file_path: Path to the image file

        Returns:
            Dictionary of tag name to value

        Raises:
            MetadataIOError: If ExifTool fails
        """
        try:
            with self._lock:
                blocks = self._get_helper().get_metadata([file_path])
        except (ValueError, TypeError, ExifToolException) as e:
            raise MetadataIOError(f"Failed to read metadata from {file_path}: {str(e)}") from e

        return blocks[0] if blocks else {}

    def read_metadata(self, file_path: str) -> Metadata:
        """Read the stock metadata of a file."""
        return parse_stock_metadata(self.read_tags(file_path))

    def read_all_metadata(self, file_path: str) -> RawMetadata:
        """Read all tags of a file, grouped by category."""
        return categorize_tags(self.read_tags(file_path))

    def write_tags(self, file_path: str, tags: Dict[str, Any]) -> None:
        """
        Write tags into a file, replacing the original.

        Raises:
            MetadataIOError: If ExifTool fails
        """
        try:
            with self._lock:
                self._get_helper().set_tags([file_path], tags, params=[OVERWRITE_ORIGINAL])
        except (ValueError, TypeError, ExifToolException) as e:
            raise MetadataIOError(f"Failed to write metadata to {file_path}: {str(e)}") from e

        logger.info(f"Wrote {len(tags)} tags to {file_path}")

    def delete_tags(self, file_path: str, tag_names: Iterable[str]) -> None:
        """
        Delete the named tags from a file.

        Raises:
            MetadataIOError: If ExifTool fails
        """
        tag_names = list(tag_names)
        if not tag_names:
            return

        # An empty value tells ExifTool to delete the tag
        self.write_tags(file_path, {name: '' for name in tag_names})
        logger.info(f"Deleted tags {', '.join(tag_names)} from {file_path}")

    def delete_all_metadata(self, file_path: str) -> None:
        """
        Remove all writable metadata from a file.

        Raises:
            MetadataIOError: If ExifTool fails
        """
        try:
            with self._lock:
                self._get_helper().execute('-all=', OVERWRITE_ORIGINAL, file_path)
        except (ValueError, TypeError, ExifToolException) as e:
            raise MetadataIOError(f"Failed to strip metadata from {file_path}: {str(e)}") from e

        logger.info(f"Stripped all metadata from {file_path}")
