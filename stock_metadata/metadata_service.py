"""
Asynchronous facade over the image, AI and metadata collaborators.

The batch processor talks only to this class. Every method runs the blocking
work (HTTP, Pillow, ExifTool) in the default executor so that the event loop
stays free while a file is being processed.
"""

import asyncio
import base64
from functools import partial
from typing import Any, Callable, Iterable, Optional

from .ai_providers import AiProvider
from .backup import create_backup_file
from .config import AppConfig
from .exceptions import ConfigurationError, UnsupportedFormatError
from .exiftool_service import ExifToolService
from .file_processors import FileProcessor, get_processor
from .image_processor import ImageProcessor
from .logging_setup import get_logger
from .models import Metadata, MetadataResult, RawMetadata
from .prompt_templates import render_system_prompt

logger = get_logger(__name__)


class MetadataService:
    """Generation, preview and tag read/write operations for single files."""

    def __init__(
        self,
        config: AppConfig,
        ai_provider: Optional[AiProvider] = None,
        image_processor: Optional[ImageProcessor] = None,
        exiftool: Optional[ExifToolService] = None,
    ):
        """
        Initialize the service.

        Args:
            config: Application configuration
            ai_provider: AI provider, created from the configuration if omitted
            image_processor: Image processor, created from the configuration if omitted
            exiftool: ExifTool wrapper, a new one if omitted
        """
        self.config = config
        self.ai_provider = ai_provider or AiProvider.get_provider(config)
        self.image_processor = image_processor or ImageProcessor(config)
        self.exiftool = exiftool or ExifToolService()

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args))

    def _require_processor(self, file_path: str) -> FileProcessor:
        processor = get_processor(file_path)
        if processor is None:
            raise UnsupportedFormatError(f"Unsupported file format: {file_path}")
        return processor

    def _backup_if_requested(self, file_path: str, create_backup: Optional[bool]) -> None:
        if create_backup is None:
            create_backup = self.config.backup_enabled
        if create_backup:
            create_backup_file(file_path, self.config.backup_path)

    # Generation

    def generate_for_file_sync(self, file_path: str) -> MetadataResult:
        """
        Resize an image, ask the AI for metadata, then clean and score it.

        Raises:
            ConfigurationError: If no API key is configured
            UnsupportedFormatError: If the file format is not supported
            GenerationError: If the AI call fails or returns invalid content
        """
        if not self.config.provider.api_key:
            raise ConfigurationError("API key not configured")

        processor = self._require_processor(file_path)
        image_bytes = processor.extract_preview(self.image_processor, file_path)
        image_b64 = base64.b64encode(image_bytes).decode('utf-8')

        system_prompt = render_system_prompt(self.config.system_prompt, self.config.metadata_language)

        logger.debug(f"Requesting metadata for {file_path}")
        result = self.ai_provider.generate_metadata(image_b64, system_prompt)
        logger.info(f"Generated metadata for {file_path} (score {result.score})")
        return result

    async def generate_for_file(self, file_path: str) -> MetadataResult:
        return await self._run(self.generate_for_file_sync, file_path)

    # Reading

    async def read_existing_metadata(self, file_path: str) -> RawMetadata:
        """Read all tags of a file grouped into stock, technical and other."""
        return await self._run(self.exiftool.read_all_metadata, file_path)

    def read_preview_sync(self, file_path: str) -> str:
        self._require_processor(file_path)
        return self.image_processor.create_preview(file_path)

    async def read_preview(self, file_path: str) -> str:
        """Thumbnail of a file as a JPEG data URL."""
        return await self._run(self.read_preview_sync, file_path)

    # Writing

    def write_metadata_sync(self, file_path: str, metadata: Metadata,
                            create_backup: Optional[bool] = None) -> None:
        processor = self._require_processor(file_path)
        self._backup_if_requested(file_path, create_backup)
        processor.write_metadata(self.exiftool, file_path, metadata)

    async def write_metadata(self, file_path: str, metadata: Metadata,
                             create_backup: Optional[bool] = None) -> None:
        """
        Embed metadata into a file.

        Args:
            file_path: Image file
            metadata: Title, description and keywords to write
            create_backup: Copy the file first; the configured default if None
        """
        await self._run(self.write_metadata_sync, file_path, metadata, create_backup)

    def delete_metadata_tags_sync(self, file_path: str, tag_names: Iterable[str],
                                  create_backup: Optional[bool] = None) -> None:
        tag_names = list(tag_names)
        if not tag_names:
            return
        self._backup_if_requested(file_path, create_backup)
        self.exiftool.delete_tags(file_path, tag_names)

    async def delete_metadata_tags(self, file_path: str, tag_names: Iterable[str],
                                   create_backup: Optional[bool] = None) -> None:
        """Delete the named tags from a file."""
        await self._run(self.delete_metadata_tags_sync, file_path, tag_names, create_backup)

    def strip_all_metadata_sync(self, file_path: str, create_backup: Optional[bool] = None) -> None:
        self._backup_if_requested(file_path, create_backup)
        self.exiftool.delete_all_metadata(file_path)

    async def strip_all_metadata(self, file_path: str, create_backup: Optional[bool] = None) -> None:
        """Remove all metadata from a file."""
        await self._run(self.strip_all_metadata_sync, file_path, create_backup)

    def close(self) -> None:
        """Release the ExifTool process."""
        self.exiftool.cleanup()
