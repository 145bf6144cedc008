"""
Prepare images for AI analysis and thumbnail previews.
"""

import io
import base64
from typing import Dict, Any
from PIL import Image

from .config import AppConfig
from .constants import AI_JPEG_QUALITY, THUMBNAIL_JPEG_QUALITY
from .logging_setup import get_logger

logger = get_logger(__name__)


class ImageProcessor:
    """Class to handle image resizing for AI analysis and previews."""

    def __init__(self, config: AppConfig):
        """
        Initialize the image processor.

        Args:
            config: Application configuration
        """
        self.config = config
        self.max_resolution = config.preview_max_resolution
        self.thumbnail_size = config.thumbnail_size

    def resize(self, file_path: str, max_dimension: int, quality: int = AI_JPEG_QUALITY) -> bytes:
        """
        Resize an image to fit inside a square and encode it as JPEG.

        Images smaller than the bounds are never enlarged.

        Args:
            file_path: Path to the image file
            max_dimension: Maximum width and height in pixels
            quality: JPEG quality

        Returns:
            JPEG bytes
        """
        with Image.open(file_path) as img:
            img_copy = img.copy()

        try:
            if img_copy.width > max_dimension or img_copy.height > max_dimension:
                img_copy.thumbnail((max_dimension, max_dimension))
                logger.debug(f"Resized {file_path} to {img_copy.width}x{img_copy.height}")

            # JPEG has no alpha channel or palette
            if img_copy.mode != 'RGB':
                img_copy = img_copy.convert('RGB')

            buffer = io.BytesIO()
            img_copy.save(buffer, format="JPEG", quality=quality)
            return buffer.getvalue()
        finally:
            img_copy.close()

    def create_preview(self, file_path: str) -> str:
        """
        Create a thumbnail preview as a JPEG data URL.

        Args:
            file_path: Path to the image file

        Returns:
            ``data:image/jpeg;base64,...`` string
        """
        img_bytes = self.resize(file_path, self.thumbnail_size, THUMBNAIL_JPEG_QUALITY)
        return f"data:image/jpeg;base64,{base64.b64encode(img_bytes).decode('utf-8')}"

    def get_image_dimensions(self, file_path: str) -> Dict[str, Any]:
        """
        Get the dimensions of an image.

        Args:
            file_path: Path to the image file

        Returns:
            Dictionary with image dimensions and format
        """
        with Image.open(file_path) as img:
            return {
                'width': img.width,
                'height': img.height,
                'format': img.format,
                'mode': img.mode,
                'aspect_ratio': round(img.width / img.height, 2) if img.height > 0 else 0
            }
