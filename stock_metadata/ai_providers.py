"""
AI provider interface and factory.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, TypeVar
import time

from .config import AppConfig
from .exceptions import ConfigurationError, GenerationError
from .logging_setup import get_logger
from .models import MetadataResult
from .normalizer import normalize_metadata
from .scorer import calculate_score
from .utils import extract_json

logger = get_logger(__name__)

T = TypeVar("T")


class AiProvider(ABC):
    """Abstract base class for AI providers."""

    @staticmethod
    def get_provider(config: AppConfig) -> 'AiProvider':
        """
        Factory method to get the appropriate AI provider based on configuration.

        Args:
            config: Application configuration

        Returns:
            An instance of the appropriate AiProvider subclass
        """
        provider_type = config.provider.provider_type.lower()

        if provider_type != 'openrouter':
            logger.warning(f"Unknown provider type: {provider_type}, using OpenRouter")

        from .openrouter_provider import OpenRouterProvider
        return OpenRouterProvider(config)

    def __init__(self, config: AppConfig):
        """
        Initialize the AI provider.

        Args:
            config: Application configuration
        """
        self.config = config
        self.max_retries = config.max_retries

    def call_with_retries(self, request_func: Callable[[], T]) -> T:
        """
        Call an API function, retrying failed attempts with exponential backoff.

        Args:
            request_func: Function performing one request

        Returns:
            The result of the first successful attempt

        Raises:
            GenerationError: If every attempt failed
            ConfigurationError: Immediately, since retrying cannot help
        """
        attempts = self.max_retries + 1
        last_error: Optional[Exception] = None

        for attempt in range(attempts):
            try:
                return request_func()
            except ConfigurationError:
                raise
            except Exception as e:
                last_error = e
                logger.error(f"Error in API call (attempt {attempt + 1}/{attempts}): {str(e)}")
                if attempt < attempts - 1:
                    logger.info(f"Retrying in {2 ** attempt} seconds")
                    time.sleep(2 ** attempt)  # Exponential backoff

        logger.error(f"Failed to get valid response after {attempts} attempts")
        if isinstance(last_error, GenerationError):
            raise last_error
        raise GenerationError(str(last_error)) from last_error

    def generate_metadata(self, image_b64: str, system_prompt: str) -> MetadataResult:
        """
        Request metadata for an image and clean and score the answer.

        Args:
            image_b64: Base64-encoded JPEG
            system_prompt: Rendered system prompt

        Returns:
            Normalized and scored metadata

        Raises:
            GenerationError: If the AI call fails or its answer is not a JSON object
        """
        content = self.call_with_retries(lambda: self.complete(image_b64, system_prompt))

        parsed = extract_json(content, self.config.debug_mode)
        if parsed is None:
            raise GenerationError("AI response is not valid JSON")

        metadata = normalize_metadata(parsed)
        score = calculate_score(metadata)
        logger.debug(
            f"Generated metadata: {len(metadata.title)} char title, "
            f"{len(metadata.keywords)} keywords, score {score}"
        )
        return MetadataResult.from_metadata(metadata, score)

    @abstractmethod
    def complete(self, image_b64: str, system_prompt: str) -> str:
        """
        Send one image to the model and return the raw text answer.

        Args:
            image_b64: Base64-encoded JPEG
            system_prompt: Rendered system prompt

        Returns:
            Raw response content
        """
        pass
