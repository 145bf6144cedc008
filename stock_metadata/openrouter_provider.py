"""
OpenRouter API implementation for stock metadata generation.
"""

import json
import requests

from .config import AppConfig
from .ai_providers import AiProvider
from .exceptions import ConfigurationError, GenerationError
from .logging_setup import get_logger

logger = get_logger(__name__)

MAX_TOKENS = 2048
TEMPERATURE = 0.3


class OpenRouterProvider(AiProvider):
    """OpenRouter API implementation of AI provider."""

    def __init__(self, config: AppConfig):
        """
        Initialize the OpenRouter provider.

        Args:
            config: Application configuration
        """
        super().__init__(config)

        self.provider_config = config.provider

        self.api_key = self.provider_config.api_key
        self.api_url = self.provider_config.api_url
        self.model = self.provider_config.model
        self.site_url = self.provider_config.site_url
        self.title = self.provider_config.title
        self.timeout = config.request_timeout_ms / 1000

        logger.info(f"Initialized OpenRouter provider with model: {self.model}")

    def complete(self, image_b64: str, system_prompt: str) -> str:
        """
        Call the OpenRouter chat completions API with the image.

        Args:
            image_b64: Base64-encoded JPEG
            system_prompt: Rendered system prompt

        Returns:
            Message content of the first choice

        Raises:
            ConfigurationError: If no API key is configured
            GenerationError: On HTTP errors or an empty answer
        """
        if not self.api_key:
            raise ConfigurationError("API key not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.site_url,
            "X-Title": self.title
        }

        messages = [
            {"role": "system", "content": system_prompt},
            {
                "role": "user",
                "content": [
                    {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image_b64}"}}
                ]
            }
        ]

        payload = {
            "model": self.model,
            "response_format": {"type": "json_object"},
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "messages": messages
        }

        logger.debug(f"Calling OpenRouter API with model: {self.model}")
        try:
            response = requests.post(
                self.api_url,
                headers=headers,
                json=payload,
                timeout=self.timeout
            )
        except requests.Timeout:
            raise GenerationError(f"Request timed out after {self.timeout:g} seconds")
        except requests.RequestException as e:
            raise GenerationError(f"Connection error: {str(e)}")

        if response.status_code != 200:
            logger.error(f"OpenRouter API error: {response.status_code} - {response.text}")
            raise GenerationError(f"OpenRouter API error {response.status_code}: {response.text}")

        try:
            response_data = response.json()
        except ValueError:
            raise GenerationError("OpenRouter returned a non-JSON body")

        if self.config.debug_mode:
            logger.debug(f"OpenRouter API response: {json.dumps(response_data, indent=2)}")

        if isinstance(response_data, dict) and response_data.get('error'):
            error = response_data['error']
            message = error.get('message') if isinstance(error, dict) else str(error)
            raise GenerationError(f"OpenRouter API error: {message}")

        choices = response_data.get('choices') if isinstance(response_data, dict) else None
        content = None
        if choices:
            message = choices[0].get('message') or {}
            content = message.get('content')

        if not content:
            raise GenerationError("Empty response from AI")

        return content
