"""
Gemini API utilities for the photo-to-level pipeline.

Centralized module for all Google Generative AI (Gemini) interactions.
"""

import asyncio
import logging
from typing import Optional, Any, List
from google import genai
from google.genai import types

from config import get_gemini_api_key, get_vision_model
from exceptions import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


class GeminiAPI:
    """Wrapper for Gemini API operations."""

    def __init__(self, model_name: Optional[str] = None, api_key: Optional[str] = None):
        """
        Initialize Gemini API client.

        Args:
            model_name: Name of the Gemini model to use (defaults to VISION_MODEL)
            api_key: API key (if None, loads from environment)

        Raises:
            ConfigurationError: If no API key can be found
        """
        self.model_name = model_name or get_vision_model()
        self._configured = False
        self.client = None

        if api_key:
            self._configure_with_key(api_key)
        else:
            self._configure_from_env()

    def _configure_from_env(self):
        """Configure Gemini with GEMINI_API_KEY from the environment or project .env."""
        try:
            api_key = get_gemini_api_key()
        except KeyError as e:
            raise ConfigurationError(
                "Gemini API key not found. Set GEMINI_API_KEY in .env file or pass api_key parameter."
            ) from e
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is set but empty.")

        self._configure_with_key(api_key)

    def _configure_with_key(self, api_key: str):
        """Configure Gemini with provided API key."""
        self.client = genai.Client(api_key=api_key)
        self._configured = True

    def generate_content(
        self,
        contents: Any,
        config: Optional[types.GenerateContentConfig] = None
    ) -> Any:
        """
        Generate content using Gemini.

        Args:
            contents: Text prompt, list of parts, or list of Content turns
            config: Optional generation config (system instruction, temperature, ...)

        Returns:
            Response object with .text attribute

        Raises:
            TransportError: If the client is not configured or the call fails
        """
        if not self._configured:
            raise TransportError("Gemini API not configured.")

        logger.debug(f"Calling {self.model_name}")
        try:
            return self.client.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=config
            )
        except Exception as e:
            raise TransportError(f"Gemini call failed ({self.model_name}): {e}") from e


def image_part(image_bytes: bytes, mime_type: str) -> types.Part:
    """Wrap raw image bytes as an inline Gemini part."""
    return types.Part.from_bytes(data=image_bytes, mime_type=mime_type)


def user_turn(parts: List[Any]) -> types.Content:
    """Build a user turn from parts (strings become text parts)."""
    return types.Content(role="user", parts=[_as_part(p) for p in parts])


def model_turn(text: str) -> types.Content:
    """Build a model turn replaying an earlier response."""
    return types.Content(role="model", parts=[types.Part.from_text(text=text)])


def _as_part(value: Any) -> types.Part:
    if isinstance(value, str):
        return types.Part.from_text(text=value)
    return value


def response_text(response: Any) -> str:
    """Return the text of a Gemini response, or "" when the model returned none."""
    text = getattr(response, "text", None)
    return text if isinstance(text, str) else ""


async def generate_content_async(
    api: GeminiAPI,
    contents: Any,
    config: Optional[types.GenerateContentConfig] = None
) -> Any:
    """
    Async wrapper for GeminiAPI.generate_content using asyncio.to_thread.

    The google.genai client call is synchronous; running it in a worker thread
    keeps the event loop free so many pipelines can run concurrently.

    Example:
        api = GeminiAPI()
        response = await generate_content_async(api, "Hello")
    """
    return await asyncio.to_thread(api.generate_content, contents, config)
