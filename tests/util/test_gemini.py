"""
Tests for src/util/gemini.py

Basic tests for Gemini API wrapper functionality.
"""

import asyncio

import pytest
from unittest.mock import MagicMock, patch

from exceptions import ConfigurationError, TransportError
from util.gemini import (
    GeminiAPI,
    generate_content_async,
    image_part,
    model_turn,
    response_text,
    user_turn,
)


class TestGeminiAPIBasics:
    """Test basic Gemini API configuration."""

    def test_configure_with_key(self):
        """Explicit key configures a client without touching the environment."""
        with patch("util.gemini.genai.Client") as client_cls:
            api = GeminiAPI(model_name="gemini-2.5-pro", api_key="test-key")

        client_cls.assert_called_once_with(api_key="test-key")
        assert api._configured is True
        assert api.model_name == "gemini-2.5-pro"

    def test_configure_from_env(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        monkeypatch.delenv("VISION_MODEL", raising=False)
        with patch("util.gemini.genai.Client") as client_cls:
            api = GeminiAPI()

        client_cls.assert_called_once_with(api_key="env-key")
        assert api.model_name == "gemini-2.5-flash"

    def test_model_from_env(self, monkeypatch):
        monkeypatch.setenv("VISION_MODEL", "gemini-2.0-flash")
        with patch("util.gemini.genai.Client"):
            api = GeminiAPI(api_key="test-key")

        assert api.model_name == "gemini-2.0-flash"

    def test_configure_without_api_key_raises_error(self, monkeypatch):
        """Test that missing API key raises ConfigurationError."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        with pytest.raises(ConfigurationError, match="Gemini API key not found") as exc_info:
            GeminiAPI()

        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_configure_reads_key_through_config(self):
        with patch("util.gemini.get_gemini_api_key", return_value="config-key") as get_key, \
                patch("util.gemini.genai.Client") as client_cls:
            GeminiAPI(model_name="gemini-test")

        get_key.assert_called_once_with()
        client_cls.assert_called_once_with(api_key="config-key")

    def test_empty_api_key_raises_error(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "")
        with pytest.raises(ConfigurationError, match="empty"):
            GeminiAPI(model_name="gemini-test")

    def test_generate_without_configuration(self):
        api = GeminiAPI.__new__(GeminiAPI)
        api._configured = False
        with pytest.raises(TransportError, match="not configured"):
            api.generate_content("hello")


class TestGenerateContent:
    """Test the call path with a mocked client."""

    def _api(self):
        with patch("util.gemini.genai.Client"):
            api = GeminiAPI(model_name="gemini-test", api_key="test-key")
        api.client = MagicMock()
        return api

    def test_passes_model_contents_and_config(self):
        api = self._api()
        api.client.models.generate_content.return_value = MagicMock(text="{}")

        response = api.generate_content(["hi"], config="cfg")

        api.client.models.generate_content.assert_called_once_with(
            model="gemini-test", contents=["hi"], config="cfg"
        )
        assert response.text == "{}"

    def test_client_errors_become_transport_errors(self):
        api = self._api()
        api.client.models.generate_content.side_effect = ConnectionError("reset by peer")

        with pytest.raises(TransportError, match="reset by peer") as exc_info:
            api.generate_content("hi")

        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_async_wrapper(self):
        api = self._api()
        api.client.models.generate_content.return_value = MagicMock(text="ok")

        response = asyncio.run(generate_content_async(api, "hi"))

        assert response.text == "ok"


class TestContentHelpers:
    def test_image_part(self):
        part = image_part(b"\x89PNG", "image/png")

        assert part.inline_data.data == b"\x89PNG"
        assert part.inline_data.mime_type == "image/png"

    def test_user_turn_converts_strings(self):
        turn = user_turn([image_part(b"x", "image/jpeg"), "describe this"])

        assert turn.role == "user"
        assert turn.parts[1].text == "describe this"

    def test_model_turn(self):
        turn = model_turn('{"version": 1}')

        assert turn.role == "model"
        assert turn.parts[0].text == '{"version": 1}'

    @pytest.mark.parametrize("response,expected", [
        (MagicMock(text="abc"), "abc"),
        (MagicMock(text=None), ""),
        (object(), ""),
    ])
    def test_response_text(self, response, expected):
        assert response_text(response) == expected


class TestGeminiAPIIntegration:
    """Integration tests that make real API calls."""

    @pytest.mark.integration
    @pytest.mark.slow
    @pytest.mark.requires_api
    def test_generate_text_content(self, check_api_key):
        """Test basic text generation."""
        api = GeminiAPI()
        response = api.generate_content("Say 'Hello World' and nothing else.")
        assert "hello" in response_text(response).lower()
