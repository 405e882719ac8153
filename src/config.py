"""Centralized configuration for the photo-to-level pipeline.

This module provides:
- PROJECT_ROOT and SRC_DIR paths
- Environment variable access with get_env()
- Automatic .env loading

Usage:
    from config import PROJECT_ROOT, get_env

    api_key = get_env("GEMINI_API_KEY")
    model = get_vision_model()
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Calculate paths once at import time
SRC_DIR = Path(__file__).parent.resolve()
PROJECT_ROOT = SRC_DIR.parent.resolve()

# Load .env from project root
_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

DEFAULT_VISION_MODEL = "gemini-2.5-flash"


def get_env(key: str, default: Optional[str] = None) -> str:
    """Read a setting from the process environment (after .env loading).

    Raises:
        KeyError: If key is unset and no default is given
    """
    value = os.environ.get(key)
    if value is not None:
        return value
    if default is not None:
        return default
    raise KeyError(f"Environment variable '{key}' not set and no default provided")


def get_gemini_api_key() -> str:
    """Get Gemini API key from environment."""
    return get_env("GEMINI_API_KEY")


def get_vision_model() -> str:
    """Get the Gemini model used for scene analysis."""
    return get_env("VISION_MODEL", default=DEFAULT_VISION_MODEL)
