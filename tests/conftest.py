"""
Shared pytest fixtures for the photo-to-level tests.
"""

import copy
import os
import pytest
from pathlib import Path
from unittest.mock import MagicMock

DEFAULT_MARKEXPR = "smoke or (not integration and not slow)"


def pytest_addoption(parser):
    """Add --full flag to run entire test suite"""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite (including integration/slow tests)"
    )


def pytest_configure(config):
    """Configure test run based on flags"""
    if config.getoption("--full"):
        # Only clear default marker if no explicit -m flag was provided
        if config.option.markexpr == DEFAULT_MARKEXPR:
            config.option.markexpr = ""


# Project root
PROJECT_ROOT = Path(__file__).parent.parent
TEST_IMAGE_PATH = PROJECT_ROOT / "data" / "photos" / "desk.jpg"

VALID_SCENE = {
    "version": 1,
    "image": {"w": 1024, "h": 768},
    "objects": [
        {
            "id": "obj_1",
            "type": "platform",
            "label": "table",
            "confidence": 0.91,
            "bounds_normalized": {"x": 0.10, "y": 0.55, "w": 0.40, "h": 0.05},
            "surface_type": "solid",
            "category": "furniture",
        },
        {
            "id": "obj_2",
            "type": "hazard",
            "label": "cactus",
            "bounds_normalized": {"x": 0.60, "y": 0.40, "w": 0.08, "h": 0.20},
            "category": "plant",
            "game_mechanics": {"damage_amount": 10, "knockback": 0.3},
        },
        {
            "id": "obj_3",
            "type": "collectible",
            "label": "apple",
            "bounds_normalized": {"x": 0.30, "y": 0.50, "w": 0.03, "h": 0.04},
            "category": "food",
        },
    ],
    "spawns": {
        "player": {"x": 0.05, "y": 0.85},
        "exit": {"x": 0.90, "y": 0.20},
        "enemies": [{"type": "crawler", "x": 0.55, "y": 0.80}],
        "pickups": [{"type": "coin", "x": 0.30, "y": 0.50}],
    },
    "rules": [{"id": "gravity multiplier", "param": 0.7}],
}


def make_object(index: int, object_type: str = "platform", **overrides) -> dict:
    """Build a valid raw object dict with a unique id."""
    obj = {
        "id": f"obj_{index}",
        "type": object_type,
        "bounds_normalized": {"x": 0.1, "y": 0.5, "w": 0.2, "h": 0.05},
    }
    obj.update(overrides)
    return obj


@pytest.fixture
def object_factory():
    """Return make_object() for building raw object dicts."""
    return make_object


@pytest.fixture
def valid_scene_data():
    """A fresh, fully valid raw Scene dict."""
    return copy.deepcopy(VALID_SCENE)


@pytest.fixture
def mock_api():
    """
    GeminiAPI stand-in whose generate_content returns queued responses.

    Usage:
        mock_api.queue('{"version": 1, ...}', TransportError("boom"))
    """
    api = MagicMock()

    def queue(*items):
        side_effects = []
        for item in items:
            if isinstance(item, BaseException):
                side_effects.append(item)
            else:
                side_effects.append(MagicMock(text=item))
        api.generate_content.side_effect = side_effects

    api.queue = queue
    return api


@pytest.fixture(scope="session")
def check_api_key():
    """Check if Gemini API key is available."""
    from dotenv import load_dotenv
    load_dotenv(PROJECT_ROOT / ".env")
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        pytest.skip("Gemini API key not found. Set GEMINI_API_KEY in .env file.")
    return api_key


@pytest.fixture(scope="session")
def test_image_path():
    """Return path to the sample photo used by integration tests."""
    if not TEST_IMAGE_PATH.exists():
        pytest.skip(f"Test photo not found: {TEST_IMAGE_PATH}")
    return TEST_IMAGE_PATH
