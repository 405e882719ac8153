"""Centralized exception hierarchy for the photo-to-level pipeline.

Usage:
    from exceptions import TransportError, StructuralError

    raise TransportError("Gemini call failed: 429 RESOURCE_EXHAUSTED")
    raise StructuralError(["spawns.player: Required"])
"""

from typing import Iterable, List


class SceneGenError(Exception):
    """Base exception for all scene generation errors."""
    pass


class ConfigurationError(SceneGenError):
    """Raised when configuration is invalid or missing.

    Examples:
        - Missing GEMINI_API_KEY
        - Unknown model name
    """
    pass


class TransportError(SceneGenError):
    """Raised when the external vision model call fails.

    Examples:
        - Network failure or timeout
        - Authentication / quota errors
        - Empty response object
    """
    pass


class ExtractionError(SceneGenError):
    """Raised when a model response contains no parseable JSON."""
    pass


class SceneValidationError(SceneGenError):
    """Raised when a payload does not satisfy the Scene contract.

    Carries every message so callers can feed them back to the model.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors) or "Scene validation failed")


class StructuralError(SceneValidationError):
    """Schema mismatch: wrong type, missing field, out-of-range value, bad version."""
    pass


class CapError(SceneValidationError):
    """Structurally valid but exceeds per-type object caps."""
    pass
