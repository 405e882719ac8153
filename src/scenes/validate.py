"""Structural and semantic validation of untrusted Scene payloads.

parse_scene() checks the payload against the Scene models and applies
defaults. validate_caps() and validate_unique_ids() enforce the aggregate
constraints the models cannot express per field. validate_scene() runs all of
them and reports every problem at once so one repair request can fix them all.
"""

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from exceptions import CapError, StructuralError
from scenes.models import ParseResult, Scene

logger = logging.getLogger(__name__)

# Max objects per type within one Scene
TYPE_CAPS: Dict[str, int] = {
    "platform": 12,
    "obstacle": 8,
    "collectible": 10,
    "hazard": 8,
    "enemy": 2,
}

ROOT_PATH = "(root)"


def _field(obj: Any, name: str) -> Any:
    """Read a field from a SceneObject or a raw dict."""
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def format_validation_errors(exc: ValidationError) -> List[str]:
    """
    Flatten a pydantic ValidationError into "path: message" strings.

    Example:
        ["spawns.player: Required", "objects.3.bounds_normalized.x: Input should be less than or equal to 1"]
    """
    messages = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or ROOT_PATH
        message = "Required" if error["type"] == "missing" else error["msg"]
        messages.append(f"{path}: {message}")
    return messages


def parse_scene(data: Any) -> ParseResult:
    """
    Structurally validate untrusted data as a Scene.

    Args:
        data: Decoded JSON (any shape)

    Returns:
        ParseResult with either a defaulted Scene or the list of structural errors
    """
    try:
        scene = Scene.model_validate(data)
    except ValidationError as e:
        errors = format_validation_errors(e)
        logger.debug(f"Structural validation failed with {len(errors)} error(s)")
        return ParseResult(errors=tuple(errors))

    return ParseResult(scene=scene)


def validate_caps(objects: Iterable[Any]) -> List[str]:
    """
    Check per-type object caps.

    Accepts validated SceneObjects or raw object dicts; entries without a
    known type are ignored. Every violated cap is reported.

    Returns:
        List of error messages (empty when all caps hold)
    """
    counts = Counter(
        object_type for object_type in (_field(obj, "type") for obj in objects)
        if isinstance(object_type, str)
    )

    errors = []
    for object_type, cap in TYPE_CAPS.items():
        count = counts.get(object_type, 0)
        if count > cap:
            errors.append(f"Too many {object_type} objects: {count} (max {cap})")
    return errors


def validate_unique_ids(objects: Iterable[Any]) -> List[str]:
    """Report object ids that occur more than once."""
    counts = Counter(
        object_id for object_id in (_field(obj, "id") for obj in objects)
        if isinstance(object_id, str)
    )
    return [
        f"Duplicate object id: {object_id} ({count} occurrences)"
        for object_id, count in counts.items()
        if count > 1
    ]


def _raw_objects(data: Any) -> List[Any]:
    if isinstance(data, dict) and isinstance(data.get("objects"), list):
        return [obj for obj in data["objects"] if isinstance(obj, dict)]
    return []


def validate_scene(data: Any) -> ParseResult:
    """
    Run structural validation, then cap and id checks, aggregating all errors.

    When the structure is invalid, cap and id checks still run over the raw
    object list so the caller sees every known problem in one pass.
    """
    result = parse_scene(data)

    if result.ok:
        objects = result.scene.objects
        semantic_errors = validate_caps(objects) + validate_unique_ids(objects)
        if semantic_errors:
            logger.debug(f"Semantic validation failed: {semantic_errors}")
            return ParseResult(errors=tuple(semantic_errors))
        logger.debug(
            f"Scene valid: objects={len(objects)}, "
            f"enemies={len(result.scene.spawns.enemies)}, "
            f"pickups={len(result.scene.spawns.pickups)}"
        )
        return result

    raw = _raw_objects(data)
    semantic_errors = validate_caps(raw) + validate_unique_ids(raw)
    return ParseResult(errors=result.errors + tuple(semantic_errors))


def require_valid_scene(data: Any) -> Scene:
    """
    Validate data and return the Scene, raising on failure.

    Raises:
        StructuralError: If the payload does not match the schema
        CapError: If the payload is well-formed but breaks a cap or id rule
    """
    result = parse_scene(data)
    if not result.ok:
        raise StructuralError(result.errors)

    objects = result.scene.objects
    semantic_errors = validate_caps(objects) + validate_unique_ids(objects)
    if semantic_errors:
        raise CapError(semantic_errors)
    return result.scene
