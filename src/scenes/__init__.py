"""Scene contract, validation and photo-to-level orchestration."""

from .models import (
    Scene,
    SceneObject,
    Spawns,
    ParseResult,
    StageDiagnostic,
    VisionResult,
)
from .validate import TYPE_CAPS, parse_scene, validate_caps, validate_unique_ids, validate_scene
from .anchors import is_enemy_spawn_anchor, get_enemy_spawn_anchors
from .fallback import FALLBACK_SCENE
from .extract_json import extract_json, parse_json_payload
from .orchestrate import analyze_image, analyze_image_sync

__all__ = [
    "Scene",
    "SceneObject",
    "Spawns",
    "ParseResult",
    "StageDiagnostic",
    "VisionResult",
    "TYPE_CAPS",
    "parse_scene",
    "validate_caps",
    "validate_unique_ids",
    "validate_scene",
    "is_enemy_spawn_anchor",
    "get_enemy_spawn_anchors",
    "FALLBACK_SCENE",
    "extract_json",
    "parse_json_payload",
    "analyze_image",
    "analyze_image_sync",
]
