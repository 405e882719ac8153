"""Fallback Scene returned when the model fails or its output is unrepairable.

A basic playable level: ground plus two floating platforms forming a staircase
from the bottom-left player spawn to the upper-right exit, with a coin on
each step. Validated once at import time.
"""

from scenes.models import Scene
from scenes.validate import require_valid_scene

FALLBACK_SCENE: Scene = require_valid_scene({
    "version": 1,
    "image": {"w": 1024, "h": 768},
    "objects": [
        {
            "id": "ground",
            "type": "platform",
            "label": "floor",
            "bounds_normalized": {"x": 0.0, "y": 0.90, "w": 1.0, "h": 0.05},
            "surface_type": "solid",
        },
        {
            "id": "step_low",
            "type": "platform",
            "label": "ledge",
            "bounds_normalized": {"x": 0.20, "y": 0.70, "w": 0.25, "h": 0.04},
            "surface_type": "solid",
        },
        {
            "id": "step_high",
            "type": "platform",
            "label": "ledge",
            "bounds_normalized": {"x": 0.55, "y": 0.50, "w": 0.25, "h": 0.04},
            "surface_type": "solid",
        },
    ],
    "spawns": {
        "player": {"x": 0.05, "y": 0.85},
        "exit": {"x": 0.90, "y": 0.15},
        "enemies": [],
        "pickups": [
            {"type": "coin", "x": 0.30, "y": 0.65},
            {"type": "coin", "x": 0.50, "y": 0.55},
            {"type": "coin", "x": 0.70, "y": 0.45},
        ],
    },
    "rules": [],
})
