"""Prompt text for the scene analysis and repair calls."""

from typing import Iterable

from scenes.validate import TYPE_CAPS
from scenes.models import MAX_OBJECTS

_CAPS_TEXT = ", ".join(f"{object_type} <= {cap}" for object_type, cap in TYPE_CAPS.items())

SYSTEM_PROMPT = f"""You are a computer-vision AI that analyses photos of real environments and converts them into 2D platformer game level descriptions.

OUTPUT FORMAT: Respond with pure JSON only. No markdown fences, no explanations, no extra text.

The JSON must follow this exact schema:

{{
  "version": 1,
  "image": {{ "w": <image_width_px>, "h": <image_height_px> }},
  "objects": [
    {{
      "id": "obj_1",
      "type": "platform" | "obstacle" | "collectible" | "hazard" | "enemy",
      "label": "<what the real object is>",
      "confidence": <0.0-1.0>,
      "bounds_normalized": {{ "x": <norm>, "y": <norm>, "w": <norm>, "h": <norm> }},
      "surface_type": "solid" | "bouncy" | "slippery" | "breakable" | "soft",
      "category": "plant" | "electric" | "food" | "furniture" | "other",
      "enemy_spawn_anchor": <true|false>,
      "game_mechanics": {{ "damage_amount": <0-50>, "speed_multiplier": <0.5-2.0> }}
    }}
  ],
  "spawns": {{
    "player": {{ "x": <norm>, "y": <norm> }},
    "exit":   {{ "x": <norm>, "y": <norm> }},
    "enemies": [ {{ "type": "<enemy_type>", "x": <norm>, "y": <norm> }} ],
    "pickups": [ {{ "type": "coin", "x": <norm>, "y": <norm> }} ]
  }},
  "rules": []
}}

COORDINATE RULES:
- All coordinates are normalized floats between 0.0 and 1.0.
- Origin is the top-left corner of the image; x grows to the right, y grows downward.
- bounds_normalized x,y is the top-left corner of the object; w,h are fractions of the image.

OBJECT RULES:
- Max {MAX_OBJECTS} objects in total. Per type: {_CAPS_TEXT}.
- Every object id must be unique.
- Turn flat horizontal surfaces (tables, shelves, counters, window sills) into platforms.
- Always include a ground platform near the bottom (y between 0.88 and 0.95).
- Plants and electric devices are good enemy spawn anchors; set enemy_spawn_anchor for others you recommend.

SPAWN RULES:
- player spawn: near the bottom-left of the scene (high y, low x).
- exit spawn: somewhere reachable, ideally the upper-right area.
- Place coin pickups on or near platforms to guide the player toward the exit.

IMPORTANT: Make the level fun and playable. Ensure platforms are reachable by jumping."""


def build_user_prompt(width: int, height: int) -> str:
    """Instruction sent alongside the photo."""
    return (
        f"Analyze this photo and generate a platformer level. "
        f"The image dimensions are {width}x{height}px."
    )


def build_repair_prompt(errors: Iterable[str]) -> str:
    """
    Ask the model to fix its previous response.

    Args:
        errors: Every validation/extraction error found in the previous response

    Returns:
        Prompt listing each error as a bullet
    """
    bullet_list = "\n".join(f"  - {error}" for error in errors)
    return f"""Your previous JSON response had validation errors:
{bullet_list}

Please fix these issues and return corrected JSON only. Keep all the same data but fix the errors listed above. Remember:
- "version" must be exactly 1
- "spawns.player" and "spawns.exit" are required objects with x and y
- All coordinate values must be numbers between 0.0 and 1.0
- Object counts per type: {_CAPS_TEXT}"""
