"""Enemy spawn anchor predicates.

An object is a candidate for enemy placement when the model flagged it
explicitly or when its real-world category is one enemies live in.
The engine decides final placement; these helpers only flag candidates.
"""

from typing import Iterable, List

from scenes.models import SceneObject

ENEMY_ANCHOR_CATEGORIES = frozenset({"plant", "electric"})


def is_enemy_spawn_anchor(obj: SceneObject) -> bool:
    """True if enemy_spawn_anchor is set or the category is plant/electric."""
    if obj.enemy_spawn_anchor is True:
        return True
    return obj.category in ENEMY_ANCHOR_CATEGORIES


def get_enemy_spawn_anchors(objects: Iterable[SceneObject]) -> List[SceneObject]:
    """Filter the anchor objects, preserving scene order."""
    return [obj for obj in objects if is_enemy_spawn_anchor(obj)]
