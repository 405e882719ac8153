"""Data models for the Scene level description (wire format version 1).

The Scene is produced from an untrusted vision-model response, so every model
here validates strictly: numbers must be real JSON numbers, booleans must be
real booleans, and every normalized coordinate is bounded to [0, 1].
All models are frozen and use tuples for sequences; a validated Scene is never
mutated after construction.
"""

import json
from typing import Annotated, Any, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

MAX_OBJECTS = 25

NormalizedFloat = Annotated[StrictFloat, Field(ge=0.0, le=1.0)]

ObjectType = Literal["platform", "obstacle", "collectible", "hazard", "enemy"]
SurfaceType = Literal["solid", "bouncy", "slippery", "breakable", "soft"]
ObjectCategory = Literal["plant", "electric", "food", "furniture", "other"]
Provenance = Literal["ai", "ai_repaired", "fallback"]

DEFAULT_SURFACE_TYPE: SurfaceType = "solid"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ImageSize(_FrozenModel):
    """Pixel dimensions of the source photograph."""

    w: Annotated[StrictInt, Field(gt=0)]
    h: Annotated[StrictInt, Field(gt=0)]


class BoundsNormalized(_FrozenModel):
    """Normalized rectangle; x/y is the top-left corner, y grows downward."""

    x: NormalizedFloat
    y: NormalizedFloat
    w: NormalizedFloat
    h: NormalizedFloat


class GameMechanics(_FrozenModel):
    """Per-object tuning values.

    Unknown keys are kept (forward compatibility) but the known keys are
    always range-checked.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    damage_amount: Optional[Annotated[StrictFloat, Field(ge=0, le=50)]] = None
    speed_multiplier: Optional[Annotated[StrictFloat, Field(ge=0.5, le=2.0)]] = None


class SceneObject(_FrozenModel):
    """One detected object mapped to a gameplay role."""

    id: Annotated[StrictStr, Field(min_length=1)]
    type: ObjectType
    label: Optional[StrictStr] = None
    confidence: Optional[NormalizedFloat] = None
    bounds_normalized: BoundsNormalized
    surface_type: Optional[SurfaceType] = None
    category: Optional[ObjectCategory] = None
    enemy_spawn_anchor: Optional[StrictBool] = None
    game_mechanics: Optional[GameMechanics] = None

    def effective_surface_type(self) -> SurfaceType:
        """Surface type with the downstream default applied."""
        return self.surface_type or DEFAULT_SURFACE_TYPE


class NormalizedPoint(_FrozenModel):
    x: NormalizedFloat
    y: NormalizedFloat


class SpawnPoint(NormalizedPoint):
    """Enemy or pickup spawn; `type` is free-form (e.g. "coin", "crawler")."""

    type: Optional[StrictStr] = None


class Spawns(_FrozenModel):
    player: NormalizedPoint
    exit: NormalizedPoint
    enemies: Tuple[SpawnPoint, ...] = ()
    pickups: Tuple[SpawnPoint, ...] = ()


class Scene(_FrozenModel):
    """Complete, validated level description exchanged with the renderer."""

    version: Annotated[Literal[1], Field(strict=True)]
    image: ImageSize
    objects: Annotated[Tuple[SceneObject, ...], Field(max_length=MAX_OBJECTS)] = ()
    spawns: Spawns
    rules: Tuple[Any, ...] = ()

    def to_wire(self) -> dict:
        """JSON-ready dict in the wire format (absent optionals omitted)."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_wire(), indent=indent)

    def with_image_size(self, w: int, h: int) -> "Scene":
        """Return a copy carrying the given source image dimensions."""
        return self.model_copy(update={"image": ImageSize(w=w, h=h)})


class ParseResult(BaseModel):
    """Outcome of validating untrusted data: a Scene or a list of errors."""

    model_config = ConfigDict(frozen=True)

    scene: Optional[Scene] = None
    errors: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.scene is not None and not self.errors


class StageDiagnostic(BaseModel):
    """Advisory record emitted for each pipeline stage."""

    model_config = ConfigDict(frozen=True)

    stage: str
    duration_ms: int
    provenance: Optional[Provenance] = None
    errors: Tuple[str, ...] = ()


class VisionResult(BaseModel):
    """Result of analyze_image(): always carries a valid Scene."""

    model_config = ConfigDict(frozen=True)

    scene: Scene
    source: Provenance
    duration_ms: int
    diagnostics: Tuple[StageDiagnostic, ...] = ()
