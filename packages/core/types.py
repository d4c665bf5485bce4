"""Pydantic models for the floor-plan document and editor query results.

The plan document is the JSON structure exchanged with persistence and
import collaborators.  Keys are camelCase on the wire (``wallId``,
``schemaVersion`` …) and snake_case in Python; unknown keys are kept so a
round trip through the models never drops data the editor does not know
about.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = 2


class PlanModel(BaseModel):
    """Base for every document model: camelCase aliases, extra keys kept."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


# ── tiny helpers ──────────────────────────────────────────────────────
class Point(PlanModel):
    """A 2-D point (x, y) in metres, or pixels in screen space."""

    x: float
    y: float


class Scale(PlanModel):
    """Per-axis furniture scale factors."""

    x: float = 1.0
    y: float = 1.0
    z: Optional[float] = None


# ── plan entities ────────────────────────────────────────────────────
class Wall(PlanModel):
    id: str
    start: Point
    end: Point
    height: Optional[float] = None
    thickness: Optional[float] = None


class Room(PlanModel):
    id: str
    name: str = ""
    vertices: list[Point] = Field(default_factory=list)
    floor_material: Optional[str] = None
    floor_color: Optional[str] = None


class Door(PlanModel):
    """An opening hosted by a wall; *position* is the offset along it."""

    id: str
    wall_id: Optional[str] = None
    position: float = 0.0
    width: float = 0.9
    height: float = 2.1
    type: str = "single"


class Window(PlanModel):
    id: str
    wall_id: Optional[str] = None
    position: float = 0.0
    width: float = 1.2
    height: float = 1.0
    sill_height: float = 1.0
    type: str = "standard"


class Furniture(PlanModel):
    id: str
    catalog_id: Optional[str] = None
    position: Point = Field(default_factory=lambda: Point(x=0.0, y=0.0))
    rotation: float = 0.0
    scale: Optional[Scale] = Field(default_factory=lambda: Scale(x=1.0, y=1.0, z=1.0))
    color: Optional[str] = None
    locked: bool = False


class Column(PlanModel):
    id: str
    position: Point
    size: float = 0.3
    height: Optional[float] = None
    shape: str = "square"


class Stairs(PlanModel):
    id: str
    position: Point
    rotation: float = 0.0
    width: float = 1.0
    depth: float = 2.5
    steps: int = 12
    type: str = "straight"
    height: Optional[float] = None


class Dimension(PlanModel):
    """A measured segment drawn *offset* metres to the left of start→end."""

    id: str
    start: Point
    end: Point
    offset: float = -0.5
    label: Optional[str] = None


class Annotation(PlanModel):
    """A note or measurement marker.  Shape varies by *type*."""

    id: str
    type: str = "note"
    text: Optional[str] = None


# ── the document ─────────────────────────────────────────────────────
class Plan(PlanModel):
    """Top-level floor-plan document.

    Collection order is insertion order; it is the z-order used by the hit
    tester and the draw order used by renderers.
    """

    id: str
    name: str
    schema_version: int = SCHEMA_VERSION
    units: str = "meters"
    floor_height: float = 2.8
    wall_thickness: float = 0.15
    walls: list[Wall] = Field(default_factory=list)
    rooms: list[Room] = Field(default_factory=list)
    doors: list[Door] = Field(default_factory=list)
    windows: list[Window] = Field(default_factory=list)
    dimensions: list[Dimension] = Field(default_factory=list)
    annotations: list[Annotation] = Field(default_factory=list)
    furniture: list[Furniture] = Field(default_factory=list)
    stairs: list[Stairs] = Field(default_factory=list)
    columns: list[Column] = Field(default_factory=list)

    def wall_by_id(self, wall_id: Optional[str]) -> Optional[Wall]:
        return next((w for w in self.walls if w.id == wall_id), None)


# ── query results ────────────────────────────────────────────────────
class ElementKind(str, Enum):
    FURNITURE = "furniture"
    COLUMN = "column"
    STAIRS = "stairs"
    DOOR = "door"
    WINDOW = "window"
    DIMENSION = "dimension"
    WALL = "wall"
    ROOM = "room"


# Plan attribute holding each kind of element.
COLLECTIONS: dict[ElementKind, str] = {
    ElementKind.FURNITURE: "furniture",
    ElementKind.COLUMN: "columns",
    ElementKind.STAIRS: "stairs",
    ElementKind.DOOR: "doors",
    ElementKind.WINDOW: "windows",
    ElementKind.DIMENSION: "dimensions",
    ElementKind.WALL: "walls",
    ElementKind.ROOM: "rooms",
}


class HitResult(BaseModel):
    """The element found under a point, tagged with its kind."""

    type: ElementKind
    element: Any


class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
