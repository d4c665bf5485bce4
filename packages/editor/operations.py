"""Snapshot-guarded edits on a typed plan.

These are the mutations an interactive editing controller performs.  Each
takes an optional :class:`HistoryManager` (snapshotted before the plan is
touched) and an optional :class:`EventBus` (notified afterwards).  Queries
that find nothing return ``None`` and leave both the plan and the history
alone.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Optional

from packages.core.errors import ElementNotFoundError
from packages.core.events import EventBus
from packages.core.types import (
    COLLECTIONS,
    Column,
    Dimension,
    Door,
    ElementKind,
    Furniture,
    Plan,
    Point,
    Room,
    Stairs,
    Wall,
    Window,
)
from packages.editor.data_model import generate_id
from packages.editor.geometry import constrain_line, distance, xy
from packages.editor.hit_testing import Catalog, find_element_at, find_wall_at, position_on_wall
from packages.editor.history import HistoryManager

logger = logging.getLogger(__name__)

MIN_DIMENSION_LENGTH = 0.05
ROTATION_STEP = math.pi / 4


def _point(p: Any) -> Point:
    x, y = xy(p)
    return Point(x=x, y=y)


def _before(history: Optional[HistoryManager]) -> None:
    if history is not None:
        history.snapshot()


def _after(events: Optional[EventBus], event: str, element: Any, plan: Plan) -> None:
    if events is not None:
        events.emit(event, element)
        events.emit("plan:changed", plan)


def add_wall(
    plan: Plan,
    start: Any,
    end: Any,
    *,
    constrain: bool = False,
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Wall:
    """Append a wall using the plan's default height and thickness.

    With *constrain* the end point is snapped to the nearest 15° direction.
    """
    end = constrain_line(start, end) if constrain else end
    _before(history)
    wall = Wall(
        id=generate_id("w"),
        start=_point(start),
        end=_point(end),
        height=plan.floor_height,
        thickness=plan.wall_thickness,
    )
    plan.walls.append(wall)
    _after(events, "wall:added", wall, plan)
    return wall


def place_door(
    plan: Plan,
    point: Any,
    *,
    width: float = 0.9,
    height: float = 2.1,
    door_type: str = "single",
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Optional[Door]:
    """Insert a door centred on the wall point nearest *point*."""
    wall = find_wall_at(point, plan)
    if wall is None:
        return None
    _before(history)
    door = Door(
        id=generate_id("d"),
        wall_id=wall.id,
        position=max(0.0, position_on_wall(point, wall) - width / 2),
        width=width,
        height=height,
        type=door_type,
    )
    plan.doors.append(door)
    _after(events, "door:added", door, plan)
    return door


def place_window(
    plan: Plan,
    point: Any,
    *,
    width: float = 1.2,
    height: float = 1.0,
    sill_height: float = 1.0,
    window_type: str = "standard",
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Optional[Window]:
    wall = find_wall_at(point, plan)
    if wall is None:
        return None
    _before(history)
    window = Window(
        id=generate_id("win"),
        wall_id=wall.id,
        position=max(0.0, position_on_wall(point, wall) - width / 2),
        width=width,
        height=height,
        sill_height=sill_height,
        type=window_type,
    )
    plan.windows.append(window)
    _after(events, "window:added", window, plan)
    return window


def place_furniture(
    plan: Plan,
    catalog_id: str,
    point: Any,
    *,
    rotation: float = 0.0,
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Furniture:
    _before(history)
    item = Furniture(
        id=generate_id("furn"),
        catalog_id=catalog_id,
        position=_point(point),
        rotation=rotation,
    )
    plan.furniture.append(item)
    _after(events, "furniture:added", item, plan)
    return item


def place_column(
    plan: Plan,
    point: Any,
    *,
    size: float = 0.3,
    shape: str = "square",
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Column:
    _before(history)
    column = Column(
        id=generate_id("col"),
        position=_point(point),
        size=size,
        height=plan.floor_height,
        shape=shape,
    )
    plan.columns.append(column)
    _after(events, "column:added", column, plan)
    return column


def place_stairs(
    plan: Plan,
    point: Any,
    *,
    width: float = 1.0,
    depth: float = 2.5,
    steps: int = 12,
    rotation: float = 0.0,
    stairs_type: str = "straight",
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Stairs:
    _before(history)
    stairs = Stairs(
        id=generate_id("stair"),
        position=_point(point),
        width=width,
        depth=depth,
        steps=steps,
        rotation=rotation,
        type=stairs_type,
        height=plan.floor_height,
    )
    plan.stairs.append(stairs)
    _after(events, "stairs:added", stairs, plan)
    return stairs


def add_dimension(
    plan: Plan,
    start: Any,
    end: Any,
    *,
    offset: float = -0.5,
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Optional[Dimension]:
    """Add a dimension line labelled with its length; too-short ones are dropped."""
    length = distance(start, end)
    if length < MIN_DIMENSION_LENGTH:
        return None
    _before(history)
    dimension = Dimension(
        id=generate_id("dim"),
        start=_point(start),
        end=_point(end),
        offset=offset,
        label=f"{length:.2f}m",
    )
    plan.dimensions.append(dimension)
    _after(events, "dimension:added", dimension, plan)
    return dimension


def add_room(
    plan: Plan,
    vertices: Iterable[Any],
    *,
    name: str = "Room",
    floor_material: str = "hardwood",
    floor_color: str = "#e8dcc8",
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Optional[Room]:
    ring = [_point(v) for v in vertices]
    if len(ring) < 3:
        return None
    _before(history)
    room = Room(
        id=generate_id("r"),
        name=name,
        vertices=ring,
        floor_material=floor_material,
        floor_color=floor_color,
    )
    plan.rooms.append(room)
    _after(events, "room:added", room, plan)
    return room


def _find_by_id(plan: Plan, kind: ElementKind, element_id: str) -> Any:
    for element in getattr(plan, COLLECTIONS[kind]):
        if element.id == element_id:
            return element
    raise ElementNotFoundError(
        f"No {kind.value} with id {element_id}",
        {"kind": kind.value, "id": element_id},
    )


def rotate_element(
    plan: Plan,
    kind: ElementKind | str,
    element_id: str,
    angle: float = ROTATION_STEP,
    *,
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Any:
    """Rotate a furniture item or a flight of stairs by *angle* radians."""
    kind = ElementKind(kind)
    if kind not in (ElementKind.FURNITURE, ElementKind.STAIRS):
        raise ValueError(f"{kind.value} elements cannot be rotated")
    element = _find_by_id(plan, kind, element_id)
    _before(history)
    element.rotation = (element.rotation or 0.0) + angle
    _after(events, f"{kind.value}:rotated", element, plan)
    return element


def delete_element(
    plan: Plan,
    kind: ElementKind | str,
    element_id: str,
    *,
    cascade: bool = True,
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Any:
    """Remove an element by id and return it.

    Deleting a wall also deletes the doors and windows it hosts unless
    *cascade* is ``False``, in which case they are left with dangling
    ``wall_id`` references for :func:`validate_plan` to report.

    Raises :class:`ElementNotFoundError` for an unknown id.
    """
    kind = ElementKind(kind)
    element = _find_by_id(plan, kind, element_id)
    _before(history)

    collection = COLLECTIONS[kind]
    setattr(plan, collection, [e for e in getattr(plan, collection) if e.id != element_id])
    if kind == ElementKind.WALL and cascade:
        doors = len(plan.doors)
        windows = len(plan.windows)
        plan.doors = [d for d in plan.doors if d.wall_id != element_id]
        plan.windows = [w for w in plan.windows if w.wall_id != element_id]
        removed = doors - len(plan.doors) + windows - len(plan.windows)
        if removed:
            logger.info("Deleted wall %s with %d hosted opening(s)", element_id, removed)

    _after(events, f"{kind.value}:deleted", element, plan)
    return element


def erase_at(
    plan: Plan,
    point: Any,
    *,
    tolerance: Optional[float] = None,
    catalog: Optional[Catalog] = None,
    cascade: bool = True,
    history: Optional[HistoryManager] = None,
    events: Optional[EventBus] = None,
) -> Any:
    """Delete whatever :func:`find_element_at` reports under *point*."""
    hit = find_element_at(point, plan, tolerance, catalog)
    if hit is None:
        return None
    return delete_element(
        plan, hit.type, hit.element.id, cascade=cascade, history=history, events=events,
    )
