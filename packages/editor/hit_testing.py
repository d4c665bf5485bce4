"""Resolve a world-space point to the plan element under it.

Each ``find_*_at`` finder returns the matching element or ``None``; the
composite :func:`find_element_at` applies a fixed priority so that small
foreground objects win over the large background ones they sit on:

    furniture > column > stairs > door > window > dimension > wall > room

Finders work on a typed :class:`~packages.core.types.Plan` as well as on a
raw (camelCase) plan document.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Protocol

import numpy as np

from packages.core.types import ElementKind, HitResult
from packages.editor.catalog import default_catalog
from packages.editor.geometry import field, xy

WALL_TOLERANCE = 0.3
OPENING_TOLERANCE = 0.3
FURNITURE_TOLERANCE = 0.2
COLUMN_TOLERANCE = 0.3
STAIRS_TOLERANCE = 0.2
DIMENSION_TOLERANCE = 0.3

DEFAULT_DOOR_WIDTH = 0.9
DEFAULT_WINDOW_WIDTH = 1.2
DEFAULT_FOOTPRINT = 0.8  # furniture width/depth when the catalogue has no entry
DEFAULT_COLUMN_SIZE = 0.3
DEFAULT_STAIRS_WIDTH = 1.0
DEFAULT_STAIRS_DEPTH = 2.5
DEFAULT_DIMENSION_OFFSET = -0.5
MIN_HOST_LENGTH = 0.01  # walls/dimensions shorter than this are not hit-tested


class Catalog(Protocol):
    def get_item(self, item_id: Optional[str]) -> Any: ...


# ── primitives ───────────────────────────────────────────────────────

def point_to_segment_dist(point: Any, a: Any, b: Any) -> float:
    """Distance from *point* to segment *ab*; a degenerate segment is a point."""
    px, py = xy(point)
    ax, ay = xy(a)
    bx, by = xy(b)
    dx, dy = bx - ax, by - ay
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return math.sqrt((px - ax) ** 2 + (py - ay) ** 2)

    t = ((px - ax) * dx + (py - ay) * dy) / len_sq
    t = max(0.0, min(1.0, t))
    proj_x = ax + t * dx
    proj_y = ay + t * dy
    return math.sqrt((px - proj_x) ** 2 + (py - proj_y) ** 2)


def segment_distances(point: Any, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
    """Vectorised :func:`point_to_segment_dist` over (N, 2) endpoint arrays."""
    p = np.asarray(xy(point), dtype=np.float64)
    ab = ends - starts
    len_sq = (ab * ab).sum(axis=1)
    ap = p - starts
    with np.errstate(divide="ignore", invalid="ignore"):
        t = np.where(len_sq > 0, (ap * ab).sum(axis=1) / len_sq, 0.0)
    t = np.clip(t, 0.0, 1.0)
    proj = starts + t[:, None] * ab
    return np.sqrt(((p - proj) ** 2).sum(axis=1))


def position_on_wall(point: Any, wall: Any) -> float:
    """Offset (metres from ``wall.start``) of the closest point on *wall*."""
    px, py = xy(point)
    sx, sy = xy(field(wall, "start"))
    ex, ey = xy(field(wall, "end"))
    dx, dy = ex - sx, ey - sy
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return 0.0
    t = ((px - sx) * dx + (py - sy) * dy) / len_sq
    t = max(0.0, min(1.0, t))
    return t * math.sqrt(len_sq)


def point_in_polygon(point: Any, vertices: Any) -> bool:
    """Even-odd ray casting against the closed ring *vertices*.

    A horizontal ray is cast towards +x; an edge counts when it straddles
    the ray's y (half-open in y) and crosses strictly to the right.  On an
    axis-aligned square this puts the left and bottom edges inside and the
    right and top edges outside.
    """
    px, py = xy(point)
    ring = [xy(v) for v in vertices or ()]
    inside = False
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if (yi > py) != (yj > py) and px < (xj - xi) * (py - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def _to_local(point: Any, origin: Any, rotation: float) -> tuple[float, float]:
    """Express *point* in a frame centred on *origin* and rotated by *rotation*."""
    px, py = xy(point)
    ox, oy = xy(origin)
    cos = math.cos(-rotation)
    sin = math.sin(-rotation)
    return (
        (px - ox) * cos - (py - oy) * sin,
        (px - ox) * sin + (py - oy) * cos,
    )


# ── per-type finders ─────────────────────────────────────────────────

def find_wall_at(point: Any, plan: Any, tolerance: Optional[float] = None) -> Any:
    """Nearest wall strictly within *tolerance*; the first one wins ties."""
    walls = list(field(plan, "walls") or ()) if plan is not None else []
    if not walls:
        return None
    tolerance = tolerance or WALL_TOLERANCE

    starts = np.array([xy(field(w, "start")) for w in walls], dtype=np.float64)
    ends = np.array([xy(field(w, "end")) for w in walls], dtype=np.float64)
    dists = segment_distances(point, starts, ends)
    candidates = np.flatnonzero(dists < tolerance)
    if not candidates.size:
        return None
    return walls[candidates[int(np.argmin(dists[candidates]))]]


def _walls_by_id(plan: Any) -> dict[Any, Any]:
    index: dict[Any, Any] = {}
    for wall in field(plan, "walls") or ():
        index.setdefault(field(wall, "id"), wall)
    return index


def _opening_center(opening: Any, wall: Any, default_width: float) -> tuple[float, float, float] | None:
    """Midpoint of an opening along its host wall, plus its width."""
    sx, sy = xy(field(wall, "start"))
    ex, ey = xy(field(wall, "end"))
    dx, dy = ex - sx, ey - sy
    length = math.sqrt(dx * dx + dy * dy)
    if length < MIN_HOST_LENGTH:
        return None
    nx, ny = dx / length, dy / length
    pos = field(opening, "position") or 0.0
    width = field(opening, "width") or default_width
    return sx + nx * (pos + width / 2), sy + ny * (pos + width / 2), width


def _find_opening_at(
    point: Any,
    plan: Any,
    collection: str,
    tolerance: Optional[float],
    default_width: float,
) -> Any:
    # Openings are approximated by a circle around their midpoint rather
    # than an oriented rectangle.
    if plan is None:
        return None
    openings = field(plan, collection) or ()
    walls = _walls_by_id(plan)
    tolerance = tolerance or OPENING_TOLERANCE
    px, py = xy(point)

    for opening in openings:
        wall = walls.get(field(opening, "wall_id"))
        if wall is None:
            continue
        center = _opening_center(opening, wall, default_width)
        if center is None:
            continue
        cx, cy, width = center
        if math.hypot(px - cx, py - cy) < tolerance + width / 2:
            return opening
    return None


def find_door_at(point: Any, plan: Any, tolerance: Optional[float] = None) -> Any:
    return _find_opening_at(point, plan, "doors", tolerance, DEFAULT_DOOR_WIDTH)


def find_window_at(point: Any, plan: Any, tolerance: Optional[float] = None) -> Any:
    return _find_opening_at(point, plan, "windows", tolerance, DEFAULT_WINDOW_WIDTH)


def furniture_footprint(item: Any, catalog: Optional[Catalog] = None) -> tuple[float, float]:
    """Half-width and half-depth of a placed furniture item."""
    catalog = catalog if catalog is not None else default_catalog()
    entry = catalog.get_item(field(item, "catalog_id"))
    width = field(entry, "width") if entry is not None else DEFAULT_FOOTPRINT
    depth = field(entry, "depth") if entry is not None else DEFAULT_FOOTPRINT

    scale = field(item, "scale")
    if scale:
        scale_x = field(scale, "x", 1.0)
        scale_depth = field(scale, "z") or field(scale, "y", 1.0)
    else:
        scale_x = scale_depth = 1.0
    return width * scale_x / 2, depth * scale_depth / 2


def find_furniture_at(
    point: Any,
    plan: Any,
    tolerance: Optional[float] = None,
    catalog: Optional[Catalog] = None,
) -> Any:
    """Topmost (last placed) furniture whose rotated footprint covers *point*."""
    if plan is None:
        return None
    tolerance = tolerance or FURNITURE_TOLERANCE

    for item in reversed(list(field(plan, "furniture") or ())):
        hw, hd = furniture_footprint(item, catalog)
        lx, ly = _to_local(point, field(item, "position"), field(item, "rotation") or 0.0)
        if abs(lx) < hw + tolerance and abs(ly) < hd + tolerance:
            return item
    return None


def find_column_at(point: Any, plan: Any, tolerance: Optional[float] = None) -> Any:
    if plan is None:
        return None
    tolerance = tolerance or COLUMN_TOLERANCE
    px, py = xy(point)

    for column in reversed(list(field(plan, "columns") or ())):
        size = field(column, "size") or DEFAULT_COLUMN_SIZE
        cx, cy = xy(field(column, "position"))
        if math.hypot(px - cx, py - cy) < size / 2 + tolerance:
            return column
    return None


def find_stairs_at(point: Any, plan: Any, tolerance: Optional[float] = None) -> Any:
    if plan is None:
        return None
    tolerance = tolerance or STAIRS_TOLERANCE

    for stair in reversed(list(field(plan, "stairs") or ())):
        width = field(stair, "width") or DEFAULT_STAIRS_WIDTH
        depth = field(stair, "depth") or DEFAULT_STAIRS_DEPTH
        lx, ly = _to_local(point, field(stair, "position"), field(stair, "rotation") or 0.0)
        if abs(lx) < width / 2 + tolerance and abs(ly) < depth / 2 + tolerance:
            return stair
    return None


def dimension_line(dimension: Any) -> tuple[tuple[float, float], tuple[float, float]] | None:
    """The drawn (offset) line of a dimension, or ``None`` if degenerate."""
    sx, sy = xy(field(dimension, "start"))
    ex, ey = xy(field(dimension, "end"))
    dx, dy = ex - sx, ey - sy
    length = math.sqrt(dx * dx + dy * dy)
    if length < MIN_HOST_LENGTH:
        return None
    offset = field(dimension, "offset")
    if offset is None:
        offset = DEFAULT_DIMENSION_OFFSET
    ox, oy = -dy / length * offset, dx / length * offset
    return (sx + ox, sy + oy), (ex + ox, ey + oy)


def find_dimension_at(point: Any, plan: Any, tolerance: Optional[float] = None) -> Any:
    if plan is None:
        return None
    tolerance = tolerance or DIMENSION_TOLERANCE

    for dimension in field(plan, "dimensions") or ():
        line = dimension_line(dimension)
        if line is None:
            continue
        p1, p2 = line
        if point_to_segment_dist(point, p1, p2) < tolerance:
            return dimension
    return None


def find_room_at(point: Any, plan: Any) -> Any:
    if plan is None:
        return None
    for room in field(plan, "rooms") or ():
        vertices = field(room, "vertices")
        if vertices and point_in_polygon(point, vertices):
            return room
    return None


# ── composite ────────────────────────────────────────────────────────

def find_element_at(
    point: Any,
    plan: Any,
    tolerance: Optional[float] = None,
    catalog: Optional[Catalog] = None,
    tolerances: Optional[Mapping[ElementKind, float]] = None,
) -> Optional[HitResult]:
    """Return the highest-priority element under *point*, or ``None``.

    *tolerance*, when given, replaces every finder's own default;
    otherwise *tolerances* may set it per element kind.
    """
    per_kind = tolerances or {}

    def tol(kind: ElementKind) -> Optional[float]:
        return tolerance if tolerance is not None else per_kind.get(kind)

    finders = (
        (ElementKind.FURNITURE, lambda: find_furniture_at(point, plan, tol(ElementKind.FURNITURE), catalog)),
        (ElementKind.COLUMN, lambda: find_column_at(point, plan, tol(ElementKind.COLUMN))),
        (ElementKind.STAIRS, lambda: find_stairs_at(point, plan, tol(ElementKind.STAIRS))),
        (ElementKind.DOOR, lambda: find_door_at(point, plan, tol(ElementKind.DOOR))),
        (ElementKind.WINDOW, lambda: find_window_at(point, plan, tol(ElementKind.WINDOW))),
        (ElementKind.DIMENSION, lambda: find_dimension_at(point, plan, tol(ElementKind.DIMENSION))),
        (ElementKind.WALL, lambda: find_wall_at(point, plan, tol(ElementKind.WALL))),
        (ElementKind.ROOM, lambda: find_room_at(point, plan)),
    )
    for kind, finder in finders:
        element = finder()
        if element is not None:
            return HitResult(type=kind, element=element)
    return None
