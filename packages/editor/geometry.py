"""Coordinate transforms, grid/angle snapping and distance primitives.

Every function here is pure and total over finite input.  Points may be
:class:`~packages.core.types.Point` models, any object with ``x``/``y``
attributes, ``{"x": …, "y": …}`` mappings or ``(x, y)`` pairs; results
are always :class:`Point`.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Sequence

import numpy as np
from pydantic.alias_generators import to_camel

from packages.core.types import Point

GRID_SIZE = 0.25  # metres
ANGLE_SNAP = 15  # degrees
MAGNETIC_THRESHOLD = 0.3  # metres, wall endpoint attraction radius


def field(obj: Any, name: str, default: Any = None) -> Any:
    """Read *name* from a model attribute or a (camelCase) document key."""
    if isinstance(obj, Mapping):
        if name in obj:
            return obj[name]
        return obj.get(to_camel(name), default)
    return getattr(obj, name, default)


def xy(point: Any) -> tuple[float, float]:
    """Coordinates of a model, ``{"x", "y"}`` mapping or ``(x, y)`` pair."""
    if isinstance(point, Mapping) or hasattr(point, "x"):
        return float(field(point, "x", 0.0)), float(field(point, "y", 0.0))
    if isinstance(point, (Sequence, np.ndarray)) and not isinstance(point, str) and len(point) == 2:
        x, y = point
        return float(x), float(y)
    raise TypeError(f"Expected a point, got {type(point).__name__}")


def _round_half_up(value: float) -> float:
    # Ties go towards +inf so that a point exactly between two grid lines
    # always lands on the same one regardless of sign.
    return math.floor(value + 0.5)


# ── view transforms ──────────────────────────────────────────────────

def screen_to_world(screen: Any, pan: Any, zoom: float) -> Point:
    """Convert screen pixels to world metres: ``(screen - pan) / zoom``.

    *zoom* must be positive.
    """
    sx, sy = xy(screen)
    px, py = xy(pan)
    return Point(x=(sx - px) / zoom, y=(sy - py) / zoom)


def world_to_screen(world: Any, pan: Any, zoom: float) -> Point:
    wx, wy = xy(world)
    px, py = xy(pan)
    return Point(x=wx * zoom + px, y=wy * zoom + py)


# ── snapping ─────────────────────────────────────────────────────────

def snap(value: float, grid_size: float = GRID_SIZE) -> float:
    """Round *value* to the nearest multiple of *grid_size* (half-up)."""
    g = grid_size or GRID_SIZE
    return _round_half_up(value / g) * g


def snap_point(point: Any, grid_size: float = GRID_SIZE) -> Point:
    x, y = xy(point)
    return Point(x=snap(x, grid_size), y=snap(y, grid_size))


def wall_endpoints(walls: Iterable[Any]) -> np.ndarray:
    """Return an (2N, 2) array ``[w0.start, w0.end, w1.start, …]``."""
    coords: list[tuple[float, float]] = []
    for wall in walls:
        coords.append(xy(field(wall, "start")))
        coords.append(xy(field(wall, "end")))
    return np.asarray(coords, dtype=np.float64).reshape(-1, 2)


def magnetic_snap(
    point: Any,
    walls: Iterable[Any],
    threshold: float = MAGNETIC_THRESHOLD,
    grid_size: float = GRID_SIZE,
) -> Point:
    """Snap to the nearest wall endpoint closer than *threshold*.

    Endpoints are considered in plan order (start before end); on an exact
    distance tie the first one wins.  Without a candidate the point is
    snapped to the grid instead.
    """
    px, py = xy(point)
    endpoints = wall_endpoints(walls)
    if len(endpoints):
        dists = np.sqrt(((endpoints - (px, py)) ** 2).sum(axis=1))
        candidates = np.flatnonzero(dists < threshold)
        if candidates.size:
            # argmin returns the first index of the minimum → first-wins ties
            best = candidates[int(np.argmin(dists[candidates]))]
            return Point(x=float(endpoints[best, 0]), y=float(endpoints[best, 1]))
    return snap_point(point, grid_size)


def nearby_endpoints(
    point: Any,
    walls: Iterable[Any],
    threshold: float = MAGNETIC_THRESHOLD,
    min_distance: float = 0.01,
) -> list[Point]:
    """Wall endpoints inside the magnetic radius, excluding coincident ones.

    These are the snap indicators shown while a wall is being drawn.
    """
    px, py = xy(point)
    found: list[Point] = []
    for ex, ey in wall_endpoints(walls):
        d = math.hypot(px - ex, py - ey)
        if min_distance < d < threshold:
            found.append(Point(x=float(ex), y=float(ey)))
    return found


def angle_snap(angle: float, increment_degrees: float = ANGLE_SNAP) -> float:
    """Round *angle* (radians) to the nearest multiple of the increment."""
    inc = (increment_degrees or ANGLE_SNAP) * math.pi / 180
    return _round_half_up(angle / inc) * inc


def constrain_line(
    start: Any, end: Any, increment_degrees: float = ANGLE_SNAP,
) -> Point:
    """Rotate *end* about *start* onto the nearest snapped angle.

    The segment length is preserved, so drawing with the constraint held
    gives horizontal, vertical and diagonal walls.
    """
    sx, sy = xy(start)
    ex, ey = xy(end)
    dx, dy = ex - sx, ey - sy
    length = math.sqrt(dx * dx + dy * dy)
    snapped = angle_snap(math.atan2(dy, dx), increment_degrees)
    return Point(x=sx + math.cos(snapped) * length, y=sy + math.sin(snapped) * length)


def distance(p1: Any, p2: Any) -> float:
    x1, y1 = xy(p1)
    x2, y2 = xy(p2)
    dx, dy = x2 - x1, y2 - y1
    return math.sqrt(dx * dx + dy * dy)
