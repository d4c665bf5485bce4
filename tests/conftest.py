"""Shared test fixtures – a small single-room plan."""

from __future__ import annotations

import copy

import pytest

from packages.core.types import Plan
from packages.editor.data_model import load_plan


def _wall(wall_id: str, x1: float, y1: float, x2: float, y2: float) -> dict:
    return {"id": wall_id, "start": {"x": x1, "y": y1}, "end": {"x": x2, "y": y2}}


SIMPLE_ROOM = {
    "id": "plan-1",
    "name": "Test house",
    "schemaVersion": 2,
    "units": "meters",
    "floorHeight": 2.8,
    "wallThickness": 0.15,
    "walls": [
        _wall("w1", 0, 0, 5, 0),
        _wall("w2", 5, 0, 5, 4),
        _wall("w3", 5, 4, 0, 4),
        _wall("w4", 0, 4, 0, 0),
    ],
    "rooms": [
        {
            "id": "r1",
            "name": "Living",
            "vertices": [
                {"x": 0, "y": 0}, {"x": 5, "y": 0}, {"x": 5, "y": 4}, {"x": 0, "y": 4},
            ],
            "floorMaterial": "hardwood",
            "floorColor": "#e8dcc8",
        }
    ],
    # door centre (1.45, 0); window centre (2.4, 4) since w3 runs right-to-left
    "doors": [{"id": "d1", "wallId": "w1", "position": 1.0, "width": 0.9, "type": "single"}],
    "windows": [{"id": "win1", "wallId": "w3", "position": 2.0, "width": 1.2, "type": "standard"}],
    "dimensions": [],
    "annotations": [],
    # sofa-2seat is 1.6 × 0.85
    "furniture": [
        {
            "id": "f1",
            "catalogId": "sofa-2seat",
            "position": {"x": 2.5, "y": 2.0},
            "rotation": 0,
            "scale": {"x": 1, "y": 1, "z": 1},
        }
    ],
    "stairs": [],
    "columns": [{"id": "c1", "position": {"x": 4.0, "y": 3.0}, "size": 0.3}],
}


@pytest.fixture()
def plan_document() -> dict:
    """A 5 m × 4 m room: four walls, a door, a window, a sofa and a column.

    Walls run counter-clockwise from the origin; x to the right, y up.
    """
    return copy.deepcopy(SIMPLE_ROOM)


@pytest.fixture()
def plan(plan_document: dict) -> Plan:
    return load_plan(plan_document)


@pytest.fixture()
def single_wall_plan() -> Plan:
    """Only wall w1 = (0, 0) → (5, 0)."""
    return load_plan({"id": "plan-w", "name": "One wall", "walls": [_wall("w1", 0, 0, 5, 0)]})
