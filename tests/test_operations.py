"""Tests for snapshot-guarded editing operations."""

from __future__ import annotations

import math

import pytest

from packages.core.errors import ElementNotFoundError
from packages.core.events import EventBus
from packages.core.types import ElementKind, Plan
from packages.editor.data_model import load_plan, validate_plan
from packages.editor.history import HistoryManager
from packages.editor.operations import (
    add_dimension,
    add_room,
    add_wall,
    delete_element,
    erase_at,
    place_column,
    place_door,
    place_furniture,
    place_stairs,
    place_window,
    rotate_element,
)


class Session:
    """A plan with history and an event log, as an editing controller holds it."""

    def __init__(self, plan: Plan):
        self.plan = plan
        self.events = EventBus()
        self.history = HistoryManager(lambda: self.plan, self._restore, events=self.events)
        self.log: list[str] = []
        for name in ("wall:added", "door:added", "window:added", "wall:deleted", "plan:changed"):
            self.events.on(name, lambda data, name=name: self.log.append(name))

    def _restore(self, document):
        self.plan = load_plan(document)

    @property
    def kw(self) -> dict:
        return {"history": self.history, "events": self.events}


@pytest.fixture()
def session(plan) -> Session:
    return Session(plan)


class TestAddWall:
    def test_appends_with_plan_defaults(self, session):
        wall = add_wall(session.plan, {"x": 0, "y": 0}, {"x": 0, "y": -3}, **session.kw)
        assert session.plan.walls[-1] is wall
        assert wall.id.startswith("w-")
        assert (wall.height, wall.thickness) == (2.8, 0.15)
        assert session.log == ["wall:added", "plan:changed"]

    def test_constrained(self, single_wall_plan):
        wall = add_wall(single_wall_plan, {"x": 0, "y": 0}, {"x": 3, "y": 0.2}, constrain=True)
        assert wall.end.y == pytest.approx(0.0, abs=1e-12)
        assert wall.end.x == pytest.approx(math.hypot(3, 0.2))

    def test_undo(self, session):
        add_wall(session.plan, {"x": 0, "y": 0}, {"x": 1, "y": 1}, **session.kw)
        assert session.history.undo()
        assert [w.id for w in session.plan.walls] == ["w1", "w2", "w3", "w4"]


class TestOpenings:
    def test_door_centred_on_click(self, single_wall_plan):
        door = place_door(single_wall_plan, {"x": 2.0, "y": 0.1})
        assert door.wall_id == "w1"
        assert door.position == pytest.approx(1.55)
        assert (door.width, door.type) == (0.9, "single")

    def test_door_clamped_at_wall_start(self, single_wall_plan):
        door = place_door(single_wall_plan, {"x": 0.1, "y": 0})
        assert door.position == 0.0

    def test_door_needs_a_wall(self, session):
        before = session.history.undo_depth
        assert place_door(session.plan, {"x": 2.5, "y": 2.0}, **session.kw) is None
        assert session.history.undo_depth == before
        assert session.log == []

    def test_window(self, single_wall_plan):
        window = place_window(single_wall_plan, {"x": 3.0, "y": -0.1})
        assert window.wall_id == "w1"
        assert window.position == pytest.approx(2.4)
        assert (window.width, window.type, window.sill_height) == (1.2, "standard", 1.0)

    def test_placed_door_is_hit(self, single_wall_plan):
        from packages.editor.hit_testing import find_door_at

        door = place_door(single_wall_plan, {"x": 3.0, "y": 0})
        assert find_door_at({"x": 3.0, "y": 0}, single_wall_plan) is door


class TestPlacement:
    def test_furniture(self, single_wall_plan):
        item = place_furniture(single_wall_plan, "bed-double", {"x": 1, "y": 1}, rotation=0.5)
        assert item.id.startswith("furn-")
        assert (item.position.x, item.position.y, item.rotation) == (1.0, 1.0, 0.5)
        assert (item.scale.x, item.scale.y, item.scale.z) == (1.0, 1.0, 1.0)

    def test_column_and_stairs_take_floor_height(self, single_wall_plan):
        column = place_column(single_wall_plan, {"x": 1, "y": 1})
        stairs = place_stairs(single_wall_plan, {"x": 3, "y": 1})
        assert column.height == stairs.height == 2.8
        assert stairs.steps == 12

    def test_dimension_label(self, single_wall_plan):
        dim = add_dimension(single_wall_plan, {"x": 0, "y": 0}, {"x": 3, "y": 4})
        assert dim.label == "5.00m"
        assert dim.offset == -0.5

    def test_short_dimension_dropped(self, single_wall_plan):
        assert add_dimension(single_wall_plan, {"x": 0, "y": 0}, {"x": 0.01, "y": 0}) is None
        assert single_wall_plan.dimensions == []

    def test_room(self, single_wall_plan):
        room = add_room(single_wall_plan, [{"x": 0, "y": 0}, {"x": 2, "y": 0}, {"x": 2, "y": 2}])
        assert room.name == "Room"
        assert len(room.vertices) == 3
        assert add_room(single_wall_plan, [{"x": 0, "y": 0}, {"x": 1, "y": 1}]) is None


class TestRotate:
    def test_rotate_furniture(self, session):
        item = rotate_element(session.plan, "furniture", "f1", **session.kw)
        assert item.rotation == pytest.approx(math.pi / 4)
        session.history.undo()
        assert session.plan.furniture[0].rotation == 0

    def test_rotate_column_rejected(self, plan):
        with pytest.raises(ValueError):
            rotate_element(plan, ElementKind.COLUMN, "c1")


class TestDelete:
    def test_wall_cascades_to_openings(self, session):
        delete_element(session.plan, ElementKind.WALL, "w1", **session.kw)
        assert [w.id for w in session.plan.walls] == ["w2", "w3", "w4"]
        assert session.plan.doors == []
        assert [w.id for w in session.plan.windows] == ["win1"]
        assert validate_plan(session.plan).valid
        assert session.log == ["wall:deleted", "plan:changed"]

    def test_wall_without_cascade_leaves_dangling_door(self, plan):
        delete_element(plan, "wall", "w1", cascade=False)
        assert [d.id for d in plan.doors] == ["d1"]
        assert validate_plan(plan).errors == ["Door d1 references missing wall w1"]

    def test_undo_restores_wall_and_openings(self, session):
        delete_element(session.plan, "wall", "w1", **session.kw)
        session.history.undo()
        assert [w.id for w in session.plan.walls] == ["w1", "w2", "w3", "w4"]
        assert [d.id for d in session.plan.doors] == ["d1"]

    def test_unknown_id(self, session):
        with pytest.raises(ElementNotFoundError):
            delete_element(session.plan, "column", "nope", **session.kw)
        assert session.history.undo_depth == 0

    def test_unknown_kind(self, plan):
        with pytest.raises(ValueError):
            delete_element(plan, "chimney", "x")


class TestEraseAt:
    def test_erases_topmost(self, session):
        erased = erase_at(session.plan, {"x": 2.5, "y": 2.0}, **session.kw)
        assert erased.id == "f1"
        assert session.plan.furniture == []
        assert [r.id for r in session.plan.rooms] == ["r1"]

    def test_miss(self, session):
        assert erase_at(session.plan, {"x": 20, "y": 20}, **session.kw) is None
        assert session.history.undo_depth == 0
