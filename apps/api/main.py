"""FastAPI application exposing one in-memory plan editing session.

The host (browser editor, scripts) loads a plan document, queries it
(hit testing, snapping, validation), edits it and walks the undo/redo
history.  Nothing is persisted: loading another plan replaces the session.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel as PydanticBaseModel

from packages.core.errors import ElementNotFoundError, PlanLoadError
from packages.core.events import EventBus
from packages.core.settings import get_settings
from packages.core.types import ElementKind, Plan, Point
from packages.editor.data_model import (
    create_default_plan,
    load_plan,
    plan_to_document,
    validate_plan,
)
from packages.editor.geometry import constrain_line, magnetic_snap, nearby_endpoints, snap_point
from packages.editor.hit_testing import find_element_at
from packages.editor.history import HistoryManager
from packages.editor.operations import add_wall, delete_element

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Plan Editor API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # permissive for local development; tighten for production
    allow_methods=["*"],
    allow_headers=["*"],
)


def _restore(document: Any) -> None:
    _state["plan"] = Plan.model_validate(document)


# ── In-memory session (single plan) ──────────────────────────────────
_state: dict = {
    "plan": None,     # Plan or None
    "events": EventBus(),
}
_state["history"] = HistoryManager(
    lambda: _state["plan"],
    _restore,
    max_stack=get_settings().history.max_stack,
    events=_state["events"],
)


def reset_session() -> None:
    """Drop the current plan, its history and every event subscriber."""
    _state["plan"] = None
    _state["events"].clear()
    _state["history"].clear()


def _current_plan() -> Plan:
    if _state["plan"] is None:
        raise HTTPException(404, "No plan loaded yet")
    return _state["plan"]


def _json(model: PydanticBaseModel) -> JSONResponse:
    return JSONResponse(content=json.loads(model.model_dump_json(by_alias=True)))


def _history_status() -> dict:
    history: HistoryManager = _state["history"]
    return {
        "can_undo": history.can_undo(),
        "can_redo": history.can_redo(),
        "undo_depth": history.undo_depth,
        "redo_depth": history.redo_depth,
    }


def _open(document: dict) -> dict:
    try:
        plan = load_plan(document)
    except PlanLoadError as e:
        logger.warning("Rejected plan document: %s", e.message)
        raise HTTPException(400, e.message)

    _state["plan"] = plan
    _state["history"].clear()
    _state["events"].emit("plan:loaded", plan)
    result = validate_plan(plan)
    logger.info(f"📐 Plan {plan.id} loaded ({len(plan.walls)} walls, valid={result.valid})")
    return {"id": plan.id, "name": plan.name, "valid": result.valid, "errors": result.errors}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/plan")
def open_plan(document: dict):
    """Load a plan document (migrated to the current schema) as the session."""
    return _open(document)


class NewPlanRequest(PydanticBaseModel):
    name: Optional[str] = None


@app.post("/plan/new")
def new_plan(req: NewPlanRequest):
    return _open(create_default_plan(req.name))


@app.get("/plan")
def get_plan():
    """Return the current plan document."""
    plan = _current_plan()
    return JSONResponse(content=plan_to_document(plan))


@app.post("/validate")
def validate_document(document: Optional[dict] = None):
    """Validate the posted document, or the session plan when no body is sent."""
    target = document if document is not None else _current_plan()
    return _json(validate_plan(target))


class PointRequest(PydanticBaseModel):
    x: float
    y: float
    tolerance: Optional[float] = None


@app.post("/hit-test")
def hit_test(req: PointRequest):
    """Return the element under a world point, by editor priority."""
    plan = _current_plan()
    settings = get_settings()
    tolerance = req.tolerance if req.tolerance is not None else settings.hit_test.override
    hit = find_element_at(req, plan, tolerance, tolerances=settings.hit_test.per_kind())
    if hit is None:
        return {"type": None, "element": None}
    return _json(hit)


class SnapRequest(PydanticBaseModel):
    x: float
    y: float
    magnetic: bool = True
    constrain_from: Optional[Point] = None


@app.post("/snap")
def snap(req: SnapRequest):
    """Snap a pointer position the way the wall tool does."""
    settings = get_settings().snap
    point = Point(x=req.x, y=req.y)
    plan: Plan | None = _state["plan"]
    walls = plan.walls if plan is not None else []

    if not settings.enabled:
        snapped = point
    elif req.magnetic:
        snapped = magnetic_snap(point, walls, settings.magnetic_threshold, settings.grid_size)
    else:
        snapped = snap_point(point, settings.grid_size)
    if req.constrain_from is not None:
        snapped = constrain_line(req.constrain_from, snapped, settings.angle_increment_deg)

    indicators = nearby_endpoints(point, walls, settings.magnetic_threshold)
    return {
        "x": snapped.x,
        "y": snapped.y,
        "indicators": [p.model_dump() for p in indicators],
    }


class WallRequest(PydanticBaseModel):
    start: Point
    end: Point
    constrain: bool = False


@app.post("/walls")
def create_wall(req: WallRequest):
    plan = _current_plan()
    wall = add_wall(
        plan, req.start, req.end,
        constrain=req.constrain,
        history=_state["history"],
        events=_state["events"],
    )
    logger.info(f"🧱 Added wall {wall.id} — plan now has {len(plan.walls)} walls")
    return _json(wall)


@app.delete("/elements/{kind}/{element_id}")
def remove_element(kind: str, element_id: str, cascade: bool = True):
    """Delete an element; deleting a wall removes its openings unless cascade=false."""
    plan = _current_plan()
    try:
        element_kind = ElementKind(kind)
    except ValueError:
        raise HTTPException(400, f"Unknown element kind '{kind}'")

    try:
        element = delete_element(
            plan, element_kind, element_id,
            cascade=cascade,
            history=_state["history"],
            events=_state["events"],
        )
    except ElementNotFoundError as e:
        raise HTTPException(404, e.message)

    logger.info(f"🗑️  Deleted {kind} {element_id}")
    return {"deleted": element.id, "kind": element_kind.value, "valid": validate_plan(plan).valid}


@app.post("/undo")
def undo():
    _current_plan()
    ok = _state["history"].undo()
    return {"ok": ok, **_history_status()}


@app.post("/redo")
def redo():
    _current_plan()
    ok = _state["history"].redo()
    return {"ok": ok, **_history_status()}


@app.get("/history")
def history_status():
    return _history_status()
