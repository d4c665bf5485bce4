"""Plan documents: id generation, default plan, migration and validation.

Plan documents arrive from persistence/import collaborators as parsed JSON
(plain dicts with camelCase keys).  :func:`migrate_plan` upgrades them in
place to the current schema, :func:`validate_plan` reports what is wrong
with them, and :func:`load_plan` turns a migrated document into the typed
:class:`~packages.core.types.Plan` model the editor works on.
"""

from __future__ import annotations

import itertools
import json
import logging
import time
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from packages.core.errors import PlanLoadError
from packages.core.types import SCHEMA_VERSION, Plan, ValidationResult

logger = logging.getLogger(__name__)

DEFAULT_PLAN_NAME = "New Plan"
DEFAULT_UNITS = "meters"
DEFAULT_FLOOR_HEIGHT = 2.8
DEFAULT_WALL_THICKNESS = 0.15

# (collection, id prefix) in document order.
COLLECTION_PREFIXES: tuple[tuple[str, str], ...] = (
    ("walls", "w"),
    ("rooms", "r"),
    ("doors", "d"),
    ("windows", "win"),
    ("dimensions", "dim"),
    ("annotations", "a"),
    ("furniture", "furn"),
    ("stairs", "stair"),
    ("columns", "col"),
)

# Explicit nulls in older documents stand for these values.
NULL_DEFAULTS: dict[str, dict[str, Any]] = {
    "doors": {"position": 0, "width": 0.9, "height": 2.1},
    "windows": {"position": 0, "width": 1.2, "height": 1.0, "sillHeight": 1.0},
    "dimensions": {"offset": -0.5},
    "columns": {"size": 0.3},
    "stairs": {"rotation": 0, "width": 1.0, "depth": 2.5},
}

_id_counter = itertools.count(1)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_id(prefix: str | None = "id") -> str:
    """Return ``"<prefix>-<base36 ms timestamp>-<counter>"``.

    The counter is per process: ids are unique within one editing session,
    not across processes.
    """
    return f"{prefix or 'id'}-{_base36(_now_ms())}-{next(_id_counter)}"


def create_default_plan(name: str | None = None) -> dict[str, Any]:
    """Return an empty plan document at the current schema version."""
    plan: dict[str, Any] = {
        "id": f"plan-{_now_ms()}",
        "name": name or DEFAULT_PLAN_NAME,
        "schemaVersion": SCHEMA_VERSION,
        "units": DEFAULT_UNITS,
        "floorHeight": DEFAULT_FLOOR_HEIGHT,
        "wallThickness": DEFAULT_WALL_THICKNESS,
    }
    for collection, _ in COLLECTION_PREFIXES:
        plan[collection] = []
    return plan


# ── migration ────────────────────────────────────────────────────────

def normalize_annotations(annotations: Any) -> list[Any]:
    """Collapse either annotation layout into one flat list.

    Current documents store a list; older ones stored
    ``{"notes": [...], "measurements": [...]}``, which flattens to notes
    followed by measurements.
    """
    if isinstance(annotations, list):
        return annotations
    flat: list[Any] = []
    if isinstance(annotations, dict):
        for key in ("notes", "measurements"):
            if isinstance(annotations.get(key), list):
                flat.extend(annotations[key])
    return flat


def _entities(plan: dict[str, Any], collection: str) -> list[dict[str, Any]]:
    value = plan.get(collection)
    if not isinstance(value, list):
        return []
    return [entity for entity in value if isinstance(entity, dict)]


def migrate_plan(plan: Any) -> Any:
    """Upgrade a plan document to the current schema, in place.

    Migration is additive and idempotent: missing collections and fields
    are filled in, values already present are left alone.  ``None`` (or any
    non-dict) is returned unchanged.
    """
    if not isinstance(plan, dict):
        return plan

    backfilled = 0
    for collection, _ in COLLECTION_PREFIXES:
        if collection == "annotations":
            continue
        if not plan.get(collection) and not isinstance(plan.get(collection), list):
            plan[collection] = []
            backfilled += 1

    annotations = plan.get("annotations")
    if not isinstance(annotations, list):
        plan["annotations"] = normalize_annotations(annotations)
        if annotations:
            logger.debug("Flattened legacy annotations into %d entries", len(plan["annotations"]))

    if not plan.get("units"):
        plan["units"] = DEFAULT_UNITS
    if not plan.get("floorHeight"):
        plan["floorHeight"] = DEFAULT_FLOOR_HEIGHT
    if not plan.get("wallThickness"):
        plan["wallThickness"] = DEFAULT_WALL_THICKNESS

    assigned = 0
    for collection, prefix in COLLECTION_PREFIXES:
        for entity in _entities(plan, collection):
            if not entity.get("id"):
                entity["id"] = generate_id(prefix)
                assigned += 1

    for door in _entities(plan, "doors"):
        if not door.get("type"):
            door["type"] = "single"
    for window in _entities(plan, "windows"):
        if not window.get("type"):
            window["type"] = "standard"
    for collection, defaults in NULL_DEFAULTS.items():
        for entity in _entities(plan, collection):
            for key, value in defaults.items():
                if key in entity and entity[key] is None:
                    entity[key] = value
    for item in _entities(plan, "furniture"):
        if not item.get("position"):
            item["position"] = {"x": 0, "y": 0}
        if item.get("rotation") is None:
            item["rotation"] = 0
        if not item.get("scale"):
            item["scale"] = {"x": 1, "y": 1, "z": 1}

    previous = plan.get("schemaVersion")
    plan["schemaVersion"] = SCHEMA_VERSION
    if backfilled or assigned or previous != SCHEMA_VERSION:
        logger.debug(
            "Migrated plan %s: v%s → v%d, %d collection(s) added, %d id(s) assigned",
            plan.get("id"), previous, SCHEMA_VERSION, backfilled, assigned,
        )
    return plan


# ── validation ───────────────────────────────────────────────────────

def validate_plan(plan: Any) -> ValidationResult:
    """Check structure and wall references; never mutates, never raises.

    Every violation is reported, in document order, so the caller can
    decide whether to block a save.
    """
    if plan is None:
        return ValidationResult(valid=False, errors=["Plan is null"])
    if isinstance(plan, BaseModel):
        plan = plan_to_document(plan)
    if not isinstance(plan, dict):
        return ValidationResult(valid=False, errors=["Plan must be an object"])

    errors: list[str] = []
    if not plan.get("id"):
        errors.append("Missing plan id")
    if not plan.get("name"):
        errors.append("Missing plan name")
    if not isinstance(plan.get("walls"), list):
        errors.append("walls must be an array")
    if not isinstance(plan.get("rooms"), list):
        errors.append("rooms must be an array")

    wall_ids = {wall.get("id") for wall in _entities(plan, "walls")}
    for door in _entities(plan, "doors"):
        if door.get("wallId") not in wall_ids:
            errors.append(f"Door {door.get('id')} references missing wall {door.get('wallId')}")
    for window in _entities(plan, "windows"):
        if window.get("wallId") not in wall_ids:
            errors.append(f"Window {window.get('id')} references missing wall {window.get('wallId')}")

    return ValidationResult(valid=not errors, errors=errors)


# ── typed model boundary ─────────────────────────────────────────────

def plan_to_document(plan: Plan) -> dict[str, Any]:
    """Dump a :class:`Plan` back to its camelCase JSON document."""
    return plan.model_dump(mode="json", by_alias=True)


def load_plan(document: Any) -> Plan:
    """Migrate *document* and parse it into a :class:`Plan`.

    Raises :class:`PlanLoadError` when the document cannot be represented
    (not an object, or entities missing required geometry).
    """
    if not isinstance(document, dict):
        raise PlanLoadError("Plan document must be a JSON object")
    migrate_plan(document)
    try:
        plan = Plan.model_validate(document)
    except ValidationError as exc:
        raise PlanLoadError(
            f"Invalid plan document: {exc.error_count()} error(s)",
            {"errors": str(exc)},
        ) from exc
    logger.info(
        "Loaded plan %s (%d walls, %d rooms, %d furniture)",
        plan.id, len(plan.walls), len(plan.rooms), len(plan.furniture),
    )
    return plan


def load_plan_file(path: str | Path) -> Plan:
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PlanLoadError(f"Cannot read plan file {path}: {exc}", {"path": str(path)}) from exc
    return load_plan(document)
