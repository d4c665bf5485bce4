"""Undo/redo history as a bounded stack of serialized document snapshots.

The manager never touches the document itself; the host supplies two
accessors: ``get_state()`` returning the current document, and
``restore_state(state)`` replacing it.  Every snapshot is a JSON string,
so the stored history is immutable whatever the host does to its live
document afterwards.

Callers must take a :meth:`HistoryManager.snapshot` *before* the mutation
it is meant to undo; a forgotten snapshot cannot be detected here.  Each
snapshot copies the whole document, so memory and time grow with document
size.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from typing import Any, Callable, Optional

from pydantic import BaseModel

from packages.core.events import EventBus

logger = logging.getLogger(__name__)

MAX_STACK = 50

GetState = Callable[[], Any]
RestoreState = Callable[[Any], None]


def serialize_state(state: Any) -> str:
    if isinstance(state, BaseModel):
        return state.model_dump_json(by_alias=True)
    return json.dumps(state)


class HistoryManager:
    def __init__(
        self,
        get_state: Optional[GetState] = None,
        restore_state: Optional[RestoreState] = None,
        *,
        max_stack: int = MAX_STACK,
        events: Optional[EventBus] = None,
    ) -> None:
        self.max_stack = max_stack
        self.events = events
        self._get_state = get_state
        self._restore_state = restore_state
        self._undo: deque[str] = deque(maxlen=max_stack)
        self._redo: list[str] = []

    def init(self, get_state: GetState, restore_state: RestoreState) -> None:
        """Bind new state accessors and start with empty history."""
        self._get_state = get_state
        self._restore_state = restore_state
        self._undo.clear()
        self._redo.clear()

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return len(self._undo) > 0

    def can_redo(self) -> bool:
        return len(self._redo) > 0

    def snapshot(self) -> None:
        """Record the current state; call before mutating the document.

        A new snapshot discards the redo history.  Once the stack holds
        ``max_stack`` entries the oldest one is dropped.
        """
        if self._get_state is None:
            return
        state = self._get_state()
        if state is None:
            return
        if len(self._undo) == self.max_stack:
            logger.debug("History full (%d), dropping oldest snapshot", self.max_stack)
        self._undo.append(serialize_state(state))
        self._redo.clear()
        self._notify_changed()

    def undo(self) -> bool:
        """Restore the most recent snapshot; ``False`` if there is none."""
        if not self.can_undo() or self._get_state is None or self._restore_state is None:
            return False
        self._redo.append(serialize_state(self._get_state()))
        previous = json.loads(self._undo.pop())
        self._restore_state(previous)
        self._emit("history:undo", previous)
        self._notify_changed()
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone state; ``False`` if there is none."""
        if not self.can_redo() or self._get_state is None or self._restore_state is None:
            return False
        self._undo.append(serialize_state(self._get_state()))
        following = json.loads(self._redo.pop())
        self._restore_state(following)
        self._emit("history:redo", following)
        self._notify_changed()
        return True

    def clear(self) -> None:
        """Forget all history, e.g. when a different document is loaded."""
        self._undo.clear()
        self._redo.clear()
        self._notify_changed()

    def _emit(self, event: str, data: Any) -> None:
        if self.events is not None:
            self.events.emit(event, data)

    def _notify_changed(self) -> None:
        self._emit("history:changed", {"can_undo": self.can_undo(), "can_redo": self.can_redo()})
