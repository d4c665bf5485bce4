"""Exception hierarchy for the plan editor.

Engine queries never raise; these are for the I/O boundaries (loading
documents and configuration, addressing elements by id from the CLI/API).
"""

from __future__ import annotations


class PlanEditorError(Exception):
    """Base exception for all plan-editor errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PlanEditorError):
    """Raised when the editor configuration file is invalid."""


class PlanLoadError(PlanEditorError):
    """Raised when a plan document cannot be read or parsed."""


class ElementNotFoundError(PlanEditorError):
    """Raised when an element addressed by id does not exist."""
