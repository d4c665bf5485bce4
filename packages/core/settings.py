"""Editor configuration: snapping, hit-test tolerances and history depth.

Settings are read from a YAML file.  The path comes from the caller or the
``PLAN_EDITOR_CONFIG`` environment variable; without either the built-in
defaults apply.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from packages.core.errors import ConfigurationError
from packages.core.types import ElementKind

logger = logging.getLogger(__name__)

CONFIG_ENV = "PLAN_EDITOR_CONFIG"


class SnapSettings(BaseModel):
    grid_size: float = Field(0.25, gt=0.0)
    angle_increment_deg: float = Field(15.0, gt=0.0, le=90.0)
    magnetic_threshold: float = Field(0.3, ge=0.0)
    enabled: bool = True


class HitTestSettings(BaseModel):
    """Per-kind default tolerances in metres.

    ``override`` replaces all of them for a composite query when set.
    """

    wall: float = Field(0.3, ge=0.0)
    door: float = Field(0.3, ge=0.0)
    window: float = Field(0.3, ge=0.0)
    furniture: float = Field(0.2, ge=0.0)
    column: float = Field(0.3, ge=0.0)
    stairs: float = Field(0.2, ge=0.0)
    dimension: float = Field(0.3, ge=0.0)
    override: Optional[float] = Field(None, ge=0.0)

    def per_kind(self) -> dict[ElementKind, float]:
        return {
            ElementKind.WALL: self.wall,
            ElementKind.DOOR: self.door,
            ElementKind.WINDOW: self.window,
            ElementKind.FURNITURE: self.furniture,
            ElementKind.COLUMN: self.column,
            ElementKind.STAIRS: self.stairs,
            ElementKind.DIMENSION: self.dimension,
        }


class HistorySettings(BaseModel):
    max_stack: int = Field(50, ge=1, le=10_000)


class EditorSettings(BaseModel):
    snap: SnapSettings = Field(default_factory=SnapSettings)
    hit_test: HitTestSettings = Field(default_factory=HitTestSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "EditorSettings":
        """Load settings from a YAML file.

        Raises :class:`ConfigurationError` if an explicitly given file is
        missing or its content does not validate.
        """
        raw_path = path or os.getenv(CONFIG_ENV)
        if not raw_path:
            return cls()
        config_path = Path(raw_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)},
            )
        with config_path.open("r", encoding="utf-8") as fp:
            try:
                payload = yaml.safe_load(fp) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
        try:
            settings = cls.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc
        logger.info("Loaded editor settings from %s", config_path)
        return settings


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> EditorSettings:
    return EditorSettings.load(path)
