from __future__ import annotations

"""settings_service.py
Persisted engine settings for the Selo kernel, stored as JSON in the user's
home directory (``~/.selo/settings.json``, override with the
``SELO_SETTINGS_PATH`` environment variable).  Access via the *singleton*
:class:`SettingsService`.

Only knobs of the external engines live here.  Geometric tolerances are
always passed explicitly by the caller and have no stored default.  The
geometry operations never consult the service themselves; callers hand
:attr:`SettingsService.settings` to them.

Example
-------
>>> settings = SettingsService()
>>> settings.triangulation_snap_radius()
0.001
>>> settings.set("buffer_mitre_limit", 5.0)
>>> settings.save()
>>> buffer(ring, 1.0, settings.settings)  # doctest: +SKIP
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..utils.singleton import Singleton

__all__ = ["KernelSettings", "SettingsService"]

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "SELO_SETTINGS_PATH"


class KernelSettings(BaseModel):
    """Validated settings document."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    # Vertices closer than this are merged before constrained triangulation
    triangulation_snap_radius: float = Field(0.001, ge=0)
    # Mitre joins keep square corners square; the limit caps spikes at acute angles
    buffer_join_style: Literal["mitre", "round", "bevel"] = "mitre"
    buffer_mitre_limit: float = Field(10.0, gt=0)
    buffer_quad_segs: int = Field(8, ge=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class SettingsService(Singleton):
    """Load/save kernel settings to *~/.selo/settings.json* (singleton)."""

    _path: Path = Path.home() / ".selo" / "settings.json"

    # ------------------------------------------------------------------
    def __init__(self) -> None:  # noqa: D401
        # Guard - only run once due to Singleton inheritance
        if getattr(self, "_initialized", False):
            return

        env_path = os.environ.get(SETTINGS_ENV_VAR)
        if env_path:
            self._path = Path(env_path)

        self._settings = self._load()
        self._initialized = True

    # ------------------------------------------------------------------
    def _load(self) -> KernelSettings:
        """Read the JSON file if present; fall back to defaults on any problem."""
        if not self._path.exists():
            return KernelSettings()
        try:
            with self._path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
            return KernelSettings.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.error("Failed to load settings file %s: %s", self._path, exc)
            return KernelSettings()

    # ------------------------------------------------------------------
    @property
    def settings(self) -> KernelSettings:
        return self._settings

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any | None = None) -> Any | None:  # noqa: D401
        """Return setting *key* or *default* if unknown."""
        return getattr(self._settings, key, default)

    def set(self, key: str, value: Any) -> None:  # noqa: D401
        """Update a setting in memory. Call :meth:`save` to persist.

        Raises:
            KeyError: For an unknown key.
            pydantic.ValidationError: If *value* is out of range.

        """
        if key not in KernelSettings.model_fields:
            raise KeyError(f"Unknown setting: {key}")
        setattr(self._settings, key, value)

    def reset(self) -> None:
        """Restore all defaults in memory."""
        self._settings = KernelSettings()

    # ------------------------------------------------------------------
    def save(self) -> None:  # noqa: D401
        """Write current settings to JSON, creating directories as needed."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as fp:
                json.dump(self._settings.model_dump(), fp, indent=2)
            logger.info("Settings saved to %s", self._path)
        except OSError as exc:  # pragma: no cover - disk full etc.
            logger.error("Failed to save settings to %s: %s", self._path, exc)

    # --- Convenience Accessors ---
    def triangulation_snap_radius(self) -> float:
        return float(self._settings.triangulation_snap_radius)

    def buffer_join_style(self) -> str:
        return self._settings.buffer_join_style

    def buffer_mitre_limit(self) -> float:
        return float(self._settings.buffer_mitre_limit)

    def buffer_quad_segs(self) -> int:
        return int(self._settings.buffer_quad_segs)

    def log_level(self) -> str:
        return self._settings.log_level
