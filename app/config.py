# app/config.py
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict
import json
import logging
import os

log = logging.getLogger(__name__)

_SETTINGS_FILE = Path("settings.json")


@dataclass(frozen=True)
class Settings:
    tick_ms: int = 100              # live display refresh
    db_path: str = "data/texts.db"
    history_limit: int = 3600       # ~6 minutes of samples at 10Hz
    log_file: str = "typeforge.log"
    wpm_display_cap: int = 300


def _coerce(current: Any, value: Any) -> Any:
    if isinstance(current, bool):
        return bool(value)
    if isinstance(current, int):
        return int(value)
    return str(value)


def _overlay(base: Settings, data: Dict[str, Any]) -> Settings:
    known = {f.name: getattr(base, f.name) for f in fields(base)}
    changes = {}
    for key, value in data.items():
        if key not in known:
            log.warning("Ignoring unknown setting %r", key)
            continue
        try:
            changes[key] = _coerce(known[key], value)
        except (TypeError, ValueError):
            log.warning("Bad value for setting %r: %r", key, value)
    return replace(base, **changes)


def load_settings(path: Path = _SETTINGS_FILE) -> Settings:
    """Defaults, then settings.json (if present), then environment overrides."""
    settings = Settings()
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning("Failed to read %s: %s", path, e)
        else:
            if isinstance(data, dict):
                settings = _overlay(settings, data)
            else:
                log.warning("%s must contain a JSON object", path)

    env = {}
    if os.environ.get("TYPEFORGE_DB"):
        env["db_path"] = os.environ["TYPEFORGE_DB"]
    if os.environ.get("TYPEFORGE_TICK_MS"):
        env["tick_ms"] = os.environ["TYPEFORGE_TICK_MS"]
    if env:
        settings = _overlay(settings, env)

    if settings.tick_ms <= 0:
        log.warning("tick_ms must be positive, using default")
        settings = replace(settings, tick_ms=Settings.tick_ms)
    return settings
