"""JSON file storage for the project list and cleanup history."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from devnest.utils import xdg_data_home

log = logging.getLogger(__name__)

_DATA_DIR = xdg_data_home() / "devnest"

HISTORY_FILE = _DATA_DIR / "history.json"
PROJECTS_FILE = _DATA_DIR / "projects.json"


def _ensure_data_dir() -> None:
    """Create the data directory if it doesn't exist."""
    _DATA_DIR.mkdir(parents=True, exist_ok=True)


def _load(path: Path, key: str) -> dict[str, Any]:
    if not path.exists():
        return {key: []}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError):
        log.exception("Failed to load %s", path)
        return {key: []}
    if not isinstance(data, dict) or not isinstance(data.get(key), list):
        log.warning("Ignoring malformed data in %s", path)
        return {key: []}
    return data


def _save(path: Path, data: dict[str, Any]) -> None:
    _ensure_data_dir()
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError:
        log.exception("Failed to save %s", path)


def load_history() -> dict[str, Any]:
    """Load the history file, returning empty structure if missing."""
    return _load(HISTORY_FILE, "sessions")


def save_history(data: dict[str, Any]) -> None:
    """Write the history data to disk."""
    _save(HISTORY_FILE, data)


def load_projects() -> dict[str, Any]:
    """Load the persisted project list, returning empty structure if missing."""
    return _load(PROJECTS_FILE, "projects")


def save_projects(data: dict[str, Any]) -> None:
    """Write the project list to disk."""
    _save(PROJECTS_FILE, data)
