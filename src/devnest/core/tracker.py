"""Tracks freed space across sessions."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from devnest.models.hygiene_result import CleanSummary, HygieneResult
from devnest.storage import load_history, save_history

log = logging.getLogger(__name__)


class Tracker:
    """Tracks and persists cleanup statistics."""

    def __init__(self) -> None:
        self._session: list[dict[str, Any]] = []

    @property
    def session_bytes_freed(self) -> int:
        """Total bytes freed in the current session."""
        return sum(d["bytes_freed"] for d in self._session)

    def record(self, results: list[HygieneResult], operation: str = "dependencies") -> None:
        """Record successful per-project results for the current session."""
        for r in results:
            if r.success:
                self._session.append({"target": r.target, "operation": operation, "bytes_freed": r.freed_bytes})

    def record_clean(self, summary: CleanSummary) -> None:
        """Record a build folder cleanup for the current session."""
        if summary.folders_cleaned:
            self._session.append({"target": summary.path, "operation": "build", "bytes_freed": summary.freed_bytes})

    def get_last_clean_time(self) -> str | None:
        """Return ISO timestamp of the most recent cleanup session, or None."""
        sessions = load_history().get("sessions", [])
        return sessions[-1]["timestamp"] if sessions else None

    def save_session(self) -> None:
        """Persist the current session to history."""
        if not self._session:
            return

        history = load_history()
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": list(self._session),
        }
        history["sessions"].append(entry)
        save_history(history)

        log.info(
            "Saved session: %d bytes freed in %d project(s)",
            _session_bytes(entry),
            len({d["target"] for d in entry["details"]}),
        )
        self._session.clear()

    def get_stats(self, period: str = "all") -> dict[str, Any]:
        """Get aggregated statistics for a time period.

        Args:
            period: One of 'today', 'week', 'month', 'all'.
        """
        all_sessions = load_history().get("sessions", [])

        match period:
            case "today":
                cutoff = _start_of_today()
            case "week":
                cutoff = _start_of_today() - timedelta(days=7)
            case "month":
                cutoff = _start_of_today() - timedelta(days=30)
            case _:
                cutoff = None

        if cutoff is not None:
            sessions = [s for s in all_sessions if datetime.fromisoformat(s["timestamp"]) >= cutoff]
        else:
            sessions = all_sessions

        per_project: dict[str, int] = {}
        for session in sessions:
            for detail in session.get("details", []):
                target = detail.get("target", "")
                per_project[target] = per_project.get(target, 0) + detail.get("bytes_freed", 0)

        return {
            "period": period,
            "bytes_freed": sum(_session_bytes(s) for s in sessions),
            "session_count": len(sessions),
            "lifetime_bytes_freed": sum(_session_bytes(s) for s in all_sessions),
            "per_project": per_project,
        }


def _session_bytes(session: dict[str, Any]) -> int:
    """Derive total bytes freed from a session's details."""
    return sum(d.get("bytes_freed", 0) for d in session.get("details", []))


def _start_of_today() -> datetime:
    """Return the start of the current UTC day."""
    now = datetime.now(timezone.utc)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)
