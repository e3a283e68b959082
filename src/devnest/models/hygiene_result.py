"""Hygiene operation result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class HygieneResult:
    """Outcome of a destructive operation on one target."""

    target: str
    success: bool
    freed_bytes: int = 0
    error: str = ""

    def label(self) -> str:
        """One-line status, e.g. '✓ /src/app' or '✗ /src/app: Permission denied'."""
        if self.success:
            return f"✓ {self.target}"
        return f"✗ {self.target}: {self.error}"


@dataclass(slots=True)
class CleanSummary:
    """Result of cleaning the build folders of one project."""

    path: str
    folders_cleaned: int = 0
    freed_bytes: int = 0
    errors: list[str] = field(default_factory=list)
    message: str = ""
