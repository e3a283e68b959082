"""Read-only project inspection dataclasses."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ProjectScript:
    """A named script from a package.json manifest."""

    name: str
    command: str


@dataclass(slots=True)
class Vulnerabilities:
    low: int = 0
    moderate: int = 0
    high: int = 0
    critical: int = 0

    @property
    def total(self) -> int:
        return self.low + self.moderate + self.high + self.critical


@dataclass(slots=True)
class HealthStatus:
    """Snapshot of outdated packages and audit findings."""

    outdated_count: int = 0
    vulnerabilities: Vulnerabilities = field(default_factory=Vulnerabilities)
    last_checked: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "outdatedCount": self.outdated_count,
            "vulnerabilities": asdict(self.vulnerabilities),
            "lastChecked": self.last_checked,
        }


@dataclass(frozen=True, slots=True)
class ToolVersion:
    """Installed version of a development tool."""

    name: str
    version: str | None
    icon: str

    @property
    def installed(self) -> bool:
        return self.version is not None
