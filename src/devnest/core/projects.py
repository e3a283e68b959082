"""Persisted list of projects the user is tracking."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from devnest.models.project import ProjectDescriptor, ProjectRecord
from devnest.storage import load_projects, save_projects

log = logging.getLogger(__name__)


class ProjectList:
    """Stores project records keyed by id, preserving insertion order."""

    def __init__(self) -> None:
        self._records: dict[str, ProjectRecord] = {}
        for raw in load_projects()["projects"]:
            try:
                record = ProjectRecord.from_dict(raw)
            except (KeyError, TypeError):
                log.warning("Skipping malformed project record: %r", raw)
                continue
            self._records[record.id] = record

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ProjectRecord]:
        return iter(self._records.values())

    def get(self, key: str) -> ProjectRecord | None:
        """Look a project up by id or by path."""
        if key in self._records:
            return self._records[key]
        return self.find_by_path(key)

    def find_by_path(self, path: str | Path) -> ProjectRecord | None:
        wanted = str(Path(path).expanduser().absolute())
        return next((r for r in self._records.values() if r.path == wanted), None)

    def add(self, descriptor: ProjectDescriptor) -> ProjectRecord:
        """Add a scanned project, replacing any record for the same path."""
        existing = self.find_by_path(descriptor.path)
        if existing is not None:
            del self._records[existing.id]
        extra = descriptor.to_dict()
        record = ProjectRecord(
            id=descriptor.id,
            name=descriptor.name,
            path=descriptor.path,
            is_archived=existing.is_archived if existing else False,
            extra={k: v for k, v in extra.items() if k not in ("id", "name", "path", "isArchived")},
        )
        self._records[record.id] = record
        self.save()
        return record

    def set_archived(self, key: str, archived: bool = True) -> ProjectRecord | None:
        record = self.get(key)
        if record is None:
            return None
        record.is_archived = archived
        self.save()
        return record

    def remove(self, key: str) -> ProjectRecord | None:
        record = self.get(key)
        if record is None:
            return None
        del self._records[record.id]
        self.save()
        log.info("Removed project %s (%s)", record.name, record.path)
        return record

    def active(self) -> list[ProjectRecord]:
        return [r for r in self._records.values() if not r.is_archived]

    def save(self) -> None:
        save_projects({"projects": [r.to_dict() for r in self._records.values()]})
