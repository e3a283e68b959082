"""Project classification and scan descriptor dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ProjectType(str, Enum):
    """Kind of project found under a root directory."""

    FLUTTER = "flutter"
    ANDROID = "android"
    NODE = "node"
    PYTHON = "python"
    RUST = "rust"
    GO = "go"
    OTHER = "other"


class PackageManager(str, Enum):
    """Package manager of a node-style project."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"


@dataclass(frozen=True, slots=True)
class TechStackEntry:
    """A single technology badge, e.g. ("React", "default").

    ``category`` is a colour tag only meaningful to the presentation layer.
    """

    name: str
    category: str = "default"

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "type": self.category}


@dataclass(frozen=True, slots=True)
class BuildArtifact:
    """A build output folder discovered under a project root."""

    name: str
    size_bytes: int


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed source-control state of a working tree."""

    branch: str
    status: str
    kind: str = "neutral"
    count: int | None = None

    @classmethod
    def absent(cls) -> GitStatus:
        """Neutral status for directories without version control."""
        return cls(branch="No Git", status="N/A")

    @classmethod
    def unknown(cls, branch: str) -> GitStatus:
        return cls(branch=branch, status="Unknown")

    def to_dict(self) -> dict[str, Any]:
        return {
            "branch": self.branch,
            "status": self.status,
            "count": self.count,
            "type": self.kind,
        }


@dataclass(frozen=True, slots=True)
class ProjectDescriptor:
    """Read-only snapshot produced by a single project scan.

    A descriptor is never updated in place; rescanning the path produces
    a new one with a new ``id``.
    """

    id: str
    name: str
    path: str
    icon: str
    project_type: ProjectType
    storage: str
    git_status: GitStatus
    tech_stack: tuple[TechStackEntry, ...] = ()
    package_manager: PackageManager | None = None
    build_folder_name: str | None = None
    build_storage: str | None = None
    last_active: str = "Just added"
    has_node_modules: bool = False
    has_build_folder: bool = False
    has_git: bool = False
    is_archived: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase record shape used by the project list."""
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "icon": self.icon,
            "techStack": [t.to_dict() for t in self.tech_stack],
            "gitStatus": self.git_status.to_dict(),
            "lastActive": self.last_active,
            "storage": self.storage,
            "buildStorage": self.build_storage,
            "isArchived": self.is_archived,
            "hasNodeModules": self.has_node_modules,
            "hasBuildFolder": self.has_build_folder,
            "buildFolderName": self.build_folder_name,
            "packageManager": self.package_manager.value if self.package_manager else None,
            "projectType": self.project_type.value,
            "hasGit": self.has_git,
        }


@dataclass(slots=True)
class ProjectRecord:
    """Entry of the persisted project list."""

    id: str
    name: str
    path: str
    is_archived: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectRecord:
        known = {"id", "name", "path", "isArchived"}
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            path=data["path"],
            is_archived=bool(data.get("isArchived", False)),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "isArchived": self.is_archived,
        }
