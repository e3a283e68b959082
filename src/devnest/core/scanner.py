"""Builds a ProjectDescriptor for a single directory."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from devnest.core.artifacts import detect_build_folder, get_cleanable_size
from devnest.core.classifier import detect_package_manager, detect_project_type, detect_tech_stack, pick_icon
from devnest.core.vcs import GitProbe, has_git
from devnest.markers import DEPENDENCY_FOLDER
from devnest.models.project import ProjectDescriptor
from devnest.utils import dir_size, format_size

log = logging.getLogger(__name__)

# Shown instead of "0 B" when nothing under the project is reclaimable.
EMPTY_STORAGE = "< 1 MB"


class PathInvalidError(Exception):
    """Raised when a scan target is missing or not a directory."""


def validate_project_path(path: str | Path) -> Path:
    """Return *path* as an absolute Path, or raise PathInvalidError."""
    root = Path(path).expanduser()
    if not root.exists():
        raise PathInvalidError("Path does not exist")
    if not root.is_dir():
        raise PathInvalidError("Path is not a directory")
    return root.absolute()


def scan_project(path: str | Path, probe: GitProbe | None = None) -> ProjectDescriptor:
    """Classify and measure the project at *path*.

    Never writes to the filesystem. Walks the dependency folder and every
    cleanable folder in full, so it can be slow on large trees.

    Raises:
        PathInvalidError: If *path* does not exist or is not a directory.
    """
    root = validate_project_path(path)
    probe = probe or GitProbe()

    tech_stack = detect_tech_stack(root)
    project_type = detect_project_type(root)
    package_manager = detect_package_manager(root)

    git_status = probe.status(root)

    build = detect_build_folder(root, project_type)

    # Total reclaimable space counts every cleanable folder, not only
    # the representative one above.
    dependency_dir = root / DEPENDENCY_FOLDER
    has_node_modules = dependency_dir.exists()
    total = dir_size(dependency_dir) if has_node_modules else 0
    total += get_cleanable_size(root, project_type)

    descriptor = ProjectDescriptor(
        id=str(uuid.uuid4()),
        name=root.name or str(root),
        path=str(root),
        icon=pick_icon(tech_stack, root),
        project_type=project_type,
        storage=format_size(total) if total > 0 else EMPTY_STORAGE,
        git_status=git_status,
        tech_stack=tuple(tech_stack),
        package_manager=package_manager,
        build_folder_name=build.name if build else None,
        build_storage=format_size(build.size_bytes) if build else None,
        has_node_modules=has_node_modules,
        has_build_folder=build is not None,
        has_git=has_git(root),
    )
    log.info("Scanned %s: %s, %s reclaimable", root, project_type.value, descriptor.storage)
    return descriptor
