"""Registry of cleanable build output folders per project type."""

from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import Iterable

from devnest.markers import CLEANABLE_FOLDERS, PYTHON_CACHE_DIR
from devnest.models.project import BuildArtifact, ProjectType
from devnest.utils import dir_size

log = logging.getLogger(__name__)


def folder_patterns(project_type: ProjectType) -> tuple[str, ...]:
    """Return the ordered cleanable folder names for a project type."""
    return CLEANABLE_FOLDERS.get(project_type, CLEANABLE_FOLDERS[ProjectType.OTHER])


def _expand(root: Path, pattern: str) -> list[tuple[str, Path]]:
    if not glob.has_magic(pattern):
        return [(pattern, root / pattern)]
    return [(p.relative_to(root).as_posix(), p) for p in sorted(root.glob(pattern))]


def nested_python_caches(root: Path, exclude: Iterable[Path] = ()) -> list[tuple[str, Path]]:
    """Find ``__pycache__`` folders inside the immediate children of *root*.

    Children listed in *exclude* are skipped; they are removed or measured
    as a whole already.
    """
    found: list[tuple[str, Path]] = []
    skipped = set(exclude)
    try:
        children = sorted(root.iterdir())
    except OSError:
        log.debug("Cannot list %s", root)
        return found
    for child in children:
        if child in skipped:
            continue
        cache = child / PYTHON_CACHE_DIR
        try:
            if child.is_dir() and cache.is_dir():
                found.append((f"{child.name}/{PYTHON_CACHE_DIR}", cache))
        except OSError:
            log.debug("Cannot access: %s", cache)
    return found


def fixed_folders(root: Path, project_type: ProjectType) -> list[tuple[str, Path]]:
    """Existing directories from the fixed folder list, in priority order."""
    return [
        (name, path)
        for pattern in folder_patterns(project_type)
        for name, path in _expand(root, pattern)
        if path.is_dir()
    ]


def cleanable_folders(root: Path, project_type: ProjectType) -> list[tuple[str, Path]]:
    """Return (relative name, path) for every existing cleanable folder.

    Python projects also get each immediate child's ``__pycache__``.
    """
    folders = fixed_folders(root, project_type)
    if project_type is ProjectType.PYTHON:
        folders.extend(nested_python_caches(root, exclude=[path for _, path in folders]))
    return folders


def detect_build_folder(root: Path, project_type: ProjectType) -> BuildArtifact | None:
    """Return the first cleanable folder with a nonzero size, for display."""
    for name, path in cleanable_folders(root, project_type):
        size = dir_size(path)
        if size > 0:
            return BuildArtifact(name=name, size_bytes=size)
    return None


def get_cleanable_size(root: Path, project_type: ProjectType) -> int:
    """Sum the sizes of all cleanable folders for a project type."""
    return sum(dir_size(path) for _, path in cleanable_folders(root, project_type))
