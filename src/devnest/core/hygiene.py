"""Destructive cleanup of build output and dependency folders.

Every operation attempts all of its targets; one failing folder or
project never stops the others.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from devnest.core.artifacts import fixed_folders, nested_python_caches
from devnest.core.classifier import detect_project_type
from devnest.markers import DEPENDENCY_FOLDER
from devnest.models.hygiene_result import CleanSummary, HygieneResult
from devnest.models.project import ProjectType
from devnest.utils import dir_size, format_size

log = logging.getLogger(__name__)


class HygieneError(Exception):
    """Raised when a cleanup request removed nothing because of errors."""


def remove_folders(folders: Iterable[tuple[str, Path]]) -> tuple[int, int, list[str]]:
    """Remove folders and return (freed_bytes, folders_removed, errors).

    Each folder is measured before removal. A failed removal is recorded
    as ``"<name>: <error>"`` and the loop moves on.
    """
    freed = 0
    removed = 0
    errors: list[str] = []

    for name, path in folders:
        size = dir_size(path)
        try:
            shutil.rmtree(path)
        except OSError as e:
            log.warning("Failed to remove %s: %s", path, e)
            errors.append(f"{name}: {e}")
            continue
        log.info("Removed %s (%s)", path, format_size(size))
        removed += 1
        freed += size

    return freed, removed, errors


def _resolve_type(root: Path, project_type: ProjectType | str | None) -> ProjectType:
    if not project_type:
        return detect_project_type(root)
    try:
        return ProjectType(project_type)
    except ValueError:
        log.debug("Unknown project type %r, using generic folders", project_type)
        return ProjectType.OTHER


def clean_build_folders(path: str | Path, project_type: ProjectType | str | None = None) -> CleanSummary:
    """Delete every build output folder of the project at *path*.

    The project type is detected when not given. Python projects get a
    second pass over ``__pycache__`` folders in immediate subdirectories.

    Raises:
        HygieneError: If nothing was removed and at least one removal failed.
    """
    root = Path(path)
    ptype = _resolve_type(root, project_type)

    fixed = fixed_folders(root, ptype)
    freed, removed, errors = remove_folders(fixed)
    if ptype is ProjectType.PYTHON:
        caches = nested_python_caches(root, exclude=[path for _, path in fixed])
        extra_freed, extra_removed, extra_errors = remove_folders(caches)
        freed += extra_freed
        removed += extra_removed
        errors.extend(extra_errors)

    summary = CleanSummary(path=str(root), folders_cleaned=removed, freed_bytes=freed, errors=errors)
    if removed > 0:
        summary.message = f"Cleaned {removed} folder(s), freed {format_size(freed)}"
        if errors:
            summary.message += f". Errors: {', '.join(errors)}"
    elif errors:
        raise HygieneError(f"Failed to clean: {', '.join(errors)}")
    else:
        summary.message = "No build folders to clean"
    return summary


def delete_dependency_folder(path: str | Path) -> str:
    """Delete the ``node_modules`` folder of one project.

    Raises:
        HygieneError: If the folder is missing or cannot be removed.
    """
    target = Path(path) / DEPENDENCY_FOLDER
    if not target.exists():
        raise HygieneError(f"{DEPENDENCY_FOLDER} directory does not exist")
    try:
        shutil.rmtree(target)
    except OSError as e:
        raise HygieneError(f"Failed to delete {DEPENDENCY_FOLDER}: {e}") from e
    log.info("Removed %s", target)
    return f"{DEPENDENCY_FOLDER} deleted successfully"


def bulk_delete_dependency_folders(paths: Iterable[str | Path]) -> list[HygieneResult]:
    """Delete ``node_modules`` in each project, in input order.

    Unlike :func:`delete_dependency_folder`, projects without the folder
    are skipped silently and produce no result.
    """
    results: list[HygieneResult] = []
    for path in paths:
        target = Path(path) / DEPENDENCY_FOLDER
        if not target.exists():
            log.debug("No %s in %s, skipping", DEPENDENCY_FOLDER, path)
            continue
        size = dir_size(target)
        try:
            shutil.rmtree(target)
        except OSError as e:
            log.warning("Failed to remove %s: %s", target, e)
            results.append(HygieneResult(target=str(path), success=False, error=str(e)))
            continue
        results.append(HygieneResult(target=str(path), success=True, freed_bytes=size))
    return results


def dependency_folder_size(path: str | Path) -> str:
    """Return the formatted size of the project's ``node_modules``."""
    target = Path(path) / DEPENDENCY_FOLDER
    if not target.exists():
        return "0 B"
    return format_size(dir_size(target))
