"""Project type, package manager and tech stack detection.

All functions here are read-only and never raise: a directory nothing
matches is classified as ``ProjectType.OTHER`` with an empty stack.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from devnest.markers import (
    ANDROID_JAVA_SOURCES,
    ANDROID_MANIFEST,
    CARGO_TOML,
    DEFAULT_ICON,
    EXCLUSIVE_MANIFEST_RULES,
    GO_MOD,
    GRADLE_FILES,
    ICON_FALLBACKS,
    ICON_TIERS,
    LOCKFILES,
    MANIFEST_RULES,
    PACKAGE_JSON,
    PACKAGE_MANAGER_COLORS,
    PROJECT_MARKERS,
    PUBSPEC,
    PYTHON_FRAMEWORKS,
    PYTHON_MANIFESTS,
    ManifestRule,
)
from devnest.models.project import PackageManager, ProjectType, TechStackEntry

log = logging.getLogger(__name__)


def detect_project_type(root: Path) -> ProjectType:
    """Return the first project type whose markers are present under *root*."""
    for project_type, matches in PROJECT_MARKERS:
        if matches(root):
            return project_type
    return ProjectType.OTHER


def detect_package_manager(root: Path) -> PackageManager | None:
    """Infer the package manager from lockfiles.

    A manifest without any lockfile means npm; no manifest means None.
    """
    for lockfile, manager in LOCKFILES:
        if (root / lockfile).exists():
            return manager
    if (root / PACKAGE_JSON).exists():
        return PackageManager.NPM
    return None


def read_manifest(root: Path) -> dict[str, Any] | None:
    """Parse package.json, returning None when missing or unreadable."""
    path = root / PACKAGE_JSON
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        log.debug("Cannot parse %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None


def _rule_matches(rule: ManifestRule, deps: dict, dev_deps: dict) -> bool:
    return any(p in deps for p in rule.dependencies) or any(p in dev_deps for p in rule.dev_dependencies)


def _section(manifest: dict[str, Any], key: str) -> dict:
    value = manifest.get(key)
    return value if isinstance(value, dict) else {}


def _manifest_stack(root: Path) -> list[TechStackEntry]:
    stack: list[TechStackEntry] = []
    manifest = read_manifest(root)
    if manifest is not None:
        deps = _section(manifest, "dependencies")
        dev_deps = _section(manifest, "devDependencies")

        for rule in EXCLUSIVE_MANIFEST_RULES:
            if _rule_matches(rule, deps, dev_deps):
                stack.append(TechStackEntry(rule.name, rule.category))
                break

        stack.extend(
            TechStackEntry(rule.name, rule.category)
            for rule in MANIFEST_RULES
            if _rule_matches(rule, deps, dev_deps)
        )

    manager = detect_package_manager(root)
    if manager is not None:
        stack.append(TechStackEntry(manager.value, PACKAGE_MANAGER_COLORS[manager]))
    return stack


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def _android_stack(root: Path) -> list[TechStackEntry]:
    gradle = next((root / name for name in GRADLE_FILES if (root / name).exists()), None)
    if gradle is None:
        return []
    content = _read_text(gradle)
    if content is None:
        return []
    if "com.android" not in content and not (root / ANDROID_MANIFEST).exists():
        return []

    stack = [TechStackEntry("Android", "green")]
    if "kotlin" in content or not (root / ANDROID_JAVA_SOURCES).exists():
        stack.append(TechStackEntry("Kotlin", "purple"))
    if "compose" in content:
        stack.append(TechStackEntry("Compose", "green"))
    return stack


def _python_stack(root: Path) -> list[TechStackEntry]:
    if not any((root / name).exists() for name in PYTHON_MANIFESTS):
        return []

    stack = [TechStackEntry("Python", "yellow")]
    content = "".join(_read_text(root / name) or "" for name in PYTHON_MANIFESTS).lower()
    for needle, name, category in PYTHON_FRAMEWORKS:
        if needle in content or (needle == "django" and (root / "manage.py").exists()):
            stack.append(TechStackEntry(name, category))
    return stack


def detect_tech_stack(root: Path) -> list[TechStackEntry]:
    """Collect every technology signal under *root*, in rule order.

    Entries are appended as rules fire and are neither deduplicated nor
    sorted; consumers render them left-to-right in this order.
    """
    stack: list[TechStackEntry] = []

    if (root / PACKAGE_JSON).exists():
        stack.extend(_manifest_stack(root))

    if (root / PUBSPEC).exists():
        stack.append(TechStackEntry("Flutter", "blue"))
        stack.append(TechStackEntry("Dart", "blue"))

    stack.extend(_android_stack(root))

    if (root / CARGO_TOML).exists():
        stack.append(TechStackEntry("Rust", "orange"))

    stack.extend(_python_stack(root))

    if (root / GO_MOD).exists():
        stack.append(TechStackEntry("Go", "blue"))

    log.debug("Tech stack for %s: %s", root, [t.name for t in stack])
    return stack


def pick_icon(tech_stack: list[TechStackEntry] | tuple[TechStackEntry, ...], root: Path) -> str:
    """Choose a display icon: mobile > desktop > backend > web/language.

    Falls back to marker files when no stack entry maps to an icon.
    """
    for tier in ICON_TIERS:
        for tech in tech_stack:
            icon = tier.get(tech.name)
            if icon is not None:
                return icon

    for matches, icon in ICON_FALLBACKS:
        if matches(root):
            return icon
    return DEFAULT_ICON
