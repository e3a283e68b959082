"""Static signature tables used to classify and clean projects.

Every table here is ordered and the order is part of its meaning:
classification and icon selection walk them first-match-wins, the tech
stack walks them append-only.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, NamedTuple

from devnest.models.project import PackageManager, ProjectType

MarkerPredicate = Callable[[Path], bool]

DEPENDENCY_FOLDER = "node_modules"
PACKAGE_JSON = "package.json"
PUBSPEC = "pubspec.yaml"
CARGO_TOML = "Cargo.toml"
GO_MOD = "go.mod"
GRADLE_FILES = ("build.gradle.kts", "build.gradle")
PYTHON_MANIFESTS = ("requirements.txt", "pyproject.toml")
ANDROID_MANIFEST = Path("app") / "src" / "main" / "AndroidManifest.xml"
ANDROID_JAVA_SOURCES = Path("app") / "src" / "main" / "java"


def _has(*names: str) -> MarkerPredicate:
    return lambda root: any((root / name).exists() for name in names)


def _is_android(root: Path) -> bool:
    return _has(*GRADLE_FILES)(root) and (root / "app").exists()


# Node goes last: package.json shows up inside almost every polyglot repo.
PROJECT_MARKERS: tuple[tuple[ProjectType, MarkerPredicate], ...] = (
    (ProjectType.FLUTTER, _has(PUBSPEC)),
    (ProjectType.ANDROID, _is_android),
    (ProjectType.PYTHON, _has("requirements.txt", "pyproject.toml", "manage.py")),
    (ProjectType.RUST, _has(CARGO_TOML)),
    (ProjectType.GO, _has(GO_MOD)),
    (ProjectType.NODE, _has(PACKAGE_JSON)),
)

LOCKFILES: tuple[tuple[str, PackageManager], ...] = (
    ("pnpm-lock.yaml", PackageManager.PNPM),
    ("yarn.lock", PackageManager.YARN),
    ("bun.lockb", PackageManager.BUN),
    ("package-lock.json", PackageManager.NPM),
)

PACKAGE_MANAGER_COLORS: dict[PackageManager, str] = {
    PackageManager.PNPM: "blue",
    PackageManager.YARN: "pink",
    PackageManager.BUN: "orange",
    PackageManager.NPM: "default",
}

# Build output and cache folders, relative to the project root, in the
# order they are reported. Entries may be glob patterns.
CLEANABLE_FOLDERS: dict[ProjectType, tuple[str, ...]] = {
    ProjectType.FLUTTER: ("build", ".dart_tool"),
    ProjectType.ANDROID: ("app/build", "build", ".gradle"),
    ProjectType.NODE: ("dist", "build", ".next", ".nuxt", "out", ".output", ".cache"),
    ProjectType.RUST: ("target",),
    ProjectType.PYTHON: ("__pycache__", ".pytest_cache", "dist", "build", ".eggs", "*.egg-info"),
    ProjectType.GO: ("bin",),
    ProjectType.OTHER: ("build", "dist", "out"),
}

PYTHON_CACHE_DIR = "__pycache__"


class ManifestRule(NamedTuple):
    """Adds ``name`` when any package is declared in the given sections."""

    name: str
    category: str
    dependencies: tuple[str, ...] = ()
    dev_dependencies: tuple[str, ...] = ()


def _both(package: str) -> dict[str, tuple[str, ...]]:
    return {"dependencies": (package,), "dev_dependencies": (package,)}


# React Native is tried before React and suppresses it.
EXCLUSIVE_MANIFEST_RULES: tuple[ManifestRule, ...] = (
    ManifestRule("React Native", "blue", **_both("react-native")),
    ManifestRule("React", "default", **_both("react")),
)

MANIFEST_RULES: tuple[ManifestRule, ...] = (
    ManifestRule("Expo", "default", **_both("expo")),
    ManifestRule("Vue", "green", **_both("vue")),
    ManifestRule("Next.js", "default", **_both("next")),
    ManifestRule("Nuxt", "green", **_both("nuxt")),
    ManifestRule("Svelte", "orange", **_both("svelte")),
    ManifestRule("Express", "default", dependencies=("express",)),
    ManifestRule("Fastify", "default", dependencies=("fastify",)),
    ManifestRule("Tauri", "yellow", dependencies=("@tauri-apps/api",), dev_dependencies=("@tauri-apps/cli",)),
    ManifestRule("Electron", "blue", **_both("electron")),
    ManifestRule("Vite", "purple", dev_dependencies=("vite",)),
    ManifestRule("TypeScript", "blue", dev_dependencies=("typescript",)),
)

# Substring searched (lower-cased) in requirements.txt + pyproject.toml.
PYTHON_FRAMEWORKS: tuple[tuple[str, str, str], ...] = (
    ("django", "Django", "green"),
    ("flask", "Flask", "default"),
    ("fastapi", "FastAPI", "green"),
)

# Icon tiers, highest priority first. Each tier is matched against the
# whole stack before the next tier is consulted.
ICON_TIERS: tuple[dict[str, str], ...] = (
    {
        "Flutter": "phone_iphone",
        "React Native": "phone_iphone",
        "Expo": "phone_iphone",
        "Android": "phone_android",
        "Kotlin": "phone_android",
        "Compose": "phone_android",
    },
    {"Tauri": "desktop_windows", "Electron": "desktop_windows"},
    {"Django": "dns", "Flask": "dns", "FastAPI": "dns", "Express": "dns", "Fastify": "dns"},
    {
        "React": "code",
        "Vue": "code",
        "Svelte": "code",
        "Next.js": "code",
        "Nuxt": "code",
        "Rust": "memory",
        "Python": "data_object",
        "Go": "speed",
    },
)

ICON_FALLBACKS: tuple[tuple[MarkerPredicate, str], ...] = (
    (_has(PUBSPEC), "phone_iphone"),
    (_has(CARGO_TOML), "memory"),
    (_has(PACKAGE_JSON), "code"),
    (_has("requirements.txt", "manage.py"), "data_object"),
)

DEFAULT_ICON = "folder"
