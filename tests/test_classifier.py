"""Tests for project classification."""

from __future__ import annotations

import pytest

from devnest.core.classifier import (
    detect_package_manager,
    detect_project_type,
    detect_tech_stack,
    pick_icon,
)
from devnest.models.project import PackageManager, ProjectType, TechStackEntry


def _names(stack):
    return [t.name for t in stack]


class TestDetectProjectType:
    def test_no_markers(self, tmp_path):
        assert detect_project_type(tmp_path) is ProjectType.OTHER
        assert detect_tech_stack(tmp_path) == []

    def test_flutter_beats_node(self, make_project):
        root = make_project({"pubspec.yaml": "name: app", "package.json": {}})
        assert detect_project_type(root) is ProjectType.FLUTTER

    def test_android_needs_app_dir(self, make_project):
        root = make_project({"build.gradle": "apply plugin: 'com.android.application'"})
        assert detect_project_type(root) is ProjectType.OTHER

        (root / "app").mkdir()
        assert detect_project_type(root) is ProjectType.ANDROID

    def test_android_kts(self, make_project):
        root = make_project({"build.gradle.kts": "", "app": None})
        assert detect_project_type(root) is ProjectType.ANDROID

    @pytest.mark.parametrize("marker", ["requirements.txt", "pyproject.toml", "manage.py"])
    def test_python_markers(self, make_project, marker):
        root = make_project({marker: ""})
        assert detect_project_type(root) is ProjectType.PYTHON

    def test_python_beats_rust(self, make_project):
        root = make_project({"Cargo.toml": "", "pyproject.toml": ""})
        assert detect_project_type(root) is ProjectType.PYTHON

    def test_rust_in_polyglot_repo(self, make_project):
        root = make_project({"Cargo.toml": "", "go.mod": "", "package.json": {}})
        assert detect_project_type(root) is ProjectType.RUST

    def test_go_beats_node(self, make_project):
        root = make_project({"go.mod": "module x", "package.json": {}})
        assert detect_project_type(root) is ProjectType.GO

    def test_node(self, make_project):
        root = make_project({"package.json": {}})
        assert detect_project_type(root) is ProjectType.NODE


class TestDetectPackageManager:
    def test_none_without_manifest(self, tmp_path):
        assert detect_package_manager(tmp_path) is None

    def test_defaults_to_npm(self, make_project):
        assert detect_package_manager(make_project({"package.json": {}})) is PackageManager.NPM

    def test_lockfile_priority(self, make_project):
        root = make_project({
            "package.json": {},
            "package-lock.json": "{}",
            "bun.lockb": b"",
            "yarn.lock": "",
            "pnpm-lock.yaml": "",
        })
        assert detect_package_manager(root) is PackageManager.PNPM
        (root / "pnpm-lock.yaml").unlink()
        assert detect_package_manager(root) is PackageManager.YARN
        (root / "yarn.lock").unlink()
        assert detect_package_manager(root) is PackageManager.BUN
        (root / "bun.lockb").unlink()
        assert detect_package_manager(root) is PackageManager.NPM

    def test_lockfile_without_manifest(self, make_project):
        assert detect_package_manager(make_project({"yarn.lock": ""})) is PackageManager.YARN


class TestDetectTechStack:
    def test_rule_order(self, make_project):
        root = make_project({
            "package.json": {
                "dependencies": {"react": "18", "react-native": "0.73", "expo": "50"},
                "devDependencies": {"typescript": "5", "vite": "5"},
            },
            "yarn.lock": "",
        })
        stack = detect_tech_stack(root)
        assert _names(stack) == ["React Native", "Expo", "Vite", "TypeScript", "yarn"]
        assert stack[-1] == TechStackEntry("yarn", "pink")

    def test_react_without_native(self, make_project):
        root = make_project({"package.json": {"devDependencies": {"react": "18", "next": "14"}}})
        assert _names(detect_tech_stack(root)) == ["React", "Next.js", "npm"]

    def test_server_frameworks_only_in_dependencies(self, make_project):
        root = make_project({"package.json": {"devDependencies": {"express": "4", "fastify": "4"}}})
        assert _names(detect_tech_stack(root)) == ["npm"]

        root = make_project({"package.json": {"dependencies": {"express": "4", "fastify": "4"}}}, name="api")
        assert _names(detect_tech_stack(root)) == ["Express", "Fastify", "npm"]

    def test_tauri(self, make_project):
        root = make_project({"package.json": {"devDependencies": {"@tauri-apps/cli": "2"}}})
        assert _names(detect_tech_stack(root)) == ["Tauri", "npm"]

    def test_vite_ignored_in_dependencies(self, make_project):
        root = make_project({"package.json": {"dependencies": {"vite": "5", "typescript": "5"}}})
        assert _names(detect_tech_stack(root)) == ["npm"]

    def test_invalid_manifest(self, make_project):
        root = make_project({"package.json": "{not json", "pnpm-lock.yaml": ""})
        assert _names(detect_tech_stack(root)) == ["pnpm"]

    def test_manifest_not_an_object(self, make_project):
        root = make_project({"package.json": "[1, 2]"})
        assert _names(detect_tech_stack(root)) == ["npm"]

    def test_flutter(self, make_project):
        root = make_project({"pubspec.yaml": ""})
        assert _names(detect_tech_stack(root)) == ["Flutter", "Dart"]

    def test_android_kotlin_compose(self, make_project):
        gradle = 'plugins { id("com.android.application"); kotlin("android") }\nbuildFeatures { compose = true }'
        root = make_project({"build.gradle.kts": gradle, "app": None})
        assert _names(detect_tech_stack(root)) == ["Android", "Kotlin", "Compose"]

    def test_android_java(self, make_project):
        root = make_project({
            "build.gradle": "apply plugin: 'com.android.application'",
            "app/src/main/java/Main.java": "class Main {}",
        })
        assert _names(detect_tech_stack(root)) == ["Android"]

    def test_android_via_manifest(self, make_project):
        root = make_project({
            "build.gradle": "",
            "app/src/main/AndroidManifest.xml": "<manifest/>",
            "app/src/main/java": None,
        })
        assert _names(detect_tech_stack(root)) == ["Android"]

    def test_plain_gradle_is_not_android(self, make_project):
        root = make_project({"build.gradle": "apply plugin: 'java'"})
        assert detect_tech_stack(root) == []

    def test_python_frameworks(self, make_project):
        root = make_project({"requirements.txt": "Django==5.0\nfastapi\n", "pyproject.toml": "[project]\n"})
        assert _names(detect_tech_stack(root)) == ["Python", "Django", "FastAPI"]

    def test_django_via_manage_py(self, make_project):
        root = make_project({"pyproject.toml": "", "manage.py": ""})
        assert _names(detect_tech_stack(root)) == ["Python", "Django"]

    def test_manage_py_alone_adds_nothing(self, make_project):
        root = make_project({"manage.py": ""})
        assert detect_tech_stack(root) == []

    def test_polyglot_order(self, make_project):
        root = make_project({
            "go.mod": "",
            "Cargo.toml": "",
            "requirements.txt": "flask",
            "package.json": {"dependencies": {"electron": "28"}},
        })
        assert _names(detect_tech_stack(root)) == ["Electron", "npm", "Rust", "Python", "Flask", "Go"]


class TestPickIcon:
    def _stack(self, *names):
        return [TechStackEntry(n) for n in names]

    def test_mobile_outranks_everything(self, tmp_path):
        assert pick_icon(self._stack("Express", "React", "Expo"), tmp_path) == "phone_iphone"

    def test_android(self, tmp_path):
        assert pick_icon(self._stack("Kotlin", "Electron"), tmp_path) == "phone_android"

    def test_desktop_outranks_backend(self, tmp_path):
        assert pick_icon(self._stack("Express", "Electron"), tmp_path) == "desktop_windows"

    def test_backend_outranks_web(self, tmp_path):
        assert pick_icon(self._stack("React", "Express"), tmp_path) == "dns"
        assert pick_icon(self._stack("Python", "Django"), tmp_path) == "dns"

    def test_first_entry_wins_within_tier(self, tmp_path):
        assert pick_icon(self._stack("Rust", "Go"), tmp_path) == "memory"
        assert pick_icon(self._stack("Go", "Rust"), tmp_path) == "speed"

    def test_fallback_to_markers(self, make_project):
        root = make_project({"package.json": {}})
        assert pick_icon(self._stack("npm"), root) == "code"

    def test_fallback_order(self, make_project):
        root = make_project({"Cargo.toml": "", "package.json": {}})
        assert pick_icon([], root) == "memory"

    def test_fallback_manage_py(self, make_project):
        assert pick_icon([], make_project({"manage.py": ""})) == "data_object"

    def test_default(self, tmp_path):
        assert pick_icon([], tmp_path) == "folder"
