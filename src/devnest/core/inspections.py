"""Read-only project and toolchain inspections."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from devnest.core.classifier import detect_package_manager
from devnest.core.process import ProcessRunner, SubprocessRunner
from devnest.markers import PACKAGE_JSON
from devnest.models.inspection import HealthStatus, ProjectScript, ToolVersion, Vulnerabilities
from devnest.models.project import PackageManager
from devnest.settings import DEFAULTS

log = logging.getLogger(__name__)

# Prefixes stripped from the first line of ``<tool> --version`` output.
_VERSION_PREFIXES = ("node ", "v", "Python ", "java ", "Flutter ", "Dart SDK version: ", "rustc ", "cargo ")


class InspectionError(Exception):
    """Raised when a project manifest exists but cannot be read."""


def list_scripts(path: str | Path) -> list[ProjectScript]:
    """Return the ``scripts`` section of package.json, in declaration order."""
    manifest = Path(path) / PACKAGE_JSON
    if not manifest.exists():
        return []
    try:
        content = manifest.read_text(encoding="utf-8")
    except OSError as e:
        raise InspectionError(f"Failed to read {PACKAGE_JSON}: {e}") from e
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise InspectionError(f"Failed to parse {PACKAGE_JSON}: {e}") from e

    scripts = data.get("scripts") if isinstance(data, dict) else None
    if not isinstance(scripts, dict):
        return []
    return [
        ProjectScript(name=name, command=command if isinstance(command, str) else "")
        for name, command in scripts.items()
    ]


def _json_output(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def _count(value: Any) -> int:
    return value if isinstance(value, int) else 0


def check_health(path: str | Path, runner: ProcessRunner | None = None) -> HealthStatus:
    """Take one snapshot of outdated packages and ``npm audit`` findings.

    Both commands exit non-zero when they find something, so only their
    JSON output is looked at. Missing tools or unparseable output count
    as zero.
    """
    root = Path(path)
    runner = runner or SubprocessRunner(timeout=DEFAULTS["health.timeout"])
    manager = detect_package_manager(root) or PackageManager.NPM

    outdated = _json_output(runner.run(manager.value, ["outdated", "--json"], cwd=root).stdout)
    outdated_count = len(outdated) if isinstance(outdated, dict) else 0

    audit = _json_output(runner.run("npm", ["audit", "--json"], cwd=root).stdout)
    found: dict[str, Any] = {}
    if isinstance(audit, dict):
        metadata = audit.get("metadata")
        if isinstance(metadata, dict) and isinstance(metadata.get("vulnerabilities"), dict):
            found = metadata["vulnerabilities"]

    return HealthStatus(
        outdated_count=outdated_count,
        vulnerabilities=Vulnerabilities(
            low=_count(found.get("low")),
            moderate=_count(found.get("moderate")),
            high=_count(found.get("high")),
            critical=_count(found.get("critical")),
        ),
        last_checked=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )


def parse_version(output: str) -> str | None:
    """Extract a version number from the first line of ``--version`` output."""
    lines = output.strip().splitlines()
    if not lines:
        return None
    line = lines[0]
    for prefix in _VERSION_PREFIXES:
        line = line.replace(prefix, "")
    parts = line.split()
    return parts[0] if parts else None


def command_version(runner: ProcessRunner, command: str, args: list[str]) -> str | None:
    outcome = runner.run(command, args)
    if not outcome.ok:
        return None
    # Some tools print their version on stderr
    return parse_version(outcome.stdout if outcome.stdout.strip() else outcome.stderr)


def _java_version(runner: ProcessRunner) -> str | None:
    # java -version writes 'openjdk version "21.0.2" ...' to stderr
    outcome = runner.run("java", ["-version"])
    lines = outcome.stderr.splitlines()
    if not lines:
        return None
    parts = lines[0].split('"')
    return parts[1] if len(parts) > 1 else None


def _flutter_version(runner: ProcessRunner) -> str | None:
    outcome = runner.run("flutter", ["--version"])
    if not outcome.ok:
        return None
    for line in outcome.stdout.splitlines():
        if line.startswith("Flutter"):
            parts = line.split()
            return parts[1] if len(parts) > 1 else None
    return None


def _git_version(runner: ProcessRunner) -> str | None:
    outcome = runner.run("git", ["--version"])
    if not outcome.ok:
        return None
    parts = outcome.stdout.replace("git version ", "").split()
    return parts[0] if parts else None


def tool_versions(runner: ProcessRunner | None = None) -> list[ToolVersion]:
    """Report installed versions of common development tools."""
    runner = runner or SubprocessRunner(timeout=DEFAULTS["tools.timeout"])
    python = command_version(runner, "python", ["--version"]) or command_version(runner, "python3", ["--version"])
    return [
        ToolVersion("Node.js", command_version(runner, "node", ["--version"]), "javascript"),
        ToolVersion("Python", python, "code"),
        ToolVersion("Java", _java_version(runner), "coffee"),
        ToolVersion("Flutter", _flutter_version(runner), "phone_iphone"),
        ToolVersion("Rust", command_version(runner, "rustc", ["--version"]), "memory"),
        ToolVersion("Git", _git_version(runner), "git"),
    ]
