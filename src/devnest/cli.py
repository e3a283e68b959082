"""CLI interface for devnest."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from devnest.core.artifacts import cleanable_folders
from devnest.core.classifier import detect_project_type
from devnest.core.hygiene import (
    HygieneError,
    bulk_delete_dependency_folders,
    clean_build_folders,
    delete_dependency_folder,
    dependency_folder_size,
)
from devnest.core.inspections import InspectionError, check_health, list_scripts, tool_versions
from devnest.core.process import SubprocessRunner
from devnest.core.projects import ProjectList
from devnest.core.scanner import PathInvalidError, scan_project, validate_project_path
from devnest.core.tracker import Tracker
from devnest.core.vcs import GitProbe
from devnest.markers import DEPENDENCY_FOLDER
from devnest.models.hygiene_result import HygieneResult
from devnest.models.project import ProjectDescriptor, ProjectType
from devnest.settings import Settings
from devnest.utils import dir_size, format_relative_time, format_size

_TYPE_CHOICES = [t.value for t in ProjectType]


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _runner(setting: str) -> SubprocessRunner:
    return SubprocessRunner(timeout=float(Settings.instance().get(setting)))


def _fail(message: str) -> NoReturn:
    click.echo(f"{click.style('✗', fg='red')} {message}", err=True)
    sys.exit(1)


def _scan(path: str) -> ProjectDescriptor:
    try:
        return scan_project(path, probe=GitProbe(_runner("git.timeout")))
    except PathInvalidError as e:
        _fail(f"{path}: {e}")


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """devnest — project inspector and workspace cleaner."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", default=".")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(path: str, as_json: bool) -> None:
    """Classify a project and report reclaimable space (never deletes)."""
    project = _scan(path)

    if as_json:
        click.echo(json.dumps(project.to_dict(), indent=2))
        return

    git = project.git_status
    git_color = {"success": "green", "warning": "yellow"}.get(git.kind, "bright_black")
    git_text = f"{git.branch} · {git.status}" + (f" ({git.count})" if git.count else "")

    click.echo(f"\n  {click.style(project.name, fg='cyan', bold=True)}  [{project.icon}]")
    click.echo(f"  {click.style('Path:', bold=True)}         {project.path}")
    click.echo(f"  {click.style('Type:', bold=True)}         {project.project_type.value}")
    if project.package_manager:
        click.echo(f"  {click.style('Packages:', bold=True)}     {project.package_manager.value}")
    stack = ", ".join(t.name for t in project.tech_stack) or "—"
    click.echo(f"  {click.style('Stack:', bold=True)}        {stack}")
    click.echo(f"  {click.style('Git:', bold=True)}          {click.style(git_text, fg=git_color)}")
    if project.has_build_folder:
        click.echo(f"  {click.style('Build output:', bold=True)} {project.build_folder_name} ({project.build_storage})")
    click.echo(f"  {click.style('Reclaimable:', bold=True)}  {click.style(project.storage, fg='green', bold=True)}\n")


# ── clean ────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", default=".")
@click.option("--type", "-t", "project_type", type=click.Choice(_TYPE_CHOICES), default=None,
              help="Override the detected project type")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--dry-run", is_flag=True, help="Show what would be cleaned without doing it")
def clean(path: str, project_type: str | None, yes: bool, dry_run: bool) -> None:
    """Delete build output folders of a project."""
    try:
        root = validate_project_path(path)
    except PathInvalidError as e:
        _fail(f"{path}: {e}")

    ptype = ProjectType(project_type) if project_type else detect_project_type(root)
    folders = cleanable_folders(root, ptype)
    if not folders:
        click.echo("No build folders to clean.")
        return

    total = 0
    for name, folder in folders:
        size = dir_size(folder)
        total += size
        click.echo(f"  {click.style('✓', fg='green')} {name:35s} — {format_size(size)}")
    click.echo(f"\nTotal: {click.style(format_size(total), fg='green', bold=True)}\n")

    if dry_run:
        click.echo("(dry run — no files were deleted)")
        return
    if not yes and not click.confirm("Delete these folders?", default=False):
        click.echo("Aborted.")
        return

    try:
        summary = clean_build_folders(root, ptype)
    except HygieneError as e:
        _fail(str(e))

    tracker = Tracker()
    tracker.record_clean(summary)
    tracker.save_session()
    color = "yellow" if summary.errors else "green"
    click.echo(click.style(summary.message, fg=color))


# ── dependency folders ───────────────────────────────────────────────────

@main.command("rm-deps")
@click.argument("path", default=".")
def rm_deps(path: str) -> None:
    """Delete the node_modules folder of one project."""
    size = dir_size(Path(path) / DEPENDENCY_FOLDER)
    try:
        message = delete_dependency_folder(path)
    except HygieneError as e:
        _fail(str(e))

    tracker = Tracker()
    tracker.record([HygieneResult(target=str(Path(path).absolute()), success=True, freed_bytes=size)])
    tracker.save_session()
    click.echo(f"{click.style('✓', fg='green')} {message} ({format_size(size)})")


@main.command("bulk-rm-deps")
@click.argument("paths", nargs=-1)
@click.option("--all", "all_projects", is_flag=True, help="Use every active project from the project list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def bulk_rm_deps(paths: tuple[str, ...], all_projects: bool, as_json: bool) -> None:
    """Delete node_modules in several projects; projects without one are skipped."""
    targets = list(paths)
    if all_projects:
        targets.extend(r.path for r in ProjectList().active())
    if not targets:
        _fail("No projects given.")

    results = bulk_delete_dependency_folders(targets)
    tracker = Tracker()
    tracker.record(results)
    tracker.save_session()

    if as_json:
        data = [
            {"path": r.target, "success": r.success, "freed_bytes": r.freed_bytes, "error": r.error}
            for r in results
        ]
        click.echo(json.dumps(data, indent=2))
        return

    if not results:
        click.echo("Nothing to delete.")
        return
    for r in results:
        click.echo(click.style(r.label(), fg="green" if r.success else "red"))
    freed = sum(r.freed_bytes for r in results)
    click.echo(f"\nTotal freed: {click.style(format_size(freed), fg='green', bold=True)}\n")


@main.command()
@click.argument("path", default=".")
def size(path: str) -> None:
    """Show the size of a project's node_modules folder."""
    click.echo(dependency_folder_size(path))


# ── inspections ──────────────────────────────────────────────────────────

@main.command()
@click.argument("path", default=".")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scripts(path: str, as_json: bool) -> None:
    """List package.json scripts."""
    try:
        found = list_scripts(path)
    except InspectionError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps([{"name": s.name, "command": s.command} for s in found], indent=2))
        return
    if not found:
        click.echo("No scripts found.")
        return
    for script in found:
        click.echo(f"  {click.style(script.name, fg='cyan', bold=True):30s}  {script.command}")


@main.command()
@click.argument("path", default=".")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def health(path: str, as_json: bool) -> None:
    """Check outdated packages and audit findings."""
    status = check_health(path, _runner("health.timeout"))
    if as_json:
        click.echo(json.dumps(status.to_dict(), indent=2))
        return

    v = status.vulnerabilities
    vuln_color = "red" if v.high or v.critical else ("yellow" if v.total else "green")
    click.echo(f"\n  {click.style('Outdated:', bold=True)}        {status.outdated_count}")
    click.echo(
        f"  {click.style('Vulnerabilities:', bold=True)} "
        + click.style(
            f"{v.critical} critical, {v.high} high, {v.moderate} moderate, {v.low} low", fg=vuln_color
        )
    )
    click.echo(f"  {click.style('Checked:', bold=True)}         {status.last_checked}\n")


@main.command()
def tools() -> None:
    """Show installed development tool versions."""
    for tool in tool_versions(_runner("tools.timeout")):
        if tool.installed:
            click.echo(f"  {click.style('✓', fg='green')} {tool.name:12s} {tool.version}")
        else:
            click.echo(f"  {click.style('·', fg='bright_black')} {tool.name:12s} "
                       f"{click.style('not installed', fg='bright_black')}")


# ── stats ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--period", "-p", default="all", type=click.Choice(["today", "week", "month", "all"]))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(period: str, as_json: bool) -> None:
    """Show space freed statistics."""
    tracker = Tracker()
    data = tracker.get_stats(period)

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"\n{click.style('📊', bold=True)} Statistics ({period})\n")
    click.echo(f"  Bytes freed:    {click.style(format_size(data['bytes_freed']), fg='green', bold=True)}")
    click.echo(f"  Sessions:       {data['session_count']}")
    click.echo(f"  Lifetime total: {click.style(format_size(data['lifetime_bytes_freed']), fg='cyan', bold=True)}")
    last = tracker.get_last_clean_time()
    if last:
        click.echo(f"  Last cleanup:   {format_relative_time(last)}")

    if data["per_project"]:
        click.echo("\n  Per-project breakdown:")
        for target, freed in sorted(data["per_project"].items(), key=lambda x: x[1], reverse=True):
            click.echo(f"    {target:50s} {format_size(freed):>10s}")
    click.echo()


# ── projects ─────────────────────────────────────────────────────────────

@main.group()
def projects() -> None:
    """Manage the saved project list."""


@projects.command("add")
@click.argument("paths", nargs=-1, required=True)
def projects_add(paths: tuple[str, ...]) -> None:
    """Scan projects and save them to the list."""
    project_list = ProjectList()
    for path in paths:
        project = _scan(path)
        project_list.add(project)
        click.echo(f"  {click.style('+', fg='green')} {project.name:30s} {project.project_type.value:8s} {project.storage}")


@projects.command("list")
@click.option("--archived", is_flag=True, help="Include archived projects")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def projects_list(archived: bool, as_json: bool) -> None:
    """List saved projects."""
    records = list(ProjectList()) if archived else ProjectList().active()
    if as_json:
        click.echo(json.dumps([r.to_dict() for r in records], indent=2))
        return
    if not records:
        click.echo("No projects saved.")
        return
    for r in records:
        tag = click.style(" [archived]", fg="bright_black") if r.is_archived else ""
        click.echo(f"  {click.style(r.name, fg='cyan', bold=True):30s}  {r.path}{tag}")


@projects.command("archive")
@click.argument("key")
@click.option("--undo", is_flag=True, help="Unarchive instead")
def projects_archive(key: str, undo: bool) -> None:
    """Archive a project by id or path."""
    record = ProjectList().set_archived(key, not undo)
    if record is None:
        _fail(f"Project '{key}' not found.")
    click.echo(f"{record.name}: {'unarchived' if undo else 'archived'}")


@projects.command("remove")
@click.argument("key")
def projects_remove(key: str) -> None:
    """Remove a project from the list (files are left untouched)."""
    record = ProjectList().remove(key)
    if record is None:
        _fail(f"Project '{key}' not found.")
    click.echo(f"Removed {record.name}")


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Read and change settings."""


@config.command("get")
@click.argument("key")
def config_get(key: str) -> None:
    """Print a setting value."""
    click.echo(json.dumps(Settings.instance().get(key)))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set a setting; VALUE is parsed as JSON when possible."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    Settings.instance().set(key, parsed)
    click.echo(f"{key} = {json.dumps(parsed)}")
