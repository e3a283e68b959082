"""Source-control probe: parses git's porcelain output into a GitStatus."""

from __future__ import annotations

import logging
from pathlib import Path

from devnest.core.process import ProcessRunner, SubprocessRunner
from devnest.models.project import GitStatus
from devnest.settings import DEFAULTS

log = logging.getLogger(__name__)

GIT_DIR = ".git"


def has_git(root: Path) -> bool:
    return (root / GIT_DIR).exists()


class GitProbe:
    """Reads branch and working-tree state of a repository."""

    def __init__(self, runner: ProcessRunner | None = None) -> None:
        self.runner = runner or SubprocessRunner(timeout=DEFAULTS["git.timeout"])

    def branch(self, root: Path) -> str:
        outcome = self.runner.run("git", ["rev-parse", "--abbrev-ref", "HEAD"], cwd=root)
        branch = outcome.stdout.strip() if outcome.ok else ""
        return branch or "unknown"

    def status(self, root: Path) -> GitStatus:
        """Return the working-tree status of *root*.

        Directories without a ``.git`` entry get the neutral status and
        no git process is started.
        """
        if not has_git(root):
            return GitStatus.absent()

        branch = self.branch(root)
        outcome = self.runner.run("git", ["status", "--porcelain"], cwd=root)
        if not outcome.ok:
            log.debug("git status failed in %s: %s", root, outcome.stderr.strip())
            return GitStatus.unknown(branch)

        changes = outcome.stdout.splitlines()
        if not changes:
            return GitStatus(branch=branch, status="Clean", kind="success")
        return GitStatus(branch=branch, status="Modified", kind="warning", count=len(changes))
