"""Devnest data models."""

from devnest.models.project import (
    BuildArtifact,
    GitStatus,
    PackageManager,
    ProjectDescriptor,
    ProjectRecord,
    ProjectType,
    TechStackEntry,
)
from devnest.models.hygiene_result import CleanSummary, HygieneResult
from devnest.models.inspection import HealthStatus, ProjectScript, ToolVersion, Vulnerabilities

__all__ = [
    "BuildArtifact",
    "CleanSummary",
    "GitStatus",
    "HealthStatus",
    "HygieneResult",
    "PackageManager",
    "ProjectDescriptor",
    "ProjectRecord",
    "ProjectScript",
    "ProjectType",
    "TechStackEntry",
    "ToolVersion",
    "Vulnerabilities",
]
