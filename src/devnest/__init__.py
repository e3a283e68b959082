"""Project inspector and workspace cleaner for local developer repositories."""

__version__ = "0.1.0"
