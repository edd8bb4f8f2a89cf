"""Centralized semantic enums for buildstamp."""

from __future__ import annotations

from enum import Enum


class VersionSource(str, Enum):
    """Where a resolved version came from."""

    OVERRIDE = "override"
    GIT = "git"
    FALLBACK = "fallback"


class OutputFormat(str, Enum):
    """Rendering choices for the CLI."""

    TEXT = "text"
    JSON = "json"
