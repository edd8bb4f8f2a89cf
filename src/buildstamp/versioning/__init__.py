"""Version resolution from git describe metadata."""

from __future__ import annotations

from .describe import parse_describe, version_from_describe
from .resolver import (
    VersionResolver,
    count_commits,
    resolve_build_identifier,
    resolve_version,
)

__all__ = [
    "VersionResolver",
    "count_commits",
    "parse_describe",
    "resolve_build_identifier",
    "resolve_version",
    "version_from_describe",
]
