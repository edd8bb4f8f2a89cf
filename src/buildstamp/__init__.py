"""Git-describe based version resolution and build stamping."""

from __future__ import annotations

from buildstamp.clock import Clock, FixedClock, SystemClock
from buildstamp.schema.models import BuildIdentifier, BuildStamp, ResolvedVersion
from buildstamp.shell.executor import ShellExecutor, SubprocessShellExecutor
from buildstamp.stamping import build_properties, create_build_stamp
from buildstamp.versioning.resolver import (
    VersionResolver,
    count_commits,
    resolve_build_identifier,
    resolve_version,
)

__all__ = [
    "BuildIdentifier",
    "BuildStamp",
    "Clock",
    "FixedClock",
    "ResolvedVersion",
    "ShellExecutor",
    "SubprocessShellExecutor",
    "SystemClock",
    "VersionResolver",
    "build_properties",
    "count_commits",
    "create_build_stamp",
    "resolve_build_identifier",
    "resolve_version",
]
