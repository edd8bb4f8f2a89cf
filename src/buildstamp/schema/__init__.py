"""Immutable records describing resolved versions and build identifiers."""

from __future__ import annotations

from .models import (
    BuildIdentifier,
    BuildStamp,
    CommandResult,
    DescribeResult,
    ResolvedVersion,
)

__all__ = [
    "BuildIdentifier",
    "BuildStamp",
    "CommandResult",
    "DescribeResult",
    "ResolvedVersion",
]
