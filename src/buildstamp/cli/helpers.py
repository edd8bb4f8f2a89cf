"""Support routines for the buildstamp CLI."""

from __future__ import annotations

from collections.abc import Mapping
import json
from typing import Any

from buildstamp.enums import OutputFormat
from buildstamp.schema.models import BuildStamp


def render_mapping(mapping: Mapping[str, str], output_format: OutputFormat) -> str:
    """Render properties as sorted ``key=value`` lines or a JSON object."""
    if output_format is OutputFormat.JSON:
        return json.dumps(dict(mapping), indent=2, sort_keys=True)
    return "\n".join(f"{key}={value}" for key, value in sorted(mapping.items()))


def stamp_summary(stamp: BuildStamp) -> dict[str, Any]:
    """JSON-friendly view of a build stamp."""
    return {
        "version": stamp.version.value,
        "version_source": stamp.version.source.value,
        "build_id": stamp.build_id.value,
        "build_timestamp": stamp.build_id.timestamp_utc,
        "git_revision": stamp.build_id.git_revision,
        "git_commit_count": stamp.commit_count,
    }


def render_value(
    value: str,
    key: str,
    stamp: BuildStamp,
    output_format: OutputFormat,
) -> str:
    if output_format is OutputFormat.JSON:
        return json.dumps({key: value, **stamp_summary(stamp)}, indent=2, sort_keys=True)
    return value
