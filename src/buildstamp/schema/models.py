"""Records produced while resolving versions and stamping a build."""

from __future__ import annotations

import re

from pydantic import Field, field_validator

from buildstamp.constants import UNKNOWN_REVISION
from buildstamp.enums import VersionSource
from buildstamp.schema.base import TypedBaseModel, final_class

_TIMESTAMP_PATTERN = re.compile(r"^\d{14}$")


@final_class
class CommandResult(TypedBaseModel):
    """Outcome of one external command with stdout and stderr merged."""

    exit_code: int = Field(..., description="Process exit status (-1 if killed)")
    output: str = Field("", description="Combined stdout/stderr text")
    timed_out: bool = Field(False, description="True when the timeout elapsed")

    @property
    def ok(self) -> bool:
        return not self.timed_out and self.exit_code == 0


@final_class
class DescribeResult(TypedBaseModel):
    """Decomposed ``git describe --tags --long --dirty`` output."""

    raw: str = Field(..., description="Trimmed describe string as reported by git")
    base_tag: str = Field(..., min_length=1, description="Tag without leading 'v'")
    commit_count: int = Field(0, ge=0, description="Commits since the tag")
    short_hash: str | None = Field(None, description="Abbreviated commit hash")
    dirty: bool = Field(False, description="Uncommitted changes were present")
    long_form: bool = Field(
        True, description="Count and hash segments were present, not a bare tag"
    )

    @property
    def is_release(self) -> bool:
        return self.commit_count == 0 and not self.dirty


@final_class
class ResolvedVersion(TypedBaseModel):
    """Canonical version string for one build."""

    value: str = Field(..., min_length=1)
    source: VersionSource = Field(VersionSource.FALLBACK)

    @field_validator("value")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("resolved version must not be blank")
        return value

    def __str__(self) -> str:
        return self.value


@final_class
class BuildIdentifier(TypedBaseModel):
    """``{version}-{timestamp}-{revision}`` naming one build output."""

    version: str = Field(..., min_length=1)
    timestamp_utc: str = Field(..., description="UTC time as yyyyMMddHHmmss")
    git_revision: str = Field(UNKNOWN_REVISION, min_length=1)

    @field_validator("timestamp_utc")
    @classmethod
    def check_fixed_width(cls, value: str) -> str:
        if not _TIMESTAMP_PATTERN.match(value):
            raise ValueError(f"timestamp must be 14 digits, got {value!r}")
        return value

    @property
    def value(self) -> str:
        return f"{self.version}-{self.timestamp_utc}-{self.git_revision}"

    def __str__(self) -> str:
        return self.value


@final_class
class BuildStamp(TypedBaseModel):
    """Everything resolved for one build invocation."""

    version: ResolvedVersion
    build_id: BuildIdentifier
    commit_count: int = Field(0, ge=0)


__all__ = [
    "BuildIdentifier",
    "BuildStamp",
    "CommandResult",
    "DescribeResult",
    "ResolvedVersion",
]
