"""Git-backed version and build identifier resolution.

Every git lookup is optional: a missing executable, a directory that is not a
repository, a non-zero exit, blank output or an elapsed timeout all count as
"unavailable" and degrade to a documented fallback instead of raising.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC
import logging
from pathlib import Path

from buildstamp.clock import Clock, SystemClock
from buildstamp.constants import (
    BUILD_TIMESTAMP_FORMAT,
    COMMIT_COUNT_COMMAND,
    COMMIT_COUNT_TIMEOUT_SECONDS,
    DESCRIBE_COMMAND,
    DESCRIBE_TIMEOUT_SECONDS,
    REVISION_COMMAND,
    REVISION_TIMEOUT_SECONDS,
    UNKNOWN_REVISION,
)
from buildstamp.enums import VersionSource
from buildstamp.schema.models import BuildIdentifier, DescribeResult, ResolvedVersion
from buildstamp.shell.executor import ShellExecutor, SubprocessShellExecutor
from buildstamp.versioning.describe import parse_describe, version_from_describe

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class VersionResolver:
    """Resolves versions, build identifiers and commit counts for one repository."""

    def __init__(
        self,
        executor: ShellExecutor | None = None,
        repo_root: str | Path | None = None,
        *,
        describe_timeout: float = DESCRIBE_TIMEOUT_SECONDS,
        revision_timeout: float = REVISION_TIMEOUT_SECONDS,
        count_timeout: float = COMMIT_COUNT_TIMEOUT_SECONDS,
    ) -> None:
        self.executor: ShellExecutor = executor or SubprocessShellExecutor()
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()
        self.describe_timeout = describe_timeout
        self.revision_timeout = revision_timeout
        self.count_timeout = count_timeout

    def _query(self, command: Sequence[str], timeout: float) -> str | None:
        """Run a git query and return its trimmed output, or None if unavailable."""
        result = self.executor.run(command, self.repo_root, timeout)
        if not result.ok:
            if result.timed_out:
                logger.debug("git unavailable: %s timed out after %ss", command, timeout)
            else:
                logger.debug(
                    "git unavailable: %s exited with %s: %s",
                    command,
                    result.exit_code,
                    result.output.strip(),
                )
            return None
        output = result.output.strip()
        if not output:
            logger.debug("git unavailable: %s produced no output", command)
            return None
        return output

    def describe(self) -> DescribeResult | None:
        output = self._query(DESCRIBE_COMMAND, self.describe_timeout)
        if output is None:
            return None
        parsed = parse_describe(output)
        if parsed is None:
            logger.debug("git unavailable: unusable describe output %r", output)
        return parsed

    def git_version(self) -> str | None:
        """Version derived from ``git describe``, or None when unavailable."""
        parsed = self.describe()
        return version_from_describe(parsed) if parsed is not None else None

    def resolve_version(
        self,
        base_version: str,
        override_version: str | None = None,
    ) -> ResolvedVersion:
        """Return the override, else the git-derived version, else ``base_version``.

        A non-blank override is returned verbatim without touching git.
        """
        if _is_blank(base_version):
            raise ValueError("base_version must not be blank")
        if override_version is not None and override_version.strip():
            return ResolvedVersion(value=override_version, source=VersionSource.OVERRIDE)

        git_version = self.git_version()
        if git_version is not None:
            return ResolvedVersion(value=git_version, source=VersionSource.GIT)
        logger.debug("Falling back to base version %s", base_version)
        return ResolvedVersion(value=base_version, source=VersionSource.FALLBACK)

    def git_revision(self) -> str | None:
        return self._query(REVISION_COMMAND, self.revision_timeout)

    def resolve_build_identifier(
        self,
        version: str | ResolvedVersion,
        clock: Clock | None = None,
    ) -> BuildIdentifier:
        """Compose ``{version}-{yyyyMMddHHmmss}-{revision}`` for this build."""
        instant = (clock or SystemClock()).now()
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        instant = instant.astimezone(UTC)
        timestamp = instant.strftime(BUILD_TIMESTAMP_FORMAT)
        revision = self.git_revision() or UNKNOWN_REVISION
        return BuildIdentifier(
            version=str(version),
            timestamp_utc=timestamp,
            git_revision=revision,
        )

    def count_commits(self) -> int:
        """Number of commits reachable from HEAD, 0 when unavailable."""
        output = self._query(COMMIT_COUNT_COMMAND, self.count_timeout)
        if output is None:
            return 0
        try:
            return max(int(output), 0)
        except ValueError:
            logger.debug("git unavailable: non-numeric commit count %r", output)
            return 0


def resolve_version(
    base_version: str,
    override_version: str | None,
    executor: ShellExecutor,
    repo_root: str | Path | None = None,
) -> ResolvedVersion:
    return VersionResolver(executor, repo_root).resolve_version(
        base_version, override_version
    )


def resolve_build_identifier(
    version: str | ResolvedVersion,
    executor: ShellExecutor,
    clock: Clock,
    repo_root: str | Path | None = None,
) -> BuildIdentifier:
    return VersionResolver(executor, repo_root).resolve_build_identifier(version, clock)


def count_commits(executor: ShellExecutor, repo_root: str | Path | None = None) -> int:
    return VersionResolver(executor, repo_root).count_commits()


__all__ = [
    "VersionResolver",
    "count_commits",
    "resolve_build_identifier",
    "resolve_version",
]
