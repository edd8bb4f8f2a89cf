"""Build orchestration: resolve once, then stamp properties and manifests."""

from __future__ import annotations

import logging

from buildstamp.clock import Clock, SystemClock
from buildstamp.config.settings import BuildSettings
from buildstamp.enums import VersionSource
from buildstamp.schema.models import BuildStamp
from buildstamp.shell.executor import ShellExecutor
from buildstamp.versioning.resolver import VersionResolver

logger = logging.getLogger(__name__)


def resolver_for(
    settings: BuildSettings, executor: ShellExecutor | None = None
) -> VersionResolver:
    return VersionResolver(
        executor,
        settings.repo_root,
        describe_timeout=settings.describe_timeout,
        revision_timeout=settings.revision_timeout,
        count_timeout=settings.count_timeout,
    )


def create_build_stamp(
    settings: BuildSettings,
    executor: ShellExecutor | None = None,
    clock: Clock | None = None,
) -> BuildStamp:
    """Resolve version, build identifier and commit count for one build."""
    resolver = resolver_for(settings, executor)
    version = resolver.resolve_version(settings.base_version, settings.override_version)
    if version.source is VersionSource.FALLBACK:
        logger.debug(
            "git metadata unavailable in %s, using base version %s",
            settings.repo_root,
            version.value,
        )
    build_id = resolver.resolve_build_identifier(version, clock or SystemClock())
    stamp = BuildStamp(
        version=version,
        build_id=build_id,
        commit_count=resolver.count_commits(),
    )
    logger.debug(
        "Resolved build %s (source=%s, commits=%d)",
        build_id.value,
        version.source.value,
        stamp.commit_count,
    )
    return stamp


def build_properties(settings: BuildSettings, stamp: BuildStamp) -> dict[str, str]:
    """Key/value mapping consumed by resource templating."""
    project = settings.project
    return {
        "plugin_group": project.plugin_group or "",
        "plugin_maven_group": project.plugin_maven_group or "",
        "plugin_name": project.plugin_name or "",
        "plugin_version": stamp.version.value,
        "server_version": project.server_version or "",
        "plugin_description": project.plugin_description or "",
        "plugin_website": project.plugin_website or "",
        "plugin_main_entrypoint": project.plugin_main_entrypoint or "",
        "plugin_author": project.plugin_author or "",
        "build_id": stamp.build_id.value,
        "git_revision": stamp.build_id.git_revision,
        "build_timestamp": stamp.build_id.timestamp_utc,
        "git_commit_count": str(stamp.commit_count),
    }


def manifest_attributes(
    settings: BuildSettings,
    stamp: BuildStamp,
    commit_sha_short: str | None = None,
) -> dict[str, str]:
    """Jar manifest attributes; the implementation version carries the CI SHA."""
    version = stamp.version.value
    implementation_version = (
        f"{version}-{commit_sha_short}" if commit_sha_short else version
    )
    return {
        "Specification-Title": settings.project.specification_title,
        "Specification-Version": version,
        "Implementation-Title": settings.project.project_name,
        "Implementation-Version": implementation_version,
    }


__all__ = [
    "build_properties",
    "create_build_stamp",
    "manifest_attributes",
    "resolver_for",
]
