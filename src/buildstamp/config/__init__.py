"""Configuration for build stamping."""

from __future__ import annotations

from .env import (
    OVERRIDE_REGISTRY,
    EnvOverride,
    commit_sha_short,
    environment_overrides,
    load_environment,
)
from .settings import BuildSettings, ProjectProperties, load_settings

__all__ = [
    "BuildSettings",
    "EnvOverride",
    "OVERRIDE_REGISTRY",
    "ProjectProperties",
    "commit_sha_short",
    "environment_overrides",
    "load_environment",
    "load_settings",
]
