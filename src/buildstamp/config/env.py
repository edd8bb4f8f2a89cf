"""Loads build overrides from the environment and optional `.env` files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv

from buildstamp.constants import (
    BASE_VERSION_ENV,
    COMMIT_SHA_ENV,
    OVERRIDE_VERSION_ENV,
)


@dataclass(frozen=True)
class EnvOverride:
    """Describes which setting an environment variable overrides."""

    setting: str
    env_var: str
    description: str


OVERRIDE_REGISTRY: tuple[EnvOverride, ...] = (
    EnvOverride("base_version", BASE_VERSION_ENV, "Fallback plugin version"),
    EnvOverride("override_version", OVERRIDE_VERSION_ENV, "Explicit local version"),
)


def load_environment(dotenv_path: str | Path | None = None) -> bool:
    """Load a `.env` file when available; existing variables are kept."""
    path = Path(dotenv_path) if dotenv_path else Path(".env")
    if path.exists():
        return load_dotenv(dotenv_path=path, override=False)
    return False


def environment_overrides(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return settings overridden by non-blank environment variables."""
    source = os.environ if environ is None else environ
    overrides: dict[str, str] = {}
    for spec in OVERRIDE_REGISTRY:
        value = source.get(spec.env_var, "")
        if value.strip():
            overrides[spec.setting] = value.strip()
    return overrides


def commit_sha_short(environ: Mapping[str, str] | None = None) -> str | None:
    """Short commit SHA supplied by CI, if any."""
    source = os.environ if environ is None else environ
    value = source.get(COMMIT_SHA_ENV, "").strip()
    return value or None


__all__ = [
    "OVERRIDE_REGISTRY",
    "EnvOverride",
    "commit_sha_short",
    "environment_overrides",
    "load_environment",
]
