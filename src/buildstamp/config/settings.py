"""Build settings loaded from YAML with environment overrides."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
import yaml

from buildstamp.config.env import environment_overrides
from buildstamp.constants import (
    COMMIT_COUNT_TIMEOUT_SECONDS,
    DEFAULT_BASE_VERSION,
    DESCRIBE_TIMEOUT_SECONDS,
    REVISION_TIMEOUT_SECONDS,
)
from buildstamp.errors import ConfigurationError
from buildstamp.schema.base import TypedBaseModel

logger = logging.getLogger(__name__)


def _scalar_to_str(value: Any) -> Any:
    """Unquoted YAML versions such as `1.0` or `2` arrive as numbers."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class ProjectProperties(TypedBaseModel):
    """Project metadata stamped into manifests; unset values render empty."""

    project_name: str = "plugin"
    root_project_name: str | None = None
    plugin_group: str | None = None
    plugin_maven_group: str | None = None
    plugin_name: str | None = None
    server_version: str | None = None
    plugin_description: str | None = None
    plugin_website: str | None = None
    plugin_main_entrypoint: str | None = None
    plugin_author: str | None = None

    @property
    def specification_title(self) -> str:
        return self.root_project_name or self.project_name


class BuildSettings(TypedBaseModel):
    """Inputs for one build invocation.

    ``override_version`` is absent when unset or blank; absence means the
    version comes from git, then from ``base_version``.
    """

    base_version: str = DEFAULT_BASE_VERSION
    override_version: str | None = None
    repo_root: Path = Field(default_factory=Path.cwd)
    describe_timeout: float = Field(DESCRIBE_TIMEOUT_SECONDS, gt=0)
    revision_timeout: float = Field(REVISION_TIMEOUT_SECONDS, gt=0)
    count_timeout: float = Field(COMMIT_COUNT_TIMEOUT_SECONDS, gt=0)
    project: ProjectProperties = Field(default_factory=ProjectProperties)

    @field_validator("base_version", mode="before")
    @classmethod
    def default_blank_base(cls, value: Any) -> Any:
        value = _scalar_to_str(value)
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_BASE_VERSION
        return value.strip() if isinstance(value, str) else value

    @field_validator("override_version", mode="before")
    @classmethod
    def blank_override_is_absent(cls, value: Any) -> Any:
        value = _scalar_to_str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as file:
            document = yaml.safe_load(file)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid YAML: {exc}", source=str(path)) from exc
    except OSError as exc:
        raise ConfigurationError(f"cannot read file: {exc}", source=str(path)) from exc
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigurationError(
            f"config must contain a mapping, got {type(document).__name__}",
            source=str(path),
        )
    return document


def load_settings(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> BuildSettings:
    """Merge YAML config, environment overrides and explicit keyword overrides.

    A missing config file is logged and skipped; keyword overrides set to None are
    ignored so CLI flags that were not passed leave the config untouched.
    """
    data: dict[str, Any] = {}
    source: str | None = None
    if config_path is not None:
        path = Path(config_path)
        source = str(path)
        if path.exists():
            data = _read_yaml(path)
        else:
            logger.warning("Config file not found at %s, using defaults", path)
    data.update(environment_overrides(environ))
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return BuildSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(str(exc), source=source) from exc


__all__ = ["BuildSettings", "ProjectProperties", "load_settings"]
