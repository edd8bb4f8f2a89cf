"""Constants shared by version resolution and build stamping."""

from __future__ import annotations

DEFAULT_BASE_VERSION = "1.0.0"
"""Version used when neither an override nor git metadata is available."""

DESCRIBE_TIMEOUT_SECONDS = 5.0
REVISION_TIMEOUT_SECONDS = 3.0
COMMIT_COUNT_TIMEOUT_SECONDS = 5.0

DESCRIBE_COMMAND: tuple[str, ...] = ("git", "describe", "--tags", "--long", "--dirty")
REVISION_COMMAND: tuple[str, ...] = ("git", "rev-parse", "--short", "HEAD")
COMMIT_COUNT_COMMAND: tuple[str, ...] = ("git", "rev-list", "--count", "HEAD")

DIRTY_SUFFIX = "-dirty"
DEV_MARKER = "dev"
TAG_PREFIX = "v"
UNKNOWN_REVISION = "unknown"

BUILD_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
"""Fixed-width UTC stamp, equivalent to ``yyyyMMddHHmmss``."""

BASE_VERSION_ENV = "BUILDSTAMP_PLUGIN_VERSION"
OVERRIDE_VERSION_ENV = "BUILDSTAMP_LOCAL_VERSION"
COMMIT_SHA_ENV = "COMMIT_SHA_SHORT"

DEFAULT_CONFIG_PATH = "buildstamp.yml"
