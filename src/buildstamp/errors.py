"""Exception hierarchy for buildstamp.

Git lookups never raise: an unavailable repository, a missing ``git``
executable or a timed-out command all degrade to fallback values. Only
configuration problems surface as exceptions.
"""

from __future__ import annotations


class BuildstampError(Exception):
    """Base class for errors raised by buildstamp."""


class ConfigurationError(BuildstampError):
    """Raised when build settings cannot be loaded or validated."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")


__all__ = ["BuildstampError", "ConfigurationError"]
