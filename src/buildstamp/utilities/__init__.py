"""Utilities package for buildstamp.

Currently holds the logging setup shared by the CLI and tests.
"""

from __future__ import annotations

from .logger_manager import LoggerConfig, LoggerManager, LoggerSettings

__all__ = [
    "LoggerConfig",
    "LoggerManager",
    "LoggerSettings",
]
