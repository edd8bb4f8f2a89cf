"""Shell execution capability used for git lookups."""

from __future__ import annotations

from .executor import ShellExecutor, SubprocessShellExecutor

__all__ = ["ShellExecutor", "SubprocessShellExecutor"]
