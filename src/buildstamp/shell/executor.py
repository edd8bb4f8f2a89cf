"""Bounded execution of external commands."""

# ruff: noqa: S603

from __future__ import annotations

from collections.abc import Sequence
import logging
import os
from pathlib import Path
import shutil
import signal
import subprocess  # nosec B404 - commands are fixed git invocations
from typing import Protocol, runtime_checkable

from buildstamp.schema.models import CommandResult

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127
KILLED_EXIT_CODE = -1
DRAIN_TIMEOUT_SECONDS = 0.5
_POSIX = os.name == "posix"


@runtime_checkable
class ShellExecutor(Protocol):
    """Capability to run one command and report its merged output."""

    def run(
        self,
        command: Sequence[str],
        working_dir: Path,
        timeout_seconds: float,
    ) -> CommandResult: ...


def _kill_group(process: subprocess.Popen[str]) -> None:
    if _POSIX:
        try:
            os.killpg(process.pid, signal.SIGKILL)
            return
        except ProcessLookupError:
            return
        except PermissionError:
            pass
    process.kill()


class SubprocessShellExecutor:
    """Runs commands with ``subprocess`` and kills them when the timeout elapses.

    Stderr is redirected into stdout. Each child runs in its own session so a
    timeout kills its whole process group; the pipe is then drained for at
    most DRAIN_TIMEOUT_SECONDS before the handle is released.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def run(
        self,
        command: Sequence[str],
        working_dir: Path,
        timeout_seconds: float,
    ) -> CommandResult:
        if not command:
            raise ValueError("command must not be empty")
        executable = shutil.which(command[0])
        if executable is None:
            logger.debug("Executable not found: %s", command[0])
            return CommandResult(
                exit_code=COMMAND_NOT_FOUND,
                output=f"{command[0]}: command not found",
            )
        argv = [executable, *command[1:]]
        try:
            process = subprocess.Popen(  # nosec S603
                argv,
                cwd=working_dir,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding=self.encoding,
                errors="replace",
                start_new_session=_POSIX,
            )
        except OSError as exc:
            logger.debug("Failed to start %s: %s", command[0], exc)
            return CommandResult(exit_code=COMMAND_NOT_FOUND, output=str(exc))

        with process:
            try:
                output, _ = process.communicate(timeout=timeout_seconds)
            except subprocess.TimeoutExpired:
                _kill_group(process)
                try:
                    output, _ = process.communicate(timeout=DRAIN_TIMEOUT_SECONDS)
                except subprocess.TimeoutExpired:
                    # a surviving descendant still holds the pipe
                    output = ""
                logger.debug(
                    "Command timed out after %.1fs and was killed: %s",
                    timeout_seconds,
                    " ".join(command),
                )
                return CommandResult(
                    exit_code=KILLED_EXIT_CODE,
                    output=output or "",
                    timed_out=True,
                )
        return CommandResult(exit_code=process.returncode, output=output or "")


__all__ = ["ShellExecutor", "SubprocessShellExecutor"]
