from __future__ import annotations

import pytest
from tests.stubs.executor_stub import RecordingExecutor, failing_executor, git_repo, ok

from buildstamp.constants import COMMIT_COUNT_COMMAND, COMMIT_COUNT_TIMEOUT_SECONDS
from buildstamp.versioning.resolver import count_commits


def test_counts_commits() -> None:
    executor = git_repo(count="128")
    assert count_commits(executor) == 128
    command, _, timeout = executor.calls[0]
    assert command == COMMIT_COUNT_COMMAND
    assert timeout == COMMIT_COUNT_TIMEOUT_SECONDS


@pytest.mark.parametrize("output", ["not-a-number", "", "12 commits", "-4"])
def test_unusable_output_counts_zero(output: str) -> None:
    assert count_commits(RecordingExecutor({"rev-list": ok(output)})) == 0


@pytest.mark.parametrize("timed_out", [False, True])
def test_failed_lookup_counts_zero(timed_out: bool) -> None:
    assert count_commits(failing_executor(timed_out=timed_out)) == 0
