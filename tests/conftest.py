from __future__ import annotations

from collections.abc import Iterator
import logging
import os
from pathlib import Path
import sys
import tempfile

from _pytest.monkeypatch import MonkeyPatch
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ALLOWED_ARTIFACTS_ROOT = PROJECT_ROOT / "artifacts" / "test"
ALLOWED_ARTIFACTS_ROOT.mkdir(parents=True, exist_ok=True)
sys.dont_write_bytecode = True
os.environ.setdefault("PYTHONDONTWRITEBYTECODE", "1")
EXEMPT_PATH_SEGMENTS = {
    ".venv",
    ".pytest_cache",
    ".hypothesis",
    "site-packages",
    "__pycache__",
}

from buildstamp.clock import FixedClock  # noqa: E402
from buildstamp.utilities.logger_manager import (  # noqa: E402
    ROOT_LOGGER_NAME,
    LoggerConfig,
    LoggerManager,
)
from tests.stubs.clock_stub import FIXED_INSTANT  # noqa: E402


def _assert_within_allowed(path: Path) -> None:
    resolved = path.resolve()
    if resolved == ALLOWED_ARTIFACTS_ROOT or ALLOWED_ARTIFACTS_ROOT in resolved.parents:
        return
    if any(segment in resolved.parts for segment in EXEMPT_PATH_SEGMENTS):
        return
    raise RuntimeError(
        "Writes, temporary files, and artifacts must stay under 'artifacts/test/'"
    )


@pytest.fixture(scope="session", autouse=True)
def enforce_artifact_boundary() -> Iterator[None]:
    mp = MonkeyPatch()
    mp.setattr(Path, "cwd", classmethod(lambda cls: ALLOWED_ARTIFACTS_ROOT))
    mp.setattr(tempfile, "gettempdir", lambda: str(ALLOWED_ARTIFACTS_ROOT))

    original_mkdir = Path.mkdir
    original_write_text = Path.write_text
    original_write_bytes = Path.write_bytes

    def guarded_mkdir(self, *args, **kwargs):
        _assert_within_allowed(self)
        return original_mkdir(self, *args, **kwargs)

    def guarded_write_text(self, *args, **kwargs):
        _assert_within_allowed(self)
        return original_write_text(self, *args, **kwargs)

    def guarded_write_bytes(self, *args, **kwargs):
        _assert_within_allowed(self)
        return original_write_bytes(self, *args, **kwargs)

    mp.setattr(Path, "mkdir", guarded_mkdir, raising=False)
    mp.setattr(Path, "write_text", guarded_write_text, raising=False)
    mp.setattr(Path, "write_bytes", guarded_write_bytes, raising=False)

    yield

    mp.undo()


@pytest.fixture
def test_artifacts_dir(request) -> Path:
    safe_name = (
        request.node.nodeid.replace("::", "__").replace("/", "_").replace("\\", "_")
    )
    target = ALLOWED_ARTIFACTS_ROOT / safe_name
    target.mkdir(parents=True, exist_ok=True)
    return target


@pytest.fixture
def tmp_path(test_artifacts_dir: Path) -> Path:
    return test_artifacts_dir


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(FIXED_INSTANT)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ("BUILDSTAMP_PLUGIN_VERSION", "BUILDSTAMP_LOCAL_VERSION", "COMMIT_SHA_SHORT"):
        # setenv first so undo also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def logger_manager(tmp_path: Path) -> Iterator[LoggerManager]:
    manager = LoggerManager(LoggerConfig(log_level="DEBUG", log_dir=tmp_path / "logs"))
    yield manager
    manager.close()


@pytest.fixture(autouse=True)
def propagate_buildstamp_logs() -> Iterator[None]:
    """Let caplog see records from the ``buildstamp`` hierarchy."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    previous = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = previous
