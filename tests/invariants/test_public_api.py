"""Snapshot test guarding the public API surface from accidental change."""

from __future__ import annotations

import importlib

MODULE_SNAPSHOT = {
    "buildstamp": (
        "BuildIdentifier",
        "BuildStamp",
        "Clock",
        "FixedClock",
        "ResolvedVersion",
        "ShellExecutor",
        "SubprocessShellExecutor",
        "SystemClock",
        "VersionResolver",
        "build_properties",
        "count_commits",
        "create_build_stamp",
        "resolve_build_identifier",
        "resolve_version",
    ),
    "buildstamp.versioning": (
        "VersionResolver",
        "count_commits",
        "parse_describe",
        "resolve_build_identifier",
        "resolve_version",
        "version_from_describe",
    ),
    "buildstamp.shell": ("ShellExecutor", "SubprocessShellExecutor"),
}


def test_public_api_snapshot() -> None:
    """Fail if any facade drops __all__ entries or critical exports."""
    for module_name, expected in MODULE_SNAPSHOT.items():
        module = importlib.import_module(module_name)
        exports = tuple(getattr(module, "__all__", ()))
        assert exports == expected, (
            f"{module_name} __all__ changed: expected {expected}, got {exports}"
        )
        for name in exports:
            assert hasattr(module, name), f"{module_name} is missing {name}"


def test_records_are_final() -> None:
    from buildstamp.schema.models import ResolvedVersion

    try:

        class Extended(ResolvedVersion):  # type: ignore[misc]
            pass

    except TypeError as exc:
        assert "final" in str(exc)
    else:
        raise AssertionError("ResolvedVersion should not be subclassable")
