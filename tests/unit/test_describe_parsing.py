from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st
import pytest

from buildstamp.versioning.describe import parse_describe, version_from_describe

semver = st.tuples(
    st.integers(min_value=0, max_value=999),
    st.integers(min_value=0, max_value=999),
    st.integers(min_value=0, max_value=999),
).map(lambda parts: ".".join(str(part) for part in parts))
short_hash = st.text(alphabet="0123456789abcdef", min_size=7, max_size=12).map(
    lambda digits: f"g{digits}"
)


def _resolve(describe: str) -> str | None:
    parsed = parse_describe(describe)
    return version_from_describe(parsed) if parsed is not None else None


@given(version=semver, commit=short_hash)
def test_exact_release_tag_resolves_to_tag(version: str, commit: str) -> None:
    assert _resolve(f"v{version}-0-{commit}") == version


@given(version=semver, commit=short_hash)
def test_dirty_release_tag_is_dev(version: str, commit: str) -> None:
    assert _resolve(f"v{version}-0-{commit}-dirty") == f"{version}-dev"


@given(
    version=semver,
    count=st.integers(min_value=1, max_value=100_000),
    commit=short_hash,
    dirty=st.booleans(),
)
def test_commits_after_tag_are_counted(
    version: str, count: int, commit: str, dirty: bool
) -> None:
    suffix = "-dirty" if dirty else ""
    assert _resolve(f"v{version}-{count}-{commit}{suffix}") == f"{version}-dev-{count}"


def test_parse_records_all_segments() -> None:
    parsed = parse_describe("  v2.0.1-7-g1a2b3c4-dirty\n")
    assert parsed is not None
    assert parsed.raw == "v2.0.1-7-g1a2b3c4-dirty"
    assert parsed.base_tag == "2.0.1"
    assert parsed.commit_count == 7
    assert parsed.short_hash == "g1a2b3c4"
    assert parsed.dirty is True
    assert parsed.long_form is True


def test_tag_without_v_prefix_is_kept() -> None:
    assert _resolve("1.4.0-0-gdeadbee") == "1.4.0"


def test_non_numeric_count_parses_as_zero() -> None:
    parsed = parse_describe("v1.0.0-abc-gdeadbee")
    assert parsed is not None
    assert parsed.commit_count == 0
    assert version_from_describe(parsed) == "1.0.0"


@pytest.mark.parametrize(
    ("describe", "expected"),
    [
        ("v3.1.0", "3.1.0"),
        ("v3.1.0-dirty", "3.1.0"),
        ("release-5", "release"),
        ("gabc1234", "gabc1234"),
    ],
)
def test_bare_tag_resolves_to_first_segment(describe: str, expected: str) -> None:
    parsed = parse_describe(describe)
    assert parsed is not None
    assert parsed.long_form is False
    assert version_from_describe(parsed) == expected


def test_prerelease_tag_uses_first_segment() -> None:
    assert _resolve("v1.0-rc1-3-gabc1234") == "1.0"


@pytest.mark.parametrize("describe", ["", "   \n", "v", "-dirty", "-3-gabc"])
def test_unusable_output_is_unavailable(describe: str) -> None:
    assert parse_describe(describe) is None
