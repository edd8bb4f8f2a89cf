"""Parsing of ``git describe --tags --long --dirty`` output."""

from __future__ import annotations

from buildstamp.constants import DEV_MARKER, DIRTY_SUFFIX, TAG_PREFIX
from buildstamp.schema.models import DescribeResult


def _strip_tag_prefix(tag: str) -> str:
    return tag[len(TAG_PREFIX) :] if tag.startswith(TAG_PREFIX) else tag


def _parse_count(segment: str) -> int:
    try:
        count = int(segment)
    except ValueError:
        return 0
    return max(count, 0)


def parse_describe(describe: str) -> DescribeResult | None:
    """Decompose a describe string, or return None when nothing usable remains.

    Output with fewer than three ``-`` separated segments is a bare tag and is
    flagged with ``long_form=False``. Tags that themselves contain ``-`` are
    split on the first separator, so ``v1.0-rc1-3-gabc`` yields ``1.0``.
    """
    raw = describe.strip()
    if not raw:
        return None

    dirty = raw.endswith(DIRTY_SUFFIX)
    text = raw[: -len(DIRTY_SUFFIX)] if dirty else raw

    segments = text.split("-")
    base_tag = _strip_tag_prefix(segments[0])
    if not base_tag:
        return None
    if len(segments) < 3:
        return DescribeResult(raw=raw, base_tag=base_tag, dirty=dirty, long_form=False)

    return DescribeResult(
        raw=raw,
        base_tag=base_tag,
        commit_count=_parse_count(segments[1]),
        short_hash=segments[-1] or None,
        dirty=dirty,
    )


def version_from_describe(result: DescribeResult) -> str:
    """Apply the release/dev policy to a parsed describe result.

    * no commits since the tag, clean tree: ``<tag>``
    * no commits since the tag, dirty tree: ``<tag>-dev``
    * commits since the tag: ``<tag>-dev-<count>``

    A bare tag always resolves to the tag itself.
    """
    if not result.long_form or result.is_release:
        return result.base_tag
    if result.commit_count > 0:
        return f"{result.base_tag}-{DEV_MARKER}-{result.commit_count}"
    return f"{result.base_tag}-{DEV_MARKER}"


__all__ = ["parse_describe", "version_from_describe"]
