"""
Version ordering and version-token resolution.

Sauce Labs reports ``short_version`` as a string.  Most are numeric
(``"9"``, ``"11.0"``), a few are channels (``"dev"``, ``"beta"``).  Numeric
versions sort ascending and channels sort after all of them, keeping catalog
order among themselves.

A query's version may be:

- an exact version (``9``, ``"11"``), which also matches ``"<v>.0"``
- ``"latest"`` / ``"oldest"``, relative to the numeric versions only
- a range ``"<start>..<end>"``, inclusive on both ends, where ``start`` may be
  ``"oldest"``, a version, or a negative offset counted back from ``end``,
  and ``end`` may be ``"latest"`` or a version.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal, Sequence, Union

from .catalog import Platform
from .errors import InvalidQueryError, RangeEndNotFound, RangeStartNotFound

logger = logging.getLogger(__name__)

LATEST = "latest"
OLDEST = "oldest"
RANGE_SEPARATOR = ".."

# Plain decimal numbers only: no underscores, no inf/nan spellings.
_NUMERIC_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_OFFSET_RE = re.compile(r"-[0-9]+")


# ---------------------------------------------------------------------------
# Typed versions and ordering
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NumericVersion:
    value: float


@dataclass(frozen=True)
class SymbolicVersion:
    text: str


Version = Union[NumericVersion, SymbolicVersion]


def parse_version(text: str) -> Version:
    """Classify a ``short_version`` string as numeric or symbolic."""
    stripped = text.strip()
    if _NUMERIC_RE.fullmatch(stripped):
        return NumericVersion(float(stripped))
    return SymbolicVersion(text)


def is_numeric(platform: Platform) -> bool:
    return isinstance(parse_version(platform.short_version), NumericVersion)


def version_sort_key(platform: Platform) -> tuple[int, float]:
    """Numeric versions first in ascending order, then every symbolic one.

    All symbolic versions share one key so a stable sort leaves them in
    catalog order.
    """
    version = parse_version(platform.short_version)
    if isinstance(version, NumericVersion):
        return (0, version.value)
    return (1, 0.0)


def sort_platforms(platforms: Sequence[Platform]) -> list[Platform]:
    """Return a stably sorted copy of ``platforms``."""
    return sorted(platforms, key=version_sort_key)


def numeric_versions(platforms: Sequence[Platform]) -> list[Platform]:
    """Keep only platforms with a numeric ``short_version``, in order."""
    return [p for p in platforms if is_numeric(p)]


# ---------------------------------------------------------------------------
# Version tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExactToken:
    version: str


@dataclass(frozen=True)
class SymbolicToken:
    kind: Literal["latest", "oldest"]


@dataclass(frozen=True)
class OffsetBound:
    """Negative offset on the start side of a range, e.g. ``-2``."""

    offset: int


RangeStart = Union[ExactToken, SymbolicToken, OffsetBound]
RangeEnd = Union[ExactToken, SymbolicToken]


@dataclass(frozen=True)
class RangeToken:
    start: RangeStart
    end: RangeEnd
    start_text: str
    end_text: str


VersionToken = Union[ExactToken, SymbolicToken, RangeToken]


def version_text(value: Union[str, int, float]) -> str:
    """Render a query version the way it is compared against the catalog."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidQueryError(f"Version must be a string or number, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_start(text: str) -> RangeStart:
    if text == OLDEST:
        return SymbolicToken(OLDEST)
    if _OFFSET_RE.fullmatch(text):
        offset = int(text)
        if offset < 0:
            return OffsetBound(offset)
    return ExactToken(text)


def _parse_end(text: str) -> RangeEnd:
    if text == LATEST:
        return SymbolicToken(LATEST)
    return ExactToken(text)


def parse_token(value: Union[str, int, float]) -> VersionToken:
    """Parse one query version into a typed token."""
    text = version_text(value)
    if text in (LATEST, OLDEST):
        return SymbolicToken(text)  # type: ignore[arg-type]

    parts = text.split(RANGE_SEPARATOR)
    if len(parts) == 2:
        start, end = parts
        return RangeToken(
            start=_parse_start(start),
            end=_parse_end(end),
            start_text=start,
            end_text=end,
        )
    return ExactToken(text)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def _resolve_symbolic(platforms: Sequence[Platform], kind: str) -> list[Platform]:
    numeric = numeric_versions(platforms)
    if not numeric:
        return []
    anchor = numeric[-1] if kind == LATEST else numeric[0]
    return [p for p in numeric if p.short_version == anchor.short_version]


def _resolve_exact(platforms: Sequence[Platform], version: str) -> list[Platform]:
    padded = f"{version}.0"
    return [p for p in platforms if p.short_version in (version, padded)]


def _end_index(platforms: Sequence[Platform], token: RangeToken) -> int:
    """Index of the range end.

    ``latest`` maps to the last numeric record and is -1 when there is none;
    the caller reports that only after the start bound has been checked.  A
    literal end that is not in the list fails straight away.
    """
    end = token.end
    if isinstance(end, SymbolicToken) and end.kind == LATEST:
        return len(numeric_versions(platforms)) - 1
    for i in range(len(platforms) - 1, -1, -1):
        if platforms[i].short_version == token.end_text:
            return i
    raise RangeEndNotFound(token.end_text)


def _start_index(platforms: Sequence[Platform], token: RangeToken, end_index: int) -> int:
    start = token.start
    if isinstance(start, OffsetBound):
        index = end_index + start.offset
    elif isinstance(start, SymbolicToken):
        index = 0
    else:
        index = next(
            (i for i, p in enumerate(platforms) if p.short_version == token.start_text),
            -1,
        )
    if index < 0:
        raise RangeStartNotFound(token.start_text)
    return index


def _resolve_range(platforms: Sequence[Platform], token: RangeToken) -> list[Platform]:
    end_index = _end_index(platforms, token)
    start_index = _start_index(platforms, token, end_index)
    if end_index < 0:
        raise RangeEndNotFound(token.end_text)
    logger.debug(
        "Range %s..%s resolved to indices [%d, %d]",
        token.start_text,
        token.end_text,
        start_index,
        end_index,
    )
    return list(platforms[start_index : end_index + 1])


def filter_by_version(
    platforms: Sequence[Platform],
    token: Union[VersionToken, str, int, float],
) -> list[Platform]:
    """Narrow a version-sorted platform list to the records matching ``token``.

    ``platforms`` must already be ordered by ``sort_platforms``; range and
    symbolic resolution rely on numeric versions forming a contiguous,
    ascending prefix.
    """
    if not isinstance(token, (ExactToken, SymbolicToken, RangeToken)):
        token = parse_token(token)

    if isinstance(token, SymbolicToken):
        return _resolve_symbolic(platforms, token.kind)
    if isinstance(token, RangeToken):
        return _resolve_range(platforms, token)
    return _resolve_exact(platforms, token.version)
