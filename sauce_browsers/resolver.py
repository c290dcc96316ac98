"""
Resolve zuul-style browser queries against the Sauce Labs platform catalog.

A query names a browser and optionally narrows it by platform (OS) and
version::

    [
        {"name": "ie", "version": "7..9"},
        {"name": "chrome", "platform": ["Windows 10", "Mac 10.12"], "version": "latest"},
    ]

``resolve`` expands such a list into the matching catalog records, in the
order they are first matched, without duplicates.  Any query that cannot be
satisfied fails the whole resolution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Union

from .catalog import Platform, aggregate
from .errors import BrowserNotAvailable, InvalidQueryError
from .versions import VersionToken, filter_by_version, parse_token, sort_platforms

logger = logging.getLogger(__name__)

VersionValue = Union[str, int, float]


# ---------------------------------------------------------------------------
# Query descriptors
# ---------------------------------------------------------------------------


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


@dataclass(frozen=True)
class BrowserQuery:
    """A normalised query descriptor.

    ``platforms`` and ``versions`` are ``None`` when the query does not
    constrain them, otherwise non-empty tuples.
    """

    name: str
    platforms: Optional[tuple[str, ...]] = None
    versions: Optional[tuple[VersionToken, ...]] = None

    @classmethod
    def create(
        cls,
        name: str,
        platform: Union[None, str, Sequence[str]] = None,
        version: Union[None, VersionValue, Sequence[VersionValue]] = None,
    ) -> "BrowserQuery":
        """Build a query from the loose zuul shapes (scalar or list fields)."""
        if not isinstance(name, str) or not name:
            raise InvalidQueryError(f"Query name must be a non-empty string, got {name!r}")

        platforms = None
        if platform is not None:
            platforms = tuple(str(p).lower() for p in _as_list(platform))

        versions = None
        if version is not None:
            versions = tuple(parse_token(v) for v in _as_list(version))

        return cls(name=name.lower(), platforms=platforms, versions=versions)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BrowserQuery":
        if "name" not in data:
            raise InvalidQueryError(f"Query is missing 'name': {dict(data)!r}")
        return cls.create(
            data["name"],
            platform=data.get("platform"),
            version=data.get("version"),
        )


QueryLike = Union[BrowserQuery, Mapping[str, Any]]


def normalize_queries(wanted: Iterable[QueryLike]) -> list[BrowserQuery]:
    queries = []
    for item in wanted:
        if isinstance(item, BrowserQuery):
            queries.append(item)
        elif isinstance(item, Mapping):
            queries.append(BrowserQuery.from_dict(item))
        else:
            raise InvalidQueryError(f"Unsupported query type: {type(item).__name__}")
    return queries


# ---------------------------------------------------------------------------
# Result accumulation
# ---------------------------------------------------------------------------


class OrderedPlatformSet:
    """Insertion-ordered set of platforms, unique by identity."""

    def __init__(self) -> None:
        self._items: list[Platform] = []
        self._seen: set[int] = set()

    def add(self, platform: Platform) -> bool:
        """Add ``platform`` unless already present.  Returns True if added."""
        key = id(platform)
        if key in self._seen:
            return False
        self._seen.add(key)
        self._items.append(platform)
        return True

    def update(self, platforms: Iterable[Platform]) -> None:
        for platform in platforms:
            self.add(platform)

    def __contains__(self, platform: object) -> bool:
        return id(platform) in self._seen

    def __iter__(self) -> Iterator[Platform]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def to_list(self) -> list[Platform]:
        return list(self._items)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def _dedupe_versions(platforms: list[Platform]) -> list[Platform]:
    """Drop consecutive records sharing a version, keeping the first OS."""
    kept: list[Platform] = []
    for platform in platforms:
        if not kept or platform.short_version != kept[-1].short_version:
            kept.append(platform)
    return kept


def _candidates(query: BrowserQuery, grouped: Mapping[str, list[Platform]]) -> list[Platform]:
    group = grouped.get(query.name)
    if group is None:
        raise BrowserNotAvailable(query.name)

    candidates = sort_platforms(group)
    if query.platforms is None:
        return _dedupe_versions(candidates)
    return [p for p in candidates if p.os.lower() in query.platforms]


def transform(
    queries: Iterable[BrowserQuery],
    grouped: Mapping[str, list[Platform]],
) -> list[Platform]:
    """Resolve normalised queries against an aggregated catalog."""
    result = OrderedPlatformSet()

    for query in queries:
        candidates = _candidates(query, grouped)
        if not candidates:
            logger.debug("No platforms left for %s after filtering, skipping", query.name)
            continue

        if query.versions is None:
            result.update(candidates)
        else:
            for token in query.versions:
                result.update(filter_by_version(candidates, token))

        logger.debug("Resolved %s: %d platforms so far", query.name, len(result))

    return result.to_list()


def resolve(
    wanted: Optional[Iterable[QueryLike]],
    catalog: Sequence[Platform],
) -> list[Platform]:
    """Expand ``wanted`` into matching records from ``catalog``.

    With ``wanted=None`` the catalog is returned unchanged.
    """
    if wanted is None:
        return list(catalog)
    queries = normalize_queries(wanted)
    return transform(queries, aggregate(catalog))
