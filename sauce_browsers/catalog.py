"""
Platform catalog records and grouping by browser name.

The Sauce Labs webdriver endpoint returns a flat JSON array, one object per
(OS, browser, version) combination.  ``parse_catalog`` turns that array into
immutable ``Platform`` records, and ``aggregate`` groups them by lowercase
``api_name`` so queries can look browsers up by name or alias.

Usage::

    from sauce_browsers.catalog import aggregate, parse_catalog

    platforms = parse_catalog(payload)
    grouped = aggregate(platforms)
    grouped["ie"] is grouped["internet explorer"]  # True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .errors import SauceBrowsersClientError

logger = logging.getLogger(__name__)

# Alias -> canonical group name.  Aliases share the target's list object.
ALIASES: dict[str, str] = {
    "iexplore": "internet explorer",
    "ie": "internet explorer",
    "googlechrome": "chrome",
}

_REQUIRED_FIELDS = ("os", "api_name", "short_version")


@dataclass(frozen=True, eq=False)
class Platform:
    """One platform published by Sauce Labs.

    Records compare and hash by identity: two entries with the same triple
    are still distinct catalog rows.
    """

    os: str
    api_name: str
    short_version: str
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Platform":
        missing = [key for key in _REQUIRED_FIELDS if key not in data or data[key] is None]
        if missing:
            raise SauceBrowsersClientError(
                f"Malformed platform record, missing {', '.join(missing)}: {dict(data)!r}"
            )
        return cls(
            os=str(data["os"]),
            api_name=str(data["api_name"]),
            short_version=str(data["short_version"]),
            raw=dict(data),
        )

    @property
    def triple(self) -> tuple[str, str, str]:
        return (self.os, self.api_name, self.short_version)

    def to_dict(self) -> dict[str, Any]:
        d = dict(self.raw)
        d.update(os=self.os, api_name=self.api_name, short_version=self.short_version)
        return d


def parse_catalog(payload: Iterable[Mapping[str, Any]]) -> list[Platform]:
    """Convert the provider's JSON array into ``Platform`` records, in order."""
    platforms = []
    for item in payload:
        if not isinstance(item, Mapping):
            raise SauceBrowsersClientError(f"Malformed platform record: {item!r}")
        platforms.append(Platform.from_dict(item))
    return platforms


def aggregate(platforms: Iterable[Platform]) -> dict[str, list[Platform]]:
    """Group platforms by lowercase ``api_name`` and register aliases.

    Each group keeps the catalog's relative order.  An alias whose target
    group does not exist is left out rather than mapped to nothing.
    """
    grouped: dict[str, list[Platform]] = {}
    for platform in platforms:
        grouped.setdefault(platform.api_name.lower(), []).append(platform)

    for alias, target in ALIASES.items():
        group = grouped.get(target)
        if group is not None:
            grouped[alias] = group

    logger.debug("Aggregated catalog into %d browser groups", len(grouped))
    return grouped
