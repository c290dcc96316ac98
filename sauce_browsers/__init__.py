"""
sauce-browsers.

Resolve zuul-style browser shorthands ("ie, versions 7 through 9") into the
exact platforms published by Sauce Labs.
"""

__version__ = "1.0.0"

from .catalog import ALIASES, Platform, aggregate, parse_catalog
from .client import sauce_browsers, sauce_browsers_async, sauce_browsers_callback
from .config import SauceBrowsersConfig
from .errors import (
    BrowserNotAvailable,
    InvalidQueryError,
    RangeEndNotFound,
    RangeStartNotFound,
    SauceBrowsersClientError,
    SauceBrowsersConfigError,
    SauceBrowsersError,
)
from .resolver import BrowserQuery, OrderedPlatformSet, resolve, transform
from .versions import filter_by_version, numeric_versions, parse_token, sort_platforms

__all__ = [
    "__version__",
    "ALIASES",
    "Platform",
    "aggregate",
    "parse_catalog",
    "sauce_browsers",
    "sauce_browsers_async",
    "sauce_browsers_callback",
    "SauceBrowsersConfig",
    "SauceBrowsersError",
    "SauceBrowsersClientError",
    "SauceBrowsersConfigError",
    "BrowserNotAvailable",
    "RangeStartNotFound",
    "RangeEndNotFound",
    "InvalidQueryError",
    "BrowserQuery",
    "OrderedPlatformSet",
    "resolve",
    "transform",
    "filter_by_version",
    "numeric_versions",
    "parse_token",
    "sort_platforms",
]
