"""Error types raised while fetching or resolving Sauce Labs platforms."""

from __future__ import annotations


class SauceBrowsersError(RuntimeError):
    """Base class for every error raised by this package."""


class SauceBrowsersClientError(SauceBrowsersError):
    """The platform catalog could not be fetched or was malformed."""


class SauceBrowsersConfigError(SauceBrowsersError, ValueError):
    """An environment setting has an unusable value."""


class BrowserNotAvailable(SauceBrowsersError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Browser {name} is not available")
        self.name = name


class RangeStartNotFound(SauceBrowsersError):
    def __init__(self, start: str) -> None:
        super().__init__(f"Unable to find start version: {start}")
        self.start = start


class RangeEndNotFound(SauceBrowsersError):
    def __init__(self, end: str) -> None:
        super().__init__(f"Unable to find end version: {end}")
        self.end = end


class InvalidQueryError(ValueError):
    """A query descriptor has a missing or malformed field."""
