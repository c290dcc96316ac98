"""
Entry points: fetch the Sauce Labs catalog and resolve queries against it.

Usage::

    from sauce_browsers import sauce_browsers

    platforms = sauce_browsers([{"name": "ie", "version": "7..9"}])
    for p in platforms:
        print(p.os, p.api_name, p.short_version)

``sauce_browsers_async`` is the asyncio flavour and
``sauce_browsers_callback`` reports through an ``(err, result)`` callback.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, Optional, Union

from .api_client import _ApiClient
from .catalog import Platform
from .resolver import QueryLike, resolve

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Optional[list[Platform]]], None]


def sauce_browsers(
    wanted: Optional[Iterable[QueryLike]] = None,
    *,
    api: Optional[_ApiClient] = None,
) -> list[Platform]:
    """Fetch the catalog and resolve ``wanted`` against it.

    Without ``wanted`` the full catalog is returned.
    """
    api = api or _ApiClient()
    catalog = api.fetch_platforms()
    return resolve(wanted, catalog)


async def sauce_browsers_async(
    wanted: Optional[Iterable[QueryLike]] = None,
    *,
    api: Optional[_ApiClient] = None,
) -> list[Platform]:
    """Async variant of :func:`sauce_browsers`; only the fetch is awaited."""
    api = api or _ApiClient()
    catalog = await api.fetch_platforms_async()
    return resolve(wanted, catalog)


def sauce_browsers_callback(
    wanted: Union[Optional[Iterable[QueryLike]], Callback],
    callback: Optional[Callback] = None,
    *,
    api: Optional[_ApiClient] = None,
) -> threading.Thread:
    """Run :func:`sauce_browsers` in a background thread and report via callback.

    ``callback(None, platforms)`` on success, ``callback(err, None)`` on
    failure.  The callback may be passed as the only positional argument to
    fetch the full catalog.  Returns the started thread so callers can join it.
    """
    if callback is None and callable(wanted):
        callback, wanted = wanted, None
    if callback is None:
        raise TypeError("sauce_browsers_callback() requires a callback")

    queries = wanted
    done = callback

    def _run() -> None:
        try:
            result = sauce_browsers(queries, api=api)  # type: ignore[arg-type]
        except Exception as exc:
            logger.debug("Platform lookup failed: %s", exc)
            done(exc, None)
            return
        done(None, result)

    thread = threading.Thread(target=_run, name="sauce-browsers", daemon=True)
    thread.start()
    return thread
