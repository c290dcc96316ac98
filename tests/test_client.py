"""Tests for sauce_browsers.client: blocking, async and callback entry points."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from sauce_browsers.api_client import _ApiClient
from sauce_browsers.client import (
    sauce_browsers,
    sauce_browsers_async,
    sauce_browsers_callback,
)
from sauce_browsers.config import SauceBrowsersConfig
from sauce_browsers.errors import RangeEndNotFound, SauceBrowsersClientError


@pytest.fixture
def api(catalog_payload) -> _ApiClient:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=catalog_payload))
    return _ApiClient(config=SauceBrowsersConfig(), transport=transport, async_transport=transport)


def _triples(platforms):
    return [p.triple for p in platforms]


def _call(*args, **kwargs):
    """Invoke the callback adapter and wait for its result."""
    calls = []
    thread = sauce_browsers_callback(*args, lambda err, result: calls.append((err, result)), **kwargs)
    thread.join(timeout=5)
    assert len(calls) == 1
    return calls[0]


class TestSauceBrowsers:
    def test_all_browsers(self, api, catalog_payload):
        platforms = sauce_browsers(api=api)
        assert [p.to_dict() for p in platforms] == catalog_payload

    def test_resolves_queries(self, api):
        platforms = sauce_browsers([{"name": "ie", "version": "7..9"}], api=api)
        assert [p.short_version for p in platforms] == ["7", "8", "9"]

    def test_propagates_resolution_errors(self, api):
        with pytest.raises(RangeEndNotFound):
            sauce_browsers([{"name": "opera", "version": "oldest..13"}], api=api)

    def test_uses_environment_config(self, monkeypatch, catalog_payload):
        monkeypatch.setenv("SAUCE_BROWSERS_API_BASE", "http://grid.local")
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json=catalog_payload)

        sauce_browsers(api=_ApiClient(transport=httpx.MockTransport(handler)))
        assert seen == ["http://grid.local/rest/v1/info/platforms/webdriver"]


class TestSauceBrowsersAsync:
    def test_all_browsers(self, api, catalog_payload):
        platforms = asyncio.run(sauce_browsers_async(api=api))
        assert len(platforms) == len(catalog_payload)

    def test_resolves_queries(self, api):
        platforms = asyncio.run(
            sauce_browsers_async([{"name": "opera", "version": "latest"}], api=api)
        )
        assert _triples(platforms) == [("Windows 2003", "opera", "12")]

    def test_propagates_errors(self, api):
        with pytest.raises(RangeEndNotFound):
            asyncio.run(sauce_browsers_async([{"name": "opera", "version": "oldest..13"}], api=api))


class TestSauceBrowsersCallback:
    def test_with_browser_list(self, api):
        err, platforms = _call([{"name": "internet explorer", "version": [6, "-1..latest"]}], api=api)
        assert err is None
        assert _triples(platforms) == [
            ("Windows 2003", "internet explorer", "6"),
            ("Windows 2012", "internet explorer", "10"),
            ("Windows 10", "internet explorer", "11"),
        ]

    def test_without_browser_list(self, api, catalog_payload):
        calls = []
        thread = sauce_browsers_callback(lambda err, result: calls.append((err, result)), api=api)
        thread.join(timeout=5)
        err, platforms = calls[0]
        assert err is None
        assert [p.to_dict() for p in platforms] == catalog_payload

    def test_with_an_error(self, api):
        err, platforms = _call([{"name": "opera", "version": "oldest..13"}], api=api)
        assert isinstance(err, RangeEndNotFound)
        assert str(err) == "Unable to find end version: 13"
        assert platforms is None

    def test_with_fetch_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))
        api = _ApiClient(config=SauceBrowsersConfig(), transport=transport)
        err, platforms = _call(None, api=api)
        assert isinstance(err, SauceBrowsersClientError)
        assert platforms is None

    def test_requires_callback(self):
        with pytest.raises(TypeError):
            sauce_browsers_callback([{"name": "opera"}])
