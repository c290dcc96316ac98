from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .catalog import Platform, parse_catalog
from .config import SauceBrowsersConfig
from .errors import SauceBrowsersClientError

logger = logging.getLogger(__name__)


class _ApiClient:
    def __init__(
        self,
        config: Optional[SauceBrowsersConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or SauceBrowsersConfig.from_env()
        self.transport = transport
        self.async_transport = async_transport

    @staticmethod
    def _headers() -> dict[str, str]:
        return {"Accept": "application/json"}

    @staticmethod
    def _decode(res: httpx.Response) -> Any:
        if res.status_code >= 400:
            raise SauceBrowsersClientError(res.text)
        try:
            return res.json()
        except ValueError as exc:
            raise SauceBrowsersClientError(f"Invalid JSON from {res.url}: {exc}") from exc

    def get(self, path: str) -> Any:
        url = f"{self.config.api_base}{path}"
        with httpx.Client(timeout=self.config.timeout, transport=self.transport) as client:
            try:
                res = client.get(url, headers=self._headers())
            except httpx.HTTPError as exc:
                raise SauceBrowsersClientError(f"GET {url} failed: {exc}") from exc
        return self._decode(res)

    async def get_async(self, path: str) -> Any:
        url = f"{self.config.api_base}{path}"
        async with httpx.AsyncClient(
            timeout=self.config.timeout, transport=self.async_transport
        ) as client:
            try:
                res = await client.get(url, headers=self._headers())
            except httpx.HTTPError as exc:
                raise SauceBrowsersClientError(f"GET {url} failed: {exc}") from exc
        return self._decode(res)

    # ------------------------------------------------------------------
    # Platform catalog
    # ------------------------------------------------------------------

    def fetch_platforms(self) -> list[Platform]:
        """Fetch the full webdriver platform catalog."""
        return self._to_platforms(self.get(self.config.platforms_path))

    async def fetch_platforms_async(self) -> list[Platform]:
        """Async variant of :meth:`fetch_platforms`."""
        return self._to_platforms(await self.get_async(self.config.platforms_path))

    def _to_platforms(self, body: Any) -> list[Platform]:
        if not isinstance(body, list):
            raise SauceBrowsersClientError(
                f"Expected a JSON array of platforms, got {type(body).__name__}"
            )
        platforms = parse_catalog(body)
        logger.info("Fetched %d platforms from %s", len(platforms), self.config.platforms_url)
        return platforms
