"""Runtime configuration, read from ``SAUCE_BROWSERS_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import SauceBrowsersConfigError

DEFAULT_API_BASE = "https://saucelabs.com"
DEFAULT_PLATFORMS_PATH = "/rest/v1/info/platforms/webdriver"
DEFAULT_TIMEOUT = 20.0


@dataclass(frozen=True)
class SauceBrowsersConfig:
    api_base: str = DEFAULT_API_BASE
    platforms_path: str = DEFAULT_PLATFORMS_PATH
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "SauceBrowsersConfig":
        """Build a config from the environment; keyword arguments win."""
        env = os.environ if environ is None else environ

        raw_timeout = env.get("SAUCE_BROWSERS_TIMEOUT", "")
        try:
            env_timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise SauceBrowsersConfigError(
                f"SAUCE_BROWSERS_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None

        return cls(
            api_base=(api_base or env.get("SAUCE_BROWSERS_API_BASE") or DEFAULT_API_BASE).rstrip("/"),
            platforms_path=env.get("SAUCE_BROWSERS_PLATFORMS_PATH") or DEFAULT_PLATFORMS_PATH,
            timeout=timeout if timeout is not None else env_timeout,
        )

    @property
    def platforms_url(self) -> str:
        return f"{self.api_base}{self.platforms_path}"
