from __future__ import annotations

import json
from pathlib import Path

import pytest

from sauce_browsers.catalog import Platform, parse_catalog

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def catalog_payload() -> list[dict]:
    with open(FIXTURES / "platforms.json") as f:
        return json.load(f)


@pytest.fixture
def catalog(catalog_payload) -> list[Platform]:
    return parse_catalog(catalog_payload)
