from pathlib import Path

import pytest

from steam_api_browser.catalog.loader import load_catalog
from steam_api_browser.search.fuzzy import FuzzyIndex
from steam_api_browser.session import BrowserSession
from steam_api_browser.storage import MemoryStore

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def catalog():
    return load_catalog(FIXTURES / "api.json")


@pytest.fixture
def index(catalog):
    return FuzzyIndex.from_catalog(catalog)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session(catalog, store):
    s = BrowserSession(store)
    s.start(catalog)
    return s
