import json
import logging

import pytest

from steam_api_browser.catalog.models import MethodDefinition, MethodParameter
from steam_api_browser.errors import UnknownMethodError
from steam_api_browser.state.favorites import FAVORITES_KEY, FavoritesTracker
from steam_api_browser.storage import MemoryStore


@pytest.fixture
def small_catalog():
    return {
        "ISteamUser": {
            "GetPlayerSummaries": MethodDefinition(
                version=2,
                parameters=[MethodParameter(name="steamids")],
            )
        }
    }


class TestHydrate:
    def test_marks_persisted_favorite(self, small_catalog):
        tracker = FavoritesTracker(MemoryStore())
        tracker.hydrate(small_catalog, ["ISteamUser/GetPlayerSummaries"])
        assert small_catalog["ISteamUser"]["GetPlayerSummaries"].is_favorite is True
        assert tracker.favorites == {"ISteamUser/GetPlayerSummaries"}

    def test_drops_stale_entries(self, small_catalog):
        tracker = FavoritesTracker(MemoryStore())
        tracker.hydrate(small_catalog, ["ISteamUser/Gone", "IGone/Method", "nonsense", 42])
        assert tracker.favorites == set()

    def test_from_store(self, small_catalog):
        store = MemoryStore({FAVORITES_KEY: '["ISteamUser/GetPlayerSummaries"]'})
        tracker = FavoritesTracker(store)
        tracker.hydrate_from_store(small_catalog)
        assert "ISteamUser/GetPlayerSummaries" in tracker

    def test_malformed_json_is_logged_and_ignored(self, small_catalog, caplog):
        tracker = FavoritesTracker(MemoryStore({FAVORITES_KEY: "[not json"}))
        with caplog.at_level(logging.WARNING):
            tracker.hydrate_from_store(small_catalog)
        assert tracker.favorites == set()
        assert "malformed favorites" in caplog.text

    def test_non_list_is_ignored(self, small_catalog):
        tracker = FavoritesTracker(MemoryStore({FAVORITES_KEY: '{"a": 1}'}))
        tracker.hydrate_from_store(small_catalog)
        assert len(tracker) == 0


class TestToggle:
    def test_toggle_persists_set(self, small_catalog):
        store = MemoryStore()
        tracker = FavoritesTracker(store)
        assert tracker.toggle(small_catalog, "ISteamUser", "GetPlayerSummaries") is True
        assert json.loads(store.get(FAVORITES_KEY)) == ["ISteamUser/GetPlayerSummaries"]

    def test_double_toggle_restores(self, small_catalog):
        store = MemoryStore()
        tracker = FavoritesTracker(store)
        method = small_catalog["ISteamUser"]["GetPlayerSummaries"]

        tracker.toggle(small_catalog, "ISteamUser", "GetPlayerSummaries")
        tracker.toggle(small_catalog, "ISteamUser", "GetPlayerSummaries")

        assert method.is_favorite is False
        assert tracker.favorites == set()
        assert json.loads(store.get(FAVORITES_KEY)) == []

    def test_unknown_method(self, small_catalog):
        tracker = FavoritesTracker(MemoryStore())
        with pytest.raises(UnknownMethodError):
            tracker.toggle(small_catalog, "ISteamUser", "Nope")
