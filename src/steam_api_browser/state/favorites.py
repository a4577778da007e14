"""Favorite methods, persisted as a JSON array of qualified names."""

import json
import logging

from steam_api_browser.catalog.models import Catalog, get_method, qualified_name
from steam_api_browser.errors import UnknownMethodError
from steam_api_browser.storage import KeyValueStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorites"


class FavoritesTracker:
    """Keeps the favorites set and each method's `is_favorite` flag in step."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.favorites: set[str] = set()

    def __len__(self) -> int:
        return len(self.favorites)

    def __contains__(self, name: object) -> bool:
        return name in self.favorites

    def toggle(self, catalog: Catalog, interface: str, method: str) -> bool:
        """Flip a method's favorite status and persist the whole set.

        Returns the new status.
        """
        definition = get_method(catalog, interface, method)
        if definition is None:
            raise UnknownMethodError(interface, method)

        name = qualified_name(interface, method)
        definition.is_favorite = not definition.is_favorite

        if definition.is_favorite:
            self.favorites.add(name)
        else:
            self.favorites.discard(name)

        self.persist()
        return definition.is_favorite

    def persist(self) -> None:
        self.store.set(FAVORITES_KEY, json.dumps(sorted(self.favorites)))

    def hydrate(self, catalog: Catalog, persisted: list) -> None:
        """Mark persisted favorites that still exist in the catalog."""
        for favorite in persisted:
            if not isinstance(favorite, str):
                logger.debug("Dropping non-string favorite %r", favorite)
                continue

            interface, _, method = favorite.partition("/")
            definition = get_method(catalog, interface, method)
            if definition is None:
                logger.debug("Dropping stale favorite %s", favorite)
                continue

            definition.is_favorite = True
            self.favorites.add(favorite)

    def hydrate_from_store(self, catalog: Catalog) -> None:
        raw = self.store.get(FAVORITES_KEY) or "[]"
        try:
            persisted = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring malformed favorites: %s", e)
            return

        if not isinstance(persisted, list):
            logger.warning("Ignoring malformed favorites: expected a list, got %s", type(persisted).__name__)
            return

        self.hydrate(catalog, persisted)
