"""User credentials and the per-field change hooks that persist them."""

import logging
from collections.abc import Callable

from pydantic import BaseModel

from steam_api_browser.request.validation import (
    is_field_valid,
    is_valid_access_token,
    is_valid_webapi_key,
)
from steam_api_browser.storage import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "json"
FIELDS = ("webapi_key", "access_token", "steamid", "format")

Watcher = Callable[[str, str], None]  # (field, new value)


class UserCredentials(BaseModel):
    webapi_key: str = ""
    access_token: str = ""
    steamid: str = ""
    format: str = DEFAULT_FORMAT

    @property
    def has_valid_webapi_key(self) -> bool:
        return is_valid_webapi_key(self.webapi_key)

    @property
    def has_valid_access_token(self) -> bool:
        return is_valid_access_token(self.access_token)

    @classmethod
    def load(cls, store: KeyValueStore) -> "UserCredentials":
        return cls(
            webapi_key=store.get("webapi_key") or "",
            access_token=store.get("access_token") or "",
            steamid=store.get("steamid") or "",
            format=store.get("format") or DEFAULT_FORMAT,
        )


class FieldWatchers:
    """Dispatch table of callbacks run after a credential field changes."""

    def __init__(self):
        self._watchers: dict[str, list[Watcher]] = {}

    def on(self, field: str, callback: Watcher) -> None:
        if field not in FIELDS:
            raise ValueError(f"Unknown field: {field}")
        self._watchers.setdefault(field, []).append(callback)

    def notify(self, field: str, value: str) -> None:
        for callback in self._watchers.get(field, []):
            callback(field, value)


def set_field(credentials: UserCredentials, watchers: FieldWatchers, field: str, value: str) -> None:
    """Assign a field and run its watchers. Invalid values are kept as typed."""
    if field not in FIELDS:
        raise ValueError(f"Unknown field: {field}")
    setattr(credentials, field, value)
    watchers.notify(field, value)


def persist_valid(store: KeyValueStore) -> Watcher:
    """Watcher that stores a valid value and forgets an invalid one."""

    def _persist(field: str, value: str) -> None:
        if is_field_valid(field, value):
            store.set(field, value)
        else:
            logger.debug("Not persisting invalid %s", field)
            store.remove(field)

    return _persist


def register_persistence(watchers: FieldWatchers, store: KeyValueStore) -> None:
    persist = persist_valid(store)
    for field in FIELDS:
        watchers.on(field, persist)
