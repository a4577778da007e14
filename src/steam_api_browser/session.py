"""Browser session: owns the catalog and all user state.

Every user-facing event (token change, filter edit, favorite toggle,
credential edit) goes through a method here. Selection transitions return
effects; titles and immediate effects are dispatched at once, deferred ones
wait in a FIFO queue until the view calls `after_render()`.
"""

import logging
from collections import deque
from collections.abc import Awaitable, Callable

from steam_api_browser.catalog.models import Catalog, MethodDefinition, MethodParameter, get_method
from steam_api_browser.config import BrowserConfig
from steam_api_browser.errors import UnknownMethodError
from steam_api_browser.request.params import ParameterOverlay, ParameterState
from steam_api_browser.request.url import build_request_target, render_query_string
from steam_api_browser.request.validation import is_valid_steamid
from steam_api_browser.search.fuzzy import FuzzyIndex
from steam_api_browser.state import selection
from steam_api_browser.state.credentials import (
    FieldWatchers,
    UserCredentials,
    register_persistence,
    set_field,
)
from steam_api_browser.state.favorites import FavoritesTracker
from steam_api_browser.state.selection import Effect, SelectionState, TitleChanged
from steam_api_browser.storage import KeyValueStore
from steam_api_browser.views.sidebar import filtered_view, sidebar_groups

logger = logging.getLogger(__name__)

EffectHandler = Callable[[Effect], None]


class DeferredQueue:
    """Effects waiting for the next render, run first-in first-out."""

    def __init__(self):
        self._pending: deque[Effect] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    def schedule(self, effect: Effect) -> None:
        self._pending.append(effect)

    def drain(self) -> list[Effect]:
        drained = list(self._pending)
        self._pending.clear()
        return drained


class BrowserSession:
    def __init__(
        self,
        store: KeyValueStore,
        title_sink: Callable[[str], None] | None = None,
        config: BrowserConfig | None = None,
    ):
        self.store = store
        self.config = config or BrowserConfig()
        self.title_sink = title_sink
        self.title = self.config.product_title

        self.catalog: Catalog = {}
        self.index: FuzzyIndex | None = None
        self.selection = SelectionState()
        self.overlay = ParameterOverlay()
        self.favorites = FavoritesTracker(store)
        self.credentials = UserCredentials()
        self.watchers = FieldWatchers()
        self.deferred = DeferredQueue()
        self.effect_handlers: list[EffectHandler] = []

        register_persistence(self.watchers, store)
        self.watchers.on("steamid", self._propagate_steamid)

    @property
    def ready(self) -> bool:
        return self.index is not None

    # -- startup

    def start(self, catalog: Catalog, token: str = "") -> None:
        """Adopt a freshly loaded catalog and restore persisted user state."""
        if self.ready:
            raise RuntimeError("Session already started")

        self.catalog = catalog
        self.credentials = UserCredentials.load(self.store)
        self.favorites.hydrate_from_store(catalog)
        self.overlay.reset()
        if is_valid_steamid(self.credentials.steamid):
            self.overlay.fill_steamid(catalog, self.credentials.steamid)

        self.index = FuzzyIndex.from_catalog(catalog, threshold=self.config.fuzzy_threshold)
        logger.info("Session started with %d favorites", len(self.favorites))
        self.on_token_changed(token)

    async def load(self, fetch: Callable[[], Awaitable[Catalog]], token: str = "") -> None:
        """Await the one-shot catalog fetch, then start."""
        catalog = await fetch()
        self.start(catalog, token)

    # -- effects

    def _apply(self, transition: selection.Transition) -> None:
        self.selection = transition.state
        for effect in transition.effects:
            if isinstance(effect, TitleChanged):
                self.title = effect.title
                if self.title_sink:
                    self.title_sink(effect.title)
            elif effect.deferred:
                self.deferred.schedule(effect)
            else:
                self._dispatch(effect)

    def _dispatch(self, effect: Effect) -> None:
        for handler in self.effect_handlers:
            handler(effect)

    def after_render(self) -> list[Effect]:
        """Run effects deferred until the view has re-rendered."""
        effects = self.deferred.drain()
        for effect in effects:
            self._dispatch(effect)
        return effects

    # -- selection

    def on_token_changed(self, token: str) -> None:
        if not self.ready:
            return
        self._apply(selection.set_from_token(self.selection, self.catalog, token, self.config.product_title))

    def set_filter(self, text: str) -> None:
        if not self.ready:
            return
        self._apply(selection.set_filter(self.selection, text, self.config.product_title))

    def navigate(self, direction: int) -> None:
        if not self.ready:
            return
        visible = list(self.filtered_view())
        self._apply(selection.navigate(self.selection, visible, direction, self.config.product_title))

    def focus_credentials(self) -> None:
        self._apply(
            selection.focus_credentials(
                self.selection,
                self.credentials.has_valid_access_token,
                self.config.product_title,
            )
        )

    # -- derived views

    def filtered_view(self) -> Catalog:
        if self.index is None:
            return {}
        return filtered_view(self.catalog, self.index, self.selection.current_filter)

    def sidebar_groups(self) -> dict[str, Catalog]:
        if self.index is None:
            return {}
        return sidebar_groups(self.filtered_view(), len(self.favorites), self.selection.current_filter)

    def current_methods(self) -> dict[str, MethodDefinition]:
        return self.catalog.get(self.selection.current_interface, {})

    # -- favorites, credentials, parameters

    def toggle_favorite(self, interface: str, method: str) -> bool:
        return self.favorites.toggle(self.catalog, interface, method)

    def set_credential(self, field: str, value: str) -> None:
        set_field(self.credentials, self.watchers, field, value)

    def _propagate_steamid(self, field: str, value: str) -> None:
        if is_valid_steamid(value):
            self.overlay.fill_steamid(self.catalog, value)

    def _definition(self, interface: str, method: str) -> MethodDefinition:
        definition = get_method(self.catalog, interface, method)
        if definition is None:
            raise UnknownMethodError(interface, method)
        return definition

    def set_parameter_value(self, interface: str, method: str, parameter: str, value: str) -> None:
        self._definition(interface, method)
        self.overlay.set_value(interface, method, parameter, value)

    def toggle_bool_parameter(self, interface: str, method: str, parameter: str) -> bool:
        self._definition(interface, method)
        return self.overlay.toggle_bool(interface, method, parameter)

    def expand_array_parameter(self, interface: str, method: str, parameter: str) -> MethodParameter:
        definition = self._definition(interface, method)
        return self.overlay.expand_array_parameter(interface, method, definition, parameter)

    def parameter_values(self, interface: str, method: str) -> list[tuple[MethodParameter, ParameterState]]:
        definition = self._definition(interface, method)
        parameters = self.overlay.parameters_for(interface, method, definition)
        return self.overlay.values_for(interface, method, parameters)

    def query_string(self, interface: str, method: str) -> str:
        return render_query_string(self.parameter_values(interface, method), self.credentials)

    def request_target(self, interface: str, method: str) -> str:
        definition = self._definition(interface, method)
        return build_request_target(
            interface,
            method,
            definition,
            self.parameter_values(interface, method),
            self.credentials,
            public_host=self.config.public_host,
            partner_host=self.config.partner_host,
        )
