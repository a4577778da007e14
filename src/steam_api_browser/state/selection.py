"""Selection and navigation state machine.

Transitions are pure: each takes the current `SelectionState` and returns a
`Transition` holding the next state plus the side effects the caller must
dispatch. Scroll and focus effects are marked deferred because their targets
only exist after the view re-renders.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, model_validator

from steam_api_browser.catalog.models import Catalog
from steam_api_browser.config import PRODUCT_TITLE


class SelectionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_interface: str = ""
    current_method: str = ""
    current_filter: str = ""

    @model_validator(mode="after")
    def check_consistency(self) -> "SelectionState":
        if self.current_method and not self.current_interface:
            raise ValueError("current_method requires current_interface")
        if self.current_filter and self.current_interface:
            raise ValueError("current_interface must be empty while filtering")
        return self


@dataclass(frozen=True)
class TitleChanged:
    title: str
    deferred: bool = False


@dataclass(frozen=True)
class ScrollIntoView:
    target: str  # "<interface>/<method>" or "<interface>"
    deferred: bool = True


@dataclass(frozen=True)
class ScrollSidebarTop:
    deferred: bool = False


@dataclass(frozen=True)
class FocusField:
    field_id: str
    deferred: bool = True


Effect = TitleChanged | ScrollIntoView | ScrollSidebarTop | FocusField


@dataclass(frozen=True)
class Transition:
    state: SelectionState
    effects: list[Effect] = field(default_factory=list)


def page_title(interface_name: str, product_title: str = PRODUCT_TITLE) -> str:
    if interface_name:
        return f"{interface_name} – {product_title}"
    return product_title


def parse_token(token: str) -> tuple[str, str]:
    """Split a `#Interface/Method` location token into its two names."""
    interface_name = token
    method_name = ""

    if token.startswith("#"):
        parts = token[1:].split("/")
        interface_name = parts[0]
        method_name = parts[1] if len(parts) > 1 else ""

    return interface_name, method_name


def resolve_token(catalog: Catalog, token: str) -> tuple[str, str]:
    interface_name, method_name = parse_token(token)

    if interface_name not in catalog:
        return "", ""
    if method_name not in catalog[interface_name]:
        return interface_name, ""
    return interface_name, method_name


def set_from_token(
    state: SelectionState,
    catalog: Catalog,
    token: str,
    product_title: str = PRODUCT_TITLE,
) -> Transition:
    """Select whatever the location token names; unknown names select nothing."""
    interface_name, method_name = resolve_token(catalog, token)

    current_filter = state.current_filter if not interface_name else ""
    new_state = SelectionState(
        current_interface=interface_name,
        current_method=method_name,
        current_filter=current_filter,
    )

    effects: list[Effect] = []
    if state.current_interface != interface_name:
        effects.append(TitleChanged(page_title(interface_name, product_title)))
        effects.append(ScrollIntoView(f"{interface_name}/{method_name}"))

    return Transition(new_state, effects)


def set_filter(state: SelectionState, text: str, product_title: str = PRODUCT_TITLE) -> Transition:
    """Whitespace-only text counts as no filter."""
    previous = state.current_filter
    if not text.strip():
        text = ""
    effects: list[Effect] = []

    if not text:
        new_state = SelectionState(
            current_interface=state.current_interface,
            current_method=state.current_method,
        )
        if previous:
            effects.append(ScrollIntoView(state.current_interface))
        return Transition(new_state, effects)

    new_state = SelectionState(current_filter=text)
    if state.current_interface:
        effects.append(TitleChanged(page_title("", product_title)))
    if not previous:
        effects.append(ScrollSidebarTop())
    return Transition(new_state, effects)


def navigate(
    state: SelectionState,
    visible_interfaces: list[str],
    direction: int,
    product_title: str = PRODUCT_TITLE,
) -> Transition:
    """Cycle through the visible interfaces, wrapping at both ends.

    Picking an interface opens it, which ends an active search.
    """
    if direction not in (1, -1):
        raise ValueError(f"direction must be 1 or -1, got {direction}")

    size = len(visible_interfaces)
    if size == 0:
        return Transition(state)

    if state.current_interface in visible_interfaces:
        index = (visible_interfaces.index(state.current_interface) + direction) % size
    else:
        index = 0 if direction > 0 else size - 1

    interface_name = visible_interfaces[index]
    new_state = SelectionState(current_interface=interface_name)

    effects: list[Effect] = []
    if state.current_interface != interface_name:
        effects.append(TitleChanged(page_title(interface_name, product_title)))
    effects.append(ScrollIntoView(interface_name))
    return Transition(new_state, effects)


def focus_credentials(
    state: SelectionState,
    has_access_token: bool,
    product_title: str = PRODUCT_TITLE,
) -> Transition:
    """Leave any interface or search and focus the credential input."""
    effects: list[Effect] = []
    if state.current_interface:
        effects.append(TitleChanged(page_title("", product_title)))
    effects.append(FocusField("form-access-token" if has_access_token else "form-api-key"))
    return Transition(SelectionState(), effects)
