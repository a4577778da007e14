"""Filtered and grouped sidebar views over the catalog."""

import re

from steam_api_browser.catalog.models import Catalog
from steam_api_browser.search.fuzzy import FuzzyIndex

FAVORITES_GROUP = "All interfaces"
CSGO_GROUP = "CSGO"
DOTA_GROUP = "Dota"
OTHER_GAMES_GROUP = "Other Games"

_APP_ID_SUFFIX = re.compile(r"_[0-9]+$")


def filtered_view(catalog: Catalog, index: FuzzyIndex, filter_text: str) -> Catalog:
    """Catalog restricted to methods matching the filter, in rank order.

    `interface/method` is searched as "interface OR method".
    """
    if not filter_text.strip():
        return catalog

    matches = index.search(filter_text.replace("/", "|"))
    result: Catalog = {}
    for match in matches:
        result.setdefault(match.interface, {})[match.method] = catalog[match.interface][match.method]
    return result


def default_group_label(favorites_count: int) -> str:
    return FAVORITES_GROUP if favorites_count > 0 else ""


def classify_interface(interface_name: str, default_group: str = "") -> str:
    """Group label for an interface, judged by its app id suffix."""
    if interface_name.endswith("_730"):
        return CSGO_GROUP
    if interface_name.endswith("_570"):
        return DOTA_GROUP
    if _APP_ID_SUFFIX.search(interface_name):
        return OTHER_GAMES_GROUP
    return default_group


def sidebar_groups(filtered: Catalog, favorites_count: int, active_filter: str) -> dict[str, Catalog]:
    """Group the (possibly filtered) catalog for the sidebar.

    While searching there is a single unlabeled group. Otherwise the four
    fixed groups are always present, even when empty.
    """
    if active_filter.strip():
        return {"": filtered}

    default_group = default_group_label(favorites_count)
    groups: dict[str, Catalog] = {
        default_group: {},
        CSGO_GROUP: {},
        DOTA_GROUP: {},
        OTHER_GAMES_GROUP: {},
    }

    for interface_name, methods in filtered.items():
        groups[classify_interface(interface_name, default_group)][interface_name] = methods

    return groups
