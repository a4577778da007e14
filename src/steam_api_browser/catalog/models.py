"""Catalog data models.

The loader converts the raw interface document into these models; every
other component works on them. Definitions are shared by the whole session,
so per-session scratch state lives in `request.params.ParameterOverlay`
instead of here.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class MethodParameter(BaseModel):
    """A single method parameter as declared in the catalog."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "string"  # string / uint32 / uint64 / bool / {message} ...
    optional: bool = False
    description: str = ""

    @property
    def is_bool(self) -> bool:
        return self.type == "bool"


class MethodDefinition(BaseModel):
    """A callable method of an interface."""

    model_config = ConfigDict(populate_by_name=True)

    http_method: Literal["GET", "POST"] = Field(default="GET", alias="httpmethod")
    version: int
    visibility: str = Field(default="public", alias="_type")  # public / publisher_only
    parameters: list[MethodParameter] = []
    description: str = ""
    is_favorite: bool = False  # kept in sync by FavoritesTracker


# interface name -> method name -> definition, in declaration order
Catalog = dict[str, dict[str, MethodDefinition]]


class SearchEntry(BaseModel):
    """One (interface, method) pair in the fuzzy index."""

    model_config = ConfigDict(frozen=True)

    interface: str
    method: str

    @property
    def qualified_name(self) -> str:
        return qualified_name(self.interface, self.method)


def qualified_name(interface: str, method: str) -> str:
    return f"{interface}/{method}"


def iter_entries(catalog: Catalog) -> list[SearchEntry]:
    """Flatten a catalog into search entries, preserving declaration order."""
    return [
        SearchEntry(interface=interface_name, method=method_name)
        for interface_name, methods in catalog.items()
        for method_name in methods
    ]


def get_method(catalog: Catalog, interface: str, method: str) -> MethodDefinition | None:
    return catalog.get(interface, {}).get(method)
