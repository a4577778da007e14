"""Session-scoped parameter values.

Catalog definitions are shared and immutable, so everything the user types
(values, boolean toggles, extra array slots) is kept here, keyed by
(interface, method, parameter name).
"""

import logging
import re
from dataclasses import dataclass

from steam_api_browser.catalog.models import Catalog, MethodDefinition, MethodParameter
from steam_api_browser.errors import NotAnArrayParameterError

logger = logging.getLogger(__name__)

_ARRAY_INDEX = re.compile(r"\[\d+\]$")

ParameterKey = tuple[str, str, str]


@dataclass
class ParameterState:
    value: str = ""
    manually_toggled: bool = False
    array_expansion_count: int = 0

    @property
    def is_active(self) -> bool:
        return bool(self.value) or self.manually_toggled


def is_array_parameter(name: str) -> bool:
    return bool(_ARRAY_INDEX.search(name))


def array_base_name(name: str) -> str:
    """`ids[0]` -> `ids`, also for indices wider than one digit."""
    return _ARRAY_INDEX.sub("", name)


class ParameterOverlay:
    def __init__(self):
        self._states: dict[ParameterKey, ParameterState] = {}
        self._expansions: dict[tuple[str, str], list[MethodParameter]] = {}

    def reset(self) -> None:
        self._states.clear()
        self._expansions.clear()

    def state_for(self, interface: str, method: str, parameter: str) -> ParameterState:
        return self._states.setdefault((interface, method, parameter), ParameterState())

    def peek(self, interface: str, method: str, parameter: str) -> ParameterState | None:
        return self._states.get((interface, method, parameter))

    def parameters_for(self, interface: str, method: str, definition: MethodDefinition) -> list[MethodParameter]:
        """Declared parameters with any array expansions spliced in."""
        return self._expansions.get((interface, method), definition.parameters)

    def set_value(self, interface: str, method: str, parameter: str, value: str) -> None:
        self.state_for(interface, method, parameter).value = value

    def toggle_bool(self, interface: str, method: str, parameter: str) -> bool:
        state = self.state_for(interface, method, parameter)
        state.manually_toggled = not state.manually_toggled
        return state.manually_toggled

    def values_for(self, interface: str, method: str, parameters: list[MethodParameter]) -> list[tuple[MethodParameter, ParameterState]]:
        return [
            (parameter, self.peek(interface, method, parameter.name) or ParameterState())
            for parameter in parameters
        ]

    def expand_array_parameter(
        self,
        interface: str,
        method: str,
        definition: MethodDefinition,
        parameter_name: str,
    ) -> MethodParameter:
        """Add one more slot after the last slot of an array parameter."""
        if not is_array_parameter(parameter_name):
            raise NotAnArrayParameterError(f"{parameter_name} is not an array parameter")

        parameters = list(self.parameters_for(interface, method, definition))
        names = [p.name for p in parameters]
        if parameter_name not in names:
            raise NotAnArrayParameterError(f"{interface}/{method} has no parameter {parameter_name}")

        original_index = names.index(parameter_name)
        original = parameters[original_index]

        state = self.state_for(interface, method, parameter_name)
        state.array_expansion_count += 1
        counter = state.array_expansion_count

        new_parameter = MethodParameter(
            name=f"{array_base_name(parameter_name)}[{counter}]",
            type=original.type,
            optional=True,
        )
        parameters.insert(original_index + counter, new_parameter)
        self._expansions[(interface, method)] = parameters

        logger.debug("Expanded %s/%s %s -> %s", interface, method, parameter_name, new_parameter.name)
        return new_parameter

    def fill_steamid(self, catalog: Catalog, steamid: str) -> int:
        """Prefill every empty SteamID-like parameter. Returns how many were filled."""
        if not steamid:
            return 0

        filled = 0
        for interface, methods in catalog.items():
            for method, definition in methods.items():
                for parameter in self.parameters_for(interface, method, definition):
                    if "steamid" not in parameter.name:
                        continue
                    state = self.state_for(interface, method, parameter.name)
                    if not state.value:
                        state.value = steamid
                        filled += 1
        return filled
