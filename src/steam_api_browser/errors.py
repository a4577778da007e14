"""Exceptions raised by the browser engine."""


class BrowserError(Exception):
    """Base class for all steam-api-browser errors."""


class CatalogError(BrowserError):
    """The catalog document could not be read or does not match the schema."""


class UnknownMethodError(BrowserError, KeyError):
    """An (interface, method) pair is not present in the loaded catalog."""

    def __init__(self, interface: str, method: str):
        super().__init__(f"{interface}/{method}")
        self.interface = interface
        self.method = method

    def __str__(self) -> str:
        return f"Unknown method: {self.interface}/{self.method}"


class NotAnArrayParameterError(BrowserError, ValueError):
    """Array expansion was requested for a parameter without an `[N]` suffix."""
