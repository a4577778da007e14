"""Runtime configuration read from the environment."""

import logging
import os
from pathlib import Path

from pydantic import BaseModel


def _parse_float(value: str | None, *, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_level(value: str | None, *, default: int) -> int:
    if value is None or not value.strip():
        return default
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def _env_str(name: str, *, default: str) -> str:
    value = os.getenv(name, "").strip()
    return value or default


PUBLIC_HOST = _env_str("STEAM_API_BROWSER_PUBLIC_HOST", default="https://api.steampowered.com/")
PARTNER_HOST = _env_str("STEAM_API_BROWSER_PARTNER_HOST", default="https://partner.steam-api.com/")
PRODUCT_TITLE = _env_str("STEAM_API_BROWSER_TITLE", default="Steam Web API Documentation")
FUZZY_THRESHOLD = _parse_float(os.getenv("STEAM_API_BROWSER_THRESHOLD"), default=0.3)
STATE_PATH = Path(
    _env_str("STEAM_API_BROWSER_STATE", default="~/.config/steam-api-browser/state.json")
).expanduser()
LOG_LEVEL = _parse_level(os.getenv("STEAM_API_BROWSER_LOG_LEVEL"), default=logging.WARNING)


class BrowserConfig(BaseModel):
    """Settings a session needs; defaults come from the environment."""

    public_host: str = PUBLIC_HOST
    partner_host: str = PARTNER_HOST
    product_title: str = PRODUCT_TITLE
    fuzzy_threshold: float = FUZZY_THRESHOLD
