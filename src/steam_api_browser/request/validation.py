"""Credential and SteamID format checks."""

import re

_HEX_KEY = re.compile(r"^[0-9a-f]{32}$", re.IGNORECASE)
_STEAMID = re.compile(r"^[0-9]{17}$")


def is_valid_webapi_key(value: str) -> bool:
    return bool(_HEX_KEY.match(value))


def is_valid_access_token(value: str) -> bool:
    return bool(_HEX_KEY.match(value))


def is_valid_steamid(value: str) -> bool:
    return bool(_STEAMID.match(value))


VALIDATORS = {
    "webapi_key": is_valid_webapi_key,
    "access_token": is_valid_access_token,
    "steamid": is_valid_steamid,
}


def is_field_valid(field: str, value: str) -> bool:
    """Fields without a validator (format) are always valid."""
    validator = VALIDATORS.get(field)
    return validator(value) if validator else True
