"""Request URL and query string rendering."""

from urllib.parse import urlencode

from steam_api_browser.catalog.models import MethodDefinition, MethodParameter
from steam_api_browser.config import PARTNER_HOST, PUBLIC_HOST
from steam_api_browser.request.params import ParameterState
from steam_api_browser.state.credentials import DEFAULT_FORMAT, UserCredentials


def render_request_url(
    interface: str,
    method_name: str,
    method: MethodDefinition,
    public_host: str = PUBLIC_HOST,
    partner_host: str = PARTNER_HOST,
) -> str:
    host = partner_host if method.visibility == "publisher_only" else public_host
    return f"{host}{interface}/{method_name}/v{method.version}/"


def render_auth(credentials: UserCredentials) -> str:
    """Auth query parameter; an access token wins over a WebAPI key."""
    if credentials.has_valid_access_token:
        return urlencode({"access_token": credentials.access_token})
    if credentials.has_valid_webapi_key:
        return urlencode({"key": credentials.webapi_key})
    return ""


def render_parameters(
    values: list[tuple[MethodParameter, ParameterState]],
    credentials: UserCredentials,
) -> str:
    """Format and filled-in parameters, with the delimiter that joins them on.

    Parameters are emitted in declared order; a parameter is included when it
    has a value or its boolean toggle is on.
    """
    query: dict[str, str] = {}

    if credentials.format != DEFAULT_FORMAT:
        query["format"] = credentials.format

    for parameter, state in values:
        if not state.is_active:
            continue
        query[parameter.name] = state.value

    if not query:
        return ""

    delimiter = "&" if render_auth(credentials) else "?"
    return delimiter + urlencode(query)


def render_query_string(
    values: list[tuple[MethodParameter, ParameterState]],
    credentials: UserCredentials,
) -> str:
    return render_auth(credentials) + render_parameters(values, credentials)


def build_request_target(
    interface: str,
    method_name: str,
    method: MethodDefinition,
    values: list[tuple[MethodParameter, ParameterState]],
    credentials: UserCredentials,
    public_host: str = PUBLIC_HOST,
    partner_host: str = PARTNER_HOST,
) -> str:
    """Full URL ready to be requested."""
    url = render_request_url(interface, method_name, method, public_host, partner_host)
    auth = render_auth(credentials)
    if auth:
        url += "?"
    return url + render_query_string(values, credentials)


def requires_confirmation(method: MethodDefinition) -> bool:
    """POST requests can change data and must be confirmed before sending."""
    return method.http_method == "POST"
