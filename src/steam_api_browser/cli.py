"""CLI entry point for steam-api-browser."""

import asyncio
import logging
from pathlib import Path

import click

from steam_api_browser import config
from steam_api_browser.catalog.loader import load_catalog_async
from steam_api_browser.catalog.models import Catalog
from steam_api_browser.errors import BrowserError
from steam_api_browser.request.url import requires_confirmation
from steam_api_browser.request.validation import is_field_valid
from steam_api_browser.session import BrowserSession
from steam_api_browser.state.credentials import FIELDS
from steam_api_browser.storage import JsonFileStore

catalog_argument = click.argument("catalog_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))


def _open_session(ctx: click.Context, catalog_path: Path, token: str = "") -> BrowserSession:
    """Load the catalog and start a session on the persisted state."""
    session = BrowserSession(JsonFileStore(ctx.obj["state"]))
    try:
        asyncio.run(session.load(lambda: load_catalog_async(catalog_path), token))
    except BrowserError as e:
        raise click.ClickException(str(e)) from e
    return session


def _split_qualified(qualified: str) -> tuple[str, str]:
    interface, _, method = qualified.partition("/")
    if not interface or not method:
        raise click.BadParameter(f"expected Interface/Method, got {qualified!r}", param_hint="QUALIFIED")
    return interface, method


def _echo_catalog(catalog: Catalog) -> None:
    for interface_name, methods in catalog.items():
        click.echo(interface_name)
        for method_name, method in methods.items():
            star = "*" if method.is_favorite else " "
            click.echo(f"  {star} {method_name} v{method.version} [{method.http_method}]")


@click.group()
@click.option("--state", type=click.Path(dir_okay=False, path_type=Path), default=config.STATE_PATH, show_default=True, help="File holding credentials and favorites.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, state: Path, verbose: bool):
    """Steam API Browser: search the Web API catalog and build request URLs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.LOG_LEVEL,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    ctx.obj = {"state": state}


@main.command()
@catalog_argument
@click.pass_context
def groups(ctx: click.Context, catalog_path: Path):
    """Show the sidebar groups of the catalog."""
    session = _open_session(ctx, catalog_path)
    for label, interfaces in session.sidebar_groups().items():
        method_count = sum(len(methods) for methods in interfaces.values())
        click.echo(f"{label or '(ungrouped)'}: {len(interfaces)} interfaces, {method_count} methods")


@main.command()
@catalog_argument
@click.argument("query")
@click.pass_context
def search(ctx: click.Context, catalog_path: Path, query: str):
    """Fuzzy-search methods. Use Interface/Method to match either name."""
    session = _open_session(ctx, catalog_path)
    session.set_filter(query)
    results = session.filtered_view()
    if not results:
        click.echo("No matches.")
        return
    _echo_catalog(results)


@main.command()
@catalog_argument
@click.argument("token")
@click.pass_context
def show(ctx: click.Context, catalog_path: Path, token: str):
    """Show the interface named by a #Interface/Method token."""
    if not token.startswith("#"):
        token = f"#{token}"
    session = _open_session(ctx, catalog_path, token)

    current = session.selection
    if not current.current_interface:
        raise click.ClickException(f"Nothing matches {token}")

    click.echo(session.title)
    for method_name, method in session.current_methods().items():
        if current.current_method and method_name != current.current_method:
            continue
        star = "*" if method.is_favorite else " "
        click.echo(f"{star} {method_name} v{method.version} [{method.http_method}] {method.visibility}")
        if method.description:
            click.echo(f"    {method.description}")
        for parameter in method.parameters:
            flag = "optional" if parameter.optional else "required"
            click.echo(f"    - {parameter.name} ({parameter.type}, {flag}) {parameter.description}".rstrip())


@main.command()
@catalog_argument
@click.argument("qualified")
@click.option("-p", "--param", "params", multiple=True, help="Parameter value as name=value; repeatable.")
@click.pass_context
def url(ctx: click.Context, catalog_path: Path, qualified: str, params: tuple[str, ...]):
    """Print the request URL for Interface/Method."""
    interface, method = _split_qualified(qualified)
    session = _open_session(ctx, catalog_path)

    try:
        declared = {parameter.name for parameter, _ in session.parameter_values(interface, method)}
        for param in params:
            name, sep, value = param.partition("=")
            if not sep:
                raise click.BadParameter(f"expected name=value, got {param!r}", param_hint="--param")
            if name not in declared:
                raise click.BadParameter(f"{qualified} has no parameter {name!r}", param_hint="--param")
            session.set_parameter_value(interface, method, name, value)
        target = session.request_target(interface, method)
        definition = session.catalog[interface][method]
    except BrowserError as e:
        raise click.ClickException(str(e)) from e

    if requires_confirmation(definition):
        click.echo("Warning: POST requests can modify data.", err=True)
    click.echo(target)


@main.command()
@catalog_argument
@click.argument("qualified")
@click.pass_context
def favorite(ctx: click.Context, catalog_path: Path, qualified: str):
    """Toggle Interface/Method as a favorite."""
    interface, method = _split_qualified(qualified)
    session = _open_session(ctx, catalog_path)
    try:
        is_favorite = session.toggle_favorite(interface, method)
    except BrowserError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"{qualified} {'added to' if is_favorite else 'removed from'} favorites")


@main.command(name="set")
@click.argument("field", type=click.Choice(FIELDS))
@click.argument("value")
@click.pass_context
def set_value(ctx: click.Context, field: str, value: str):
    """Store a credential (webapi_key, access_token, steamid) or the format."""
    session = BrowserSession(JsonFileStore(ctx.obj["state"]))
    session.set_credential(field, value)
    if not is_field_valid(field, value):
        click.echo(f"Warning: {field} looks invalid and was not saved.", err=True)
    else:
        click.echo(f"Saved {field}.")
