"""Catalog document loader.

Reads the published interface document (JSON, or YAML for hand-written
catalogs) into a `Catalog`.
"""

import asyncio
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from steam_api_browser.catalog.models import Catalog, MethodDefinition
from steam_api_browser.errors import CatalogError

logger = logging.getLogger(__name__)


def load_catalog(file_path: Path) -> Catalog:
    """Load a catalog document from disk."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {file_path}: {e}") from e

    # JSON is a subset of YAML, so one parser covers both formats
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CatalogError(f"Cannot parse catalog {file_path}: {e}") from e

    catalog = parse_catalog(data)
    logger.info(
        "Loaded %d interfaces (%d methods) from %s",
        len(catalog),
        sum(len(methods) for methods in catalog.values()),
        file_path,
    )
    return catalog


async def load_catalog_async(file_path: Path) -> Catalog:
    """Load a catalog without blocking the event loop."""
    return await asyncio.to_thread(load_catalog, file_path)


def parse_catalog(data: object) -> Catalog:
    """Validate a decoded catalog document."""
    if not isinstance(data, dict):
        raise CatalogError("Catalog document must be a mapping of interfaces")

    catalog: Catalog = {}
    for interface_name, methods in data.items():
        if not isinstance(methods, dict):
            raise CatalogError(f"Interface {interface_name} must be a mapping of methods")

        catalog[str(interface_name)] = {
            str(method_name): _parse_method(interface_name, method_name, raw)
            for method_name, raw in methods.items()
        }
    return catalog


def _parse_method(interface_name: str, method_name: str, raw: object) -> MethodDefinition:
    try:
        return MethodDefinition.model_validate(raw)
    except ValidationError as e:
        raise CatalogError(f"Invalid method {interface_name}/{method_name}: {e}") from e
