"""Shared utilities for CLI commands."""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape

from mirror_query.query.base import QueryImage
from mirror_query.query.client import RegistryQueryClient
from mirror_query.utils.config import get_config
from mirror_query.utils.errors import MirrorQueryError

# Shared console instances
console = Console()
err_console = Console(stderr=True)


def build_query() -> QueryImage:
    """Create the query client configured from the active configuration."""
    return RegistryQueryClient(config=get_config().query)


def fail(error: MirrorQueryError | str) -> NoReturn:
    """Print an error and exit with status 1.

    Args:
        error: Error or message to display
    """
    message = error.message if isinstance(error, MirrorQueryError) else error
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def print_raw(text: str) -> None:
    """Print text verbatim, without markup or highlighting."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def output_json(data: dict[str, Any] | BaseModel) -> None:
    """Print data as JSON.

    Args:
        data: Data to output (dict or Pydantic model)
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    print_raw(json.dumps(data, indent=2, default=str))


def parse_listing(body: str, key: str) -> list[str]:
    """Pull a list field out of a catalog or tag-list body.

    Args:
        body: JSON response body
        key: Field holding the list ("repositories" or "tags")

    Returns:
        The listed names; an absent or null field yields an empty list
    """
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        fail(f"Response is not valid JSON: {e}")
    if not isinstance(data, dict):
        fail("Response is not a JSON object")
    return list(data.get(key) or [])
