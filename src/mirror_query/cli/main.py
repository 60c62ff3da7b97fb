"""Main CLI entry point for mirror-query."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from mirror_query.cli import query
from mirror_query.cli.utils import fail
from mirror_query.utils.errors import ConfigurationError

app = typer.Typer(
    name="mirror-query",
    help="Query container registry endpoints for image mirroring.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register subcommands
app.command(name="get")(query.get_cmd)
app.command(name="catalog")(query.catalog_cmd)
app.command(name="tags")(query.tags_cmd)
app.command(name="digest")(query.digest_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a configuration file"
    ),
) -> None:
    """
    mirror-query: query container registry endpoints.

    - [bold]get[/bold]: Fetch one endpoint (body or digest)
    - [bold]catalog[/bold]: List repositories
    - [bold]tags[/bold]: List tags of a repository
    - [bold]digest[/bold]: Resolve a manifest digest
    """
    from mirror_query.utils.config import get_config, load_config, set_config
    from mirror_query.utils.logging import configure_logging

    try:
        if config is not None:
            set_config(load_config(config))
        settings = get_config().logging
    except ConfigurationError as e:
        fail(e)

    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = settings.level
    configure_logging(level=level, structured=settings.structured)


@app.command()
def version() -> None:
    """Show the mirror-query version."""
    from mirror_query import __version__

    console.print(f"mirror-query version {__version__}")


if __name__ == "__main__":
    app()
