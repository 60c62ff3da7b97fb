"""CLI commands that query a registry."""

from typing import Optional

import typer

from mirror_query.cli.utils import build_query, fail, output_json, parse_listing, print_raw
from mirror_query.query.pagination import catalog_url, iter_pages, manifest_url, tags_url
from mirror_query.utils.errors import MirrorQueryError

TOKEN_ENVVAR = "MIRROR_QUERY_TOKEN"


def _token_option() -> str:
    return typer.Option(
        "",
        "--token",
        "-t",
        envvar=TOKEN_ENVVAR,
        help="Bearer token (empty for unauthenticated, plain HTTP access)",
        show_default=False,
    )


def get_cmd(
    url: str = typer.Argument(..., help="Fully qualified registry endpoint"),
    token: str = _token_option(),
    digest: bool = typer.Option(
        False, "--digest", "-d", help="Print the docker-content-digest header instead of the body"
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """
    Issue a single GET against a registry endpoint.

    Example:
        mirror-query get https://registry.local/v2/_catalog --token $TOKEN
    """
    query = build_query()
    try:
        result = query.get_details(url, token, digest)
    except MirrorQueryError as e:
        fail(e)

    if json_output:
        output_json(result)
        return

    print_raw(result.data)
    if result.link:
        print_raw(f"next: {result.link}")


def _print_listing(url: str, token: str, key: str, max_pages: Optional[int]) -> None:
    query = build_query()
    try:
        for page in iter_pages(query, url, token, max_pages=max_pages):
            for name in parse_listing(page.data, key):
                print_raw(name)
    except MirrorQueryError as e:
        fail(e)


def catalog_cmd(
    registry: str = typer.Argument(..., help="Registry host or base URL"),
    token: str = _token_option(),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", help="Entries per page"),
    max_pages: Optional[int] = typer.Option(None, "--max-pages", help="Stop after this many pages"),
) -> None:
    """
    List every repository in a registry, following pagination.

    Example:
        mirror-query catalog registry.local -n 100
    """
    _print_listing(catalog_url(registry, page_size), token, "repositories", max_pages)


def tags_cmd(
    registry: str = typer.Argument(..., help="Registry host or base URL"),
    repository: str = typer.Argument(..., help="Repository name"),
    token: str = _token_option(),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", help="Entries per page"),
    max_pages: Optional[int] = typer.Option(None, "--max-pages", help="Stop after this many pages"),
) -> None:
    """
    List every tag of a repository, following pagination.

    Example:
        mirror-query tags registry.local library/nginx
    """
    _print_listing(tags_url(registry, repository, page_size), token, "tags", max_pages)


def digest_cmd(
    registry: str = typer.Argument(..., help="Registry host or base URL"),
    repository: str = typer.Argument(..., help="Repository name"),
    reference: str = typer.Argument(..., help="Tag or digest"),
    token: str = _token_option(),
) -> None:
    """
    Print the manifest digest for a tag.

    Example:
        mirror-query digest registry.local library/nginx latest
    """
    query = build_query()
    try:
        result = query.get_details(manifest_url(registry, repository, reference), token, True)
    except MirrorQueryError as e:
        fail(e)
    print_raw(result.data)
