"""Distribution API URL builders and Link-header pagination."""

from __future__ import annotations

from typing import AsyncIterator, Iterator
from urllib.parse import urlencode, urljoin

from mirror_query.models.response import ResponseData
from mirror_query.query.base import AsyncQueryImage, QueryImage
from mirror_query.utils.logging import get_logger_with_context


def _base(registry: str) -> str:
    if not registry.startswith(("http://", "https://")):
        registry = f"https://{registry}"
    return registry.rstrip("/")


def _with_page_size(url: str, page_size: int | None) -> str:
    if page_size is None:
        return url
    return f"{url}?{urlencode({'n': page_size})}"


def catalog_url(registry: str, page_size: int | None = None) -> str:
    """URL of the repository catalog, e.g. ``https://reg/v2/_catalog?n=100``."""
    return _with_page_size(f"{_base(registry)}/v2/_catalog", page_size)


def tags_url(registry: str, repository: str, page_size: int | None = None) -> str:
    """URL of the tag list for a repository."""
    return _with_page_size(f"{_base(registry)}/v2/{repository}/tags/list", page_size)


def manifest_url(registry: str, repository: str, reference: str) -> str:
    """URL of a manifest addressed by tag or digest."""
    return f"{_base(registry)}/v2/{repository}/manifests/{reference}"


def next_url(current: str, link: str) -> str:
    """Resolve a next-page link against the URL of the page that carried it."""
    return urljoin(current, link)


def iter_pages(
    query: QueryImage,
    url: str,
    token: str,
    max_pages: int | None = None,
) -> Iterator[ResponseData]:
    """Yield every page of a paginated listing.

    Follows the Link header of each page until a page has none, or until
    max_pages pages have been fetched. Errors from any page propagate.

    Args:
        query: Query capability used for each page
        url: URL of the first page
        token: Bearer token passed on every request
        max_pages: Optional upper bound on the number of pages

    Yields:
        One ResponseData per page
    """
    log = get_logger_with_context("query.pagination", start=url)
    fetched = 0
    while url:
        if max_pages is not None and fetched >= max_pages:
            log.debug("Stopping after %d pages", fetched)
            return
        page = query.get_details(url, token, False)
        fetched += 1
        log.debug("Fetched page %d", fetched)
        yield page
        url = next_url(url, page.link) if page.link else ""


def collect_pages(
    query: QueryImage,
    url: str,
    token: str,
    max_pages: int | None = None,
) -> list[ResponseData]:
    """Fetch all pages into a list. See iter_pages."""
    return list(iter_pages(query, url, token, max_pages=max_pages))


async def aiter_pages(
    query: AsyncQueryImage,
    url: str,
    token: str,
    max_pages: int | None = None,
) -> AsyncIterator[ResponseData]:
    """Async twin of iter_pages."""
    log = get_logger_with_context("query.pagination", start=url)
    fetched = 0
    while url:
        if max_pages is not None and fetched >= max_pages:
            log.debug("Stopping after %d pages", fetched)
            return
        page = await query.get_details(url, token, False)
        fetched += 1
        log.debug("Fetched page %d", fetched)
        yield page
        url = next_url(url, page.link) if page.link else ""
