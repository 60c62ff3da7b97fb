"""HTTP registry query clients."""

from __future__ import annotations

from contextlib import asynccontextmanager, contextmanager
from typing import AsyncIterator, Iterator

import httpx

from mirror_query.models.response import ResponseData
from mirror_query.query.base import (
    BodyReadError,
    MissingDigestHeaderError,
    StatusError,
    TransportError,
)
from mirror_query.utils.config import QueryConfig
from mirror_query.utils.logging import ContextAdapter, request_logger

DIGEST_HEADER = "docker-content-digest"
LINK_HEADER = "link"


def build_headers(token: str, config: QueryConfig | None = None) -> dict[str, str]:
    """Build the request headers for a registry query.

    Args:
        token: Bearer token; no Authorization header is sent when empty
        config: Header configuration (defaults reproduce the image-mirror client)

    Returns:
        Header mapping
    """
    config = config or QueryConfig()
    headers = {
        "User-Agent": config.user_agent,
        "Accept": config.accept_header,
        "Content-Type": config.content_type,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def resolve_url(url: str, token: str) -> str:
    """Return the URL to dispatch.

    Unauthenticated endpoints are reached over plain HTTP, so without a token
    every "https" in the URL is replaced by "http".
    """
    if not token:
        return url.replace("https", "http")
    return url


def parse_link(value: str | None) -> str:
    """Reduce a Link header such as ``</v2/_catalog?last=x>; rel="next"`` to its URL."""
    if not value:
        return ""
    return value.replace("<", "").replace(">", "").replace('; rel="next"', "")


def decode_body(content: bytes, url: str | None = None) -> str:
    """Decode a response body as UTF-8."""
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BodyReadError(str(e), url=url) from e


def _check_status(response: httpx.Response, url: str, log: ContextAdapter) -> None:
    if response.status_code != httpx.codes.OK:
        log.debug("GET failed", extra={"context": {"status": response.status_code}})
        raise StatusError(response.status_code, response.reason_phrase, url=url)


def _digest_result(response: httpx.Response, url: str) -> ResponseData:
    digest = response.headers.get(DIGEST_HEADER)
    if digest is None:
        raise MissingDigestHeaderError(url=url, header=DIGEST_HEADER)
    return ResponseData(data=digest, link="")


class RegistryQueryClient:
    """Query a container registry endpoint over HTTP.

    Each call issues exactly one GET and keeps no state between calls. An
    httpx.Client may be handed in and is then reused (and left open);
    otherwise a client is created and closed per call.

    Example:
        query = RegistryQueryClient()
        page = query.get_details("https://registry.local/v2/_catalog", token, False)
        print(page.data, page.link)
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        config: QueryConfig | None = None,
    ) -> None:
        """Initialize the query client.

        Args:
            client: Optional caller-owned HTTP client
            config: Request configuration
        """
        self._client = client
        self._config = config or QueryConfig()

    @contextmanager
    def _get_client(self) -> Iterator[httpx.Client]:
        if self._client is not None:
            yield self._client
            return
        with httpx.Client(
            timeout=self._config.timeout,
            follow_redirects=self._config.follow_redirects,
            max_redirects=self._config.max_redirects,
        ) as client:
            yield client

    def get_details(self, url: str, token: str, extract_digest: bool) -> ResponseData:
        """Issue one GET against a registry endpoint.

        Args:
            url: Fully qualified registry endpoint
            token: Bearer token; empty string means unauthenticated
            extract_digest: Return the docker-content-digest header instead of the body

        Returns:
            The body and next-page link, or the digest with an empty link

        Raises:
            TransportError: If no response was obtained
            StatusError: If the status is not 200
            BodyReadError: If the body could not be read
            MissingDigestHeaderError: If digest mode finds no digest header
        """
        target = resolve_url(url, token)
        headers = build_headers(token, self._config)
        log = request_logger("query.client", target, extract_digest)
        log.debug("GET", extra={"context": {"authenticated": bool(token)}})

        with self._get_client() as client:
            try:
                request = client.build_request("GET", target, headers=headers)
                response = client.send(
                    request, stream=True, follow_redirects=self._config.follow_redirects
                )
            except httpx.HTTPError as e:
                log.debug("GET failed: %s", e)
                raise TransportError(str(e), url=target) from e

            try:
                _check_status(response, target, log)
                if extract_digest:
                    return _digest_result(response, target)

                link = parse_link(response.headers.get(LINK_HEADER))
                try:
                    content = response.read()
                except httpx.HTTPError as e:
                    raise BodyReadError(str(e), url=target) from e
                return ResponseData(data=decode_body(content, target), link=link)
            finally:
                response.close()


class AsyncRegistryQueryClient:
    """Coroutine counterpart of RegistryQueryClient built on httpx.AsyncClient."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        config: QueryConfig | None = None,
    ) -> None:
        self._client = client
        self._config = config or QueryConfig()

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            timeout=self._config.timeout,
            follow_redirects=self._config.follow_redirects,
            max_redirects=self._config.max_redirects,
        ) as client:
            yield client

    async def get_details(self, url: str, token: str, extract_digest: bool) -> ResponseData:
        """Issue one GET against a registry endpoint. See RegistryQueryClient.get_details."""
        target = resolve_url(url, token)
        headers = build_headers(token, self._config)
        log = request_logger("query.client", target, extract_digest)
        log.debug("GET", extra={"context": {"authenticated": bool(token)}})

        async with self._get_client() as client:
            try:
                request = client.build_request("GET", target, headers=headers)
                response = await client.send(
                    request, stream=True, follow_redirects=self._config.follow_redirects
                )
            except httpx.HTTPError as e:
                log.debug("GET failed: %s", e)
                raise TransportError(str(e), url=target) from e

            try:
                _check_status(response, target, log)
                if extract_digest:
                    return _digest_result(response, target)

                link = parse_link(response.headers.get(LINK_HEADER))
                try:
                    content = await response.aread()
                except httpx.HTTPError as e:
                    raise BodyReadError(str(e), url=target) from e
                return ResponseData(data=decode_body(content, target), link=link)
            finally:
                await response.aclose()
