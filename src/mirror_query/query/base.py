"""Query capability protocols and error types."""

from typing import Protocol, runtime_checkable

from mirror_query.models.response import ResponseData
from mirror_query.utils.errors import MirrorQueryError


class RequestError(MirrorQueryError):
    """A registry request did not produce a usable response."""

    def __init__(self, message: str, code: str = "REQUEST_ERROR", url: str | None = None) -> None:
        details = {"url": url} if url else {}
        super().__init__(message, code=code, details=details)
        self.url = url


class TransportError(RequestError):
    """No response was obtained (connection, DNS or timeout failure)."""

    def __init__(self, cause: str, url: str | None = None) -> None:
        super().__init__(f"[get_details] {cause.lower()}", code="TRANSPORT_ERROR", url=url)


class StatusError(RequestError):
    """The registry answered with a status other than 200."""

    def __init__(self, status_code: int, reason: str = "", url: str | None = None) -> None:
        status = f"{status_code} {reason}".strip()
        super().__init__(f"[get_details] {status}", code="STATUS_ERROR", url=url)
        self.status_code = status_code
        self.details["status_code"] = status_code


class BodyReadError(RequestError):
    """The response body could not be read or decoded."""

    def __init__(self, cause: str, url: str | None = None) -> None:
        super().__init__(
            f"[get_details] could not read body contents {cause.lower()}",
            code="BODY_READ_ERROR",
            url=url,
        )


class MissingDigestHeaderError(MirrorQueryError):
    """Digest mode was requested against an endpoint that sets no digest header.

    This is a caller contract violation rather than a transient failure.
    """

    def __init__(self, url: str | None = None, header: str = "docker-content-digest") -> None:
        details = {"header": header}
        if url:
            details["url"] = url
        super().__init__(
            f"[get_details] response has no {header} header",
            code="MISSING_DIGEST_HEADER",
            details=details,
        )


@runtime_checkable
class QueryImage(Protocol):
    """Capability for querying a container registry endpoint.

    Depending on the URL the same call returns:
    - the repository catalog
    - the tag list for a repository
    - a manifest, or its digest (taken from a response header)

    Implemented by RegistryQueryClient for real registries and by
    FakeQueryImage in tests.
    """

    def get_details(self, url: str, token: str, extract_digest: bool) -> ResponseData:
        """Issue one GET against a registry endpoint.

        Args:
            url: Fully qualified registry endpoint
            token: Bearer token; empty string means unauthenticated
            extract_digest: Return the docker-content-digest header instead of the body

        Returns:
            The body and next-page link, or the digest

        Raises:
            TransportError: If no response was obtained
            StatusError: If the status is not 200
            BodyReadError: If the body could not be read
            MissingDigestHeaderError: If digest mode finds no digest header
        """
        ...


@runtime_checkable
class AsyncQueryImage(Protocol):
    """Coroutine flavour of QueryImage for use inside an event loop."""

    async def get_details(self, url: str, token: str, extract_digest: bool) -> ResponseData:
        """Issue one GET against a registry endpoint. See QueryImage.get_details."""
        ...
