"""Container registry query clients."""

from mirror_query.query.base import (
    AsyncQueryImage,
    BodyReadError,
    MissingDigestHeaderError,
    QueryImage,
    RequestError,
    StatusError,
    TransportError,
)
from mirror_query.query.client import AsyncRegistryQueryClient, RegistryQueryClient
from mirror_query.query.fake import FakeQueryImage, QueryCall
from mirror_query.query.pagination import (
    aiter_pages,
    catalog_url,
    collect_pages,
    iter_pages,
    manifest_url,
    tags_url,
)

__all__ = [
    "QueryImage",
    "AsyncQueryImage",
    "RequestError",
    "TransportError",
    "StatusError",
    "BodyReadError",
    "MissingDigestHeaderError",
    "RegistryQueryClient",
    "AsyncRegistryQueryClient",
    "FakeQueryImage",
    "QueryCall",
    "iter_pages",
    "aiter_pages",
    "collect_pages",
    "catalog_url",
    "tags_url",
    "manifest_url",
]
