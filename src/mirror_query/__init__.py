"""mirror-query: query container registry endpoints for image mirroring.

One authenticated GET per call against a registry endpoint, returning either
the raw body with its next-page link, or the manifest digest header.

Usage:
    from mirror_query import RegistryQueryClient, iter_pages, catalog_url

    query = RegistryQueryClient()
    digest = query.get_details(
        "https://registry.local/v2/library/nginx/manifests/latest", token, True
    ).data

    for page in iter_pages(query, catalog_url("registry.local"), token):
        print(page.data)

CLI:
    mirror-query get <url> [--digest]
    mirror-query catalog <registry>
    mirror-query tags <registry> <repository>
    mirror-query digest <registry> <repository> <reference>
"""

__version__ = "0.1.0"

from mirror_query.models.response import ResponseData
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
from mirror_query.query.fake import FakeQueryImage
from mirror_query.query.pagination import (
    aiter_pages,
    catalog_url,
    collect_pages,
    iter_pages,
    manifest_url,
    tags_url,
)
from mirror_query.utils.errors import MirrorQueryError

__all__ = [
    # Version
    "__version__",
    # Models
    "ResponseData",
    # Capability
    "QueryImage",
    "AsyncQueryImage",
    # Clients
    "RegistryQueryClient",
    "AsyncRegistryQueryClient",
    "FakeQueryImage",
    # Pagination
    "iter_pages",
    "aiter_pages",
    "collect_pages",
    "catalog_url",
    "tags_url",
    "manifest_url",
    # Errors
    "MirrorQueryError",
    "RequestError",
    "TransportError",
    "StatusError",
    "BodyReadError",
    "MissingDigestHeaderError",
]
