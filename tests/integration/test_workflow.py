"""Integration tests: clients, pagination and CLI against a simulated registry."""

import asyncio
import json
from unittest.mock import patch

import httpx
import pytest
from typer.testing import CliRunner

from mirror_query import (
    AsyncRegistryQueryClient,
    RegistryQueryClient,
    StatusError,
    aiter_pages,
    catalog_url,
    collect_pages,
    manifest_url,
    tags_url,
)
from mirror_query.cli.main import app

REPOSITORIES = ["alpine", "busybox", "library/nginx", "redis", "ubuntu"]
TAGS = {"library/nginx": ["1.24", "1.25", "latest"]}
DIGESTS = {("library/nginx", "latest"): "sha256:4c0fdaa8b6341bfdeca5f18f7837462c80cff90527ee35ef185571e1c327beac"}


def registry(request: httpx.Request) -> httpx.Response:
    """A tiny Distribution API registry requiring a bearer token."""
    if request.headers.get("Authorization") != "Bearer s3cret":
        return httpx.Response(401)

    path = request.url.path
    if path == "/v2/_catalog":
        n = int(request.url.params.get("n", len(REPOSITORIES)))
        last = request.url.params.get("last")
        start = REPOSITORIES.index(last) + 1 if last else 0
        page = REPOSITORIES[start : start + n]
        headers = {}
        if start + n < len(REPOSITORIES):
            headers["Link"] = f'</v2/_catalog?last={page[-1]}&n={n}>; rel="next"'
        return httpx.Response(200, json={"repositories": page}, headers=headers)

    if path.endswith("/tags/list"):
        name = path[len("/v2/") : -len("/tags/list")]
        if name not in TAGS:
            return httpx.Response(404)
        return httpx.Response(200, json={"name": name, "tags": TAGS[name]})

    if "/manifests/" in path:
        name, reference = path[len("/v2/") :].split("/manifests/")
        digest = DIGESTS.get((name, reference))
        if digest is None:
            return httpx.Response(404)
        return httpx.Response(
            200,
            json={"schemaVersion": 2},
            headers={"docker-content-digest": digest},
        )

    return httpx.Response(404)


@pytest.fixture
def query():
    return RegistryQueryClient(client=httpx.Client(transport=httpx.MockTransport(registry)))


class TestRegistryWorkflow:
    """Mirror-style walk over a registry."""

    def test_full_catalog(self, query):
        """Test paging through the catalog two entries at a time."""
        pages = collect_pages(query, catalog_url("reg.local", 2), "s3cret")

        assert len(pages) == 3
        names = [n for p in pages for n in json.loads(p.data)["repositories"]]
        assert names == REPOSITORIES
        assert pages[-1].link == ""

    def test_tags_then_digest(self, query):
        """Test listing tags and resolving the digest of one of them."""
        page = query.get_details(tags_url("reg.local", "library/nginx"), "s3cret", False)
        assert json.loads(page.data)["tags"] == TAGS["library/nginx"]

        digest = query.get_details(manifest_url("reg.local", "library/nginx", "latest"), "s3cret", True)
        assert digest.data == DIGESTS[("library/nginx", "latest")]
        assert digest.link == ""

    def test_unauthenticated_rejected(self, query):
        """Test the registry's 401 surfaces as a StatusError."""
        with pytest.raises(StatusError) as exc_info:
            query.get_details(catalog_url("reg.local"), "", False)
        assert exc_info.value.status_code == 401
        assert exc_info.value.url == "http://reg.local/v2/_catalog"

    def test_async_catalog(self):
        """Test the async client walks the same catalog."""

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(registry)) as http_client:
                query = AsyncRegistryQueryClient(client=http_client)
                return [p async for p in aiter_pages(query, catalog_url("reg.local", 2), "s3cret")]

        pages = asyncio.run(run())
        names = [n for p in pages for n in json.loads(p.data)["repositories"]]
        assert names == REPOSITORIES


class TestCLIWorkflow:
    """CLI commands over the simulated registry."""

    def test_catalog_command(self, query):
        """Test the catalog command prints every repository."""
        with patch("mirror_query.cli.query.build_query", return_value=query):
            result = CliRunner().invoke(app, ["catalog", "reg.local", "-n", "2", "-t", "s3cret"])

        assert result.exit_code == 0
        assert result.stdout.split() == REPOSITORIES

    def test_digest_command(self, query):
        """Test the digest command prints the header value."""
        with patch("mirror_query.cli.query.build_query", return_value=query):
            result = CliRunner().invoke(
                app, ["digest", "reg.local", "library/nginx", "latest", "-t", "s3cret"]
            )

        assert result.exit_code == 0
        assert result.stdout.strip() == DIGESTS[("library/nginx", "latest")]

    def test_missing_tag_fails(self, query):
        """Test a 404 exits with status 1."""
        with patch("mirror_query.cli.query.build_query", return_value=query):
            result = CliRunner().invoke(app, ["digest", "reg.local", "library/nginx", "0.1", "-t", "s3cret"])
        assert result.exit_code == 1
