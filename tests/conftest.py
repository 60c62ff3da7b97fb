"""Shared test fixtures for mirror-query tests."""

from typing import Callable

import httpx
import pytest

from mirror_query.utils.config import MirrorQueryConfig, set_config


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def default_config():
    """Isolate tests from configuration files on the host."""
    set_config(MirrorQueryConfig())
    yield
    set_config(None)


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    """Requests received by the mock registry."""
    return []


@pytest.fixture
def mock_registry(requests_seen: list[httpx.Request]) -> Callable[[Handler], httpx.Client]:
    """Build an httpx.Client whose transport is the given handler."""

    def factory(handler: Handler) -> httpx.Client:
        def recording(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        return httpx.Client(transport=httpx.MockTransport(recording))

    return factory


@pytest.fixture
def mock_async_registry(
    requests_seen: list[httpx.Request],
) -> Callable[[Handler], httpx.AsyncClient]:
    """Build an httpx.AsyncClient whose transport is the given handler."""

    def factory(handler: Handler) -> httpx.AsyncClient:
        def recording(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(recording))

    return factory
