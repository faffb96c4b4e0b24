# tests/conftest.py — v2
"""Shared test fixtures for all unit tests.

Provides a controllable clock, an in-memory cache, a blob registry and a
fake file server mounted on httpx.MockTransport. No network access: every
remote read goes through the fake server, which records it.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import httpx
import pytest

from filepreview.cache.memory_store import MemoryCacheStore
from filepreview.config.settings import Settings
from filepreview.fetching.blob_registry import BlobRegistry
from filepreview.fetching.fetcher import ContentFetcher


# === FAKES ===


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class Route:
    body: bytes
    content_type: str = ""
    status: int = 200


@dataclass
class FakeFileServer:
    """Serves registered URLs; unknown URLs answer 404.

    ``hold()`` makes every response wait until ``release()`` so tests can
    act while a fetch is in flight.
    """

    routes: dict[str, Route] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    _gate: asyncio.Event | None = None
    _arrived: asyncio.Event | None = None

    def add(self, url: str, body: bytes | str, content_type: str = "", status: int = 200) -> str:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.routes[url] = Route(body=body, content_type=content_type, status=status)
        return url

    def remove(self, url: str) -> None:
        self.routes.pop(url, None)

    def calls(self, url: str | None = None) -> int:
        if url is None:
            return len(self.requests)
        return sum(1 for r in self.requests if str(r.url) == url)

    def hold(self) -> None:
        self._gate = asyncio.Event()
        self._arrived = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()

    async def wait_for_request(self) -> None:
        assert self._arrived is not None, "call hold() first"
        await asyncio.wait_for(self._arrived.wait(), timeout=1)
        self._arrived.clear()

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._arrived is not None:
            self._arrived.set()
        if self._gate is not None:
            await self._gate.wait()
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404)
        headers = {"content-type": route.content_type} if route.content_type else {}
        return httpx.Response(route.status, content=route.body, headers=headers)


# === FIXTURES ===


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_store(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(ttl_seconds=300, clock=clock)


@pytest.fixture
def blobs() -> BlobRegistry:
    return BlobRegistry()


@pytest.fixture
def file_server() -> FakeFileServer:
    return FakeFileServer()


@pytest.fixture
def http_client(file_server: FakeFileServer) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(file_server.handle))


@pytest.fixture
def fetcher(
    cache_store: MemoryCacheStore,
    blobs: BlobRegistry,
    http_client: httpx.AsyncClient,
    settings: Settings,
) -> ContentFetcher:
    return ContentFetcher(cache_store, blobs=blobs, client=http_client, settings=settings)
