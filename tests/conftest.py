# File: tests/conftest.py
from __future__ import annotations

from collections import Counter
from typing import Awaitable, Callable, Dict, List, Optional, Union

import pytest
import pytest_asyncio
from aiohttp import web

from site_mapper.config import CrawlerConfig
from site_mapper.logger import configure

#: a page body (served as text/html) or a full aiohttp handler
Route = Union[str, Callable[[web.Request], Awaitable[web.StreamResponse]]]


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


def _handler(route: Route, hits: Counter):
    async def handle(request: web.Request) -> web.StreamResponse:
        hits[request.path] += 1
        if isinstance(route, str):
            return web.Response(text=route, content_type="text/html")
        return await route(request)

    return handle


class SiteServer:
    """Serves a dict of ``path -> Route`` on localhost and counts requests per path."""

    def __init__(self, port_factory: Callable[[], int]) -> None:
        self._port_factory = port_factory
        self._runners: List[web.AppRunner] = []
        self.hits: Counter = Counter()

    async def serve(self, routes: Dict[str, Route]) -> str:
        app = web.Application()
        for path, route in routes.items():
            app.router.add_get(path, _handler(route, self.hits))
        runner = web.AppRunner(app)
        await runner.setup()
        port = self._port_factory()
        await web.TCPSite(runner, "127.0.0.1", port).start()
        self._runners.append(runner)
        return f"http://127.0.0.1:{port}"

    async def close(self) -> None:
        for runner in self._runners:
            await runner.cleanup()


@pytest_asyncio.fixture
async def site(unused_tcp_port_factory):
    server = SiteServer(unused_tcp_port_factory)
    try:
        yield server
    finally:
        await server.close()


@pytest.fixture()
def make_config() -> Callable[..., CrawlerConfig]:
    def _make(base_url: str, *, timeout: float = 5.0, max_concurrency: Optional[int] = None) -> CrawlerConfig:
        return CrawlerConfig(
            base_url=base_url,
            timeout=timeout,
            user_agent="TestAgent/1.0",
            max_concurrency=max_concurrency,
        )

    return _make


@pytest.fixture(autouse=True)
def _reset_logging():
    """CliRunner swaps sys.stderr; rebind the project logger after every test."""
    yield
    configure(level="WARNING")
