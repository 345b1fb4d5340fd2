# File: tests/conftest.py
from collections import Counter
from typing import AsyncIterator, Awaitable, Callable, Dict

import pytest
import pytest_asyncio
from aiohttp import web

from site_mapper.config import CrawlerConfig
from site_mapper.logger import configure

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@pytest.fixture(autouse=True)
def reset_logging():
    """
    CliRunner swaps sys.stdout; give the project logger a fresh handler
    after every test so nothing writes into a closed stream.
    """
    yield
    configure(level="INFO")


@pytest.fixture()
def crawl_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig for crawler tests.
    """
    return CrawlerConfig(timeout=5.0, user_agent="TestAgent/1.0")


@pytest.fixture()
def hits() -> Counter:
    """
    Request counter keyed by (method, path), filled by html_page handlers.
    """
    return Counter()


@pytest.fixture()
def html_page(hits: Counter) -> Callable[..., Handler]:
    """
    Build an aiohttp handler that serves *body* and records every request.
    """

    def _factory(body: str, *, content_type: str = "text/html", status: int = 200) -> Handler:
        async def handler(request: web.Request) -> web.Response:
            hits[(request.method, request.path)] += 1
            return web.Response(text=body, content_type=content_type, status=status)

        return handler

    return _factory


@pytest_asyncio.fixture
async def serve_site(unused_tcp_port_factory) -> AsyncIterator[Callable[[Dict[str, Handler]], Awaitable[str]]]:
    """
    Start an aiohttp app with the given GET routes (HEAD is added by aiohttp),
    return its base URL and clean every started app up afterwards.
    """
    runners = []

    async def _serve(routes: Dict[str, Handler]) -> str:
        app = web.Application()
        for path, handler in routes.items():
            app.router.add_get(path, handler)
        runner = web.AppRunner(app)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()
