# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import threading
import time
from typing import Optional, Set

from aiohttp import ClientSession, ClientTimeout

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.fetcher import Fetcher
from site_mapper.crawler.graph import ErrorLog, SiteGraph, VisitationTracker
from site_mapper.crawler.link_extractor import iter_references
from site_mapper.crawler.models import CrawlResult, FetchOutcome, FetchResult
from site_mapper.crawler.urls import hostname_of, resolve
from site_mapper.logger import logger

__all__ = ("SiteCrawler",)


class _PendingUnits:
    """Counting join: wait() returns once every added unit has called done()."""

    def __init__(self) -> None:
        self._count = 0
        self._idle = asyncio.Event()
        self._idle.set()

    def add(self) -> None:
        self._count += 1
        self._idle.clear()

    def done(self) -> None:
        self._count -= 1
        if self._count == 0:
            self._idle.set()

    async def wait(self) -> None:
        await self._idle.wait()


class SiteCrawler:
    """
    Concurrent crawler of a single origin.

    Every discovered page link becomes its own task; the crawl ends when all of
    them, including the ones spawned later, have finished.
    """

    def __init__(self, seed_url: str, config: Optional[CrawlerConfig] = None) -> None:
        self.config = config or CrawlerConfig()
        self.seed_url = resolve("", seed_url)
        self.allowed_host = hostname_of(self.seed_url)
        if not self.allowed_host:
            raise ValueError(f"Seed URL has no host: {seed_url!r}")

        lock = threading.RLock()
        self.errors = ErrorLog(lock)
        self.graph = SiteGraph(lock)
        self.tracker = VisitationTracker(lock, self.errors)

        self.session: Optional[ClientSession] = None
        self._fetcher: Optional[Fetcher] = None
        self._pending: Optional[_PendingUnits] = None
        self._slots: Optional[asyncio.Semaphore] = None
        self._tasks: Set[asyncio.Task] = set()

    async def __aenter__(self) -> SiteCrawler:
        timeout = ClientTimeout(total=self.config.timeout)
        self.session = ClientSession(
            timeout=timeout,
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self._fetcher = Fetcher(self.session, self.allowed_host, self.graph, self.tracker, self.errors)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlResult:
        if not self.session or self._fetcher is None:
            raise RuntimeError("Session not initialized")
        logger.info("Start crawl: %s", self.seed_url)
        start = time.monotonic()
        self._pending = _PendingUnits()
        if self.config.concurrency:
            self._slots = asyncio.Semaphore(self.config.concurrency)
        self._spawn(self.seed_url, referrer=None)
        await self._pending.wait()
        duration = time.monotonic() - start
        pages = self.graph.nodes()
        errors = list(self.errors)
        logger.info(
            "Finished: %d pages, %d static files, %d addresses claimed, %d errors in %.2f s",
            len(pages), sum(len(p.static_files) for p in pages), len(self.tracker), len(errors), duration,
        )
        return CrawlResult(graph=self.graph, errors=errors)

    def _spawn(self, url: str, referrer: Optional[str]) -> None:
        assert self._pending is not None
        self._pending.add()
        task = asyncio.create_task(self._visit(url, referrer))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _visit(self, url: str, referrer: Optional[str]) -> None:
        assert self._pending is not None and self._fetcher is not None
        try:
            if self._slots is None:
                result = await self._fetcher.fetch(url)
            else:
                async with self._slots:
                    result = await self._fetcher.fetch(url)
            logger.debug("%s -> %s", url, result.outcome.value)
            if referrer is not None and result.outcome.reached_page:
                self.graph.add_edge(referrer, url)
            if result.outcome is FetchOutcome.FETCHED:
                self._process(result)
        except Exception as e:
            logger.exception("Unexpected failure while visiting %s", url)
            self.errors.append(f"Visiting {url} failed with error: {e!r}")
        finally:
            self._pending.done()

    def _process(self, page: FetchResult) -> None:
        """Record the page's assets and spawn a unit for every page link."""
        for ref in iter_references(page.url, page.markup or "", self.errors):
            if ref.is_asset:
                self.graph.add_asset(page.url, ref.url)
            else:
                self._spawn(ref.url, referrer=page.url)
