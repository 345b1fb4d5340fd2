# site_mapper/crawler/fetcher.py
"""
Fetcher module: claims an address, probes it with HEAD and downloads HTML pages.

Each distinct address (scheme ignored) reaches the network at most once per run;
the claim in the visitation record gates every request.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession

from site_mapper.crawler.graph import ErrorLog, SiteGraph, VisitationTracker
from site_mapper.crawler.models import FetchOutcome, FetchResult
from site_mapper.crawler.urls import hostname_of
from site_mapper.logger import logger

HTML_MARKER = "html"


class Fetcher:
    """Performs the HEAD probe and the conditional GET for one crawl."""

    def __init__(
        self,
        session: ClientSession,
        allowed_host: Optional[str],
        graph: SiteGraph,
        tracker: VisitationTracker,
        errors: ErrorLog,
    ) -> None:
        self.session = session
        self.allowed_host = allowed_host.lower() if allowed_host else allowed_host
        self.graph = graph
        self.tracker = tracker
        self.errors = errors

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch *url* unless it was already claimed, is off-origin or is not HTML.

        Returns a FetchResult; ``markup`` is set only for FetchOutcome.FETCHED.
        """
        if not self.tracker.claim(url):
            if self.graph.index_of(url) is not None:
                return FetchResult(url, FetchOutcome.VISITED_WITH_NODE)
            return FetchResult(url, FetchOutcome.VISITED)

        if hostname_of(url) != self.allowed_host:
            logger.debug("Skipping off-origin %s", url)
            return FetchResult(url, FetchOutcome.OFF_ORIGIN)

        # HEAD probe
        try:
            async with self.session.head(url, allow_redirects=True) as resp:
                ctype = resp.headers.get("Content-Type", "")
                final_host = resp.url.host
        except (ClientError, asyncio.TimeoutError) as e:
            self.errors.append(f"Request URL (HEAD): {url} failed with error: {e!r}")
            return FetchResult(url, FetchOutcome.FAILED)

        # a redirect may leave the origin; such pages are never downloaded
        if (final_host or "").lower() != self.allowed_host:
            logger.debug("Redirected off-origin (%s): %s", final_host, url)
            return FetchResult(url, FetchOutcome.OFF_ORIGIN)

        if HTML_MARKER not in ctype.lower():
            logger.debug("Not HTML (%s): %s", ctype or "no content type", url)
            return FetchResult(url, FetchOutcome.NOT_HTML)

        # full retrieval
        try:
            async with self.session.get(url) as resp:
                if resp.status != 200:
                    self.errors.append(
                        f"Request URL (GET): {url} failed with status code: {resp.status}"
                    )
                    return FetchResult(url, FetchOutcome.FAILED)
                markup = await resp.text(errors="replace")
        except (ClientError, asyncio.TimeoutError) as e:
            self.errors.append(f"Request URL (GET): {url} failed with error: {e!r}")
            return FetchResult(url, FetchOutcome.FAILED)

        logger.info("Visiting %s", url)
        self.graph.node_for(url)
        return FetchResult(url, FetchOutcome.FETCHED, markup)


__all__ = ["Fetcher", "HTML_MARKER"]
