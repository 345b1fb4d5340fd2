# File: site_mapper/engine.py
"""site_mapper.engine: обёртка для запуска обхода сайта."""

from __future__ import annotations

from typing import Optional

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.crawler import SiteCrawler
from site_mapper.crawler.models import CrawlResult

__all__ = ["start_crawl"]


async def start_crawl(seed_url: str, cfg: Optional[CrawlerConfig] = None) -> CrawlResult:
    """
    Запускает асинхронный краулер в контексте и возвращает CrawlResult.

    Parameters
    ----------
    seed_url : str
        Абсолютный адрес, с которого начинается обход.
    cfg : CrawlerConfig, optional
        Конфигурация обхода; по умолчанию — значения CrawlerConfig().
    """
    async with SiteCrawler(seed_url, cfg) as crawler:
        return await crawler.crawl()

