"""site_mapper.crawler: URL resolution, reference extraction, site graph and the concurrent crawler."""

from site_mapper.crawler.crawler import SiteCrawler
from site_mapper.crawler.graph import ErrorLog, SiteGraph, VisitationTracker
from site_mapper.crawler.models import CrawlResult, FetchOutcome, PageNode

__all__ = [
    "SiteCrawler",
    "SiteGraph",
    "VisitationTracker",
    "ErrorLog",
    "CrawlResult",
    "FetchOutcome",
    "PageNode",
]
