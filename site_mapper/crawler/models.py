"""
Data models for the SiteMapper crawler.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set, Tuple

if TYPE_CHECKING:
    from site_mapper.crawler.graph import SiteGraph


@dataclass(slots=True)
class PageNode:
    """A page of the crawled site: stable id, canonical address, assets and outbound links."""

    id: int
    address: str
    static_files: List[str] = field(default_factory=list)
    links_to: Set[int] = field(default_factory=set)

    def to_record(self) -> Dict[str, Any]:
        return {
            "Id": self.id,
            "Address": self.address,
            "StaticFiles": list(self.static_files),
            "LinksTo": sorted(self.links_to),
        }


class FetchOutcome(enum.Enum):
    """Terminal states of a single fetch attempt."""

    FETCHED = "fetched"
    VISITED_WITH_NODE = "previously visited, page-node exists"
    VISITED = "previously visited, no page"
    OFF_ORIGIN = "off-origin, not fetched"
    NOT_HTML = "not HTML, not fetched"
    FAILED = "fetch failed"

    @property
    def reached_page(self) -> bool:
        """True when the target is known to be a same-origin HTML page."""
        return self in (FetchOutcome.FETCHED, FetchOutcome.VISITED_WITH_NODE)


@dataclass(slots=True)
class FetchResult:
    url: str
    outcome: FetchOutcome
    markup: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TagEvent:
    """An opening (or self-closing) tag with its attributes in source order."""

    name: str
    attrs: Tuple[Tuple[str, str], ...] = ()

    def first(self, key: str) -> Optional[str]:
        """Return the value of the first attribute named *key*, or None."""
        for name, value in self.attrs:
            if name == key:
                return value
        return None


class ReferenceKind(str, enum.Enum):
    LINK = "link"
    IMAGE = "image"
    STYLESHEET = "stylesheet"
    SCRIPT = "script"


@dataclass(frozen=True, slots=True)
class Reference:
    """An outbound reference found on a page, already resolved to an absolute address."""

    kind: ReferenceKind
    url: str

    @property
    def is_asset(self) -> bool:
        return self.kind is not ReferenceKind.LINK


@dataclass(slots=True)
class CrawlResult:
    """Finished crawl: the site graph plus the diagnostics collected on the way."""

    graph: "SiteGraph"
    errors: List[str] = field(default_factory=list)
