# site_mapper/crawler/graph.py
"""
Shared crawl state: the site graph, the visitation record and the error record.

All three may share one lock so that every read and write of crawl state goes
through a single mutual-exclusion domain. Accessors never hold the lock across
network I/O and never hand out the underlying containers.
"""
from __future__ import annotations

import threading
from typing import Any, Dict, Iterator, List, Optional, Set

from site_mapper.crawler.models import PageNode
from site_mapper.crawler.urls import identity_key, strip_trailing_slash
from site_mapper.logger import logger

__all__ = ("ErrorLog", "SiteGraph", "VisitationTracker")

_LockT = Any


class ErrorLog:
    """Append-only list of human-readable diagnostics."""

    def __init__(self, lock: Optional[_LockT] = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._entries: List[str] = []

    def append(self, message: str) -> None:
        with self._lock:
            self._entries.append(message)
        logger.debug("Recorded error: %s", message)

    def snapshot(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())


class SiteGraph:
    """Pages discovered during a crawl, keyed by a dense integer id."""

    def __init__(self, lock: Optional[_LockT] = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._nodes: List[PageNode] = []
        self._index: Dict[str, int] = {}

    def node_for(self, address: str) -> int:
        """Return the id of *address*, creating the node on first sight."""
        address = strip_trailing_slash(address)
        with self._lock:
            idx = self._index.get(address)
            if idx is None:
                idx = len(self._nodes)
                self._nodes.append(PageNode(id=idx, address=address))
                self._index[address] = idx
            return idx

    def index_of(self, address: str) -> Optional[int]:
        with self._lock:
            return self._index.get(strip_trailing_slash(address))

    def add_asset(self, page: str, asset: str) -> None:
        with self._lock:
            idx = self.node_for(page)
            self._nodes[idx].static_files.append(strip_trailing_slash(asset))

    def add_edge(self, source: str, target: str) -> None:
        with self._lock:
            src = self.node_for(source)
            dst = self.node_for(target)
            self._nodes[src].links_to.add(dst)

    def nodes(self) -> List[PageNode]:
        """Copies of all nodes in creation order."""
        with self._lock:
            return [
                PageNode(n.id, n.address, list(n.static_files), set(n.links_to))
                for n in self._nodes
            ]

    def export_view(self) -> List[Dict[str, Any]]:
        """Serializable records in creation order, outbound ids ascending."""
        with self._lock:
            return [node.to_record() for node in self._nodes]

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.index_of(address) is not None


class VisitationTracker:
    """Decides whether an address still has to be fetched."""

    def __init__(self, lock: Optional[_LockT] = None, errors: Optional[ErrorLog] = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._errors = errors
        self._claimed: Set[str] = set()

    def claim(self, address: str) -> bool:
        """
        Atomically mark *address* as submitted for fetching.

        True means the caller owns the fetch; False means somebody already did
        (or the address has no usable identity and must not be fetched).
        """
        key = identity_key(strip_trailing_slash(address), self._errors)
        if not key:
            return False
        with self._lock:
            if key in self._claimed:
                return False
            self._claimed.add(key)
            return True

    def __contains__(self, address: object) -> bool:
        if not isinstance(address, str):
            return False
        key = identity_key(strip_trailing_slash(address))
        with self._lock:
            return key in self._claimed

    def __len__(self) -> int:
        with self._lock:
            return len(self._claimed)
