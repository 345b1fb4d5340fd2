# site_mapper/crawler/link_extractor.py
"""
Reference extraction for SiteMapper: page links, images, stylesheets and scripts.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterator, MutableSequence, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_mapper.crawler.models import Reference, ReferenceKind, TagEvent
from site_mapper.crawler.urls import resolve

_Errors = Optional[MutableSequence[str]]


def iter_tag_events(markup: Union[str, bytes]) -> Iterator[TagEvent]:
    """
    Yield every opening and self-closing tag of *markup* in document order.

    Attribute values are kept as plain strings (``rel`` is not split) and the
    first occurrence of a repeated attribute wins.
    """
    soup = BeautifulSoup(
        markup,
        "html.parser",
        multi_valued_attributes=None,
        on_duplicate_attribute="ignore",
    )
    for tag in soup.find_all(True):
        if not isinstance(tag, Tag):
            continue
        attrs = tuple((key, value if isinstance(value, str) else " ".join(value))
                      for key, value in tag.attrs.items())
        yield TagEvent(tag.name, attrs)


def _reference(kind: ReferenceKind, page_url: str, raw: Optional[str], errors: _Errors) -> Optional[Reference]:
    if raw is None:
        return None
    url = resolve(page_url, raw, errors)
    return Reference(kind, url) if url else None


def _scan_anchor(page_url: str, event: TagEvent, errors: _Errors) -> Optional[Reference]:
    return _reference(ReferenceKind.LINK, page_url, event.first("href"), errors)


def _scan_image(page_url: str, event: TagEvent, errors: _Errors) -> Optional[Reference]:
    return _reference(ReferenceKind.IMAGE, page_url, event.first("src"), errors)


def _scan_stylesheet(page_url: str, event: TagEvent, errors: _Errors) -> Optional[Reference]:
    # rel and href are evaluated together, attribute order does not matter
    rel = event.first("rel")
    href = event.first("href")
    if rel is None or rel.strip().lower() != "stylesheet" or not href:
        return None
    return _reference(ReferenceKind.STYLESHEET, page_url, href, errors)


def _scan_script(page_url: str, event: TagEvent, errors: _Errors) -> Optional[Reference]:
    src = event.first("src")
    if not src:
        return None
    return _reference(ReferenceKind.SCRIPT, page_url, src, errors)


_SCANNERS: Dict[str, Callable[[str, TagEvent, _Errors], Optional[Reference]]] = {
    "a": _scan_anchor,
    "img": _scan_image,
    "link": _scan_stylesheet,
    "script": _scan_script,
}


def scan_tag(page_url: str, event: TagEvent, errors: _Errors = None) -> Optional[Reference]:
    """Return the single reference carried by *event*, or None for tags we ignore."""
    scanner = _SCANNERS.get(event.name)
    if scanner is None:
        return None
    return scanner(page_url, event, errors)


def iter_references(page_url: str, markup: Union[str, bytes], errors: _Errors = None) -> Iterator[Reference]:
    """
    Extract references from a fetched page.

    Relative addresses are resolved against *page_url*; fragment-only and
    unparsable references are dropped.
    """
    for event in iter_tag_events(markup):
        ref = scan_tag(page_url, event, errors)
        if ref is not None:
            yield ref


__all__ = ["iter_tag_events", "scan_tag", "iter_references"]
