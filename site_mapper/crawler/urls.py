"""
URL resolution and identity helpers for SiteMapper.

Every address the crawler stores or compares goes through :func:`resolve`,
so ``/a/`` and ``/a`` always collapse to the same canonical address.
"""
from __future__ import annotations

from typing import MutableSequence, Optional
from urllib.parse import urldefrag, urljoin, urlsplit

from site_mapper.logger import logger

__all__ = ("strip_trailing_slash", "resolve", "identity_key", "hostname_of")


def strip_trailing_slash(address: str) -> str:
    """Remove every trailing ``/`` from *address*."""
    return address.rstrip("/")


def _report(errors: Optional[MutableSequence[str]], message: str) -> None:
    if errors is None:
        logger.debug(message)
    else:
        errors.append(message)


def resolve(base: str, raw: str, errors: Optional[MutableSequence[str]] = None) -> str:
    """
    Resolve *raw* against *base* and return the canonical absolute address.

    Returns ``""`` for fragment-only references (``#top``) and for input
    that cannot be parsed; the latter also appends a diagnostic to *errors*.
    With an empty *base* the reference is taken as already absolute; its
    fragment is dropped all the same.
    """
    if raw.startswith("#"):
        return ""
    if not base:
        try:
            address, _ = urldefrag(raw)
        except ValueError as exc:
            _report(errors, f"URL: {raw} parsing failed with error: {exc}")
            return ""
        return strip_trailing_slash(address)
    try:
        urlsplit(raw)
    except ValueError as exc:
        _report(errors, f"Relative URL: {raw} parsing failed with error: {exc}")
        return ""
    try:
        urlsplit(base)
        joined, _ = urldefrag(urljoin(base, raw))
    except ValueError as exc:
        _report(errors, f"Base URL: {base} parsing failed with error: {exc}")
        return ""
    return strip_trailing_slash(joined)


def identity_key(address: str, errors: Optional[MutableSequence[str]] = None) -> str:
    """
    Strip the scheme from *address* for de-duplication.

    ``http://x/y`` and ``https://x/y`` both become ``//x/y``.
    """
    try:
        parts = urlsplit(address)
    except ValueError as exc:
        _report(errors, f"URL: {address} parsing failed with error: {exc}")
        return ""
    if not parts.scheme:
        return address
    return address[len(parts.scheme) + 1:]


def hostname_of(address: str) -> Optional[str]:
    """Lower-cased hostname of *address*, None when missing or unparsable."""
    try:
        return urlsplit(address).hostname
    except ValueError:
        return None
