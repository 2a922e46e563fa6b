# File: site_mapper/utils.py
"""site_mapper.utils: URL resolution and host-scope checks used by the frontier and link extractor.

No canonicalisation is applied: ``/a`` and ``/a/`` stay distinct, fragments and
default ports are kept as written.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence
from urllib.parse import urljoin, urlsplit

from site_mapper.logger import logger

__all__: Sequence[str] = (
    "resolve_url",
    "in_scope",
    "extract_host",
    "parse_href",
    "is_absolute_url",
)

# a '%' not followed by two hex digits, or an ASCII control character
_INVALID_URL_RE = re.compile(r"%(?![0-9A-Fa-f]{2})|[\x00-\x1f\x7f]")
# a valid scheme prefix, e.g. "https:" or "mailto:"
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*:")


def resolve_url(base: str, candidate: str) -> str:
    """Resolve *candidate* (relative or absolute) against *base*."""
    resolved = urljoin(base, candidate)
    logger.debug("Resolved URL: %s -> %s", candidate, resolved)
    return resolved


def extract_host(url: str) -> Optional[str]:
    """Return the hostname of *url* (lower-cased, without port) or None."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def in_scope(base: str, url: str) -> bool:
    """True when *url* has the same hostname as *base*; scheme and port are ignored."""
    base_host = extract_host(base)
    return base_host is not None and extract_host(url) == base_host


def parse_href(raw: Optional[str]) -> Optional[str]:
    """Trim an ``href`` value and return it, or None if it is empty or not a parsable URL."""
    if raw is None:
        return None
    href = raw.strip()
    if not href or _INVALID_URL_RE.search(href):
        return None
    # without a scheme the first path segment may not contain a colon (":x", "1a:b")
    if not _SCHEME_RE.match(href) and ":" in re.split(r"[/?#]", href, maxsplit=1)[0]:
        return None
    try:
        parts = urlsplit(href)
        # forces port validation, e.g. "http://host:abc/"
        parts.port
    except ValueError:
        return None
    return href


def is_absolute_url(url: str) -> bool:
    """Проверяет, что URL абсолютный: есть схема и хост."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.hostname)
