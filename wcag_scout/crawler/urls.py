# wcag_scout/crawler/urls.py
"""
URL canonicalisation for the crawler.

Every URL that enters the visited store or the report goes through
:func:`normalize_url` first, so string equality is URL identity.
"""
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from wcag_scout.errors import InvalidUrl

__all__ = ("normalize_url", "hostname_of", "same_domain")

_HTTP_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(raw: object) -> str:
    """
    Canonicalise *raw* into an absolute http(s) URL.

    - trims whitespace, prefixes ``https://`` when no http(s) scheme is given
    - lower-cases scheme and host, drops the default port
    - clears the fragment, turns an empty path into ``/``

    Raises :class:`InvalidUrl` for empty input or anything without a usable host.
    """
    if not isinstance(raw, str):
        raise InvalidUrl(raw, "expected a string")
    trimmed = raw.strip()
    if not trimmed:
        raise InvalidUrl(raw, "empty")
    if not _HTTP_SCHEME_RE.match(trimmed):
        trimmed = f"https://{trimmed}"

    try:
        parts = urlsplit(trimmed)
        port = parts.port
    except ValueError as exc:
        raise InvalidUrl(raw, str(exc)) from exc

    host = parts.hostname
    if not host:
        raise InvalidUrl(raw, "missing host")
    if any(ch.isspace() for ch in parts.netloc):
        raise InvalidUrl(raw, "whitespace in host")

    scheme = parts.scheme.lower()
    if ":" in host:
        host = f"[{host}]"
    netloc = host
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{port}"
    if "@" in parts.netloc:
        netloc = f"{parts.netloc.rsplit('@', 1)[0]}@{netloc}"

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, ""))


def hostname_of(url: str) -> Optional[str]:
    """Return the lower-cased hostname of *url* (``None`` if it has none)."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def same_domain(url: str, domain: str) -> bool:
    """True when *url*'s hostname is exactly *domain*."""
    return hostname_of(url) == domain
