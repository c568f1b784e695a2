# wcag_scout/crawler/link_extractor.py
"""
Outgoing link extraction from rendered page markup.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

_SKIP_PREFIXES = ("mailto:", "javascript:", "tel:", "data:")


def extract_links(html: str, page_url: str) -> List[str]:
    """
    Extract absolute HTTP(S) links from *html* rendered at *page_url*.

    Resolves relative hrefs against ``<base href>`` when present, the way the
    browser does for ``a.href``. Keeps document order and duplicates; callers
    decide what to follow.
    """
    soup = BeautifulSoup(html, "html.parser")
    base_url = page_url
    base_tag = soup.find("base", href=True)
    if isinstance(base_tag, Tag):
        base_href = base_tag.get("href")
        if isinstance(base_href, str) and base_href.strip():
            base_url = urljoin(page_url, base_href.strip())

    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.lower().startswith(_SKIP_PREFIXES):
            continue
        absolute = urljoin(base_url, raw)
        if urlparse(absolute).scheme in ("http", "https"):
            links.append(absolute)
    return links
