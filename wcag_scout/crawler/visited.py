# wcag_scout/crawler/visited.py
"""
Visited store: the single deduplication authority of a crawl.
"""
from __future__ import annotations

import asyncio
from typing import FrozenSet, Iterable, Set


class VisitedStore:
    """Insert-only set of URLs that have been, or are being, visited."""

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._urls: Set[str] = set(urls)
        self._lock = asyncio.Lock()

    async def try_claim(self, url: str) -> bool:
        """Insert *url* if absent. True only for the caller that inserted it."""
        async with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)

    def snapshot(self) -> FrozenSet[str]:
        return frozenset(self._urls)
