"""
Loader for the axe-core script injected into every audited page.

A local path is read from disk; an http(s) URL is downloaded with retry and
backoff on 5xx/429 and connection errors.
"""
from __future__ import annotations

import asyncio
import logging
import random
from pathlib import Path
from typing import Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from wcag_scout.errors import AxeSourceError

__all__ = ["load_axe_source"]

logger = logging.getLogger(__name__)

_RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)


async def load_axe_source(source: str, *, timeout: float = 30.0, retry_times: int = 2) -> str:
    """Return the JavaScript source of axe-core from *source* (URL or file path)."""
    if source.lower().startswith(("http://", "https://")):
        script = await _download(source, timeout, retry_times)
    else:
        path = Path(source).expanduser()
        try:
            script = path.read_text(encoding="utf-8")
        except OSError as e:
            raise AxeSourceError(f"cannot read {path}: {e}") from e
    if "axe" not in script:
        raise AxeSourceError(f"{source} does not look like axe-core")
    return script


async def _download(url: str, timeout: float, retry_times: int) -> str:
    attempts = 0
    async with ClientSession(timeout=ClientTimeout(total=timeout)) as session:
        while True:
            try:
                async with session.get(url) as resp:
                    if resp.status in _RETRY_STATUS:
                        raise ClientError(f"retryable status {resp.status}")
                    if resp.status != 200:
                        raise AxeSourceError(f"{url} -> HTTP {resp.status}")
                    logger.debug("Downloaded axe-core from %s", url)
                    return await resp.text()
            except (ClientError, asyncio.TimeoutError) as e:
                attempts += 1
                if attempts > retry_times:
                    raise AxeSourceError(f"cannot download {url}: {e}") from e
                backoff = min(60, 2**attempts * 0.1 + random.random() * 0.1)
                logger.debug("Retry %d/%d for %s after %.2f s", attempts, retry_times, url, backoff)
                await asyncio.sleep(backoff)
