"""
Headless browser collaborator: page lifecycle, navigation, axe-core audit and
link extraction on top of Playwright's async API.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Dict, List, Optional, Protocol

from playwright.async_api import Browser, Error as PlaywrightError, Page, Playwright, async_playwright

from wcag_scout.config import AuditConfig
from wcag_scout.crawler.link_extractor import extract_links
from wcag_scout.crawler.models import Violation
from wcag_scout.errors import AuditExecutionError, NavigationError

__all__ = ["PageRenderer", "PlaywrightRenderer"]

logger = logging.getLogger(__name__)

_AXE_RUN_SCRIPT = """
async (options) => {
    const result = await axe.run(document, options);
    return result.violations;
}
"""


class PageRenderer(Protocol):
    """What the crawler needs from a rendering engine."""

    def open_page(self) -> AsyncContextManager[Any]: ...

    async def navigate(self, page: Any, url: str, timeout: float) -> None: ...

    async def run_audit(self, page: Any) -> List[Violation]: ...

    async def extract_links(self, page: Any) -> List[str]: ...


class PlaywrightRenderer:
    """
    Chromium driven by Playwright.

    Use as an async context manager; every :meth:`open_page` gets its own tab
    which is closed on exit, including on errors.
    """

    def __init__(self, config: AuditConfig, axe_source: str) -> None:
        self.config = config
        self._axe_source = axe_source
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def __aenter__(self) -> PlaywrightRenderer:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def start(self) -> None:
        if self._browser is not None:
            return
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.config.headless, args=["--no-sandbox"]
        )
        logger.debug("Chromium started (headless=%s)", self.config.headless)

    async def stop(self) -> None:
        if self._browser is not None:
            try:
                await self._browser.close()
            except PlaywrightError as e:
                logger.warning("Error closing browser: %s", e)
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[Page]:
        if self._browser is None:
            raise RuntimeError("Browser not started")
        context_options: Dict[str, Any] = {"ignore_https_errors": True}
        if self.config.user_agent:
            context_options["user_agent"] = self.config.user_agent
        page = await self._browser.new_page(**context_options)
        try:
            yield page
        finally:
            try:
                await page.close()
            except PlaywrightError as e:
                logger.debug("Error closing page: %s", e)

    async def navigate(self, page: Page, url: str, timeout: float) -> None:
        try:
            response = await page.goto(url, wait_until=self.config.wait_until, timeout=timeout * 1000)
        except PlaywrightError as e:
            raise NavigationError(url, _first_line(e)) from e
        if response is not None and response.status >= 400:
            raise NavigationError(url, f"HTTP {response.status}")

    async def run_audit(self, page: Page) -> List[Violation]:
        options: Dict[str, Any] = {}
        if self.config.axe_tags:
            options["runOnly"] = {"type": "tag", "values": list(self.config.axe_tags)}
        try:
            await page.add_script_tag(content=self._axe_source)
            raw = await page.evaluate(_AXE_RUN_SCRIPT, options)
        except PlaywrightError as e:
            raise AuditExecutionError(page.url, _first_line(e)) from e
        if not isinstance(raw, list):
            raise AuditExecutionError(page.url, f"unexpected axe result: {type(raw).__name__}")
        return [Violation.from_axe(v) for v in raw if isinstance(v, dict)]

    async def extract_links(self, page: Page) -> List[str]:
        try:
            html = await page.content()
        except PlaywrightError as e:
            raise NavigationError(page.url, _first_line(e)) from e
        return extract_links(html, page.url)


def _first_line(exc: BaseException) -> str:
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__
