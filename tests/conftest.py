# File: tests/conftest.py
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional

import pytest

from wcag_scout.config import AuditConfig
from wcag_scout.crawler.models import Violation
from wcag_scout.errors import AuditExecutionError, NavigationError


def make_violation(rule: str = "image-alt", impact: Optional[str] = "serious") -> Violation:
    return Violation.from_axe(
        {
            "id": rule,
            "help": f"{rule} help",
            "impact": impact,
            "nodes": [{"target": ["#main img"], "failureSummary": "Fix this"}],
        }
    )


@dataclass
class FakePage:
    """Scripted behaviour of one URL in the fake site."""

    links: List[str] = field(default_factory=list)
    violations: List[Violation] = field(default_factory=list)
    delay: float = 0.0
    nav_error: bool = False
    audit_error: bool = False
    redirect_to: Optional[str] = None


@dataclass
class _Handle:
    url: str = ""


class FakeRenderer:
    """
    In-memory stand-in for the browser.

    URLs missing from *site* fail navigation like a 404 would. Tracks how many
    pages are open at once and which URLs were navigated to.
    """

    def __init__(self, site: Dict[str, FakePage]) -> None:
        self.site = site
        self.navigated: List[str] = []
        self.audited: List[str] = []
        self.open_pages = 0
        self.peak_open_pages = 0
        self.closed_pages = 0

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[_Handle]:
        self.open_pages += 1
        self.peak_open_pages = max(self.peak_open_pages, self.open_pages)
        try:
            yield _Handle()
        finally:
            self.open_pages -= 1
            self.closed_pages += 1

    async def navigate(self, page: _Handle, url: str, timeout: float) -> None:
        self.navigated.append(url)
        spec = self.site.get(url)
        if spec is None:
            raise NavigationError(url, "HTTP 404")
        await asyncio.sleep(spec.delay)
        if spec.nav_error:
            raise NavigationError(url, "net::ERR_CONNECTION_REFUSED")
        page.url = spec.redirect_to or url

    async def run_audit(self, page: _Handle) -> List[Violation]:
        spec = self.site[page.url]
        if spec.audit_error:
            raise AuditExecutionError(page.url, "axe is not defined")
        self.audited.append(page.url)
        return list(spec.violations)

    async def extract_links(self, page: _Handle) -> List[str]:
        return list(self.site[page.url].links)


@pytest.fixture()
def axe_file(tmp_path: Path) -> Path:
    """A tiny stand-in for axe.min.js on disk."""
    path = tmp_path / "axe.min.js"
    path.write_text("window.axe = { run: async () => ({ violations: [] }) };", encoding="utf-8")
    return path


@pytest.fixture()
def make_config(axe_file: Path):
    """Factory for fast test configs: no politeness delay, short page timeout."""

    def _make(start_url: str = "https://site.test", **kwargs: Any) -> AuditConfig:
        settings: Dict[str, Any] = {
            "start_url": start_url,
            "max_depth": 1,
            "concurrency": 3,
            "politeness_delay": 0,
            "page_timeout": 2.0,
            "axe_source": str(axe_file),
        }
        settings.update(kwargs)
        return AuditConfig(**settings)

    return _make
