# File: wcag_scout/engine.py
"""wcag_scout.engine: orchestration layer that runs a crawl and aggregates its results."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from typing import Optional

from wcag_scout.aggregator import AuditReport, aggregate_results
from wcag_scout.axe import load_axe_source
from wcag_scout.browser import PageRenderer, PlaywrightRenderer
from wcag_scout.config import AuditConfig
from wcag_scout.crawler.crawler import AuditCrawler
from wcag_scout.errors import CrawlTimeout

__all__ = ["start_scan"]

logger = logging.getLogger(__name__)


async def start_scan(
    cfg: AuditConfig,
    *,
    audit: bool = True,
    renderer: Optional[PageRenderer] = None,
) -> AuditReport:
    """
    Crawl ``cfg.start_url`` and return the aggregated report.

    Parameters
    ----------
    cfg : AuditConfig
        Audit settings.
    audit : bool
        ``False`` only maps the site (no axe-core run, no violations).
    renderer : PageRenderer, optional
        Rendering engine to use; defaults to a headless Chromium.

    A crawl-level timeout is not fatal: the pages audited so far are reported.
    """
    async with AsyncExitStack() as stack:
        if renderer is None:
            axe_source = ""
            if audit:
                axe_source = await load_axe_source(
                    cfg.axe_source, timeout=cfg.axe_fetch_timeout, retry_times=cfg.retry_times
                )
            renderer = await stack.enter_async_context(PlaywrightRenderer(cfg, axe_source))

        crawler = AuditCrawler(cfg, renderer, audit=audit)
        try:
            await crawler.crawl()
        except CrawlTimeout as exc:
            logger.warning("%s; reporting %d pages audited so far", exc, len(crawler.records))

    report = aggregate_results(crawler.root, crawler.records, crawler.failed, crawler.discovered)
    logger.info(
        "Summary: %d pages, %d violations, %.1f per page",
        report.summary.total_pages, report.summary.total_violations, report.summary.average_per_page,
    )
    return report
