# === FILE: wcag_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional, Set

from wcag_scout.browser import PageRenderer
from wcag_scout.config import AuditConfig
from wcag_scout.crawler.models import AuditRecord, CrawlTask, Violation
from wcag_scout.crawler.scheduler import Task, TaskScheduler
from wcag_scout.crawler.urls import normalize_url, same_domain
from wcag_scout.crawler.visited import VisitedStore
from wcag_scout.errors import InvalidUrl, RendererError

__all__ = ("AuditCrawler",)

logger = logging.getLogger(__name__)


class AuditCrawler:
    """Depth-limited, same-domain crawler that audits every page it reaches."""

    def __init__(
        self,
        config: AuditConfig,
        renderer: PageRenderer,
        *,
        scheduler: Optional[TaskScheduler] = None,
        visited: Optional[VisitedStore] = None,
        audit: bool = True,
    ) -> None:
        self.config = config
        self.renderer = renderer
        self.scheduler = scheduler if scheduler is not None else TaskScheduler(config.concurrency)
        self.visited = visited if visited is not None else VisitedStore()
        self.audit = audit
        self.root = normalize_url(config.start_url)
        self.domain = config.domain
        self.records: List[AuditRecord] = []
        self.failed: List[str] = []
        self.discovered: Set[str] = {self.root}

    async def crawl(self) -> List[AuditRecord]:
        """Run until no unvisited same-domain link remains within the depth bound."""
        logger.info("Crawl started: %s (max depth %d)", self.root, self.config.max_depth)
        start = time.monotonic()
        root_task = CrawlTask(self.root, 0)
        await self.scheduler.run([self._task_for(root_task, delay=0.0)], timeout=self.config.crawl_timeout)
        duration = time.monotonic() - start
        logger.info(
            "Crawl finished: %d pages audited, %d failed in %.2f s",
            len(self.records), len(self.failed), duration,
        )
        return list(self.records)

    async def visit(self, url: str, depth: int) -> None:
        if depth > self.config.max_depth:
            return
        if not await self.visited.try_claim(url):
            return

        logger.info("Auditing [%d] %s", depth, url)
        try:
            violations, links = await asyncio.wait_for(
                self._inspect(url), timeout=self.config.page_timeout
            )
        except asyncio.TimeoutError:
            self._record_failure(url, f"timed out after {self.config.page_timeout} s")
            return
        except RendererError as exc:
            self._record_failure(url, exc.message)
            return

        self.records.append(AuditRecord(url, violations))

        children = self._same_domain_links(links)
        if depth + 1 > self.config.max_depth:
            return
        for link in children:
            if link in self.visited:
                continue
            self.scheduler.submit(self._task_for(CrawlTask(link, depth + 1)))

    async def _inspect(self, url: str) -> tuple[List[Violation], List[str]]:
        async with self.renderer.open_page() as page:
            await self.renderer.navigate(page, url, self.config.page_timeout)
            violations = await self.renderer.run_audit(page) if self.audit else []
            links = await self.renderer.extract_links(page)
        return violations, links

    def _same_domain_links(self, links: List[str]) -> List[str]:
        unique: List[str] = []
        seen: Set[str] = set()
        for raw in links:
            try:
                link = normalize_url(raw)
            except InvalidUrl:
                logger.debug("Skipping malformed link %r", raw)
                continue
            if link in seen or not same_domain(link, self.domain):
                continue
            seen.add(link)
            unique.append(link)
        self.discovered.update(unique)
        return unique

    def _task_for(self, item: CrawlTask, delay: Optional[float] = None) -> Task:
        pause = self.config.politeness_delay if delay is None else delay

        async def visit_task() -> None:
            if pause:
                await asyncio.sleep(pause)
            await self.visit(item.url, item.depth)

        visit_task.__name__ = f"visit[{item.depth}] {item.url}"
        return visit_task

    def _record_failure(self, url: str, reason: str) -> None:
        self.failed.append(url)
        logger.error("Failed %s: %s", url, reason)
