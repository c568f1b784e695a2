# wcag_scout/errors.py
"""
Exception hierarchy for wcag_scout.

Only :class:`InvalidUrl` and :class:`AxeSourceError` are meant to reach the
process boundary; page-level errors are recovered by the crawler and task
errors by the scheduler.
"""
from __future__ import annotations

from typing import Optional

__all__ = [
    "WcagScoutError",
    "InvalidUrl",
    "RendererError",
    "NavigationError",
    "AuditExecutionError",
    "TaskError",
    "CrawlTimeout",
    "AxeSourceError",
]


class WcagScoutError(Exception):
    """Base class for all wcag_scout errors."""


class InvalidUrl(WcagScoutError, ValueError):
    """Raised when a string cannot be turned into an absolute http(s) URL."""

    def __init__(self, raw: object, reason: str = "not a valid URL") -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Invalid URL {raw!r}: {reason}")


class RendererError(WcagScoutError):
    """A page could not be rendered or audited."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        self.message = message
        super().__init__(f"{url}: {message}")


class NavigationError(RendererError):
    """Navigation timed out, failed on the network, or returned an error status."""


class AuditExecutionError(RendererError):
    """The in-page axe-core audit could not run."""


class TaskError(WcagScoutError):
    """Wraps an exception that escaped a scheduled task."""

    def __init__(self, original: BaseException, task_name: Optional[str] = None) -> None:
        self.original = original
        self.task_name = task_name
        detail = str(original) or type(original).__name__
        prefix = f"{task_name}: " if task_name else ""
        super().__init__(f"{prefix}{type(original).__name__}: {detail}")


class CrawlTimeout(WcagScoutError):
    """The whole crawl exceeded its time budget."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"crawl did not finish within {timeout} seconds")


class AxeSourceError(WcagScoutError):
    """The axe-core script could not be loaded."""
