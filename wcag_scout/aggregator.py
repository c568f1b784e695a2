# File: wcag_scout/aggregator.py
"""wcag_scout.aggregator: statistics over the audit records of a finished crawl."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence

from wcag_scout.crawler.models import IMPACT_LEVELS, AuditRecord


@dataclass(slots=True)
class AuditSummary:
    """Totals and histograms for a report."""

    total_pages: int = 0
    total_violations: int = 0
    average_per_page: float = 0.0
    pages_with_violations: int = 0
    impact_histogram: Dict[str, int] = field(default_factory=dict)
    rule_histogram: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_pages": self.total_pages,
            "total_violations": self.total_violations,
            "average_per_page": self.average_per_page,
            "pages_with_violations": self.pages_with_violations,
            "impact_histogram": dict(self.impact_histogram),
            "rule_histogram": dict(self.rule_histogram),
        }


@dataclass(slots=True)
class AuditReport:
    """Everything the report writers need: records in completion order plus the summary."""

    start_url: str
    records: List[AuditRecord] = field(default_factory=list)
    summary: AuditSummary = field(default_factory=AuditSummary)
    failed: List[str] = field(default_factory=list)
    discovered: List[str] = field(default_factory=list)

    @property
    def has_violations(self) -> bool:
        return self.summary.total_violations > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_url": self.start_url,
            "summary": self.summary.to_dict(),
            "pages": [r.to_dict() for r in self.records],
            "failed": list(self.failed),
        }

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def _impact_order(item: tuple[str, int]) -> int:
    impact = item[0]
    return IMPACT_LEVELS.index(impact) if impact in IMPACT_LEVELS else len(IMPACT_LEVELS)


def summarize(records: Sequence[AuditRecord]) -> AuditSummary:
    """Count pages and violations; one pass over every violation of every record."""
    impacts: Counter[str] = Counter()
    rules: Counter[str] = Counter()
    total = 0
    affected = 0
    for record in records:
        if record.violations:
            affected += 1
        for violation in record.violations:
            total += 1
            impacts[violation.impact or "unknown"] += 1
            rules[violation.id] += 1

    pages = len(records)
    return AuditSummary(
        total_pages=pages,
        total_violations=total,
        average_per_page=round(total / pages, 1) if pages else 0.0,
        pages_with_violations=affected,
        impact_histogram=dict(sorted(impacts.items(), key=_impact_order)),
        rule_histogram=dict(rules.most_common()),
    )


def aggregate_results(
    start_url: str,
    records: Sequence[AuditRecord],
    failed: Iterable[str] = (),
    discovered: Iterable[str] = (),
) -> AuditReport:
    """Bundle records and their summary into an :class:`AuditReport`."""
    return AuditReport(
        start_url=start_url,
        records=list(records),
        summary=summarize(records),
        failed=list(failed),
        discovered=sorted(discovered),
    )
