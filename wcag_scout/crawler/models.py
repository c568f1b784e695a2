# wcag_scout/crawler/models.py
"""
Data models for the wcag_scout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

IMPACT_LEVELS: Tuple[str, ...] = ("critical", "serious", "moderate", "minor", "unknown")


@dataclass(frozen=True, slots=True)
class CrawlTask:
    """A normalized URL scheduled at a given link depth."""

    url: str
    depth: int = 0


@dataclass(frozen=True, slots=True)
class ViolationNode:
    """One offending DOM node reported by axe-core."""

    target: Tuple[str, ...]
    failure_summary: str = ""

    @classmethod
    def from_axe(cls, data: Mapping[str, Any]) -> ViolationNode:
        target = data.get("target") or ()
        # iframes/shadow DOM give nested selector lists
        flat = tuple(" > ".join(t) if isinstance(t, list) else str(t) for t in target)
        return cls(target=flat, failure_summary=str(data.get("failureSummary") or ""))

    def to_dict(self) -> Dict[str, Any]:
        return {"target": list(self.target), "failure_summary": self.failure_summary}


@dataclass(frozen=True, slots=True)
class Violation:
    """A single axe-core rule violation on a page."""

    id: str
    help: str
    impact: str = "unknown"
    nodes: Tuple[ViolationNode, ...] = ()
    description: str = ""
    help_url: str = ""

    @classmethod
    def from_axe(cls, data: Mapping[str, Any]) -> Violation:
        """Build from one entry of axe-core's ``results.violations``."""
        impact = data.get("impact") or "unknown"
        if impact not in IMPACT_LEVELS:
            impact = "unknown"
        return cls(
            id=str(data.get("id") or ""),
            help=str(data.get("help") or ""),
            impact=impact,
            nodes=tuple(ViolationNode.from_axe(n) for n in data.get("nodes") or ()),
            description=str(data.get("description") or ""),
            help_url=str(data.get("helpUrl") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "help": self.help,
            "impact": self.impact,
            "description": self.description,
            "help_url": self.help_url,
            "nodes": [n.to_dict() for n in self.nodes],
        }


@dataclass(slots=True)
class AuditRecord:
    """Audit outcome of one successfully rendered page."""

    url: str
    violations: List[Violation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "violations": [v.to_dict() for v in self.violations]}
