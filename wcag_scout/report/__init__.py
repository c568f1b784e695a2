# File: wcag_scout/report/__init__.py
"""wcag_scout.report: report writers (JSON, HTML and URL list) used by the CLI and tests."""

from __future__ import annotations

from wcag_scout.report.html_report import render_html
from wcag_scout.report.json_report import render_json
from wcag_scout.report.url_list import render_url_list

__all__ = ["render_json", "render_html", "render_url_list"]
