"""wcag_scout.report.html_report: HTML report rendered with Jinja2."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from wcag_scout.aggregator import AuditReport

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    report: AuditReport,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Render the HTML report from ``report.html.j2`` and save it.

    Args:
        report: AuditReport of a finished crawl.
        template_dir: directory holding ``report.html.j2``; ``None`` uses the
            template shipped with the package.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    summary = report.summary
    chart_data = [{"name": k, "value": v} for k, v in summary.impact_histogram.items()]
    context: dict[str, Any] = {
        "start_url": report.start_url,
        "summary": summary,
        "average": f"{summary.average_per_page:.1f}",
        "records": report.records,
        "failed": report.failed,
        "chart_data": json.dumps(chart_data, ensure_ascii=False),
    }

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
