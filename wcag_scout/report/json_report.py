# wcag_scout/report/json_report.py

"""
JSON report for wcag_scout.

Serialises an AuditReport (summary, per-page violations, failed pages) to a file.
"""
import json
from pathlib import Path

from wcag_scout.aggregator import AuditReport


def render_json(report: AuditReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: AuditReport of a finished crawl
    :param output_path: path of the JSON file
    :param pretty: indent with two spaces
    :return: Path of the saved file

    Example:
    ```python
    from wcag_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/wcag-report.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
