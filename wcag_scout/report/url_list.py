# wcag_scout/report/url_list.py
"""Plain-text list of discovered URLs, one per line."""
from pathlib import Path
from typing import Iterable


def render_url_list(urls: Iterable[str], output_path: Path | str) -> Path:
    """Write the sorted, de-duplicated *urls* to *output_path*."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    lines = sorted(set(urls))
    output.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
    return output
