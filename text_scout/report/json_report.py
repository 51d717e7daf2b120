# text_scout/report/json_report.py

"""
JSON report for TextScout.

Serialises a CrawlSummary to a file.
"""
import json
from pathlib import Path
from typing import Any, Dict

from text_scout.crawler.models import CrawlSummary


def summary_payload(summary: CrawlSummary) -> Dict[str, Any]:
    data = summary.as_dict()
    data["failures"] = summary.failures
    data["elapsed"] = round(summary.elapsed, 3)
    return data


def render_json(summary: CrawlSummary, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *summary* as JSON at the given path.

    :param summary: CrawlSummary of a finished run
    :param output_path: path of the JSON file
    :param pretty: indent the output by two spaces
    :return: Path of the saved file

    Example:
    ```python
    from text_scout.report.json_report import render_json
    report_path = render_json(summary, 'reports/summary.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(summary_payload(summary), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
