"""text_scout.report: serialisation of crawl summaries used by the CLI."""

from text_scout.report.json_report import render_json, summary_payload

__all__ = ["render_json", "summary_payload"]
