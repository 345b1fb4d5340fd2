"""site_mapper.report: сохранение результата обхода (JSON-граф сайта)."""

from site_mapper.report.json_report import build_report, render_json

__all__ = ["build_report", "render_json"]
