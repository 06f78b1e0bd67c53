"""site_mapper.report: отчёты о запуске для CLI и тестов."""

from site_mapper.report.json_report import render_json

__all__ = ["render_json"]
