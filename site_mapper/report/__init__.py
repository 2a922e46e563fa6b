# File: site_mapper/report/__init__.py
"""site_mapper.report: генерация отчётов (JSON и HTML) по результатам обхода."""

from site_mapper.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from site_mapper.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
