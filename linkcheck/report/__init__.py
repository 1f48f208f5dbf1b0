"""Report rendering: text, JSON and HTML."""

from linkcheck.report.renderers import ReportFormat, render_report, write_report

__all__ = ["ReportFormat", "render_report", "write_report"]
