"""Services package that exposes the report parser and report rendering."""

from .engine import AuditReportParser, parse_audit_report
from .reporting import generate_report, render_report

__all__ = ["AuditReportParser", "generate_report", "parse_audit_report", "render_report"]
