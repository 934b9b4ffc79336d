"""auditlens package: turns free-form audit text into structured findings."""

from .services.engine import AuditReportParser, parse_audit_report

__all__ = ["AuditReportParser", "parse_audit_report"]
