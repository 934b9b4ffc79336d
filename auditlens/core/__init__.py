"""Core package that re-exports settings, dialect tables and value types."""

from .config import DEFAULT_DIALECT_FILE, FALLBACK_MIN_LENGTH
from .dialects import Dialect, DialectTable
from .logging import setup_logging
from .types import Finding, OverallRisk, ParsedReport, Severity, Summary

__all__ = [
    "DEFAULT_DIALECT_FILE",
    "Dialect",
    "DialectTable",
    "FALLBACK_MIN_LENGTH",
    "Finding",
    "OverallRisk",
    "ParsedReport",
    "Severity",
    "Summary",
    "setup_logging",
]
