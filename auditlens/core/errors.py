"""Common exception module that standardizes the package's error types."""


class DialectConfigError(ValueError):
    """Raised when the dialect table fails validation."""


class UpstreamAuditError(RuntimeError):
    """Raised when the upstream audit envelope reports a failure."""


class ReportFormatError(ValueError):
    """Raised for an unsupported report export format."""
