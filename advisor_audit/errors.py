"""Exceptions raised by the audit pipeline."""


class AuditError(Exception):
    """Raised when a page audit cannot be completed."""

    pass


class ReportWriteError(AuditError):
    """Raised when the report artifact cannot be written."""

    pass


class SiteNotFoundError(AuditError):
    """Raised when a site code is not in the catalogue."""

    pass
