"""Models package for the advisor audit."""

from .audit_models import (
    BrowserType,
    Viewport,
    ReportFormat,
    PageStatus,
    PageTarget,
    SiteDefinition,
    ResourceSample,
    PageAuditRecord,
)

__all__ = [
    "BrowserType",
    "Viewport",
    "ReportFormat",
    "PageStatus",
    "PageTarget",
    "SiteDefinition",
    "ResourceSample",
    "PageAuditRecord",
]
