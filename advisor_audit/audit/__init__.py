"""Page audit orchestration."""

from .site_auditor import SiteAuditor

__all__ = ["SiteAuditor"]
