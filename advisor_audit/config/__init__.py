"""Configuration and site catalogue."""

from .audit_config import AuditConfig, load_config
from .sites import BUILTIN_SITES, load_sites, get_site

__all__ = [
    "AuditConfig",
    "load_config",
    "BUILTIN_SITES",
    "load_sites",
    "get_site",
]
