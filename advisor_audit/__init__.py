"""Browser audits of regional Forbes Advisor pages with performance reporting."""

__version__ = "0.1.0"
