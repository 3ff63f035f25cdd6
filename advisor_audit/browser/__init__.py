"""Browser automation layer for page audits.

This package provides:
- Playwright browser lifecycle management
- Resource timing collection and top-N ranking
- CAPTCHA interstitial detection with retries
- Headline and page chrome assertions
"""

from advisor_audit.browser.playwright_integration import PlaywrightManager
from advisor_audit.browser.resource_timing import (
    ResourceTimingCollector,
    collect_top,
    hostname_contains,
    path_prefix,
    any_url,
)
from advisor_audit.browser.captcha import CaptchaGuard
from advisor_audit.browser.page_verifier import PageVerifier

__all__ = [
    "PlaywrightManager",
    "ResourceTimingCollector",
    "collect_top",
    "hostname_contains",
    "path_prefix",
    "any_url",
    "CaptchaGuard",
    "PageVerifier",
]
