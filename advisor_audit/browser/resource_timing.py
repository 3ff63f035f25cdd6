"""Resource timing collection and top-N ranking.

This module provides the pure ranking function used to highlight the slowest
network requests of a page, the URL filters that scope the ranking to the
audited site, and the ResourceTimingCollector that reads the browser's
Resource Timing and Navigation Timing entries through Playwright.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional
import logging
import time
from urllib.parse import urlsplit

from playwright.async_api import Page
from pydantic import ValidationError

from advisor_audit.models.audit_models import ResourceSample

logger = logging.getLogger(__name__)

UrlFilter = Callable[[str], bool]

DEFAULT_TOP_N = 5

RESOURCE_ENTRIES_SCRIPT = """
    () => {
        return performance.getEntriesByType('resource').map(entry => ({
            name: entry.name,
            duration: Number(entry.duration.toFixed(1)),
            initiatorType: entry.initiatorType || 'unknown'
        }));
    }
"""

LOAD_TIME_SCRIPT = """
    () => {
        const nav = performance.getEntriesByType('navigation')[0];
        if (nav && nav.loadEventEnd > 0) {
            return nav.loadEventEnd - nav.startTime;
        }
        const timing = window.performance.timing;
        if (timing && timing.loadEventEnd > 0) {
            return timing.loadEventEnd - timing.navigationStart;
        }
        return null;
    }
"""


def _parse_hostname(url: str) -> Optional[str]:
    """Return the hostname of an absolute http(s) URL, or None if malformed."""
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return None
    if parts.scheme not in ("http", "https") or not hostname:
        return None
    return hostname


def hostname_contains(fragment: str) -> UrlFilter:
    """
    Build a filter accepting URLs whose hostname contains a fragment.

    Args:
        fragment: Hostname fragment, e.g. "forbes.com"

    Returns:
        URL predicate
    """
    fragment = fragment.lower()

    def _filter(url: str) -> bool:
        hostname = _parse_hostname(url)
        return hostname is not None and fragment in hostname

    return _filter


def path_prefix(prefix: str) -> UrlFilter:
    """
    Build a filter accepting URLs under a host and path prefix.

    The prefix may omit the scheme ("forbes.com/advisor/au/"). Subdomains of
    the prefix host match ("www.forbes.com").

    Args:
        prefix: Host plus path prefix

    Returns:
        URL predicate
    """
    parts = urlsplit(prefix if "//" in prefix else f"//{prefix}")
    prefix_host = (parts.hostname or "").lower()
    prefix_path = parts.path or "/"

    def _filter(url: str) -> bool:
        hostname = _parse_hostname(url)
        if hostname is None:
            return False
        if hostname != prefix_host and not hostname.endswith(f".{prefix_host}"):
            return False
        return (urlsplit(url).path or "/").startswith(prefix_path)

    return _filter


def any_url() -> UrlFilter:
    """Build a filter accepting every well-formed http(s) URL."""
    return lambda url: _parse_hostname(url) is not None


def collect_top(
    samples: Iterable[ResourceSample],
    n: int = DEFAULT_TOP_N,
    url_filter: Optional[UrlFilter] = None,
) -> List[ResourceSample]:
    """
    Return the n slowest samples that pass the URL filter.

    The sort is stable: samples with equal durations keep their observation
    order. Malformed URLs never raise; the filter rejects them.

    Args:
        samples: Resource timing snapshot, in observation order
        n: Maximum number of samples returned
        url_filter: URL predicate (all well-formed URLs if None)

    Returns:
        Samples sorted by duration descending, at most n long
    """
    if n <= 0:
        return []

    url_filter = url_filter or any_url()
    kept = []
    for sample in samples:
        try:
            if url_filter(sample.name):
                kept.append(sample)
        except ValueError:
            logger.debug(f"Excluding resource with malformed URL: {sample.name!r}")

    ranked = sorted(kept, key=lambda sample: sample.duration, reverse=True)
    return ranked[:n]


def parse_entries(entries: Iterable[Dict[str, Any]]) -> List[ResourceSample]:
    """
    Convert raw browser timing entries into ResourceSample objects.

    Entries that do not validate (missing name, negative duration) are
    dropped.

    Args:
        entries: Dicts with name, duration and initiatorType keys

    Returns:
        Samples in input order
    """
    samples = []
    for entry in entries:
        try:
            samples.append(ResourceSample.model_validate(entry))
        except ValidationError as e:
            logger.debug(f"Skipping invalid resource entry {entry!r}: {e}")
    return samples


class ResourceTimingCollector:
    """Collect load time and slowest resources from a live page.

    PATTERN: Read the Performance API via page.evaluate() after navigation
    settles, then rank in Python so the ranking stays testable.
    """

    def __init__(
        self,
        top_n: int = DEFAULT_TOP_N,
        url_filter: Optional[UrlFilter] = None,
    ):
        """Initialize the collector.

        Args:
            top_n: Number of slowest resources to keep
            url_filter: URL predicate scoping the ranking
        """
        self.top_n = top_n
        self.url_filter = url_filter or any_url()

    async def read_samples(self, page: Page) -> List[ResourceSample]:
        """Read every resource timing entry visible to the page.

        Args:
            page: Playwright page instance

        Returns:
            Samples in observation order
        """
        entries = await page.evaluate(RESOURCE_ENTRIES_SCRIPT)
        samples = parse_entries(entries or [])
        logger.debug(f"Read {len(samples)} resource timing entries")
        return samples

    async def collect_top(self, page: Page) -> List[ResourceSample]:
        """Return the slowest in-scope resources of the page.

        Args:
            page: Playwright page instance

        Returns:
            At most top_n samples, slowest first
        """
        samples = await self.read_samples(page)
        top = collect_top(samples, self.top_n, self.url_filter)
        logger.debug(
            f"Top {len(top)} of {len(samples)} resources: "
            f"{[(s.name, s.duration) for s in top]}"
        )
        return top

    async def measure_load_time(
        self, page: Page, started_at: Optional[float] = None
    ) -> float:
        """Read the page load time from Navigation Timing.

        Falls back to wall-clock time since started_at when the browser
        reports no completed load event.

        Args:
            page: Playwright page instance
            started_at: time.monotonic() value taken before navigation

        Returns:
            Load time in milliseconds, rounded to 0.1 ms
        """
        try:
            load_time = await page.evaluate(LOAD_TIME_SCRIPT)
        except Exception as e:
            logger.warning(f"Failed to read navigation timing: {e}")
            load_time = None

        if load_time is None:
            if started_at is None:
                return 0.0
            load_time = (time.monotonic() - started_at) * 1000
            logger.debug("Navigation timing unavailable, using wall-clock load time")

        return round(max(float(load_time), 0.0), 1)
