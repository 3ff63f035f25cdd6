"""Tests for resource timing ranking and collection."""

import time

import pytest
from unittest.mock import AsyncMock

from advisor_audit.browser.resource_timing import (
    ResourceTimingCollector,
    any_url,
    collect_top,
    hostname_contains,
    parse_entries,
    path_prefix,
)
from advisor_audit.models.audit_models import ResourceSample


def sample(name: str, duration: float, initiator_type: str = "script") -> ResourceSample:
    return ResourceSample(name=name, duration=duration, initiator_type=initiator_type)


@pytest.fixture
def forbes_samples():
    """Samples mixing in-scope and third-party resources."""
    return [
        sample("https://forbes.com/a", 120),
        sample("https://forbes.com/b", 300),
        sample("https://x.com/c", 999),
    ]


class TestCollectTop:
    """Tests for the pure top-N ranking."""

    def test_filters_and_ranks(self, forbes_samples):
        """Third-party resources are dropped and the rest ranked slowest first."""
        result = collect_top(forbes_samples, 5, hostname_contains("forbes.com"))

        assert [s.name for s in result] == [
            "https://forbes.com/b",
            "https://forbes.com/a",
        ]
        assert [s.duration for s in result] == [300, 120]

    def test_empty_input(self):
        """Empty input yields empty output."""
        assert collect_top([], 5, hostname_contains("forbes.com")) == []

    def test_truncates_to_n(self):
        """At most n samples are returned."""
        samples = [sample(f"https://www.forbes.com/r{i}", i * 10) for i in range(12)]

        result = collect_top(samples, 5, hostname_contains("forbes.com"))

        assert len(result) == 5
        assert [s.duration for s in result] == [110, 100, 90, 80, 70]

    def test_fewer_than_n(self, forbes_samples):
        """Fewer passing samples than n returns all of them."""
        result = collect_top(forbes_samples, 10, hostname_contains("forbes.com"))
        assert len(result) == 2

    def test_non_positive_n(self, forbes_samples):
        """n of zero returns nothing."""
        assert collect_top(forbes_samples, 0) == []

    def test_ties_keep_observation_order(self):
        """Equal durations keep their input order."""
        samples = [
            sample("https://forbes.com/first", 50),
            sample("https://forbes.com/slow", 80),
            sample("https://forbes.com/second", 50),
            sample("https://forbes.com/third", 50),
        ]

        result = collect_top(samples, 5, hostname_contains("forbes.com"))

        assert [s.name for s in result] == [
            "https://forbes.com/slow",
            "https://forbes.com/first",
            "https://forbes.com/second",
            "https://forbes.com/third",
        ]

    def test_output_non_increasing(self):
        """Output is sorted non-increasing by duration."""
        durations = [5, 250, 17.5, 250, 0, 42, 99.9, 3]
        samples = [sample(f"https://forbes.com/{i}", d) for i, d in enumerate(durations)]

        result = collect_top(samples, 6, hostname_contains("forbes.com"))

        values = [s.duration for s in result]
        assert values == sorted(values, reverse=True)
        assert len(result) == 6

    def test_repeated_urls_are_kept(self):
        """Repeated requests to one URL stay separate samples."""
        samples = [
            sample("https://forbes.com/pixel.gif", 40, "img"),
            sample("https://forbes.com/pixel.gif", 60, "img"),
        ]

        result = collect_top(samples, 5, hostname_contains("forbes.com"))

        assert [s.duration for s in result] == [60, 40]

    def test_malformed_urls_excluded(self):
        """Malformed URLs are excluded without raising."""
        samples = [
            sample("not a url", 500),
            sample("http://[::1", 400),
            sample("data:image/png;base64,AAAA", 300),
            sample("https://www.forbes.com/ok.js", 10),
        ]

        result = collect_top(samples, 5, hostname_contains("forbes.com"))

        assert [s.name for s in result] == ["https://www.forbes.com/ok.js"]

    def test_default_filter_accepts_wellformed(self, forbes_samples):
        """Without a filter every well-formed URL is ranked."""
        result = collect_top(forbes_samples, 5)
        assert [s.duration for s in result] == [999, 300, 120]

    def test_input_not_mutated(self, forbes_samples):
        """The input sequence keeps its order."""
        before = list(forbes_samples)
        collect_top(forbes_samples, 5)
        assert forbes_samples == before


class TestUrlFilters:
    """Tests for URL filter builders."""

    def test_hostname_contains_subdomain(self):
        """Subdomains match a hostname fragment."""
        url_filter = hostname_contains("forbes.com")
        assert url_filter("https://www.forbes.com/advisor/au/")
        assert url_filter("https://images.forbes.com/x.png")
        assert not url_filter("https://example.com/forbes.com")

    def test_hostname_contains_case_insensitive(self):
        """Fragments are compared against the lowercase hostname."""
        assert hostname_contains("Forbes.com")("https://WWW.FORBES.COM/")

    def test_path_prefix(self):
        """Path prefix filter scopes to a locale."""
        url_filter = path_prefix("forbes.com/advisor/au/")

        assert url_filter("https://www.forbes.com/advisor/au/investing/")
        assert url_filter("https://forbes.com/advisor/au/app.js")
        assert not url_filter("https://www.forbes.com/advisor/ca/")
        assert not url_filter("https://notforbes.com/advisor/au/")
        assert not url_filter("garbage")

    def test_path_prefix_with_scheme(self):
        """A prefix with a scheme works the same way."""
        url_filter = path_prefix("https://www.forbes.com/advisor/")
        assert url_filter("https://www.forbes.com/advisor/ca/")
        assert not url_filter("https://www.forbes.com/business/")

    def test_any_url(self):
        """any_url rejects only malformed URLs."""
        url_filter = any_url()
        assert url_filter("http://example.com/")
        assert not url_filter("/relative/path")
        assert not url_filter("about:blank")


class TestParseEntries:
    """Tests for raw entry conversion."""

    def test_parses_browser_entries(self):
        """Browser field names map onto ResourceSample."""
        samples = parse_entries(
            [{"name": "https://forbes.com/a.js", "duration": 12.3, "initiatorType": "script"}]
        )

        assert samples == [sample("https://forbes.com/a.js", 12.3, "script")]

    def test_missing_initiator_defaults(self):
        """Missing initiator type becomes 'unknown'."""
        samples = parse_entries([{"name": "https://forbes.com/a", "duration": 1}])
        assert samples[0].initiator_type == "unknown"

    def test_invalid_entries_dropped(self):
        """Entries failing validation are skipped."""
        samples = parse_entries(
            [
                {"name": "https://forbes.com/neg", "duration": -1},
                {"duration": 5},
                {"name": "https://forbes.com/ok", "duration": 5},
            ]
        )
        assert [s.name for s in samples] == ["https://forbes.com/ok"]


class TestResourceTimingCollector:
    """Tests for the Playwright-backed collector."""

    @pytest.mark.asyncio
    async def test_collect_top_from_page(self):
        """Entries read from the page are filtered and ranked."""
        page = AsyncMock()
        page.evaluate = AsyncMock(
            return_value=[
                {"name": "https://forbes.com/a", "duration": 120, "initiatorType": "img"},
                {"name": "https://forbes.com/b", "duration": 300, "initiatorType": "script"},
                {"name": "https://x.com/c", "duration": 999, "initiatorType": "script"},
            ]
        )
        collector = ResourceTimingCollector(top_n=5, url_filter=hostname_contains("forbes.com"))

        result = await collector.collect_top(page)

        assert [(s.name, s.duration) for s in result] == [
            ("https://forbes.com/b", 300),
            ("https://forbes.com/a", 120),
        ]
        page.evaluate.assert_called_once()

    @pytest.mark.asyncio
    async def test_collect_top_no_entries(self):
        """A page reporting nothing yields an empty ranking."""
        page = AsyncMock()
        page.evaluate = AsyncMock(return_value=None)

        assert await ResourceTimingCollector().collect_top(page) == []

    @pytest.mark.asyncio
    async def test_measure_load_time(self):
        """Navigation timing is used when available."""
        page = AsyncMock()
        page.evaluate = AsyncMock(return_value=1534.26)

        load_time = await ResourceTimingCollector().measure_load_time(page)

        assert load_time == 1534.3

    @pytest.mark.asyncio
    async def test_measure_load_time_fallback(self):
        """Wall-clock time is used when the browser reports no load event."""
        page = AsyncMock()
        page.evaluate = AsyncMock(return_value=None)
        started_at = time.monotonic() - 2.5

        load_time = await ResourceTimingCollector().measure_load_time(
            page, started_at=started_at
        )

        assert 2500.0 <= load_time < 2600.0

    @pytest.mark.asyncio
    async def test_measure_load_time_evaluate_error(self):
        """Evaluation errors fall back rather than raise."""
        page = AsyncMock()
        page.evaluate = AsyncMock(side_effect=Exception("Execution context destroyed"))

        assert await ResourceTimingCollector().measure_load_time(page) == 0.0
