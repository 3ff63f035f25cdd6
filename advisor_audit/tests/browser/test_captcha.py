"""Tests for CAPTCHA detection and retry handling."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from advisor_audit.browser.captcha import CAPTCHA_SELECTOR, CaptchaGuard
from advisor_audit.utils.retry import RetryPolicy


def make_page(visible_results):
    """Create a page whose CAPTCHA locator reports the given visibility sequence."""
    page = MagicMock()
    page.url = "https://www.forbes.com/advisor/ca/"
    page.reload = AsyncMock()
    page.screenshot = AsyncMock(return_value=b"png")
    is_visible = AsyncMock(side_effect=list(visible_results))
    page.locator.return_value.first.is_visible = is_visible
    return page


@pytest.fixture
def no_wait_policy():
    """Retry policy that never actually sleeps."""
    return RetryPolicy(max_attempts=3, base_delay=1.0, jitter=0.5, sleep=AsyncMock())


class TestCaptchaDetection:
    """Tests for single CAPTCHA checks."""

    @pytest.mark.asyncio
    async def test_is_present(self):
        """A visible challenge element is detected."""
        page = make_page([True])

        assert await CaptchaGuard().is_present(page) is True
        page.locator.assert_called_once_with(CAPTCHA_SELECTOR)

    @pytest.mark.asyncio
    async def test_is_absent(self):
        """No visible challenge element means no CAPTCHA."""
        page = make_page([False])
        assert await CaptchaGuard().is_present(page) is False

    @pytest.mark.asyncio
    async def test_locator_error_is_absent(self):
        """Locator errors count as no CAPTCHA."""
        page = make_page([Exception("Target closed")])
        assert await CaptchaGuard().is_present(page) is False


class TestCaptchaClearance:
    """Tests for the retry loop around CAPTCHA checks."""

    @pytest.mark.asyncio
    async def test_clear_on_first_check(self, no_wait_policy):
        """A clean page passes without waiting."""
        page = make_page([False])
        guard = CaptchaGuard(retry_policy=no_wait_policy)

        assert await guard.wait_for_clearance(page) is True
        no_wait_policy._sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_clears_after_retry(self, no_wait_policy):
        """A challenge that goes away on a later check is cleared."""
        page = make_page([True, True, False])
        guard = CaptchaGuard(retry_policy=no_wait_policy)

        assert await guard.wait_for_clearance(page) is True
        assert no_wait_policy._sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_persists_past_attempts(self, no_wait_policy):
        """A challenge visible on every check is reported as persisting."""
        page = make_page([True, True, True])
        guard = CaptchaGuard(retry_policy=no_wait_policy)

        assert await guard.wait_for_clearance(page) is False
        assert page.locator.return_value.first.is_visible.await_count == 3

    @pytest.mark.asyncio
    async def test_reload_between_attempts(self, no_wait_policy):
        """Reload happens before every re-check, not before the first."""
        page = make_page([True, True, False])
        guard = CaptchaGuard(retry_policy=no_wait_policy, reload_between_attempts=True)

        await guard.wait_for_clearance(page)

        assert page.reload.await_count == 2


class TestCaptchaEvidence:
    """Tests for CAPTCHA screenshots."""

    @pytest.mark.asyncio
    async def test_capture_evidence(self, tmp_path):
        """A full-page screenshot is saved in the directory."""
        page = make_page([])

        path = await CaptchaGuard().capture_evidence(page, tmp_path)

        assert path is not None
        assert path.startswith(str(tmp_path))
        assert "captcha-detected-" in path
        page.screenshot.assert_awaited_once_with(path=path, full_page=True)

    @pytest.mark.asyncio
    async def test_capture_evidence_failure(self, tmp_path):
        """A failed screenshot returns None."""
        page = make_page([])
        page.screenshot = AsyncMock(side_effect=Exception("Page crashed"))

        assert await CaptchaGuard().capture_evidence(page, tmp_path) is None
