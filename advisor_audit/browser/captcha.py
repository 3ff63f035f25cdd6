"""CAPTCHA interstitial detection with bounded retries."""

from pathlib import Path
from typing import Optional, Union
import logging
import time

from playwright.async_api import Page

from advisor_audit.utils.retry import RetryPolicy

logger = logging.getLogger(__name__)

CAPTCHA_SELECTOR = (
    'iframe[src*="captcha"], div:has-text("Press & Hold"), div[class*="captcha"]'
)


class CaptchaGuard:
    """Detect anti-automation challenges and wait for them to clear.

    The guard re-checks the page under a RetryPolicy. When the challenge is
    still visible after the last attempt, the page should be skipped.
    """

    def __init__(
        self,
        retry_policy: Optional[RetryPolicy] = None,
        selector: str = CAPTCHA_SELECTOR,
        reload_between_attempts: bool = False,
    ):
        """Initialize the guard.

        Args:
            retry_policy: Attempts and backoff for re-checking
            selector: Locator matching challenge elements
            reload_between_attempts: Reload the page before each re-check
        """
        self.retry_policy = retry_policy or RetryPolicy()
        self.selector = selector
        self.reload_between_attempts = reload_between_attempts

    async def is_present(self, page: Page) -> bool:
        """Return True if a challenge element is visible.

        Locator errors (detached frames, closed pages) count as not present.
        """
        try:
            return await page.locator(self.selector).first.is_visible()
        except Exception as e:
            logger.debug(f"CAPTCHA check failed, treating as absent: {e}")
            return False

    async def wait_for_clearance(self, page: Page) -> bool:
        """Re-check the page until no challenge is visible.

        Args:
            page: Playwright page instance

        Returns:
            True if the page is clear, False if the challenge persisted
        """
        attempts = 0

        async def check() -> bool:
            nonlocal attempts
            if attempts > 0 and self.reload_between_attempts:
                await page.reload()
            attempts += 1
            return await self.is_present(page)

        present = await self.retry_policy.run(check, lambda found: not found)

        if present:
            logger.warning(
                f"[WARNING] CAPTCHA still present on {page.url} after {attempts} checks"
            )
            return False

        if attempts > 1:
            logger.info(f"CAPTCHA cleared on {page.url} after {attempts} checks")
        return True

    async def capture_evidence(
        self, page: Page, directory: Union[str, Path]
    ) -> Optional[str]:
        """Save a full-page screenshot of the challenge.

        Args:
            page: Playwright page instance
            directory: Screenshot directory

        Returns:
            Screenshot path, or None if the capture failed
        """
        path = Path(directory) / f"captcha-detected-{int(time.time() * 1000)}.png"
        try:
            await page.screenshot(path=str(path), full_page=True)
            logger.info(f"Saved CAPTCHA screenshot to {path}")
            return str(path)
        except Exception as e:
            logger.warning(f"Failed to capture CAPTCHA screenshot: {e}")
            return None
