"""Page content assertions shared by every audited page."""

from typing import List, Tuple
import logging

from playwright.async_api import Page, expect

logger = logging.getLogger(__name__)

# (role, accessible name, exact match)
COMMON_ELEMENTS: List[Tuple[str, str, bool]] = [
    ("link", "Forbes Logo", False),
    ("button", "Subscribe", False),
    ("link", "forbes", True),
]


class PageVerifier:
    """Assert the headline and site chrome of a page.

    Assertions use Playwright's auto-waiting expect(); a failed assertion
    raises AssertionError.
    """

    def __init__(self, timeout_ms: int = 10000, check_common_elements: bool = True):
        """Initialize the verifier.

        Args:
            timeout_ms: Per-assertion wait in milliseconds
            check_common_elements: Also assert logo, Subscribe and nav link
        """
        self.timeout_ms = timeout_ms
        self.check_common_elements = check_common_elements

    async def verify_heading(self, page: Page, expected: str) -> None:
        """Assert that the page's h1 contains the expected text."""
        await expect(page.locator("h1").first).to_contain_text(
            expected, timeout=self.timeout_ms
        )
        logger.debug(f"Heading contains {expected!r}")

    async def verify_common_elements(self, page: Page) -> None:
        """Assert that the Forbes logo, Subscribe button and nav link are visible."""
        for role, name, exact in COMMON_ELEMENTS:
            locator = page.get_by_role(role, name=name, exact=exact)
            await expect(locator).to_be_visible(timeout=self.timeout_ms)
        logger.debug("Common page elements visible")

    async def verify(self, page: Page, expected_heading: str) -> None:
        """Run every configured assertion.

        Raises:
            AssertionError: On the first failed assertion
        """
        await self.verify_heading(page, expected_heading)
        if self.check_common_elements:
            await self.verify_common_elements(page)
