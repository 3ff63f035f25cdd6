"""Playwright browser lifecycle for audit runs.

This module provides the PlaywrightManager class which owns the Playwright
driver, the audit browser, its context and pages, and wraps the handful of
page operations the auditor needs.

CRITICAL: Proper cleanup is essential to avoid resource leaks.
"""

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)
from typing import Optional, Dict, Any, List
import logging

from advisor_audit.models.audit_models import BrowserType, Viewport

logger = logging.getLogger(__name__)


class PlaywrightManager:
    """Manage the Playwright browser used for an audit run.

    A run uses one browser and one isolated context; pages are created on
    demand and all closed by cleanup().

    CRITICAL: Always call cleanup() or use as async context manager to ensure
    proper resource cleanup.
    """

    def __init__(
        self,
        browser_type: BrowserType = BrowserType.CHROMIUM,
        headless: bool = True,
        viewport: Optional[Viewport] = None,
        user_agent: Optional[str] = None,
    ):
        """Initialize the Playwright manager.

        Args:
            browser_type: Browser engine to launch
            headless: Whether to run in headless mode
            viewport: Viewport for new pages (1280x720 by default)
            user_agent: User agent override
        """
        self.browser_type = browser_type
        self.headless = headless
        self.viewport = viewport or Viewport()
        self.user_agent = user_agent
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.pages: List[Page] = []
        self._initialized = False

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.cleanup()

    async def initialize(self) -> None:
        """Start Playwright.

        Raises:
            RuntimeError: If initialization fails
        """
        if self._initialized:
            return

        try:
            self.playwright = await async_playwright().start()
            self._initialized = True
            logger.info("Playwright initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize Playwright: {e}")
            raise RuntimeError(f"Playwright initialization failed: {e}")

    async def launch_browser(self, **options: Any) -> Browser:
        """Launch the audit browser, reusing it if already running.

        Args:
            **options: Additional browser launch options

        Returns:
            Browser instance

        Raises:
            RuntimeError: If browser fails to launch
        """
        if not self._initialized:
            await self.initialize()

        if self.browser is not None:
            logger.debug(f"Reusing existing {self.browser_type.value} browser")
            return self.browser

        try:
            browser_launcher = getattr(self.playwright, self.browser_type.value)
            self.browser = await browser_launcher.launch(
                headless=self.headless, **options
            )
            logger.info(
                f"Launched {self.browser_type.value} browser (headless={self.headless})"
            )
            return self.browser
        except Exception as e:
            logger.error(f"Failed to launch {self.browser_type.value} browser: {e}")
            raise RuntimeError(f"Browser launch failed: {e}")

    async def create_context(self, **options: Any) -> BrowserContext:
        """Create the isolated context pages are opened in.

        Args:
            **options: Additional context options

        Returns:
            Browser context

        Raises:
            RuntimeError: If context creation fails
        """
        if self.context is not None:
            return self.context

        browser = await self.launch_browser()
        try:
            context_options: Dict[str, Any] = {
                "viewport": {
                    "width": self.viewport.width,
                    "height": self.viewport.height,
                },
            }
            if self.user_agent:
                context_options["user_agent"] = self.user_agent
            context_options.update(options)

            self.context = await browser.new_context(**context_options)
            logger.debug("Created browser context")
            return self.context
        except Exception as e:
            logger.error(f"Failed to create browser context: {e}")
            raise RuntimeError(f"Context creation failed: {e}")

    async def create_page(self) -> Page:
        """Open a new page with runtime error logging attached.

        Returns:
            Page instance

        Raises:
            RuntimeError: If page creation fails
        """
        context = await self.create_context()
        try:
            page = await context.new_page()
        except Exception as e:
            logger.error(f"Failed to create page: {e}")
            raise RuntimeError(f"Page creation failed: {e}")

        page.on("pageerror", lambda error: logger.error(f"[RUNTIME ERROR] {error}"))
        self.pages.append(page)
        logger.debug(f"Created page (total: {len(self.pages)})")
        return page

    async def navigate(
        self, page: Page, url: str, wait_until: str = "load", timeout: int = 30000
    ) -> None:
        """Navigate page to URL.

        Args:
            page: Page instance
            url: Target URL
            wait_until: Wait condition (load, domcontentloaded, networkidle)
            timeout: Navigation timeout in milliseconds

        Raises:
            RuntimeError: If navigation fails
        """
        try:
            await page.goto(url, wait_until=wait_until, timeout=timeout)
            logger.debug(f"Navigated to {url}")
        except Exception as e:
            logger.error(f"Navigation to {url} failed: {e}")
            raise RuntimeError(f"Navigation failed: {e}")

    async def screenshot(self, page: Page, path: str, full_page: bool = True) -> bytes:
        """Capture page screenshot.

        Args:
            page: Page instance
            path: Path to save screenshot
            full_page: Whether to capture full scrollable page

        Returns:
            Screenshot bytes

        Raises:
            RuntimeError: If screenshot fails
        """
        try:
            screenshot_bytes = await page.screenshot(path=path, full_page=full_page)
            logger.debug(f"Captured screenshot to {path}")
            return screenshot_bytes
        except Exception as e:
            logger.error(f"Screenshot capture failed: {e}")
            raise RuntimeError(f"Screenshot failed: {e}")

    async def cleanup(self) -> None:
        """Close pages, context, browser and Playwright, in that order.

        Raises:
            RuntimeError: If any resource fails to close
        """
        errors = []

        for page in self.pages:
            try:
                await page.close()
            except Exception as e:
                errors.append(f"Failed to close page: {e}")
        self.pages.clear()

        if self.context is not None:
            try:
                await self.context.close()
                logger.debug("Closed browser context")
            except Exception as e:
                errors.append(f"Failed to close context: {e}")
            self.context = None

        if self.browser is not None:
            try:
                await self.browser.close()
                logger.debug(f"Closed browser: {self.browser_type.value}")
            except Exception as e:
                errors.append(f"Failed to close browser: {e}")
            self.browser = None

        if self.playwright is not None:
            try:
                await self.playwright.stop()
                logger.info("Playwright stopped successfully")
            except Exception as e:
                errors.append(f"Failed to stop Playwright: {e}")
            self.playwright = None

        self._initialized = False

        if errors:
            error_msg = "; ".join(errors)
            logger.warning(f"Cleanup completed with errors: {error_msg}")
            raise RuntimeError(f"Cleanup errors: {error_msg}")

        logger.info("Cleanup completed successfully")
