"""Sequential page audits for a regional site.

This module provides the SiteAuditor class, which visits a site's pages one
at a time and turns each visit into a PageAuditRecord:

navigate -> CAPTCHA check -> assertions -> timing capture -> screenshot

Page-level failures never stop the run. They are logged and recorded with a
``failed`` or ``captcha`` status, and the auditor moves on to the next page.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from playwright.async_api import Error as PlaywrightError, Page

from advisor_audit.browser.captcha import CaptchaGuard
from advisor_audit.browser.page_verifier import PageVerifier
from advisor_audit.browser.playwright_integration import PlaywrightManager
from advisor_audit.browser.resource_timing import (
    ResourceTimingCollector,
    hostname_contains,
)
from advisor_audit.config.audit_config import AuditConfig
from advisor_audit.models.audit_models import (
    PageAuditRecord,
    PageStatus,
    PageTarget,
    SiteDefinition,
)
from advisor_audit.reporters.report_aggregator import ReportAggregator
from advisor_audit.utils.paths import ensure_directory, screenshot_path
from advisor_audit.utils.retry import RetryPolicy

logger = logging.getLogger(__name__)

RecordCallback = Callable[[PageAuditRecord], None]


class SiteAuditor:
    """Audit every page of a site and collect the results.

    PATTERN: Breadth over depth. Each page gets the same short sequence of
    checks; a failure on one page is recorded and the next page is visited.
    """

    def __init__(
        self,
        config: AuditConfig,
        manager: PlaywrightManager,
        captcha_guard: Optional[CaptchaGuard] = None,
        verifier: Optional[PageVerifier] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """Initialize the auditor.

        Args:
            config: Audit configuration
            manager: Playwright manager owning the browser
            captcha_guard: CAPTCHA detector (built from config if None)
            verifier: Page assertions (built from config if None)
            sleep: Awaitable sleep used for the inter-page delay
        """
        self.config = config
        self.manager = manager
        self.captcha_guard = captcha_guard or CaptchaGuard(
            retry_policy=RetryPolicy(
                max_attempts=config.captcha_max_attempts,
                base_delay=config.captcha_base_delay,
                jitter=config.captcha_jitter,
            ),
            reload_between_attempts=config.captcha_reload,
        )
        self.verifier = verifier or PageVerifier(
            timeout_ms=config.assertion_timeout_ms,
            check_common_elements=config.check_common_elements,
        )
        self._sleep = sleep or asyncio.sleep

    async def audit_site(
        self,
        site: SiteDefinition,
        aggregator: Optional[ReportAggregator] = None,
        on_record: Optional[RecordCallback] = None,
    ) -> ReportAggregator:
        """Visit every page of a site in order.

        Args:
            site: Site definition with ordered pages
            aggregator: Aggregator to record into (new one if None)
            on_record: Called with each record right after it is recorded

        Returns:
            The aggregator holding one record per page
        """
        if aggregator is None:
            aggregator = ReportAggregator(title=f"{site.name} Site Performance Report")
        collector = ResourceTimingCollector(
            top_n=self.config.top_n,
            url_filter=hostname_contains(site.resource_filter),
        )
        ensure_directory(self.config.screenshots_dir)

        logger.info(f"Auditing {len(site.pages)} pages of {site.name}")
        page = await self.manager.create_page()

        for index, target in enumerate(site.pages):
            record = await self.audit_page(page, target, collector)
            aggregator.record(record)
            if on_record:
                on_record(record)

            is_last = index == len(site.pages) - 1
            if not is_last and self.config.page_delay_seconds > 0:
                logger.info(f"⏳ Waiting {self.config.page_delay_seconds:g} seconds...")
                await self._sleep(self.config.page_delay_seconds)

        summary = aggregator.summary()
        logger.info(
            f"Audit of {site.name} finished: {summary['passed']} passed, "
            f"{summary['failed']} failed, {summary['captcha']} blocked by CAPTCHA"
        )
        return aggregator

    async def audit_page(
        self,
        page: Page,
        target: PageTarget,
        collector: ResourceTimingCollector,
    ) -> PageAuditRecord:
        """Audit a single page.

        Args:
            page: Playwright page to drive
            target: Page to visit and its expected heading
            collector: Resource timing collector for the site

        Returns:
            The page's audit record; never raises for page-level failures
        """
        logger.info(f"Visiting {target.title}: {target.url}")
        started_at = time.monotonic()

        try:
            await self.manager.navigate(
                page,
                target.url,
                wait_until=self.config.wait_until,
                timeout=self.config.navigation_timeout_ms,
            )

            if not await self.captcha_guard.wait_for_clearance(page):
                evidence = await self.captcha_guard.capture_evidence(
                    page, self.config.screenshots_dir
                )
                return PageAuditRecord(
                    title=target.title,
                    url=target.url,
                    screenshot=evidence,
                    status=PageStatus.CAPTCHA,
                    error=(
                        "CAPTCHA challenge still present after "
                        f"{self.captcha_guard.retry_policy.max_attempts} checks"
                    ),
                )

            await self.verifier.verify(page, target.heading)

            load_time = await collector.measure_load_time(page, started_at)
            top_resources = await collector.collect_top(page)

            shot = screenshot_path(self.config.screenshots_dir, target.title)
            await self.manager.screenshot(page, str(shot), full_page=True)

            logger.info(f"✅ {target.title} load time: {load_time} ms")
            return PageAuditRecord(
                title=target.title,
                url=target.url,
                load_time_ms=load_time,
                top_resources=top_resources,
                screenshot=str(shot),
                status=PageStatus.PASSED,
            )

        except (AssertionError, RuntimeError, PlaywrightError) as e:
            logger.error(f"❌ Error visiting {target.title}: {e}")
            return PageAuditRecord(
                title=target.title,
                url=target.url,
                status=PageStatus.FAILED,
                error=str(e).strip() or type(e).__name__,
            )
