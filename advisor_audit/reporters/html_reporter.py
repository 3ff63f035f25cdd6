"""HTML report generator for audit runs.

This module renders a self-contained HTML document with a summary header and
one section per audited page: title, URL, load time, status, the slowest
resources and the page screenshot.
"""

import html
import logging
import os
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union

from advisor_audit.models.audit_models import PageAuditRecord, PageStatus

logger = logging.getLogger(__name__)


class HtmlReporter:
    """Render audit records as a standalone HTML page.

    Screenshot links are written relative to the report's directory so the
    report and the screenshots folder can be moved together.
    """

    def __init__(self, title: str = "Site Performance Report"):
        """Initialize the HTML reporter.

        Args:
            title: Document title and main heading
        """
        self.title = title

    def generate_report(
        self,
        records: Sequence[PageAuditRecord],
        report_dir: Optional[Union[str, Path]] = None,
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Build the HTML document.

        Args:
            records: Audit records in visit order
            report_dir: Directory the report is written to, used to make
                screenshot paths relative (as-is if None)
            generated_at: Timestamp shown in the header (now if None)

        Returns:
            Complete HTML content
        """
        generated_at = generated_at or datetime.now()
        sections = "\n".join(
            self._build_page_section(index, record, report_dir)
            for index, record in enumerate(records, start=1)
        )

        content = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(self.title)}</title>
    {self._get_styles()}
</head>
<body>
    <div class="container">
        <header>
            <h1>{html.escape(self.title)}</h1>
            <p class="meta">Generated: {generated_at.strftime("%Y-%m-%d %H:%M:%S")}</p>
            {self._build_summary(records)}
        </header>
{sections}
    </div>
</body>
</html>"""
        logger.debug(f"HTML report generated ({len(records)} sections)")
        return content

    def _get_styles(self) -> str:
        """Get inline CSS styles for the report."""
        return """<style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif;
            background: #f5f5f5;
            color: #333;
            line-height: 1.6;
            margin: 0;
        }

        .container {
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
        }

        header, .page {
            background: #fff;
            padding: 25px;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
            margin-bottom: 20px;
        }

        h1 {
            color: #2c3e50;
        }

        h2 {
            color: #34495e;
            padding-bottom: 10px;
            border-bottom: 2px solid #3498db;
        }

        .meta {
            color: #7f8c8d;
            font-size: 0.9em;
        }

        .status {
            font-weight: 600;
            text-transform: uppercase;
        }

        .status.passed { color: #27ae60; }
        .status.failed { color: #e74c3c; }
        .status.captcha { color: #f39c12; }

        table {
            border-collapse: collapse;
            width: 100%;
            margin: 15px 0;
        }

        th, td {
            border: 1px solid #ccc;
            padding: 8px;
            text-align: left;
            word-break: break-all;
        }

        th {
            background: #f4f4f4;
        }

        img {
            width: 100%;
            border: 1px solid #ddd;
            margin-top: 10px;
        }
    </style>"""

    def _build_summary(self, records: Sequence[PageAuditRecord]) -> str:
        """Build the per-status page counts line."""
        counts = Counter(record.status for record in records)
        parts = [f"Pages: {len(records)}"]
        parts.extend(f"{status.value}: {counts.get(status, 0)}" for status in PageStatus)
        return f'<p class="summary">{" | ".join(parts)}</p>'

    def _build_page_section(
        self,
        index: int,
        record: PageAuditRecord,
        report_dir: Optional[Union[str, Path]],
    ) -> str:
        """Build the section for one audited page."""
        url = html.escape(record.url, quote=True)
        status = record.status.value

        error_html = ""
        if record.error:
            error_html = f"\n            <p><strong>Error:</strong> {html.escape(record.error)}</p>"

        screenshot_html = ""
        if record.screenshot:
            src = html.escape(
                self._relative_screenshot(record.screenshot, report_dir), quote=True
            )
            alt = html.escape(f"{record.title} Screenshot", quote=True)
            screenshot_html = f'\n            <img src="{src}" alt="{alt}" />'

        return f"""
        <section class="page" id="page-{index}">
            <h2>{html.escape(record.title)}</h2>
            <p><strong>URL:</strong> <a href="{url}">{url}</a></p>
            <p><strong>Load Time:</strong> {record.load_time_ms:.1f} ms</p>
            <p><strong>Status:</strong> <span class="status {status}">{status}</span></p>{error_html}
            {self._build_resources_table(record)}{screenshot_html}
        </section>"""

    def _build_resources_table(self, record: PageAuditRecord) -> str:
        """Build the slowest-resources table, or a note when there are none."""
        if not record.top_resources:
            return "<p><em>No resource timings recorded.</em></p>"

        rows = "".join(
            f"""
                <tr>
                    <td>{html.escape(sample.name)}</td>
                    <td>{sample.duration:.1f} ms</td>
                    <td>{html.escape(sample.initiator_type)}</td>
                </tr>"""
            for sample in record.top_resources
        )
        return f"""<p><strong>Top {len(record.top_resources)} Slowest Resources:</strong></p>
            <table class="resources">
                <tr><th>Resource</th><th>Duration</th><th>Initiator</th></tr>{rows}
            </table>"""

    @staticmethod
    def _relative_screenshot(
        screenshot: str, report_dir: Optional[Union[str, Path]]
    ) -> str:
        """Express a screenshot path relative to the report directory."""
        if report_dir is None:
            return Path(screenshot).as_posix()
        try:
            return Path(os.path.relpath(screenshot, start=report_dir)).as_posix()
        except ValueError:
            # Different drives on Windows
            return Path(screenshot).as_posix()
