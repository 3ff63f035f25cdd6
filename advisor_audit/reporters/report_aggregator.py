"""Accumulate per-page audit records and write the run's report artifact.

This module provides the ReportAggregator, which collects one
PageAuditRecord per visited page during a sequential run and serializes the
whole batch once, at the end of the run, as JSON, CSV or HTML.
"""

import logging
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from advisor_audit.errors import ReportWriteError
from advisor_audit.models.audit_models import (
    PageAuditRecord,
    PageStatus,
    ReportFormat,
)
from advisor_audit.reporters.csv_reporter import CsvReporter
from advisor_audit.reporters.html_reporter import HtmlReporter
from advisor_audit.reporters.json_reporter import JsonReporter

logger = logging.getLogger(__name__)


class ReportAggregator:
    """Collect audit records in visit order and flush them to one artifact.

    Records are appended as-is: no deduplication, and earlier records are
    never touched. PageAuditRecord is frozen, so the stored entries cannot be
    mutated after the fact either.

    PATTERN: Accumulate during the run, serialize once at the end.
    """

    def __init__(self, title: str = "Site Performance Report"):
        """Initialize the aggregator.

        Args:
            title: Report title, used by the HTML format
        """
        self.title = title
        self._records: List[PageAuditRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> Tuple[PageAuditRecord, ...]:
        """Recorded entries in insertion order."""
        return tuple(self._records)

    def record(self, entry: PageAuditRecord) -> None:
        """Append one page's audit record.

        Args:
            entry: Audit record for a visited page
        """
        self._records.append(entry)
        logger.debug(
            f"Recorded {entry.title} ({entry.status.value}), total: {len(self._records)}"
        )

    def summary(self) -> Dict[str, int]:
        """Count recorded pages per status.

        Returns:
            Mapping with a "total" key and one key per PageStatus value
        """
        counts = Counter(entry.status for entry in self._records)
        result = {"total": len(self._records)}
        result.update({status.value: counts.get(status, 0) for status in PageStatus})
        return result

    def render(
        self,
        format: Union[ReportFormat, str],
        report_dir: Optional[Union[str, Path]] = None,
    ) -> str:
        """Serialize all records without writing them.

        Args:
            format: json, csv or html
            report_dir: Directory the HTML report will live in

        Returns:
            Report content

        Raises:
            ValueError: If the format is not supported
        """
        report_format = ReportFormat(format)

        if report_format == ReportFormat.JSON:
            return JsonReporter().generate_report(self._records)
        if report_format == ReportFormat.CSV:
            return CsvReporter().generate_report(self._records)
        return HtmlReporter(title=self.title).generate_report(
            self._records, report_dir=report_dir
        )

    def flush(
        self, format: Union[ReportFormat, str], destination: Union[str, Path]
    ) -> Path:
        """Write every recorded entry to the destination file.

        Nothing is retried; a failed write is the caller's problem.

        Args:
            format: json, csv or html
            destination: Output file path (its directory must exist)

        Returns:
            Path of the written report

        Raises:
            ValueError: If the format is not supported
            ReportWriteError: If the file cannot be written
        """
        destination = Path(destination)
        content = self.render(format, report_dir=destination.parent)

        try:
            with open(destination, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to write report to {destination}: {e}")
            raise ReportWriteError(f"Report write failed for {destination}: {e}") from e

        logger.info(
            f"Wrote {ReportFormat(format).value} report with "
            f"{len(self._records)} pages to {destination}"
        )
        return destination
