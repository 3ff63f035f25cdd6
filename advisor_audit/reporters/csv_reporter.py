"""CSV report generator for audit runs.

Layout: one row per resource sample, with the owning page's fields flattened
into the leading columns. A page without samples still gets one row with
empty resource columns, so every audited page appears in the file. The
``page`` column numbers records in visit order and is what groups rows back
into records when the file is read.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Sequence, Union

from advisor_audit.models.audit_models import (
    PageAuditRecord,
    PageStatus,
    ResourceSample,
)

logger = logging.getLogger(__name__)

PAGE_COLUMNS = ["page", "title", "url", "loadTimeMs", "status", "screenshot", "error"]
RESOURCE_COLUMNS = ["name", "duration", "initiatorType"]
CSV_HEADER = PAGE_COLUMNS + RESOURCE_COLUMNS


class CsvReporter:
    """
    Serialize audit records to CSV rows.

    All quoting and escaping goes through the csv module; values are written
    exactly as recorded.
    """

    def generate_report(self, records: Sequence[PageAuditRecord]) -> str:
        """
        Generate the CSV artifact.

        Args:
            records: Audit records in visit order

        Returns:
            CSV text including the header row
        """
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=CSV_HEADER, lineterminator="\n")
        writer.writeheader()

        rows = 0
        for index, record in enumerate(records, start=1):
            page_fields = {
                "page": index,
                "title": record.title,
                "url": record.url,
                "loadTimeMs": record.load_time_ms,
                "status": record.status.value,
                "screenshot": record.screenshot or "",
                "error": record.error or "",
            }

            if not record.top_resources:
                writer.writerow(page_fields)
                rows += 1
                continue

            for sample in record.top_resources:
                writer.writerow(
                    {
                        **page_fields,
                        "name": sample.name,
                        "duration": sample.duration,
                        "initiatorType": sample.initiator_type,
                    }
                )
                rows += 1

        logger.debug(f"CSV report generated ({rows} rows, {len(records)} pages)")
        return buffer.getvalue()

    def parse_report(self, content: str) -> List[PageAuditRecord]:
        """
        Read a CSV artifact back into records.

        Args:
            content: CSV text produced by generate_report

        Returns:
            Audit records in page order
        """
        pages: Dict[str, Dict] = {}

        for row in csv.DictReader(io.StringIO(content)):
            page = pages.get(row["page"])
            if page is None:
                page = {
                    "title": row["title"],
                    "url": row["url"],
                    "load_time_ms": float(row["loadTimeMs"] or 0),
                    "status": PageStatus(row["status"]),
                    "screenshot": row["screenshot"] or None,
                    "error": row["error"] or None,
                    "top_resources": [],
                }
                pages[row["page"]] = page

            # Page rows without samples leave duration empty
            if row["duration"]:
                page["top_resources"].append(
                    ResourceSample(
                        name=row["name"],
                        duration=float(row["duration"]),
                        initiator_type=row["initiatorType"],
                    )
                )

        return [PageAuditRecord(**page) for page in pages.values()]


def read_csv_report(path: Union[str, Path]) -> List[PageAuditRecord]:
    """
    Load a CSV report written by ReportAggregator.flush.

    Args:
        path: CSV file path

    Returns:
        Audit records in page order
    """
    with open(path, encoding="utf-8", newline="") as f:
        return CsvReporter().parse_report(f.read())
