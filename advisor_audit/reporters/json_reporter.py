"""JSON report generator for audit runs.

The artifact is a JSON array with one object per audited page, in visit
order. Keys follow the PageAuditRecord field order so diffs between runs stay
readable.
"""

import logging
import json
from typing import List, Sequence

from advisor_audit.models.audit_models import PageAuditRecord

logger = logging.getLogger(__name__)


class JsonReporter:
    """
    Serialize audit records to a JSON array.

    GOTCHA: Keys use the browser's camelCase names (loadTimeMs, topResources,
    initiatorType), not the Python attribute names.
    """

    def __init__(self, pretty: bool = True):
        """
        Initialize JSON reporter.

        Args:
            pretty: Whether to pretty-print JSON output
        """
        self.pretty = pretty

    def generate_report(self, records: Sequence[PageAuditRecord]) -> str:
        """
        Generate the JSON artifact.

        Args:
            records: Audit records in visit order

        Returns:
            JSON string
        """
        data = [record.to_dict() for record in records]

        if self.pretty:
            json_str = json.dumps(data, indent=2, ensure_ascii=False)
        else:
            json_str = json.dumps(data, ensure_ascii=False)

        logger.debug(f"JSON report generated ({len(json_str)} bytes)")
        return json_str

    def parse_report(self, content: str) -> List[PageAuditRecord]:
        """
        Read a JSON artifact back into records.

        Args:
            content: JSON string produced by generate_report

        Returns:
            Audit records in file order
        """
        return [PageAuditRecord.model_validate(item) for item in json.loads(content)]
