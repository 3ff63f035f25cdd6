"""Report writers for audit runs."""

from .json_reporter import JsonReporter
from .csv_reporter import CsvReporter, read_csv_report
from .html_reporter import HtmlReporter
from .report_aggregator import ReportAggregator

__all__ = [
    "JsonReporter",
    "CsvReporter",
    "read_csv_report",
    "HtmlReporter",
    "ReportAggregator",
]
