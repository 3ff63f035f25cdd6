"""Rich console output for audit runs."""

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from advisor_audit.models.audit_models import PageAuditRecord, PageStatus, SiteDefinition

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    PageStatus.PASSED: "green",
    PageStatus.FAILED: "red",
    PageStatus.CAPTCHA: "yellow",
}


class OutputRenderer:
    """
    Rich output renderer for the CLI.

    Prints one table of slowest resources per audited page, the run summary
    and the site catalogue.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize output renderer.

        Args:
            console: Rich console (creates new if not provided)
        """
        self.console = console or Console()

    def render_record(self, record: PageAuditRecord) -> None:
        """Print a page's outcome and its slowest resources."""
        style = STATUS_STYLES[record.status]
        self.console.print(
            f"[bold]{escape(record.title)}[/bold] [{style}]{record.status.value}[/{style}] "
            f"load time: {record.load_time_ms:.1f} ms"
        )

        if record.error:
            self.console.print(f"  [{style}]{escape(record.error)}[/{style}]")

        if not record.top_resources:
            return

        table = Table(
            title=f"Top {len(record.top_resources)} slowest resources for {escape(record.url)}"
        )
        table.add_column("Resource", overflow="fold")
        table.add_column("Duration (ms)", justify="right")
        table.add_column("Initiator")
        for sample in record.top_resources:
            table.add_row(escape(sample.name), f"{sample.duration:.1f}", sample.initiator_type)
        self.console.print(table)

    def render_summary(self, summary: Mapping[str, int], report_path: Path) -> None:
        """Print per-status counts and where the report went."""
        self.console.print(
            f"\n[bold]Pages:[/bold] {summary['total']}  "
            f"[green]passed: {summary['passed']}[/green]  "
            f"[red]failed: {summary['failed']}[/red]  "
            f"[yellow]captcha: {summary['captcha']}[/yellow]"
        )
        self.console.print(f"Report written to [cyan]{escape(str(report_path))}[/cyan]")

    def render_sites(self, sites: Dict[str, SiteDefinition]) -> None:
        """Print the site catalogue."""
        table = Table(title="Audited sites")
        table.add_column("Code")
        table.add_column("Name")
        table.add_column("Pages", justify="right")
        table.add_column("Resource filter")
        for code, site in sorted(sites.items()):
            table.add_row(code, site.name, str(len(site.pages)), site.resource_filter)
        self.console.print(table)
