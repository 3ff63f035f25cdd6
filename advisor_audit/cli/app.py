"""Main CLI application entry point."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from advisor_audit.audit.site_auditor import SiteAuditor
from advisor_audit.browser.playwright_integration import PlaywrightManager
from advisor_audit.config.audit_config import AuditConfig, load_config
from advisor_audit.config.sites import get_site, load_sites
from advisor_audit.models.audit_models import ReportFormat, SiteDefinition, Viewport
from advisor_audit.cli.renderer import OutputRenderer
from advisor_audit.utils.paths import ensure_directory

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Configure root logging for a CLI invocation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def default_report_path(config: AuditConfig, site: SiteDefinition) -> Path:
    """Report path used when --output is not given."""
    return Path(config.output_dir) / (
        f"performance-metrics-{site.code}.{config.report_format.value}"
    )


async def run_audit(
    config: AuditConfig,
    site: SiteDefinition,
    destination: Path,
    renderer: Optional[OutputRenderer] = None,
) -> Path:
    """
    Audit a site and write its report.

    Args:
        config: Audit configuration
        site: Site to audit
        destination: Report file path
        renderer: Console renderer for per-page output

    Returns:
        Path of the written report

    Raises:
        ReportWriteError: If the report cannot be written
        RuntimeError: If the browser cannot be started or released (a release
            failure is raised after the report is written)
    """
    manager = PlaywrightManager(
        browser_type=config.browser,
        headless=config.headless,
        viewport=Viewport(width=config.viewport_width, height=config.viewport_height),
        user_agent=config.user_agent,
    )

    async with manager:
        auditor = SiteAuditor(config, manager)
        aggregator = await auditor.audit_site(
            site, on_record=renderer.render_record if renderer else None
        )
        # Report is written before the browser is released
        report_path = aggregator.flush(config.report_format, destination)

    if renderer:
        renderer.render_summary(aggregator.summary(), report_path)
    return report_path


@click.group()
def main() -> None:
    """
    Forbes Advisor site audits.

    Audit a site and write an HTML report:
        advisor-audit run --site au --format html

    List the configured sites:
        advisor-audit sites
    """


@main.command()
@click.option(
    "--site", "site_code",
    default="au",
    show_default=True,
    help="Site code to audit",
)
@click.option(
    "--format", "report_format",
    type=click.Choice([f.value for f in ReportFormat]),
    help="Report format (default: json)",
)
@click.option(
    "--output", "-o", "output_path",
    type=click.Path(dir_okay=False),
    help="Report file path",
)
@click.option(
    "--top-n",
    type=click.IntRange(min=1),
    help="Slowest resources kept per page",
)
@click.option(
    "--page-delay",
    type=click.FloatRange(min=0),
    help="Seconds to wait between pages",
)
@click.option(
    "--headed",
    is_flag=True,
    help="Show the browser window",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML config file",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def run(
    site_code: str,
    report_format: Optional[str],
    output_path: Optional[str],
    top_n: Optional[int],
    page_delay: Optional[float],
    headed: bool,
    config_path: Optional[str],
    verbose: bool,
) -> None:
    """Audit every page of a site and write one report."""
    configure_logging(verbose)

    try:
        config = load_config(
            config_path,
            report_format=report_format,
            top_n=top_n,
            page_delay_seconds=page_delay,
            headless=False if headed else None,
        )
        site = get_site(site_code, config_path)

        destination = Path(output_path) if output_path else default_report_path(config, site)
        ensure_directory(destination.parent)

        asyncio.run(run_audit(config, site, destination, OutputRenderer()))
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        if verbose:
            logger.exception("Audit failed")
        else:
            click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML config file with extra sites",
)
def sites(config_path: Optional[str]) -> None:
    """List the sites that can be audited."""
    OutputRenderer().render_sites(load_sites(config_path))


if __name__ == "__main__":
    main()
