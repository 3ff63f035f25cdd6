"""Built-in catalogue of audited regional sites."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from advisor_audit.errors import SiteNotFoundError
from advisor_audit.models.audit_models import PageTarget, SiteDefinition

logger = logging.getLogger(__name__)

AU_SITE = SiteDefinition(
    code="au",
    name="Forbes Advisor AU",
    resource_filter="forbes.com",
    pages=[
        PageTarget(
            title="Home",
            url="https://www.forbes.com/advisor/au/",
            heading="Smart Financial Decisions Made Simple",
        ),
        PageTarget(
            title="Investing",
            url="https://www.forbes.com/advisor/au/investing/",
            heading="How To Invest",
        ),
        PageTarget(
            title="Credit Cards",
            url="https://www.forbes.com/advisor/au/credit-cards/best-credit-cards/",
            heading="Our Pick Of The Best Credit Cards For Australians",
        ),
        PageTarget(
            title="SuperFunds",
            url=(
                "https://www.forbes.com/advisor/au/superannuation/"
                "best-default-superannuation-funds-in-australia/"
            ),
            heading="Our Pick Of The Best Default Superannuation Funds In 2025",
        ),
    ],
)

CA_SITE = SiteDefinition(
    code="ca",
    name="Forbes Advisor CA",
    resource_filter="forbes.com",
    pages=[
        PageTarget(
            title="Home",
            url="https://www.forbes.com/advisor/ca/",
            heading="Smart Financial Decisions Made Simple",
        ),
        PageTarget(
            title="Credit Cards",
            url="https://www.forbes.com/advisor/ca/credit-cards/best/best-credit-cards/",
            heading="Compare Canada's Best Credit Cards and Choose Your Perfect Match",
        ),
        PageTarget(
            title="Business",
            url="https://www.forbes.com/advisor/ca/business/",
            heading="Transform Your Small Business",
        ),
        PageTarget(
            title="Cash Back Credit Cards",
            url="https://www.forbes.com/advisor/ca/credit-cards/best/cash-back/",
            heading="Best Cash Back Credit Cards In Canada For 2025",
        ),
        PageTarget(
            title="Mortgage Lenders",
            url="https://www.forbes.com/advisor/ca/mortgages/best-mortgage-lenders/",
            heading="Best Mortgage Lenders In Canada For 2025",
        ),
        PageTarget(
            title="Mortgage Rates",
            url="https://www.forbes.com/advisor/ca/mortgages/best-mortgage-rates-in-canada/",
            heading="Best Mortgage Rates In Canada For 2025",
        ),
        PageTarget(
            title="Personal Loans",
            url="https://www.forbes.com/advisor/ca/personal-loans/best-personal-loans/",
            heading="Best Personal Loans In Canada For 2025",
        ),
        PageTarget(
            title="GIC Rates",
            url="https://www.forbes.com/advisor/ca/banking/gic/best-gic-rates/",
            heading="Best GIC Rates In Canada For 2025",
        ),
        PageTarget(
            title="Savings Accounts",
            url="https://www.forbes.com/advisor/ca/banking/savings/best-savings-accounts/",
            heading="Best Savings Accounts In Canada For 2025",
        ),
        PageTarget(
            title="Chequing Accounts",
            url="https://www.forbes.com/advisor/ca/banking/chequing/best-chequing-accounts/",
            heading="Best Chequing Accounts In Canada For 2025",
        ),
        PageTarget(
            title="Travel Credit Cards",
            url="https://www.forbes.com/advisor/ca/credit-cards/best/travel/",
            heading="Best Travel Credit Cards In Canada For 2025",
        ),
    ],
)

CA_DELAYED_SITE = SiteDefinition(
    code="ca-delayed",
    name="Forbes Advisor CA Delayed",
    resource_filter="forbes.com",
    pages=[
        PageTarget(
            title="Home",
            url="https://www.forbes.com/advisor/ca/",
            heading="Smart Financial Decisions Made Simple",
        ),
        PageTarget(
            title="Investing",
            url="https://www.forbes.com/advisor/ca/investing/",
            heading="What Is Investing?",
        ),
        PageTarget(
            title="Credit Cards",
            url="https://www.forbes.com/advisor/ca/credit-cards/",
            heading="Best Credit Cards In Canada",
        ),
        PageTarget(
            title="Mortgage",
            url="https://www.forbes.com/advisor/ca/mortgages/",
            heading="Best Mortgage Lenders In Canada",
        ),
    ],
)

BUILTIN_SITES: Dict[str, SiteDefinition] = {
    AU_SITE.code: AU_SITE,
    CA_SITE.code: CA_SITE,
    CA_DELAYED_SITE.code: CA_DELAYED_SITE,
}


def load_sites(config_path: Optional[Union[str, Path]] = None) -> Dict[str, SiteDefinition]:
    """
    Load the site catalogue.

    Sites from the YAML file's ``sites`` mapping are added to, or replace,
    the built-in ones. Each entry looks like::

        sites:
          nz:
            name: Forbes Advisor NZ
            resource_filter: forbes.com
            pages:
              - {title: Home, url: "https://...", heading: "..."}

    Args:
        config_path: Optional YAML file

    Returns:
        Mapping of site code to definition
    """
    sites = dict(BUILTIN_SITES)
    if not config_path:
        return sites

    with open(config_path) as f:
        file_config: Dict[str, Any] = yaml.safe_load(f) or {}

    for code, data in (file_config.get("sites") or {}).items():
        code = str(code).lower()
        sites[code] = SiteDefinition(code=code, **data)
        logger.debug(f"Loaded site {code} from {config_path}")

    return sites


def get_site(code: str, config_path: Optional[Union[str, Path]] = None) -> SiteDefinition:
    """
    Look up a site by code.

    Raises:
        SiteNotFoundError: If no site has this code
    """
    sites = load_sites(config_path)
    try:
        return sites[code.lower()]
    except KeyError:
        available = ", ".join(sorted(sites))
        raise SiteNotFoundError(f"Unknown site '{code}' (available: {available})")
