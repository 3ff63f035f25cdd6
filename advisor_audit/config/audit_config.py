"""Audit run configuration with environment variable loading."""

import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from advisor_audit.models.audit_models import BrowserType, ReportFormat

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = "ADVISOR_AUDIT_"


def _env(name: str, default: str) -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


class AuditConfig(BaseModel):
    """Configuration for an audit run."""

    # Browser
    browser: BrowserType = Field(
        default_factory=lambda: BrowserType(_env("BROWSER", "chromium")),
        description="Browser engine",
    )
    headless: bool = Field(
        default_factory=lambda: _env("HEADLESS", "true").lower() == "true",
        description="Run the browser without a window",
    )
    viewport_width: int = Field(
        default_factory=lambda: int(_env("VIEWPORT_WIDTH", "1280")),
        description="Viewport width",
    )
    viewport_height: int = Field(
        default_factory=lambda: int(_env("VIEWPORT_HEIGHT", "720")),
        description="Viewport height",
    )
    user_agent: Optional[str] = Field(
        default_factory=lambda: os.getenv(f"{ENV_PREFIX}USER_AGENT"),
        description="User agent override",
    )

    # Navigation
    wait_until: str = Field(
        default_factory=lambda: _env("WAIT_UNTIL", "load"),
        description="Navigation wait condition: load, domcontentloaded, networkidle",
    )
    navigation_timeout_ms: int = Field(
        default_factory=lambda: int(_env("NAVIGATION_TIMEOUT_MS", "60000")),
        description="Navigation timeout in milliseconds",
    )
    assertion_timeout_ms: int = Field(
        default_factory=lambda: int(_env("ASSERTION_TIMEOUT_MS", "10000")),
        description="Per-assertion timeout in milliseconds",
    )
    page_delay_seconds: float = Field(
        default_factory=lambda: float(_env("PAGE_DELAY_SECONDS", "0")),
        ge=0,
        description="Pause between page visits",
    )
    check_common_elements: bool = Field(
        default_factory=lambda: _env("CHECK_COMMON_ELEMENTS", "true").lower() == "true",
        description="Assert logo, Subscribe button and nav link",
    )

    # CAPTCHA retries
    captcha_max_attempts: int = Field(
        default_factory=lambda: int(_env("CAPTCHA_MAX_ATTEMPTS", "3")),
        ge=1,
        description="CAPTCHA checks before a page is skipped",
    )
    captcha_base_delay: float = Field(
        default_factory=lambda: float(_env("CAPTCHA_BASE_DELAY", "5.0")),
        ge=0,
        description="Backoff before the second CAPTCHA check (seconds)",
    )
    captcha_jitter: float = Field(
        default_factory=lambda: float(_env("CAPTCHA_JITTER", "2.0")),
        ge=0,
        description="Random extra backoff (seconds)",
    )
    captcha_reload: bool = Field(
        default_factory=lambda: _env("CAPTCHA_RELOAD", "false").lower() == "true",
        description="Reload the page before re-checking",
    )

    # Metrics
    top_n: int = Field(
        default_factory=lambda: int(_env("TOP_N", "5")),
        ge=1,
        description="Slowest resources kept per page",
    )

    # Output
    report_format: ReportFormat = Field(
        default_factory=lambda: ReportFormat(_env("REPORT_FORMAT", "json")),
        description="Report artifact format",
    )
    output_dir: str = Field(
        default_factory=lambda: _env("OUTPUT_DIR", "reports"),
        description="Directory for report artifacts",
    )
    screenshots_dir: str = Field(
        default_factory=lambda: _env("SCREENSHOTS_DIR", "screenshots"),
        description="Directory for page screenshots",
    )


def load_config(
    config_path: Optional[Union[str, Path]] = None, **overrides: Any
) -> AuditConfig:
    """
    Load audit configuration.

    Configuration is merged in this order (later overrides earlier):
    1. Default values and environment variables (ADVISOR_AUDIT_*)
    2. The ``audit`` section of the YAML file, if given
    3. Explicit keyword overrides whose value is not None

    Args:
        config_path: Optional YAML config file
        **overrides: Field overrides, typically from CLI flags

    Returns:
        Merged AuditConfig instance
    """
    merged: Dict[str, Any] = {}

    if config_path:
        with open(config_path) as f:
            file_config = yaml.safe_load(f) or {}
        merged.update(file_config.get("audit") or {})
        logger.debug(f"Loaded config from {config_path}")

    merged.update({key: value for key, value in overrides.items() if value is not None})
    return AuditConfig(**merged)
