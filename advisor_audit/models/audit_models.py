"""Audit data models for page visits, resource timings and report records.

This module defines the Pydantic models shared by the resource timing
collector, the report aggregator and the site auditor: the configured page
targets, the per-request timing samples reported by the browser, and the
immutable per-page audit records that make up a report.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from enum import Enum


class BrowserType(str, Enum):
    """Playwright browser engines."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class Viewport(BaseModel):
    """Browser viewport used for audits and screenshots."""

    width: int = Field(default=1280, description="Viewport width")
    height: int = Field(default=720, description="Viewport height")


class ReportFormat(str, Enum):
    """Supported report artifact formats."""

    JSON = "json"
    CSV = "csv"
    HTML = "html"


class PageStatus(str, Enum):
    """Outcome of a single page audit."""

    PASSED = "passed"
    FAILED = "failed"
    CAPTCHA = "captcha"


class PageTarget(BaseModel):
    """A page to visit, with the headline text expected on it."""

    title: str = Field(description="Human-readable page title")
    url: str = Field(description="Page URL")
    heading: str = Field(description="Substring expected in the page's h1")


class SiteDefinition(BaseModel):
    """A regional site and the ordered pages audited on it."""

    code: str = Field(description="Short site code (au, ca)")
    name: str = Field(description="Display name")
    resource_filter: str = Field(
        default="forbes.com",
        description="Hostname fragment a resource URL must contain to be ranked",
    )
    pages: List[PageTarget] = Field(
        default_factory=list, description="Pages in visit order"
    )


class ResourceSample(BaseModel):
    """One browser-reported network fetch."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(description="Resource URL")
    duration: float = Field(ge=0, description="Fetch duration (ms)")
    initiator_type: str = Field(
        default="unknown",
        alias="initiatorType",
        description="Initiator type (script, img, css, fetch, ...)",
    )


class PageAuditRecord(BaseModel):
    """Aggregated result of visiting one page.

    Field declaration order is the serialization order, so JSON output is
    stable across runs.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(description="Page title")
    url: str = Field(description="Page URL")
    load_time_ms: float = Field(
        default=0.0, alias="loadTimeMs", description="Page load time (ms)"
    )
    top_resources: List[ResourceSample] = Field(
        default_factory=list,
        alias="topResources",
        description="Slowest resources, sorted by duration descending",
    )
    screenshot: Optional[str] = Field(
        default=None, description="Screenshot path relative to the run directory"
    )
    status: PageStatus = Field(default=PageStatus.PASSED, description="Audit outcome")
    error: Optional[str] = Field(default=None, description="Failure detail")

    @field_validator("screenshot", "error", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        # Empty screenshot paths and error messages are stored as None
        if isinstance(v, str) and not v:
            return None
        return v

    def to_dict(self) -> dict:
        """Serialize with browser-style camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
