"""Typed dataclasses describing mdpages build configuration."""

from __future__ import annotations

import dataclasses as dc
import enum
from pathlib import Path

from mdpages._constants import (
    DEFAULT_BASE_URL,
    DEFAULT_LISTING_URL,
    DEFAULT_OUTPUT_DIR,
    DOC_SUFFIXES,
)


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class DeploymentMode(enum.StrEnum):
    """Where Markdown is turned into HTML."""

    BUILD_TIME = "build-time"
    CLIENT_RENDERED = "client-rendered"


class PageLayout(enum.StrEnum):
    """How build-time output is split into HTML files."""

    SINGLE = "single"
    TOC = "toc"
    MULTI_PAGE = "multi-page"


@dc.dataclass(slots=True, frozen=True)
class SiteMetadata:
    """Document-level metadata and theming shared by every rendered page.

    Attributes
    ----------
    title : str
        Site title used for ``<title>``, Open Graph and JSON-LD.
    description : str
        Default meta description.
    language : str
        Value of the ``lang`` attribute on ``<html>``.
    keywords : tuple[str, ...]
        Keywords emitted in the ``keywords`` meta tag.
    structured_data : bool
        Emit a JSON-LD block when ``True``.
    theme_toggle : bool
        Render the light/dark theme switch when ``True``.
    pygments_style : str
        Pygments style used for highlighted code blocks.
    """

    title: str = "Effect-TS Documentation"
    description: str = (
        "Effect-TS Documentation - Comprehensive guide for the Effect-TS library"
    )
    language: str = "en"
    keywords: tuple[str, ...] = ("Effect-TS", "TypeScript", "documentation")
    structured_data: bool = True
    theme_toggle: bool = True
    pygments_style: str = "friendly"


@dc.dataclass(slots=True, frozen=True)
class SiteConfig:
    """A fully resolved build definition passed into the pipeline.

    Attributes
    ----------
    listing_url : str
        Content-listing endpoint for the documentation root directory.
    base_url : str
        Public URL the generated site is served from.
    output_dir : Path
        Directory receiving the HTML, sitemap and robots artifacts.
    token : str | None
        Optional bearer token for the content host.
    mode : DeploymentMode
        Build-time rendering or a client-rendered shell.
    layout : PageLayout
        Output layout used in build-time mode.
    max_workers : int
        Upper bound on concurrent document fetches.
    timeout : float
        Per-request timeout in seconds.
    crawl_delay : int | None
        Optional ``Crawl-delay`` value written to ``robots.txt``.
    sort_by_path : bool
        Sort discovered documents by repository path before rendering.
    suffixes : tuple[str, ...]
        File suffixes recognised as documentation.
    site : SiteMetadata
        Page metadata and theming.
    """

    listing_url: str = DEFAULT_LISTING_URL
    base_url: str = DEFAULT_BASE_URL
    output_dir: Path = DEFAULT_OUTPUT_DIR
    token: str | None = None
    mode: DeploymentMode = DeploymentMode.BUILD_TIME
    layout: PageLayout = PageLayout.TOC
    max_workers: int = 6
    timeout: float = 30.0
    crawl_delay: int | None = None
    sort_by_path: bool = False
    suffixes: tuple[str, ...] = DOC_SUFFIXES
    site: SiteMetadata = dc.field(default_factory=SiteMetadata)

    @property
    def normalized_base_url(self) -> str:
        """Return ``base_url`` with exactly one trailing slash."""
        return self.base_url.rstrip("/") + "/"


__all__ = [
    "DeploymentMode",
    "PageLayout",
    "SiteConfig",
    "SiteConfigError",
    "SiteMetadata",
]
