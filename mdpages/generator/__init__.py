"""Utilities for rendering parsed Markdown documents into HTML pages."""

from .models import PageMeta, RenderedPage, RenderedSection
from .page_generator import SitePageBuilder
from .renderer import HtmlContentRenderer

__all__ = [
    "HtmlContentRenderer",
    "PageMeta",
    "RenderedPage",
    "RenderedSection",
    "SitePageBuilder",
]
