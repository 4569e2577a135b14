"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@dc.dataclass(slots=True, frozen=True)
class RenderedSection:
    """One document converted to HTML.

    Attributes
    ----------
    title : str
        Title derived from the document's first heading.
    identifier : str
        URL-safe identifier unique within the build.
    anchor : str
        In-page fragment id (``section-<n>``) used by the contents list.
    html_body : str
        HTML produced from the document's Markdown.
    path : str
        Repository path of the source document.
    """

    title: str
    identifier: str
    anchor: str
    html_body: str
    path: str


@dc.dataclass(slots=True, frozen=True)
class PageMeta:
    """Head metadata for a single HTML document.

    Attributes
    ----------
    title : str
        Text for ``<title>``, ``og:title`` and the JSON-LD headline.
    description : str
        Meta and Open Graph description.
    canonical_url : str
        Absolute URL of the page.
    keywords : tuple[str, ...]
        Keywords for the ``keywords`` meta tag.
    language : str
        ``lang`` attribute of the document.
    json_ld : dict[str, Any] | None
        Structured data serialised into an ``application/ld+json`` block.
    robots : str
        Value of the robots meta directive.
    """

    title: str
    description: str
    canonical_url: str
    keywords: tuple[str, ...]
    language: str
    json_ld: dict[str, typ.Any] | None = None
    robots: str = "index, follow"


@dc.dataclass(slots=True, frozen=True)
class RenderedPage:
    """An HTML artifact ready to be written under the output directory."""

    filename: str
    html: str


__all__ = ["PageMeta", "RenderedPage", "RenderedSection"]
