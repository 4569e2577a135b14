"""Render parsed documents into complete HTML pages.

:class:`SitePageBuilder` turns :class:`~mdpages.markdown_parser.ParsedDocument`
values into :class:`~mdpages.generator.models.RenderedPage` artifacts for the
configured layout:

* ``single``: every document joined and converted once into ``index.html``.
* ``toc``: each document converted on its own and placed in a numbered
  ``<section>`` with a contents list of anchor links.
* ``multi-page``: one ``<identifier>.html`` per document plus an index.

In client-rendered mode the builder emits only a shell page whose script
fetches and converts the documents in the browser.

Example
-------
>>> from mdpages.config import SiteConfig
>>> from mdpages.generator import SitePageBuilder
>>> from mdpages.markdown_parser import parse_documents
>>> docs = parse_documents([("intro.md", "docs/intro.md", "# Intro\nHello")])
>>> pages = SitePageBuilder(SiteConfig()).render(docs)  # doctest: +SKIP
>>> pages[0].filename  # doctest: +SKIP
'index.html'
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from mdpages._constants import (
    DOCUMENT_SEPARATOR,
    INDEX_FILENAME,
    MARKED_CDN_URL,
    THEME_STORAGE_KEY,
)
from mdpages.config import DeploymentMode, PageLayout, SiteConfig
from mdpages.generator.models import PageMeta, RenderedPage, RenderedSection
from mdpages.generator.renderer import HtmlContentRenderer
from mdpages.templating import build_environment

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from mdpages.markdown_parser import ParsedDocument


class SitePageBuilder:
    """Render documents into themed HTML pages for one build."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        templates_dir: Path | None = None,
        renderer: HtmlContentRenderer | None = None,
    ) -> None:
        """Initialize the builder with configuration and template context.

        Parameters
        ----------
        config : SiteConfig
            Build configuration supplying layout, mode and site metadata.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        renderer : HtmlContentRenderer, optional
            Markdown renderer; defaults to one using the configured Pygments style.
        """
        self.config = config
        self.site = config.site
        self.renderer = renderer or HtmlContentRenderer(config.site.pygments_style)
        self.env = build_environment(templates_dir)

    def render(self, documents: cabc.Sequence[ParsedDocument]) -> list[RenderedPage]:
        """Render ``documents`` according to the configured mode and layout."""
        if self.config.mode is DeploymentMode.CLIENT_RENDERED:
            return [self.render_client_shell()]
        match self.config.layout:
            case PageLayout.SINGLE:
                return [self.render_single(documents)]
            case PageLayout.TOC:
                return [self.render_toc(self.build_sections(documents))]
            case PageLayout.MULTI_PAGE:
                return self.render_multi_page(self.build_sections(documents))
        msg = f"Unsupported layout: {self.config.layout}"
        raise ValueError(msg)

    def build_sections(
        self, documents: cabc.Sequence[ParsedDocument]
    ) -> list[RenderedSection]:
        """Convert each document independently into a numbered section."""
        return [
            RenderedSection(
                title=doc.title,
                identifier=doc.identifier,
                anchor=f"section-{index}",
                html_body=self.renderer.markdown(doc.markdown),
                path=doc.path,
            )
            for index, doc in enumerate(documents, start=1)
        ]

    def render_single(self, documents: cabc.Sequence[ParsedDocument]) -> RenderedPage:
        """Join every document and convert the combined Markdown once."""
        combined = DOCUMENT_SEPARATOR.join(doc.markdown for doc in documents)
        content = self.renderer.markdown(combined)
        html = self._render(
            "single_page.html.jinja",
            meta=self._site_meta(),
            content_html=content,
        )
        return RenderedPage(filename=INDEX_FILENAME, html=html)

    def render_toc(self, sections: cabc.Sequence[RenderedSection]) -> RenderedPage:
        """Render one page with a contents list linking to each section anchor."""
        toc_items = [
            {"label": section.title, "anchor": section.anchor} for section in sections
        ]
        html = self._render(
            "toc_page.html.jinja",
            meta=self._site_meta(),
            sections=sections,
            toc_items=toc_items,
        )
        return RenderedPage(filename=INDEX_FILENAME, html=html)

    def render_multi_page(
        self, sections: cabc.Sequence[RenderedSection]
    ) -> list[RenderedPage]:
        """Render one page per section and an index linking to all of them."""
        entries = [
            {"label": section.title, "href": self.page_filename(section)}
            for section in sections
        ]
        pages = [
            RenderedPage(
                filename=INDEX_FILENAME,
                html=self._render(
                    "index_page.html.jinja", meta=self._site_meta(), entries=entries
                ),
            )
        ]
        for section in sections:
            filename = self.page_filename(section)
            html = self._render(
                "doc_page.html.jinja",
                meta=self._section_meta(section, filename),
                section=section,
                entries=entries,
                current_href=filename,
                index_href=INDEX_FILENAME,
            )
            pages.append(RenderedPage(filename=filename, html=html))
        return pages

    def render_client_shell(self) -> RenderedPage:
        """Render the shell page that loads and converts documents in the browser."""
        html = self._render(
            "client_shell.html.jinja",
            meta=self._site_meta(),
            listing_url=self.config.listing_url,
            doc_suffixes=list(self.config.suffixes),
            separator=DOCUMENT_SEPARATOR,
            marked_url=MARKED_CDN_URL,
        )
        return RenderedPage(filename=INDEX_FILENAME, html=html)

    @staticmethod
    def page_filename(section: RenderedSection) -> str:
        """Return the output filename for ``section`` in multi-page mode."""
        return f"{section.identifier}.html"

    def _render(self, template_name: str, **context: typ.Any) -> str:
        """Render ``template_name`` with the shared page context merged in."""
        template = self.env.get_template(template_name)
        html = template.render(
            site=self.site,
            pygments_css=self.renderer.stylesheet,
            theme_storage_key=THEME_STORAGE_KEY,
            generated_at=dt.datetime.now(dt.UTC),
            **context,
        )
        if not html.endswith("\n"):
            html += "\n"
        return html

    def _site_meta(self) -> PageMeta:
        """Return head metadata for the site-wide index page."""
        canonical = self.config.normalized_base_url
        return PageMeta(
            title=self.site.title,
            description=self.site.description,
            canonical_url=canonical,
            keywords=self.site.keywords,
            language=self.site.language,
            json_ld=self._json_ld(
                "WebSite", self.site.title, self.site.description, canonical
            ),
        )

    def _section_meta(self, section: RenderedSection, filename: str) -> PageMeta:
        """Return head metadata for a single document page."""
        canonical = f"{self.config.normalized_base_url}{filename}"
        description = f"{section.title} - {self.site.description}"
        title = f"{section.title} | {self.site.title}"
        return PageMeta(
            title=title,
            description=description,
            canonical_url=canonical,
            keywords=(section.title, *self.site.keywords),
            language=self.site.language,
            json_ld=self._json_ld("TechArticle", section.title, description, canonical),
        )

    def _json_ld(
        self, kind: str, headline: str, description: str, url: str
    ) -> dict[str, typ.Any] | None:
        """Return the structured-data mapping, or None when disabled."""
        if not self.site.structured_data:
            return None
        payload: dict[str, typ.Any] = {
            "@context": "https://schema.org",
            "@type": kind,
            "description": description,
            "url": url,
            "inLanguage": self.site.language,
        }
        if kind == "WebSite":
            payload["name"] = headline
        else:
            payload["headline"] = headline
            payload["isPartOf"] = {
                "@type": "WebSite",
                "name": self.site.title,
                "url": self.config.normalized_base_url,
            }
        return payload


__all__ = ["SitePageBuilder"]
