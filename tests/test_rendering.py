"""Tests for Markdown conversion and page templating.

The fixtures build parsed documents directly, so no network or pipeline is
involved. Rendered HTML is inspected with BeautifulSoup, the same way the
generated pages would be read by a crawler: head metadata, navigation
anchors, section ids and structured data.
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ

import pytest
from bs4 import BeautifulSoup

from mdpages.config import DeploymentMode, PageLayout, SiteConfig, SiteMetadata
from mdpages.errors import RenderError
from mdpages.generator import HtmlContentRenderer, SitePageBuilder
from mdpages.markdown_parser import ParsedDocument, parse_documents

if typ.TYPE_CHECKING:
    from mdpages.generator import RenderedPage


@pytest.fixture
def documents() -> list[ParsedDocument]:
    return parse_documents(
        [
            ("getting-started.md", "docs/getting-started.md", "# Getting Started\nInstall it."),
            ("advanced.mdx", "docs/advanced.mdx", "# Advanced Usage\nGo further."),
        ]
    )


def _soup(page: RenderedPage) -> BeautifulSoup:
    return BeautifulSoup(page.html, "html.parser")


def _builder(config: SiteConfig, **changes: typ.Any) -> SitePageBuilder:
    return SitePageBuilder(dc.replace(config, **changes))


def test_raw_html_blocks_pass_through_unescaped() -> None:
    renderer = HtmlContentRenderer()
    fragment = '<div class="callout">Raw <em>HTML</em> &amp; more</div>'
    html = renderer.markdown(f"Intro paragraph.\n\n{fragment}\n\nAfter.")
    assert fragment in html
    assert "&lt;div" not in html


def test_bare_urls_are_not_autolinked() -> None:
    html = HtmlContentRenderer().markdown("Visit https://effect.website today.")
    assert "<a " not in html


def test_fence_info_extras_are_dropped_for_highlighting() -> None:
    html = HtmlContentRenderer().markdown("```ts twoslash\nconst a = 1\n```\n")
    soup = BeautifulSoup(html, "html.parser")
    block = soup.select_one("div.codehilite")
    assert block is not None
    assert block["data-language"] == "ts"
    assert "twoslash" not in html


def test_tilde_and_backtick_fences_keep_their_own_languages() -> None:
    source = "~~~python\nprint('hi')\n~~~\n\nBetween.\n\n```ts\nconst a = 1\n```\n"
    soup = BeautifulSoup(HtmlContentRenderer().markdown(source), "html.parser")
    languages = [block["data-language"] for block in soup.select("div.codehilite")]
    assert languages == ["python", "ts"]


def test_empty_markdown_renders_nothing() -> None:
    assert HtmlContentRenderer().markdown("   \n") == ""


def test_converter_failure_raises_render_error(mocker: typ.Any) -> None:
    mocker.patch(
        "mdpages.generator.renderer.Markdown.convert",
        side_effect=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
    )
    with pytest.raises(RenderError, match="Markdown conversion failed"):
        HtmlContentRenderer().markdown("# Title")


def test_unknown_pygments_style_raises_render_error() -> None:
    with pytest.raises(RenderError, match="no-such-style"):
        HtmlContentRenderer("no-such-style")


def test_toc_links_match_section_ids_in_order(
    site_config: SiteConfig, documents: list[ParsedDocument]
) -> None:
    pages = _builder(site_config, layout=PageLayout.TOC).render(documents)

    assert [page.filename for page in pages] == ["index.html"]
    soup = _soup(pages[0])
    links = soup.select("nav.doc-nav a")
    assert [a.get_text(strip=True) for a in links] == [
        "Getting Started",
        "Advanced Usage",
    ]
    section_ids = [section["id"] for section in soup.select("section.doc-section")]
    assert section_ids == ["section-1", "section-2"]
    assert [a["href"] for a in links] == [f"#{sid}" for sid in section_ids]


def test_toc_sections_carry_identifier_anchors(
    site_config: SiteConfig, documents: list[ParsedDocument]
) -> None:
    soup = _soup(_builder(site_config, layout=PageLayout.TOC).render(documents)[0])
    anchors = [span["id"] for span in soup.select("span.doc-section__anchor")]
    assert anchors == ["getting-started", "advanced"]
    assert soup.select_one("#section-1 h1").get_text() == "Getting Started"


def test_single_layout_joins_documents_without_navigation(
    site_config: SiteConfig, documents: list[ParsedDocument]
) -> None:
    pages = _builder(site_config, layout=PageLayout.SINGLE).render(documents)

    soup = _soup(pages[0])
    assert soup.select("nav.doc-nav") == []
    article = soup.select_one("main.doc-article")
    assert article is not None
    assert [h.get_text() for h in article.select("h1")] == [
        "Getting Started",
        "Advanced Usage",
    ]
    assert len(article.select("hr")) == 1


def test_multi_page_layout_writes_index_and_one_page_per_document(
    site_config: SiteConfig, documents: list[ParsedDocument]
) -> None:
    pages = _builder(site_config, layout=PageLayout.MULTI_PAGE).render(documents)

    assert [page.filename for page in pages] == [
        "index.html",
        "getting-started.html",
        "advanced.html",
    ]
    index = _soup(pages[0])
    assert [a["href"] for a in index.select("nav.doc-nav a")] == [
        "getting-started.html",
        "advanced.html",
    ]

    page = _soup(pages[2])
    assert page.select_one("a.doc-nav__back")["href"] == "index.html"
    assert page.title.get_text() == "Advanced Usage | Acme Docs"
    description = page.select_one("meta[name='description']")["content"]
    assert description == "Advanced Usage - Guides for Acme."
    keywords = page.select_one("meta[name='keywords']")["content"]
    assert keywords == "Advanced Usage, acme, docs"
    canonical = page.select_one("link[rel='canonical']")["href"]
    assert canonical == "https://example.com/advanced.html"
    assert page.select_one("meta[property='og:url']")["content"] == canonical


def test_document_pages_list_every_page_and_mark_the_current_one(
    site_config: SiteConfig, documents: list[ParsedDocument]
) -> None:
    pages = _builder(site_config, layout=PageLayout.MULTI_PAGE).render(documents)

    nav = _soup(pages[1]).select_one("nav.doc-nav")
    assert nav is not None
    links = nav.select("ul.doc-nav__list a")
    assert [a["href"] for a in links] == ["getting-started.html", "advanced.html"]
    current = nav.select("a[aria-current='page']")
    assert [a.get_text(strip=True) for a in current] == ["Getting Started"]


def test_titles_are_escaped_in_attributes_and_json_ld(site_config: SiteConfig) -> None:
    hostile = 'Break </script><script>alert("x")</script> & "quotes"'
    docs = parse_documents([("evil.md", "docs/evil.md", f"# {hostile}\nBody")])

    pages = _builder(site_config, layout=PageLayout.MULTI_PAGE).render(docs)
    html = pages[1].html
    soup = BeautifulSoup(html, "html.parser")

    assert soup.select_one("meta[property='og:title']")["content"].startswith(hostile)
    ld_blocks = soup.select("script[type='application/ld+json']")
    assert len(ld_blocks) == 1
    payload = json.loads(ld_blocks[0].string)
    assert payload["headline"] == hostile
    assert payload["@type"] == "TechArticle"
    assert '<script>alert("x")' not in html.split("<body>")[0]


def test_structured_data_can_be_disabled(
    site_config: SiteConfig, documents: list[ParsedDocument]
) -> None:
    config = dc.replace(
        site_config, site=dc.replace(site_config.site, structured_data=False)
    )
    soup = _soup(SitePageBuilder(config).render(documents)[0])
    assert soup.select("script[type='application/ld+json']") == []


def test_index_head_metadata(
    site_config: SiteConfig, documents: list[ParsedDocument]
) -> None:
    soup = _soup(SitePageBuilder(site_config).render(documents)[0])

    assert soup.html["lang"] == "en"
    assert soup.title.get_text() == "Acme Docs"
    assert soup.select_one("meta[name='robots']")["content"] == "index, follow"
    assert soup.select_one("link[rel='canonical']")["href"] == "https://example.com/"
    assert soup.select_one("meta[property='og:title']")["content"] == "Acme Docs"
    payload = json.loads(soup.select_one("script[type='application/ld+json']").string)
    assert payload == {
        "@context": "https://schema.org",
        "@type": "WebSite",
        "name": "Acme Docs",
        "description": "Guides for Acme.",
        "url": "https://example.com/",
        "inLanguage": "en",
    }


def test_theme_toggle_is_optional(
    site_config: SiteConfig, documents: list[ParsedDocument]
) -> None:
    with_toggle = _soup(SitePageBuilder(site_config).render(documents)[0])
    assert with_toggle.select_one("#theme-toggle") is not None
    assert '"mdpages-theme"' in str(with_toggle.head)

    config = dc.replace(
        site_config, site=SiteMetadata(title="Acme Docs", theme_toggle=False)
    )
    without_toggle = _soup(SitePageBuilder(config).render(documents)[0])
    assert without_toggle.select_one("#theme-toggle") is None


def test_client_rendered_mode_emits_shell_only(
    site_config: SiteConfig, documents: list[ParsedDocument]
) -> None:
    pages = _builder(site_config, mode=DeploymentMode.CLIENT_RENDERED).render(documents)

    assert [page.filename for page in pages] == ["index.html"]
    html = pages[0].html
    soup = BeautifulSoup(html, "html.parser")
    assert soup.select("section.doc-section") == []
    assert "Getting Started" not in html
    assert json.dumps(site_config.listing_url) in html
    assert soup.select_one("script[src*='marked']") is not None
