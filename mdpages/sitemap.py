"""Build ``sitemap.xml`` and ``robots.txt`` for a generated site.

The sitemap lists the index page (``daily``, priority ``1.0``) followed by one
entry per page identifier (``weekly``, priority ``0.8``). Identifiers become
fragment links (``<base>#intro``) when every document lives on one page, or
file links (``<base>intro.html``) in multi-page output. ``lastmod`` is the
current UTC date for every entry.

Example
-------
>>> import datetime as dt
>>> from mdpages.sitemap import page_loc
>>> page_loc("https://example.com", "intro", link_style="page")
'https://example.com/intro.html'
>>> page_loc("https://example.com/", "intro", link_style="anchor")
'https://example.com/#intro'
"""

from __future__ import annotations

import datetime as dt
import typing as typ

from mdpages._constants import ROBOTS_FILENAME, SITEMAP_FILENAME, SITEMAP_NAMESPACE
from mdpages.output import write_artifact
from mdpages.templating import build_environment

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

LinkStyle = typ.Literal["anchor", "page"]

INDEX_CHANGEFREQ = "daily"
INDEX_PRIORITY = "1.0"
PAGE_CHANGEFREQ = "weekly"
PAGE_PRIORITY = "0.8"


def _normalize_base(base_url: str) -> str:
    return base_url.rstrip("/") + "/"


def page_loc(base_url: str, identifier: str, *, link_style: LinkStyle) -> str:
    """Return the absolute location of a page identifier."""
    base = _normalize_base(base_url)
    if link_style == "anchor":
        return f"{base}#{identifier}"
    return f"{base}{identifier}.html"


def build_sitemap(
    base_url: str,
    identifiers: cabc.Iterable[str],
    *,
    link_style: LinkStyle = "page",
    today: dt.date | None = None,
) -> str:
    """Render the sitemap XML for the index page and each identifier.

    Parameters
    ----------
    base_url : str
        Public URL of the site root.
    identifiers : Iterable[str]
        Page identifiers in output order. Uniqueness is not checked here.
    link_style : {"anchor", "page"}, optional
        How identifiers become locations. Defaults to ``"page"``.
    today : date, optional
        Date used for ``lastmod``; defaults to the current UTC date.

    Returns
    -------
    str
        UTF-8 sitemap document following the sitemaps.org 0.9 schema.
    """
    lastmod = (today or dt.datetime.now(dt.UTC).date()).isoformat()
    entries = [
        {
            "loc": _normalize_base(base_url),
            "changefreq": INDEX_CHANGEFREQ,
            "priority": INDEX_PRIORITY,
        }
    ]
    entries.extend(
        {
            "loc": page_loc(base_url, identifier, link_style=link_style),
            "changefreq": PAGE_CHANGEFREQ,
            "priority": PAGE_PRIORITY,
        }
        for identifier in identifiers
    )
    template = build_environment().get_template("sitemap.xml.jinja")
    return template.render(
        namespace=SITEMAP_NAMESPACE, entries=entries, lastmod=lastmod
    )


def build_robots(base_url: str, *, crawl_delay: int | None = None) -> str:
    """Render ``robots.txt`` allowing all crawlers and pointing at the sitemap."""
    template = build_environment().get_template("robots.txt.jinja")
    return template.render(
        crawl_delay=crawl_delay,
        sitemap_url=f"{_normalize_base(base_url)}{SITEMAP_FILENAME}",
    )


def write_sitemap(
    output_dir: Path,
    base_url: str,
    identifiers: cabc.Iterable[str],
    *,
    link_style: LinkStyle = "page",
) -> Path:
    """Write ``sitemap.xml`` into ``output_dir`` and return its path."""
    xml = build_sitemap(base_url, identifiers, link_style=link_style)
    return write_artifact(output_dir / SITEMAP_FILENAME, xml)


def write_robots(
    output_dir: Path, base_url: str, *, crawl_delay: int | None = None
) -> Path:
    """Write ``robots.txt`` into ``output_dir`` and return its path."""
    text = build_robots(base_url, crawl_delay=crawl_delay)
    return write_artifact(output_dir / ROBOTS_FILENAME, text)


__all__ = [
    "LinkStyle",
    "build_robots",
    "build_sitemap",
    "page_loc",
    "write_robots",
    "write_sitemap",
]
