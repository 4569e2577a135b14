"""Common literal values used across mdpages.

These constants keep default endpoints, filenames and header values in one
place so the walker, renderer, sitemap writer and tests agree on them.

Examples
--------
>>> from mdpages import _constants
>>> _constants.SITEMAP_FILENAME
'sitemap.xml'
>>> ".mdx" in _constants.DOC_SUFFIXES
True
"""

from pathlib import Path

DEFAULT_LISTING_URL = (
    "https://api.github.com/repos/Effect-TS/website/contents/"
    "content/src/content/docs/docs"
)
DEFAULT_BASE_URL = "https://charlee-dev.github.io/effect-docs/"
DEFAULT_OUTPUT_DIR = Path("dist")

DOC_SUFFIXES = (".md", ".mdx")
DOCUMENT_SEPARATOR = "\n\n---\n\n"

INDEX_FILENAME = "index.html"
SITEMAP_FILENAME = "sitemap.xml"
ROBOTS_FILENAME = "robots.txt"
SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"

GITHUB_ACCEPT_HEADER = "application/vnd.github+json"
USER_AGENT = "mdpages/0.1"
THEME_STORAGE_KEY = "mdpages-theme"
MARKED_CDN_URL = "https://cdn.jsdelivr.net/npm/marked/marked.min.js"
