"""Generate static documentation pages from Markdown hosted on GitHub.

This package exposes the CLI entry point used by the ``mdpages`` console
script. A run walks a repository content listing, fetches every Markdown
document, renders HTML, and writes ``sitemap.xml`` and ``robots.txt`` next to
the pages.

Exports
-------
- ``app``: Cyclopts application entry.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from mdpages import main
>>> main([])  # doctest: +SKIP
0
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
