"""Cyclopts CLI entrypoint for building documentation sites from GitHub Markdown.

The ``mdpages`` console script takes no required arguments: every option has
a default and can be supplied through an ``MDPAGES_*`` environment variable,
which is how CI jobs usually configure it. The command walks the configured
content listing, renders HTML into the output directory together with
``sitemap.xml`` and ``robots.txt``, and prints one ``wrote <path>`` line per
artifact.

Exit status is ``0`` on success and ``1`` when any stage fails; the error is
printed to stderr.

Examples
--------
Build with defaults (reads ``MDPAGES_*`` and ``GITHUB_TOKEN`` from the
environment):

>>> from mdpages.cli import main
>>> main([])  # doctest: +SKIP
0

Render one HTML file per document into ``public``:

>>> main(["--layout", "multi-page", "--output-dir", "public"])  # doctest: +SKIP
0
"""

from __future__ import annotations

import logging
import os
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import SiteConfigError, load_site_config
from .errors import MdPagesError
from .pipeline import DocsPipeline

app = App(name="mdpages", config=cyclopts.config.Env("MDPAGES_", command=False))  # type: ignore[unknown-argument]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(level: str) -> None:
    """Send log records to stderr at ``level``."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT, stream=sys.stderr, force=True)


@app.default
def build(
    *,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Optional YAML site file", env_var="MDPAGES_CONFIG"),
    ] = None,
    listing_url: typ.Annotated[
        str | None,
        Parameter(
            help="Content listing endpoint of the docs root",
            env_var="MDPAGES_LISTING_URL",
        ),
    ] = None,
    base_url: typ.Annotated[
        str | None,
        Parameter(help="Public URL of the generated site", env_var="MDPAGES_BASE_URL"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Output folder", env_var="MDPAGES_OUTPUT_DIR"),
    ] = None,
    mode: typ.Annotated[
        str | None,
        Parameter(
            help="Deployment mode: build-time or client-rendered",
            env_var="MDPAGES_MODE",
        ),
    ] = None,
    layout: typ.Annotated[
        str | None,
        Parameter(help="Layout: single, toc or multi-page", env_var="MDPAGES_LAYOUT"),
    ] = None,
    max_workers: typ.Annotated[
        int | None,
        Parameter(help="Concurrent fetch limit", env_var="MDPAGES_MAX_WORKERS"),
    ] = None,
    timeout: typ.Annotated[
        float | None,
        Parameter(help="Per-request timeout in seconds", env_var="MDPAGES_TIMEOUT"),
    ] = None,
    crawl_delay: typ.Annotated[
        int | None,
        Parameter(help="Crawl-delay for robots.txt", env_var="MDPAGES_CRAWL_DELAY"),
    ] = None,
    github_token: typ.Annotated[
        str | None,
        Parameter(
            help="Optional GitHub token (falls back to GITHUB_TOKEN)",
            env_var="MDPAGES_GITHUB_TOKEN",
        ),
    ] = None,
    log_level: typ.Annotated[
        str,
        Parameter(help="Logging level", env_var="MDPAGES_LOG_LEVEL"),
    ] = "INFO",
) -> int:
    """Build the documentation site and report what was written.

    Parameters
    ----------
    config : Path or None, optional
        YAML site file; values given on the command line or through the
        environment take precedence over it.
    listing_url : str or None, optional
        Repository contents endpoint for the documentation root.
    base_url : str or None, optional
        Public site URL used for canonical links, sitemap and robots.
    output_dir : Path or None, optional
        Destination folder; defaults to ``dist``.
    mode : str or None, optional
        ``build-time`` (default) or ``client-rendered``.
    layout : str or None, optional
        ``single``, ``toc`` (default) or ``multi-page``.
    max_workers : int or None, optional
        Upper bound on concurrent document downloads.
    timeout : float or None, optional
        Per-request timeout in seconds.
    crawl_delay : int or None, optional
        Adds a ``Crawl-delay`` line to ``robots.txt``.
    github_token : str or None, optional
        Token for authenticated requests. If ``None``, falls back to
        ``GITHUB_TOKEN`` or ``GH_TOKEN`` before making anonymous requests.
    log_level : str, optional
        Logging level for progress messages on stderr.

    Returns
    -------
    int
        ``0`` on success, ``1`` on any configuration or build error.
    """
    _configure_logging(log_level)
    token = github_token or os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN")
    overrides = {
        "listing_url": listing_url,
        "base_url": base_url,
        "output_dir": output_dir,
        "mode": mode,
        "layout": layout,
        "max_workers": max_workers,
        "timeout": timeout,
        "crawl_delay": crawl_delay,
        "token": token,
    }
    try:
        site_config = load_site_config(config, overrides=overrides)
        summary = DocsPipeline(site_config).run()
    except (MdPagesError, SiteConfigError, FileNotFoundError) as exc:
        cause = f" (caused by: {exc.__cause__})" if exc.__cause__ else ""
        print(f"error: {exc}{cause}", file=sys.stderr)
        return 1

    for path in summary.written:
        print(f"wrote {_format_path(path)}")
    print(
        f"{summary.document_count} documents, "
        f"{summary.html_bytes / 1024:.2f}KB of HTML"
    )
    return 0


def main(tokens: typ.Sequence[str] | None = None) -> int:
    """Invoke the Cyclopts application that powers the ``mdpages`` console command.

    Parameters
    ----------
    tokens : Sequence[str] or None, optional
        Command-line tokens; defaults to ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit status.
    """
    result = app(tokens)
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    sys.exit(main())
