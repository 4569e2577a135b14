"""Jinja environment shared by the page and sitemap builders."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATES_DIR = Path(__file__).parent / "templates"


def build_environment(templates_dir: Path | None = None) -> Environment:
    """Return an environment that autoescapes ``*.html.jinja`` and ``*.xml.jinja``.

    Plain-text templates such as ``robots.txt.jinja`` are rendered verbatim.
    """
    return Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml", "html.jinja", "xml.jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


__all__ = ["TEMPLATES_DIR", "build_environment"]
