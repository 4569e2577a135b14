"""Convert Markdown into HTML with highlighted code blocks."""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter
from pygments.util import ClassNotFound

from mdpages.errors import RenderError

CODE_BLOCK_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)^\1[ \t]*$", re.DOTALL | re.MULTILINE
)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?([ \t,][^\r\n]*)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists")


class HtmlContentRenderer:
    """Render Markdown with consistent code highlighting.

    Raw HTML blocks pass through unchanged and no autolinking extension is
    enabled, so bare URLs stay plain text.
    """

    def __init__(self, pygments_style: str = "friendly") -> None:
        """Initialize a renderer with the Pygments style used for code blocks.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults
            to ``"friendly"``.

        Raises
        ------
        RenderError
            If ``pygments_style`` is not a known Pygments style.
        """
        self.pygments_style = pygments_style
        try:
            self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        except ClassNotFound as exc:
            msg = f"Unknown Pygments style '{pygments_style}'"
            raise RenderError(msg) from exc

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render Markdown into HTML using the configured extensions.

        Raises
        ------
        RenderError
            If the converter fails on the input.
        """
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        md = Markdown(
            extensions=list(MARKDOWN_EXTENSIONS),
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        try:
            html = md.convert(normalized)
        except Exception as exc:  # noqa: BLE001 - converter errors are not typed
            msg = f"Markdown conversion failed: {exc}"
            raise RenderError(msg) from exc
        return self._annotate_codehilite(html, normalized)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(2) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        """Dedent fences and drop info-string extras such as ``twoslash`` or ``,no_run``."""
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer"]
