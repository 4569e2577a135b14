r"""Prepare fetched Markdown documents for rendering.

This module strips YAML front matter and MDX module statements, extracts a
title from the first heading, and assigns each document an identifier derived
from its file name. Identifiers are unique within one build: collisions get a
numeric suffix in document order.

Example
-------
>>> from mdpages.markdown_parser import extract_title, identifier_from_name
>>> extract_title("# Getting Started\nBody")
'Getting Started'
>>> identifier_from_name("Error Handling.mdx")
'error-handling'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mdpages._constants import DOC_SUFFIXES

FRONT_MATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.+?)[ \t]*$", re.MULTILINE)
CLOSING_HASHES_PATTERN = re.compile(r"[ \t]+#+$")
MDX_STATEMENT_PATTERN = re.compile(r"^(?:import|export)\s[^\n]*(?:\n|\Z)", re.MULTILINE)


@dc.dataclass(slots=True, frozen=True)
class ParsedDocument:
    """A fetched document ready for Markdown conversion.

    Attributes
    ----------
    title : str
        Title taken from the first heading, front matter, or file name.
    identifier : str
        URL-safe identifier unique within the build.
    markdown : str
        Markdown body with front matter and MDX statements removed.
    path : str
        Repository path of the source file.
    """

    title: str
    identifier: str
    markdown: str
    path: str


def _clean_heading(text: str) -> str:
    """Return a cleaned heading, removing escapes, closing hashes and bold markers."""
    cleaned = CLOSING_HASHES_PATTERN.sub("", text.strip()).replace("\\", "").strip()
    if cleaned.startswith("**") and cleaned.endswith("**") and len(cleaned) > 4:
        cleaned = cleaned[2:-2].strip()
    return cleaned


def split_front_matter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Separate a leading YAML front matter block from the Markdown body.

    Malformed front matter is left in the body untouched.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text
    loader = YAML(typ="safe")
    try:
        loaded = loader.load(match.group(1))
    except YAMLError:
        return {}, text
    if not isinstance(loaded, dict):
        return {}, text
    return dict(loaded), text[match.end() :]


def _is_fence(line: str) -> bool:
    return line.lstrip().startswith(("```", "~~~"))


def strip_mdx_statements(text: str) -> str:
    """Remove top-level MDX ``import``/``export`` statements outside code fences.

    Multi-line ``import { a, b } from "x"`` statements are dropped up to the
    line carrying the ``from`` clause.
    """
    kept: list[str] = []
    in_fence = False
    in_statement = False
    for line in text.splitlines(keepends=True):
        if in_statement:
            if " from " in line or line.strip().startswith(("}", "from ")):
                in_statement = False
            continue
        if _is_fence(line):
            in_fence = not in_fence
        if not in_fence and MDX_STATEMENT_PATTERN.match(line):
            in_statement = line.rstrip().endswith("{")
            continue
        kept.append(line)
    return "".join(kept)


def _first_heading(text: str) -> tuple[int, str] | None:
    """Return the level and cleaned text of the first heading outside code fences."""
    in_fence = False
    for line in text.splitlines():
        if _is_fence(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        match = HEADING_PATTERN.match(line)
        if match:
            cleaned = _clean_heading(match.group(2))
            return (len(match.group(1)), cleaned) if cleaned else None
    return None


def extract_title(text: str) -> str | None:
    """Return the text of the first Markdown heading outside code fences, or None."""
    heading = _first_heading(text)
    return heading[1] if heading else None


def identifier_from_name(name: str) -> str:
    """Derive a lowercase hyphen-separated identifier from a file name."""
    stem = name.rsplit("/", 1)[-1]
    for suffix in DOC_SUFFIXES:
        if stem.endswith(suffix):
            stem = stem[: -len(suffix)]
            break
    slug = re.sub(r"[^a-z0-9]+", "-", stem.lower()).strip("-")
    return slug or "page"


def _unique_slug(base: str, used: set[str]) -> str:
    """Generate a unique slug, appending numeric suffixes when needed."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def _humanize(identifier: str) -> str:
    return identifier.replace("-", " ").strip().title() or "Untitled"


def parse_document(
    name: str, path: str, text: str, *, identifier: str | None = None
) -> ParsedDocument:
    """Prepare one document's Markdown and derive its title.

    Parameters
    ----------
    name : str
        Source file name; ``.mdx`` files have module statements removed.
    path : str
        Repository path recorded on the result.
    text : str
        Raw fetched text.
    identifier : str, optional
        Pre-assigned identifier; derived from ``name`` when omitted.

    Returns
    -------
    ParsedDocument
        Title, identifier and cleaned Markdown for the document.
    """
    front_matter, body = split_front_matter(text)
    is_mdx = name.endswith(".mdx")
    if is_mdx:
        body = strip_mdx_statements(body)
    identifier = identifier or identifier_from_name(name)
    fm_title = front_matter.get("title")
    fm_title = fm_title.strip() if isinstance(fm_title, str) else ""
    heading = _first_heading(body)

    # MDX pages keep their page title in front matter and start at ``##``.
    if fm_title and (heading is None or (is_mdx and heading[0] > 1)):
        title = fm_title
        body = f"# {title}\n\n{body.lstrip()}"
    elif is_mdx and fm_title:
        title = fm_title
    elif heading is not None:
        title = heading[1]
    else:
        title = _humanize(identifier)
    return ParsedDocument(title=title, identifier=identifier, markdown=body, path=path)


def parse_documents(
    sources: typ.Iterable[tuple[str, str, str]],
    *,
    reserved: typ.Iterable[str] = (),
) -> list[ParsedDocument]:
    """Parse ``(name, path, text)`` triples, assigning unique identifiers.

    Parameters
    ----------
    sources : Iterable[tuple[str, str, str]]
        Documents in presentation order.
    reserved : Iterable[str], optional
        Identifiers that must not be handed out (for example ``"index"`` when
        every document becomes its own HTML file).

    Returns
    -------
    list[ParsedDocument]
        Parsed documents in the input order.
    """
    used = set(reserved)
    parsed: list[ParsedDocument] = []
    for name, path, text in sources:
        identifier = _unique_slug(identifier_from_name(name), used)
        parsed.append(parse_document(name, path, text, identifier=identifier))
    return parsed


__all__ = [
    "ParsedDocument",
    "extract_title",
    "identifier_from_name",
    "parse_document",
    "parse_documents",
    "split_front_matter",
    "strip_mdx_statements",
]
