"""Exception hierarchy for the documentation build pipeline.

Every stage raises its own subclass of :class:`MdPagesError` so the CLI can
catch one type at the top level, report the failing stage, and exit with a
non-zero status. None of these errors are retried.
"""

from __future__ import annotations


class MdPagesError(RuntimeError):
    """Base class for unrecoverable build failures."""


class ListingError(MdPagesError):
    """Raised when a directory listing request fails."""


class FetchError(MdPagesError):
    """Raised when document content cannot be retrieved."""


class RenderError(MdPagesError):
    """Raised when Markdown cannot be converted into HTML."""


class WriteError(MdPagesError):
    """Raised when an output artifact cannot be written to disk."""


__all__ = ["FetchError", "ListingError", "MdPagesError", "RenderError", "WriteError"]
