"""Filesystem writes for generated artifacts."""

from __future__ import annotations

from pathlib import Path

from mdpages.errors import WriteError


def ensure_output_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if missing and return it."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create output directory '{path}': {exc}"
        raise WriteError(msg) from exc
    return path


def write_artifact(path: Path, content: str) -> Path:
    """Write ``content`` to ``path`` as UTF-8, raising :class:`WriteError` on failure."""
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot write '{path}': {exc}"
        raise WriteError(msg) from exc
    return path


__all__ = ["ensure_output_dir", "write_artifact"]
