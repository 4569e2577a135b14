"""Utility helpers shared by the mdpages configuration loader."""

from __future__ import annotations

import enum
import typing as typ

from .models import SiteConfigError, SiteMetadata

E = typ.TypeVar("E", bound=enum.Enum)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _required_url(key: str, value: object | None, default: str) -> str:
    """Return a non-empty URL string, falling back to ``default`` when unset."""
    if value is None:
        return default
    text = str(value).strip()
    if not text:
        msg = f"'{key}' must not be empty."
        raise SiteConfigError(msg)
    return text


def _normalize_keywords(value: str | list[object] | tuple[object, ...] | None) -> tuple[str, ...]:
    """Normalize keyword definitions into a tuple of non-empty strings."""
    if isinstance(value, str):
        return tuple(segment.strip() for segment in value.split(",") if segment.strip())
    if isinstance(value, list | tuple):
        normalized: list[str] = []
        for segment in value:
            text = str(segment).strip()
            if text:
                normalized.append(text)
        return tuple(normalized)
    return ()


def _parse_enum(enum_type: type[E], key: str, value: object | None, default: E) -> E:
    """Look up ``value`` among the enum values, raising on unknown entries."""
    if value is None:
        return default
    if isinstance(value, enum_type):
        return value
    text = str(value).strip().lower().replace("_", "-")
    try:
        return enum_type(text)
    except ValueError as exc:
        allowed = ", ".join(str(member.value) for member in enum_type)
        msg = f"Unknown {key} '{value}'. Expected one of: {allowed}"
        raise SiteConfigError(msg) from exc


def _positive_int(key: str, value: object | None, default: int) -> int:
    """Return ``value`` as an int greater than zero."""
    if value is None:
        return default
    try:
        number = int(typ.cast("typ.Any", value))
    except (TypeError, ValueError) as exc:
        msg = f"'{key}' must be an integer, got {value!r}."
        raise SiteConfigError(msg) from exc
    if number < 1:
        msg = f"'{key}' must be at least 1, got {number}."
        raise SiteConfigError(msg)
    return number


def _positive_float(key: str, value: object | None, default: float) -> float:
    """Return ``value`` as a float greater than zero."""
    if value is None:
        return default
    try:
        number = float(typ.cast("typ.Any", value))
    except (TypeError, ValueError) as exc:
        msg = f"'{key}' must be a number, got {value!r}."
        raise SiteConfigError(msg) from exc
    if number <= 0:
        msg = f"'{key}' must be greater than zero, got {number}."
        raise SiteConfigError(msg)
    return number


def _optional_delay(value: object | None) -> int | None:
    """Return a non-negative crawl delay or None when unset."""
    if value is None or value == "":
        return None
    try:
        number = int(typ.cast("typ.Any", value))
    except (TypeError, ValueError) as exc:
        msg = f"'crawl_delay' must be an integer, got {value!r}."
        raise SiteConfigError(msg) from exc
    if number < 0:
        msg = f"'crawl_delay' must not be negative, got {number}."
        raise SiteConfigError(msg)
    return number


def _as_bool(key: str, value: object | None, *, default: bool) -> bool:
    """Interpret YAML or environment style booleans."""
    match value:
        case None:
            return default
        case bool():
            return value
        case str() if value.strip().lower() in {"1", "true", "yes", "on"}:
            return True
        case str() if value.strip().lower() in {"0", "false", "no", "off"}:
            return False
        case _:
            msg = f"'{key}' must be a boolean, got {value!r}."
            raise SiteConfigError(msg)


def _build_site_metadata(payload: typ.Mapping[str, typ.Any]) -> SiteMetadata:
    """Build a SiteMetadata instance from the provided mapping payload."""
    base = SiteMetadata()
    keywords = payload.get("keywords")
    return SiteMetadata(
        title=_optional_str(payload.get("title")) or base.title,
        description=_optional_str(payload.get("description")) or base.description,
        language=_optional_str(payload.get("language")) or base.language,
        keywords=base.keywords if keywords is None else _normalize_keywords(keywords),
        structured_data=_as_bool(
            "site.structured_data",
            payload.get("structured_data"),
            default=base.structured_data,
        ),
        theme_toggle=_as_bool(
            "site.theme_toggle", payload.get("theme_toggle"), default=base.theme_toggle
        ),
        pygments_style=_optional_str(payload.get("pygments_style"))
        or base.pygments_style,
    )
