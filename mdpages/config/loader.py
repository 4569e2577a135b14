"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mdpages._constants import DEFAULT_BASE_URL, DEFAULT_LISTING_URL, DEFAULT_OUTPUT_DIR

from .helpers import (
    _as_bool,
    _build_site_metadata,
    _normalize_keywords,
    _optional_delay,
    _optional_str,
    _parse_enum,
    _positive_float,
    _positive_int,
    _required_url,
)
from .models import DeploymentMode, PageLayout, SiteConfig, SiteConfigError

TOP_LEVEL_KEYS = frozenset(
    {
        "listing_url",
        "base_url",
        "output_dir",
        "token",
        "mode",
        "layout",
        "max_workers",
        "timeout",
        "crawl_delay",
        "sort_by_path",
        "suffixes",
        "site",
    }
)


def load_site_config(
    path: Path | None = None,
    *,
    overrides: typ.Mapping[str, typ.Any] | None = None,
) -> SiteConfig:
    """Resolve the build configuration from an optional YAML file and overrides.

    Parameters
    ----------
    path : Path or None, optional
        YAML site file. When ``None`` only built-in defaults and ``overrides``
        are used.
    overrides : Mapping[str, Any], optional
        Top-level values (typically from CLI flags or ``MDPAGES_*``
        environment variables) that take precedence over the YAML file.
        ``None`` values are ignored.

    Returns
    -------
    SiteConfig
        Validated configuration ready for :class:`~mdpages.pipeline.DocsPipeline`.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    SiteConfigError
        If the YAML is not a mapping or any value fails validation.

    Examples
    --------
    >>> from mdpages.config import load_site_config
    >>> config = load_site_config(overrides={"layout": "multi-page"})
    >>> config.layout.value
    'multi-page'
    """
    raw: dict[str, typ.Any] = {}
    if path is not None:
        raw.update(_read_yaml(path))
    for key, value in (overrides or {}).items():
        if value is not None:
            raw[key] = value
    return build_site_config(raw)


def build_site_config(raw: typ.Mapping[str, typ.Any]) -> SiteConfig:
    """Validate a merged mapping and convert it into a :class:`SiteConfig`."""
    unknown = sorted(set(raw) - TOP_LEVEL_KEYS)
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(unknown)}"
        raise SiteConfigError(msg)

    site_raw = raw.get("site") or {}
    if not isinstance(site_raw, dict):
        msg = "'site' must be a mapping."
        raise SiteConfigError(msg)

    suffixes = _normalize_keywords(raw.get("suffixes"))
    defaults = SiteConfig()
    return SiteConfig(
        listing_url=_required_url(
            "listing_url", raw.get("listing_url"), DEFAULT_LISTING_URL
        ),
        base_url=_required_url("base_url", raw.get("base_url"), DEFAULT_BASE_URL),
        output_dir=Path(raw.get("output_dir") or DEFAULT_OUTPUT_DIR),
        token=_optional_str(raw.get("token")),
        mode=_parse_enum(
            DeploymentMode, "mode", raw.get("mode"), DeploymentMode.BUILD_TIME
        ),
        layout=_parse_enum(PageLayout, "layout", raw.get("layout"), PageLayout.TOC),
        max_workers=_positive_int(
            "max_workers", raw.get("max_workers"), defaults.max_workers
        ),
        timeout=_positive_float("timeout", raw.get("timeout"), defaults.timeout),
        crawl_delay=_optional_delay(raw.get("crawl_delay")),
        sort_by_path=_as_bool(
            "sort_by_path", raw.get("sort_by_path"), default=defaults.sort_by_path
        ),
        suffixes=suffixes or defaults.suffixes,
        site=_build_site_metadata(site_raw),
    )


def _read_yaml(path: Path) -> dict[str, typ.Any]:
    """Return the top-level mapping stored in ``path``."""
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read configuration file '{path}': {exc}"
        raise SiteConfigError(msg) from exc
    except YAMLError as exc:
        msg = f"Configuration file '{path}' is not valid YAML: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    return dict(loaded)


__all__ = ["build_site_config", "load_site_config"]
