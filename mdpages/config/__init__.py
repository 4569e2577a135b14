"""Resolve and validate the mdpages build configuration.

This subpackage merges built-in defaults, an optional YAML site file and
CLI/environment overrides into a single :class:`SiteConfig`. The config is
built once at startup and passed explicitly into the pipeline; nothing below
the CLI reads environment variables.

Examples
--------
>>> from pathlib import Path
>>> from mdpages.config import load_site_config
>>> config = load_site_config(Path("mdpages.yaml"))  # doctest: +SKIP
>>> config.output_dir  # doctest: +SKIP
PosixPath('dist')
"""

from .loader import build_site_config, load_site_config
from .models import DeploymentMode, PageLayout, SiteConfig, SiteConfigError, SiteMetadata

__all__ = [
    "DeploymentMode",
    "PageLayout",
    "SiteConfig",
    "SiteConfigError",
    "SiteMetadata",
    "build_site_config",
    "load_site_config",
]
