"""Shared fixtures for mdpages tests."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import pytest

from mdpages.config import SiteConfig, SiteMetadata

from .support import LISTING_ROOT

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    """Return a build config rooted in a per-test output directory."""
    return SiteConfig(
        listing_url=LISTING_ROOT,
        base_url="https://example.com/",
        output_dir=tmp_path / "dist",
        max_workers=4,
        timeout=5.0,
        site=SiteMetadata(
            title="Acme Docs",
            description="Guides for Acme.",
            keywords=("acme", "docs"),
        ),
    )


@pytest.fixture
def make_config(
    site_config: SiteConfig,
) -> typ.Callable[..., SiteConfig]:
    """Return a helper deriving configs from ``site_config`` with overrides."""

    def _make(**changes: typ.Any) -> SiteConfig:
        return dc.replace(site_config, **changes)

    return _make
