"""Typed dataclasses describing the site configuration structure."""

from __future__ import annotations

import dataclasses as dc
from pathlib import PurePosixPath

from mdtree_pages.errors import SiteConfigError


@dc.dataclass(frozen=True, slots=True)
class NavItemConfig:
    """One ``nav`` element: a markdown path, directory, or absolute URL."""

    key: str
    title: str | None = None


@dc.dataclass(slots=True)
class SiteConfig:
    """Process-wide build configuration read from ``.render/config.yml``."""

    site_title: str
    home_md: str
    nav: list[NavItemConfig] = dc.field(default_factory=list)

    @property
    def home_path(self) -> PurePosixPath:
        """Return ``home_md`` as a normalized content-root relative path."""
        return PurePosixPath(self.home_md.replace("\\", "/").removeprefix("./"))

    @property
    def home_basename(self) -> str:
        """Return the filename of the home document."""
        return self.home_path.name


__all__ = ["NavItemConfig", "SiteConfig", "SiteConfigError"]
