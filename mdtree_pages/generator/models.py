"""Shared dataclasses and capability protocols used by the site generator."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path, PurePosixPath

    from mdtree_pages.navigation import NavEntry, NavLink


class MarkdownRenderer(typ.Protocol):
    """Capability that converts Markdown text into HTML."""

    def render(self, text: str) -> str:
        """Return the HTML rendering of ``text``."""
        ...


class Sanitizer(typ.Protocol):
    """Capability that removes unsafe markup from rendered HTML."""

    def sanitize(self, html: str) -> str:
        """Return a safe version of ``html``."""
        ...


@dc.dataclass(slots=True)
class PageModel:
    """Structured data passed to the page template.

    Attributes
    ----------
    title : str
        Page title; frontmatter ``title`` wins, then the first heading, then
        the site title.
    description : str
        Meta description, resolved with the same fallbacks as ``title``.
    site_title : str
        Configured site title, linked to the home page.
    home_href : str
        Relative link from this page to the site root.
    nav_links : list[NavLink]
        Navigation entries relativized for this page.
    stylesheet_href : str
        Relative link to the content-hashed stylesheet.
    content : str
        Sanitized, reference-rewritten body HTML.
    """

    title: str
    description: str
    site_title: str
    home_href: str
    nav_links: list[NavLink]
    stylesheet_href: str
    content: str


@dc.dataclass(slots=True)
class BuildResult:
    """Summary of a completed build."""

    pages: list[Path]
    assets_copied: int
    stylesheet: PurePosixPath
    navigation: list[NavEntry]


__all__ = ["BuildResult", "MarkdownRenderer", "PageModel", "Sanitizer"]
