"""Resolve the configured navigation menu and relativize it per page.

Navigation is resolved once per build by :func:`build_navigation`, which turns
each configured ``nav`` item into a :class:`NavEntry` with a display title and
an output location. :func:`render_nav_links` then produces the hrefs a given
page needs, computed from that page's own output directory so the menu works
from any base path.

Directory keys resolve to the directory's ``README.md`` or, failing that, its
``index.md``. A directory key that resolves to neither is dropped with a
warning rather than emitted as a broken link.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import PurePosixPath

from mdtree_pages._constants import DIRECTORY_INDEX_CANDIDATES, HOME_FALLBACK_TITLE
from mdtree_pages.layout import (
    MARKDOWN_SUFFIX_PATTERN,
    SiteLayout,
    is_markdown,
    route_for,
)
from mdtree_pages.markdown_parser import read_document
from mdtree_pages.references import is_external, page_href

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from mdtree_pages.config import NavItemConfig

    Routes = cabc.Mapping[PurePosixPath, PurePosixPath]

logger = logging.getLogger(__name__)

NavKind = typ.Literal["internal", "external"]


@dc.dataclass(frozen=True, slots=True)
class NavEntry:
    """A resolved navigation entry shared by every page of the build.

    Attributes
    ----------
    title : str
        Display title.
    kind : {"internal", "external"}
        Whether the entry points into the generated site.
    href : str or None
        Verbatim URL for external entries.
    source : PurePosixPath or None
        Content-root relative Markdown path for internal entries.
    output : PurePosixPath or None
        Output-root relative page location for internal entries.
    """

    title: str
    kind: NavKind
    href: str | None = None
    source: PurePosixPath | None = None
    output: PurePosixPath | None = None


@dc.dataclass(frozen=True, slots=True)
class NavLink:
    """A navigation entry as seen from one particular page."""

    title: str
    href: str
    external: bool = False
    current: bool = False


def _normalize_key(key: str) -> PurePosixPath:
    """Return a nav key as a content-root relative path."""
    text = key.replace("\\", "/").strip()
    return PurePosixPath(text.lstrip("/") or ".")


def derive_title(
    source: PurePosixPath, layout: SiteLayout, configured: str | None = None
) -> str:
    """Return the display title for the document at ``source``.

    The configured title wins, then the document's first level-one heading,
    then ``"Home"`` for the home document, then the filename without its
    extension. Unreadable documents fall through to the filename fallbacks.
    """
    if configured:
        return configured
    try:
        heading = read_document(layout.source_file(source)).heading
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read '%s' for a nav title: %s", source, exc)
        heading = None
    if heading:
        return heading
    if source == layout.home_md:
        return HOME_FALLBACK_TITLE
    return MARKDOWN_SUFFIX_PATTERN.sub("", source.name)


def _internal_entry(
    source: PurePosixPath,
    layout: SiteLayout,
    configured: str | None,
    routes: Routes | None,
) -> NavEntry:
    return NavEntry(
        title=derive_title(source, layout, configured),
        kind="internal",
        source=source,
        output=route_for(source, layout.home_md, routes),
    )


def _resolve_directory(
    directory: PurePosixPath,
    layout: SiteLayout,
    configured: str | None,
    routes: Routes | None,
) -> NavEntry | None:
    """Resolve a directory key to its README.md or index.md, in that order."""
    if not layout.source_file(directory).is_dir():
        return None
    for candidate in DIRECTORY_INDEX_CANDIDATES:
        source = directory / candidate
        if layout.source_file(source).is_file():
            return _internal_entry(source, layout, configured, routes)
    return None


def resolve_nav_item(
    item: NavItemConfig, layout: SiteLayout, routes: Routes | None = None
) -> NavEntry | None:
    """Resolve a single configured nav item, or return None when it cannot be."""
    if is_external(item.key):
        return NavEntry(title=item.title or item.key, kind="external", href=item.key)
    key_path = _normalize_key(item.key)
    if is_markdown(item.key):
        return _internal_entry(key_path, layout, item.title, routes)
    return _resolve_directory(key_path, layout, item.title, routes)


def build_navigation(
    items: cabc.Iterable[NavItemConfig],
    layout: SiteLayout,
    routes: Routes | None = None,
) -> list[NavEntry]:
    """Resolve configured nav items, in declaration order, into NavEntry objects.

    Parameters
    ----------
    items : Iterable[NavItemConfig]
        The ``nav`` list from the site configuration.
    layout : SiteLayout
        Roots and home document of the current build.
    routes : Mapping, optional
        Planned source-to-output routes; entries outside it use the
        path-only mapping.

    Returns
    -------
    list[NavEntry]
        Resolved entries. Directory keys without a ``README.md`` or
        ``index.md`` are omitted and logged.
    """
    entries: list[NavEntry] = []
    for item in items:
        entry = resolve_nav_item(item, layout, routes)
        if entry is None:
            logger.warning(
                "Dropping nav entry '%s': no README.md or index.md found", item.key
            )
            continue
        entries.append(entry)
    return entries


def render_nav_links(
    entries: cabc.Iterable[NavEntry], page_output: PurePosixPath
) -> list[NavLink]:
    """Return the nav links for the page written at ``page_output``."""
    page_dir = page_output.parent
    links: list[NavLink] = []
    for entry in entries:
        if entry.kind == "external" or entry.output is None:
            links.append(NavLink(entry.title, entry.href or "", external=True))
            continue
        links.append(
            NavLink(
                entry.title,
                page_href(page_dir, entry.output),
                current=entry.output == page_output,
            )
        )
    return links


def home_href(layout: SiteLayout, page_output: PurePosixPath) -> str:
    """Return the link from the page at ``page_output`` to the site root."""
    return page_href(page_output.parent, layout.home_output)


__all__ = [
    "NavEntry",
    "NavLink",
    "build_navigation",
    "derive_title",
    "home_href",
    "render_nav_links",
    "resolve_nav_item",
]
