r"""Rewrite document-relative references so they stay valid in the output tree.

Authors write links the way they work when browsing the raw Markdown tree:
relative to the *source* document's directory, pointing at ``.md`` files and
assets. Because every page is emitted as ``<name>/index.html``, those links
must be recomputed relative to the page's *output* directory. External URLs,
``mailto:``/``tel:`` links and fragment-only anchors are never touched.

Examples
--------
>>> from pathlib import PurePosixPath as P
>>> from mdtree_pages.references import rewrite_reference
>>> rewrite_reference("c.md?x=1#sec", P("a/b.md"), P("README.md"))
'../c?x=1#sec'
>>> rewrite_reference("../README.md", P("docs/guide.md"), P("README.md"))
'../..'
>>> rewrite_reference("https://example.com/a.md", P("a/b.md"), P("README.md"))
'https://example.com/a.md'
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import re
import typing as typ
from pathlib import PurePosixPath
from urllib.parse import unquote

from mdtree_pages.layout import is_markdown, output_path_for_asset, route_for

if typ.TYPE_CHECKING:
    import collections.abc as cabc

ABSOLUTE_URL_PATTERN = re.compile(r"^([a-z][a-z0-9+.-]*:)?//", re.IGNORECASE)
CONTACT_SCHEME_PATTERN = re.compile(
    r"^(mailto|tel|sms|callto|xmpp|cid|matrix):", re.IGNORECASE
)
INDEX_SUFFIX_PATTERN = re.compile(r"(?:^|/)index(?:\.html)?$", re.IGNORECASE)
HTML_SUFFIX_PATTERN = re.compile(r"\.html$", re.IGNORECASE)
CURRENT_DIR = "."
PARENT_DIR = ".."


@dc.dataclass(frozen=True, slots=True)
class Reference:
    """A link target split into path, query, and fragment.

    Attributes
    ----------
    path : str
        Everything before the query and fragment; may be empty.
    query : str
        The query string including its leading ``?``, or ``""``.
    fragment : str
        The fragment including its leading ``#``, or ``""``.
    """

    path: str
    query: str = ""
    fragment: str = ""

    def __str__(self) -> str:
        return f"{self.path}{self.query}{self.fragment}"


def is_external(value: str) -> bool:
    """Return True for absolute URLs (with or without scheme) and contact links."""
    return bool(
        ABSOLUTE_URL_PATTERN.match(value) or CONTACT_SCHEME_PATTERN.match(value)
    )


def split_reference(value: str) -> Reference:
    """Split off the fragment first, then the query within the remainder."""
    remainder, hash_sep, fragment = value.partition("#")
    path, query_sep, query = remainder.partition("?")
    return Reference(
        path=path,
        query=f"?{query}" if query_sep else "",
        fragment=f"#{fragment}" if hash_sep else "",
    )


def resolve_against(path: str, source: PurePosixPath) -> PurePosixPath:
    """Resolve a percent-encoded reference path against the source document.

    A leading ``/`` is taken relative to the content root. Paths that climb
    above the root keep their ``..`` segments.
    """
    decoded = unquote(path)
    if decoded.startswith("/"):
        joined = decoded.lstrip("/")
    else:
        joined = posixpath.join(str(source.parent), decoded)
    return PurePosixPath(posixpath.normpath(joined or CURRENT_DIR))


def relative_href(from_dir: PurePosixPath, target: PurePosixPath) -> str:
    """Return a POSIX relative path from the ``from_dir`` directory to ``target``.

    Both paths are normalized and relative to the same root; ``from_dir`` is
    a page directory and therefore never climbs above that root.
    """
    start = from_dir.parts
    dest = target.parts
    common = 0
    while common < min(len(start), len(dest)) and start[common] == dest[common]:
        common += 1
    segments = [PARENT_DIR] * (len(start) - common) + list(dest[common:])
    return "/".join(segments) or CURRENT_DIR


def to_extensionless(href: str) -> str:
    """Strip a trailing ``index``/``index.html`` segment and any ``.html`` suffix."""
    trimmed = INDEX_SUFFIX_PATTERN.sub("", href, count=1)
    return HTML_SUFFIX_PATTERN.sub("", trimmed, count=1)


def page_href(from_dir: PurePosixPath, target: PurePosixPath) -> str:
    """Return the extensionless link from ``from_dir`` to the page at ``target``."""
    return to_extensionless(relative_href(from_dir, target)) or CURRENT_DIR


def rewrite_reference(
    reference: str | None,
    source: PurePosixPath,
    home_md: PurePosixPath,
    routes: cabc.Mapping[PurePosixPath, PurePosixPath] | None = None,
) -> str | None:
    """Return ``reference`` relativized for the output page of ``source``.

    Parameters
    ----------
    reference : str or None
        Raw ``href``/``src`` value found in the rendered document.
    source : PurePosixPath
        Content-root relative path of the document containing the reference.
    home_md : PurePosixPath
        Content-root relative path of the home document.
    routes : Mapping, optional
        Planned source-to-output routes of the build; documents missing from
        it use the path-only mapping.

    Returns
    -------
    str or None
        The rewritten reference. Empty values, external URLs, fragment-only
        anchors, and query-only references are returned unchanged.
    """
    if not reference or reference.startswith("#") or is_external(reference):
        return reference
    parts = split_reference(reference)
    if not parts.path:
        return reference

    page_dir = route_for(source, home_md, routes).parent
    target_source = resolve_against(parts.path, source)
    if is_markdown(parts.path):
        href = page_href(page_dir, route_for(target_source, home_md, routes))
    else:
        href = relative_href(page_dir, output_path_for_asset(target_source))
    return str(dc.replace(parts, path=href))


__all__ = [
    "Reference",
    "is_external",
    "page_href",
    "relative_href",
    "resolve_against",
    "rewrite_reference",
    "split_reference",
    "to_extensionless",
]
