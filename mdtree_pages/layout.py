r"""Map source documents and assets onto the output tree.

Every path handled here is relative: sources are relative to the content root
and outputs are relative to the output root, both expressed as
:class:`~pathlib.PurePosixPath` values so the mapping never touches the
filesystem. :class:`SiteLayout` carries the two roots for one build and
qualifies relative paths when the generator needs real files.

Examples
--------
>>> from pathlib import PurePosixPath as P
>>> from mdtree_pages.layout import output_path_for
>>> str(output_path_for(P("README.md"), P("README.md")))
'index.html'
>>> str(output_path_for(P("docs/guide.md"), P("README.md")))
'docs/guide/index.html'
>>> str(output_path_for(P("docs/README.md"), P("README.md")))
'docs/index.html'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from pathlib import Path, PurePosixPath

from mdtree_pages._constants import (
    HOME_OUTPUT,
    INDEX_STEM,
    INDEX_STEMS,
    PAGE_FILENAME,
    README_FILENAME,
)
from mdtree_pages.errors import OutputCollisionError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

MARKDOWN_SUFFIX_PATTERN = re.compile(r"\.md$", re.IGNORECASE)
ROOT = PurePosixPath(".")


def is_markdown(path: str | PurePosixPath) -> bool:
    """Return True when ``path`` names a Markdown document."""
    return MARKDOWN_SUFFIX_PATTERN.search(str(path)) is not None


def output_path_for(source: PurePosixPath, home_md: PurePosixPath) -> PurePosixPath:
    """Return the output location of the Markdown document at ``source``.

    Parameters
    ----------
    source : PurePosixPath
        Document path relative to the content root. It may climb above the
        root with ``..`` segments; those are preserved.
    home_md : PurePosixPath
        Content-root relative path of the home document.

    Returns
    -------
    PurePosixPath
        ``index.html`` for the home document, ``<dir>/index.html`` for an
        ``index.md`` or ``README.md`` inside a directory, and
        ``[<dir>/]<name>/index.html`` for everything else.
    """
    if source == home_md:
        return PurePosixPath(HOME_OUTPUT)
    parent = source.parent
    name = MARKDOWN_SUFFIX_PATTERN.sub("", source.name)
    if parent != ROOT and name.lower() in INDEX_STEMS:
        return parent / PAGE_FILENAME
    return parent / name / PAGE_FILENAME


def output_path_for_asset(source: PurePosixPath) -> PurePosixPath:
    """Return the output location of a static asset; assets mirror the source tree."""
    return source


def route_for(
    source: PurePosixPath,
    home_md: PurePosixPath,
    routes: cabc.Mapping[PurePosixPath, PurePosixPath] | None = None,
) -> PurePosixPath:
    """Return the planned output of ``source``, else its path-only mapping.

    Documents that are not part of the planned routes (missing files, paths
    above the content root) fall back to :func:`output_path_for`.
    """
    if routes is not None and source in routes:
        return routes[source]
    return output_path_for(source, home_md)


@dc.dataclass(frozen=True, slots=True)
class SiteLayout:
    """The content and output roots of a single build plus its home document.

    Attributes
    ----------
    content_root : Path
        Directory holding the Markdown tree.
    output_root : Path
        Directory receiving the generated site.
    home_md : PurePosixPath
        Content-root relative path of the document served as ``index.html``.
    """

    content_root: Path
    output_root: Path
    home_md: PurePosixPath

    def output_for(self, source: PurePosixPath) -> PurePosixPath:
        """Return the output location of a content-relative Markdown path."""
        return output_path_for(source, self.home_md)

    @property
    def home_output(self) -> PurePosixPath:
        """Return the output location of the home document."""
        return self.output_for(self.home_md)

    def relative_source(self, path: Path) -> PurePosixPath:
        """Return ``path`` relative to the content root as a POSIX path."""
        return PurePosixPath(path.relative_to(self.content_root).as_posix())

    def source_file(self, source: PurePosixPath) -> Path:
        """Qualify a content-relative path against the content root."""
        return self.content_root.joinpath(*source.parts)

    def output_file(self, output: PurePosixPath) -> Path:
        """Qualify an output-relative path against the output root."""
        return self.output_root.joinpath(*output.parts)


def _is_readme(source: PurePosixPath) -> bool:
    return source.name.lower() == README_FILENAME


def _is_index(source: PurePosixPath) -> bool:
    return MARKDOWN_SUFFIX_PATTERN.sub("", source.name).lower() == INDEX_STEM


def plan_routes(
    sources: cabc.Iterable[PurePosixPath], home_md: PurePosixPath
) -> dict[PurePosixPath, PurePosixPath]:
    """Map each source document to its output location, rejecting collisions.

    A directory holding both ``README.md`` and ``index.md`` gives
    ``<dir>/index.html`` to the README, the same document a directory nav
    entry resolves to. The sibling ``index.md`` is written to
    ``<dir>/index/index.html`` instead.

    Raises
    ------
    OutputCollisionError
        If two distinct sources map to the same output location, for example
        ``guide.md`` next to ``guide/README.md``.
    """
    documents = list(sources)
    readme_dirs = {
        source.parent
        for source in documents
        if _is_readme(source) and source != home_md and source.parent != ROOT
    }
    routes: dict[PurePosixPath, PurePosixPath] = {}
    claimed: dict[PurePosixPath, PurePosixPath] = {}
    for source in documents:
        output = output_path_for(source, home_md)
        if source != home_md and source.parent in readme_dirs and _is_index(source):
            output = source.parent / INDEX_STEM / PAGE_FILENAME
        previous = claimed.setdefault(output, source)
        if previous != source:
            raise OutputCollisionError(str(output), str(previous), str(source))
        routes[source] = output
    return routes


__all__ = [
    "SiteLayout",
    "is_markdown",
    "output_path_for",
    "output_path_for_asset",
    "plan_routes",
    "route_for",
]
