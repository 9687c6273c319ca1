"""Rewrite ``href``/``src`` attributes in sanitized HTML for the output tree."""

from __future__ import annotations

import typing as typ

from bs4 import BeautifulSoup

from mdtree_pages.references import rewrite_reference

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import PurePosixPath

REFERENCE_ATTRIBUTES: tuple[tuple[str, str], ...] = (
    ("a", "href"),
    ("img", "src"),
    ("video", "src"),
    ("audio", "src"),
    ("source", "src"),
    ("link", "href"),
    ("script", "src"),
)


class HtmlReferenceRewriter:
    """Relativize every local reference in one document's rendered HTML.

    References are interpreted the way the author wrote them: relative to the
    source Markdown file. The rewritten values point at the corresponding
    locations in the output tree, relative to the document's own output page.
    """

    def __init__(
        self,
        source: PurePosixPath,
        home_md: PurePosixPath,
        routes: cabc.Mapping[PurePosixPath, PurePosixPath] | None = None,
    ) -> None:
        self.source = source
        self.home_md = home_md
        self.routes = routes

    def rewrite(self, html: str) -> str:
        """Return ``html`` with each reference attribute rewritten in place."""
        if not html:
            return html
        soup = BeautifulSoup(html, "html.parser")
        for tag_name, attribute in REFERENCE_ATTRIBUTES:
            for element in soup.find_all(tag_name, attrs={attribute: True}):
                target = element.get(attribute)
                rewritten = self._rewrite(target)
                if rewritten is not None and rewritten != target:
                    element[attribute] = rewritten
        return str(soup)

    def _rewrite(self, target: object) -> str | None:
        """Rewrite a single attribute value; non-string values are left alone."""
        if not isinstance(target, str):
            return None
        return rewrite_reference(target, self.source, self.home_md, self.routes)


def rewrite_html_references(
    html: str,
    source: PurePosixPath,
    home_md: PurePosixPath,
    routes: cabc.Mapping[PurePosixPath, PurePosixPath] | None = None,
) -> str:
    """Rewrite the references in ``html`` for the document at ``source``."""
    return HtmlReferenceRewriter(source, home_md, routes).rewrite(html)


__all__ = ["REFERENCE_ATTRIBUTES", "HtmlReferenceRewriter", "rewrite_html_references"]
