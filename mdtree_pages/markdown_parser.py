r"""Split Markdown documents into frontmatter metadata and body text.

This module powers title and description derivation for the site generator:
it peels the optional YAML frontmatter block off the top of a document and
finds the first level-one ATX heading, returning dataclasses the generator
and navigation builder consume.

Example
-------
>>> from mdtree_pages.markdown_parser import parse_document
>>> doc = parse_document("---\ntitle: Guide\n---\n# Getting started\nBody")
>>> doc.metadata["title"], doc.heading
('Guide', 'Getting started')
"""

from __future__ import annotations

import dataclasses as dc
import io
import logging
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)
H1_PATTERN = re.compile(r"^[ ]{0,3}#[ \t]+(.+?)[ \t]*$", re.MULTILINE)
CLOSING_HASHES_PATTERN = re.compile(r"(?:^|[ \t]+)#+$")


@dc.dataclass(slots=True)
class ParsedDocument:
    """Frontmatter metadata and Markdown body of a single document.

    Attributes
    ----------
    metadata : dict[str, Any]
        Frontmatter mapping; empty when the document has none or it is invalid.
    body : str
        Markdown with the frontmatter block removed.
    """

    metadata: dict[str, typ.Any]
    body: str

    @property
    def heading(self) -> str | None:
        """Return the first level-one heading of the body, if any."""
        return first_heading(self.body)

    def meta_str(self, key: str) -> str | None:
        """Return a stripped, non-empty string frontmatter value or None."""
        value = self.metadata.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None


def _load_frontmatter(block: str) -> dict[str, typ.Any]:
    loader = YAML(typ="safe")
    try:
        loaded = loader.load(io.StringIO(block))
    except YAMLError as exc:
        logger.warning("Ignoring malformed frontmatter: %s", exc)
        return {}
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        logger.warning(
            "Ignoring frontmatter that is not a mapping: %s", type(loaded).__name__
        )
        return {}
    return dict(loaded)


def parse_document(text: str) -> ParsedDocument:
    """Split ``text`` into frontmatter metadata and Markdown body.

    Parameters
    ----------
    text : str
        Raw Markdown, optionally starting with a ``---`` delimited YAML block.

    Returns
    -------
    ParsedDocument
        The parsed metadata and the remaining body. Malformed or non-mapping
        frontmatter yields empty metadata; the block is still removed.
    """
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return ParsedDocument(metadata={}, body=text)
    return ParsedDocument(
        metadata=_load_frontmatter(match.group(1)), body=text[match.end() :]
    )


def read_document(path: Path) -> ParsedDocument:
    """Read and parse the Markdown document at ``path``."""
    return parse_document(path.read_text(encoding="utf-8"))


def first_heading(markdown_text: str) -> str | None:
    """Return the text of the first level-one ATX heading, or None."""
    match = H1_PATTERN.search(markdown_text)
    if not match:
        return None
    title = CLOSING_HASHES_PATTERN.sub("", match.group(1).rstrip()).strip()
    return title or None


__all__ = ["ParsedDocument", "first_heading", "parse_document", "read_document"]
