"""Markdown rendering and HTML sanitization capabilities used by the generator.

:class:`HtmlContentRenderer` converts Markdown to HTML with GitHub-flavoured
tables, line-break sensitive paragraphs, and fenced code blocks emitted as
escaped, language-tagged ``<pre><code>`` markup. :class:`HtmlSanitizer` then
cleans the result with bleach using a policy that admits embeddable media on
top of the Markdown output allow-list.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

import bleach
from markdown import Markdown

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
FENCED_CODE_OPEN_TAG = re.compile(r'<pre><code class="language-([A-Za-z0-9_+#.-]+)">')

MARKDOWN_TAGS = frozenset(
    {
        "a", "abbr", "acronym", "b", "blockquote", "br", "code", "dd", "del",
        "details", "div", "dl", "dt", "em", "figcaption", "figure", "h1", "h2",
        "h3", "h4", "h5", "h6", "hr", "i", "img", "ins", "kbd", "li", "mark",
        "ol", "p", "pre", "s", "samp", "small", "span", "strong", "sub",
        "summary", "sup", "table", "tbody", "td", "tfoot", "th", "thead", "tr",
        "u", "ul",
    }
)  # fmt: skip
MARKDOWN_ATTRIBUTES: dict[str, frozenset[str]] = {
    "*": frozenset({"id", "class", "title", "lang", "dir"}),
    "a": frozenset({"href", "name"}),
    "img": frozenset({"src", "alt", "width", "height", "loading"}),
    "ol": frozenset({"start", "type"}),
    "td": frozenset({"align", "colspan", "rowspan"}),
    "th": frozenset({"align", "colspan", "rowspan", "scope"}),
    "details": frozenset({"open"}),
}
MEDIA_TAGS = frozenset({"iframe", "video", "audio", "source"})
MEDIA_ATTRIBUTES: dict[str, frozenset[str]] = {
    "iframe": frozenset({"src", "width", "height", "allow", "loading"}),
    "video": frozenset({"src", "poster", "width", "height", "loop", "muted"}),
    "audio": frozenset({"src", "loop", "muted"}),
    "source": frozenset({"src", "type", "media"}),
}
EXTRA_ATTRIBUTES = frozenset(
    {"target", "rel", "frameborder", "allowfullscreen", "autoplay", "controls"}
)
ALLOWED_PROTOCOLS = frozenset(
    {
        "http", "https", "ftp", "ftps", "mailto", "tel", "callto", "sms", "cid",
        "xmpp", "matrix",
    }
)  # fmt: skip


class HtmlContentRenderer:
    """Render markdown into HTML with a consistent set of extensions."""

    def __init__(self, extensions: list[Extension | str] | None = None) -> None:
        """Initialize a renderer, optionally appending extra Markdown extensions.

        Parameters
        ----------
        extensions : list, optional
            Additional Python-Markdown extensions (instances or import names)
            loaded after the built-in set.
        """
        self._extra_extensions = list(extensions or [])

    def render(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "tables",
            "nl2br",
            "sane_lists",
            "toc",
            *self._extra_extensions,
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "fenced_code": {"lang_prefix": "language-"},
                "tables": {"use_align_attribute": True},
            },
        )
        return self._tag_fenced_blocks(md.convert(normalized))

    @staticmethod
    def _tag_fenced_blocks(html: str) -> str:
        """Repeat each fenced block's language class on its ``<pre>`` element."""

        def _repl(match: re.Match[str]) -> str:
            lang = match.group(1)
            return f'<pre class="language-{lang}"><code class="language-{lang}">'

        return FENCED_CODE_OPEN_TAG.sub(_repl, html)

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


@dc.dataclass(frozen=True, slots=True)
class SanitizerPolicy:
    """Tags, attributes, and protocols admitted by :class:`HtmlSanitizer`.

    Attributes
    ----------
    tags : frozenset[str]
        Base allow-list of element names.
    attributes : dict[str, frozenset[str]]
        Per-tag attribute allow-list; ``"*"`` applies to every tag.
    extra_tags : frozenset[str]
        Elements admitted on top of the base list (embeddable media).
    extra_attributes : frozenset[str]
        Attributes admitted on any allowed element.
    allow_data_attributes : bool
        Whether ``data-*`` attributes survive.
    protocols : frozenset[str]
        URL schemes permitted in ``href``/``src``; relative URLs always pass.
    """

    tags: frozenset[str] = MARKDOWN_TAGS
    attributes: dict[str, frozenset[str]] = dc.field(
        default_factory=lambda: {**MARKDOWN_ATTRIBUTES, **MEDIA_ATTRIBUTES}
    )
    extra_tags: frozenset[str] = MEDIA_TAGS
    extra_attributes: frozenset[str] = EXTRA_ATTRIBUTES
    allow_data_attributes: bool = True
    protocols: frozenset[str] = ALLOWED_PROTOCOLS

    @property
    def all_tags(self) -> frozenset[str]:
        """Return the base and extra tags combined."""
        return self.tags | self.extra_tags

    def allows(self, tag: str, name: str, value: str) -> bool:  # noqa: ARG002
        """Return True when ``name`` may appear on ``tag``; bleach attribute hook."""
        if self.allow_data_attributes and name.startswith("data-"):
            return True
        if name in self.extra_attributes:
            return True
        return name in self.attributes.get(tag, frozenset()) or name in (
            self.attributes.get("*", frozenset())
        )


class HtmlSanitizer:
    """Clean rendered HTML against a :class:`SanitizerPolicy` using bleach."""

    def __init__(self, policy: SanitizerPolicy | None = None) -> None:
        self.policy = policy or SanitizerPolicy()

    def sanitize(self, html: str, policy: SanitizerPolicy | None = None) -> str:
        """Return ``html`` with disallowed tags stripped and attributes filtered."""
        active = policy or self.policy
        return bleach.clean(
            html,
            tags=active.all_tags,
            attributes=active.allows,
            protocols=active.protocols,
            strip=True,
            strip_comments=True,
        )


__all__ = [
    "ALLOWED_PROTOCOLS",
    "EXTRA_ATTRIBUTES",
    "MEDIA_TAGS",
    "HtmlContentRenderer",
    "HtmlSanitizer",
    "SanitizerPolicy",
]
