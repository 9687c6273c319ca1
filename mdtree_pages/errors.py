"""Exception hierarchy raised while loading configuration and building sites."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class SiteBuildError(RuntimeError):
    """Base class for failures that abort a site build."""


class OutputCollisionError(SiteBuildError):
    """Raised when two source documents map to the same output location."""

    def __init__(self, output: str, first: str, second: str) -> None:
        self.output = output
        self.sources = (first, second)
        msg = f"'{first}' and '{second}' both render to '{output}'."
        super().__init__(msg)


class PageRenderError(SiteBuildError):
    """Raised when a single document cannot be rendered.

    The original exception is chained as ``__cause__`` so the CLI traceback
    shows both the offending file and the underlying failure.
    """

    def __init__(self, source: Path, reason: str) -> None:
        self.source = source
        msg = f"Failed to render '{source}': {reason}"
        super().__init__(msg)


__all__ = [
    "OutputCollisionError",
    "PageRenderError",
    "SiteBuildError",
    "SiteConfigError",
]
