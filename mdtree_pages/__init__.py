"""Render a tree of Markdown documents into a static, relocatable HTML site.

This package exposes the CLI entry points used by ``uv run pages`` and the
layout engine that maps Markdown sources to ``<name>/index.html`` pages while
keeping every document-relative link valid.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from mdtree_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
