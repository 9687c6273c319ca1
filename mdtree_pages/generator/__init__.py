"""Utilities for rendering, sanitizing, rewriting, and writing site pages."""

from .link_rewriter import HtmlReferenceRewriter, rewrite_html_references
from .models import BuildResult, PageModel
from .page_generator import SiteGenerator
from .renderer import HtmlContentRenderer, HtmlSanitizer, SanitizerPolicy

__all__ = [
    "BuildResult",
    "HtmlContentRenderer",
    "HtmlReferenceRewriter",
    "HtmlSanitizer",
    "PageModel",
    "SanitizerPolicy",
    "SiteGenerator",
    "rewrite_html_references",
]
