"""High-level orchestration for turning a Markdown tree into a static site.

This module exposes :class:`SiteGenerator`, which consumes a loaded
:class:`~mdtree_pages.config.SiteConfig` and a
:class:`~mdtree_pages.layout.SiteLayout`, mirrors the content tree into the
output root, resolves the navigation menu once, and writes one
``index.html`` per Markdown document using the shared Jinja templates.

Example
-------
>>> from pathlib import Path
>>> from mdtree_pages.config import load_site_config
>>> from mdtree_pages.generator import SiteGenerator
>>> from mdtree_pages.layout import SiteLayout
>>> root = Path("docs-repo")
>>> config = load_site_config(root / ".render/config.yml")  # doctest: +SKIP
>>> layout = SiteLayout(root, root / "_site", config.home_path)  # doctest: +SKIP
>>> SiteGenerator(config, layout).run().pages  # doctest: +SKIP
[PosixPath('docs-repo/_site/index.html'), ...]
"""

from __future__ import annotations

import concurrent.futures as cf
import hashlib
import logging
import typing as typ
from pathlib import Path, PurePosixPath

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, select_autoescape

from mdtree_pages._constants import (
    ASSETS_DIR,
    NAV_TEMPLATE,
    PAGE_TEMPLATE,
    RENDER_DIR,
    STYLESHEET_SOURCE,
    STYLESHEET_TEMPLATE,
    TEMPLATE_DIRNAME,
)
from mdtree_pages.errors import PageRenderError
from mdtree_pages.generator.link_rewriter import rewrite_html_references
from mdtree_pages.generator.models import BuildResult, PageModel
from mdtree_pages.generator.renderer import HtmlContentRenderer, HtmlSanitizer
from mdtree_pages.generator.tree import copy_tree, find_markdown_files
from mdtree_pages.layout import plan_routes
from mdtree_pages.markdown_parser import read_document
from mdtree_pages.navigation import build_navigation, home_href, render_nav_links
from mdtree_pages.references import relative_href

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from mdtree_pages.config import SiteConfig
    from mdtree_pages.generator.models import MarkdownRenderer, Sanitizer
    from mdtree_pages.layout import SiteLayout
    from mdtree_pages.navigation import NavEntry

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


class SiteGenerator:
    """Render every Markdown document under the content root into the output root."""

    def __init__(
        self,
        config: SiteConfig,
        layout: SiteLayout,
        *,
        renderer: MarkdownRenderer | None = None,
        sanitizer: Sanitizer | None = None,
        templates_dir: Path | None = None,
        jobs: int = 1,
    ) -> None:
        """Initialize the generator with configuration, roots, and capabilities.

        Parameters
        ----------
        config : SiteConfig
            Loaded site configuration (title, home document, navigation).
        layout : SiteLayout
            Content root, output root, and home document of this build.
        renderer : MarkdownRenderer, optional
            Markdown-to-HTML capability; defaults to :class:`HtmlContentRenderer`.
        sanitizer : Sanitizer, optional
            HTML cleaning capability; defaults to :class:`HtmlSanitizer`.
        templates_dir : Path, optional
            Directory whose templates and ``style.css`` override the packaged
            defaults; defaults to ``<content root>/.render/template``.
        jobs : int, optional
            Number of worker threads rendering pages; ``1`` renders inline.
        """
        self.config = config
        self.layout = layout
        self.renderer = renderer or HtmlContentRenderer()
        self.sanitizer = sanitizer or HtmlSanitizer()
        self.templates_dir = templates_dir or (
            layout.content_root / RENDER_DIR / TEMPLATE_DIRNAME
        )
        self.jobs = max(1, jobs)
        self.env = Environment(
            loader=ChoiceLoader(
                [
                    FileSystemLoader(str(self.templates_dir)),
                    FileSystemLoader(str(DEFAULT_TEMPLATES_DIR)),
                ]
            ),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.page_template = self.env.get_template(PAGE_TEMPLATE)
        self.nav_template = self.env.get_template(NAV_TEMPLATE)

    def run(self) -> BuildResult:
        """Build the whole site.

        Returns
        -------
        BuildResult
            Written page paths, number of mirrored files, the stylesheet
            location, and the resolved navigation.

        Raises
        ------
        OutputCollisionError
            Raised before anything is written when two documents share an
            output location.
        PageRenderError
            Raised when any document fails to read, render, or write; the
            original exception is chained.
        """
        content_root = self.layout.content_root
        excluded = self._excluded_dirs()
        sources = [
            self.layout.relative_source(path)
            for path in find_markdown_files(content_root, exclude=excluded)
        ]
        routes = plan_routes(sources, self.layout.home_md)

        self.layout.output_root.mkdir(parents=True, exist_ok=True)
        stylesheet = self._copy_stylesheet()
        copied = copy_tree(content_root, self.layout.output_root, exclude=excluded)
        navigation = build_navigation(self.config.nav, self.layout, routes)

        pages = self._render_all(routes, navigation, stylesheet)
        logger.info(
            "Built %d pages and mirrored %d files into %s",
            len(pages),
            copied,
            self.layout.output_root,
        )
        if navigation:
            logger.info("Pages in nav: %s", ", ".join(e.title for e in navigation))
        else:
            logger.info("No nav configured")
        return BuildResult(
            pages=pages,
            assets_copied=copied,
            stylesheet=stylesheet,
            navigation=navigation,
        )

    def render_page(
        self,
        source: PurePosixPath,
        output: PurePosixPath,
        navigation: list[NavEntry],
        stylesheet: PurePosixPath,
        routes: cabc.Mapping[PurePosixPath, PurePosixPath] | None = None,
    ) -> Path:
        """Render the document at ``source`` and write it to ``output``."""
        try:
            destination = self._render_page(
                source, output, navigation, stylesheet, routes
            )
        except Exception as exc:  # noqa: BLE001 - surfaced with the source path
            raise PageRenderError(self.layout.source_file(source), str(exc)) from exc
        logger.debug("Built %s -> %s", source, output)
        return destination

    def _render_page(
        self,
        source: PurePosixPath,
        output: PurePosixPath,
        navigation: list[NavEntry],
        stylesheet: PurePosixPath,
        routes: cabc.Mapping[PurePosixPath, PurePosixPath] | None,
    ) -> Path:
        document = read_document(self.layout.source_file(source))
        html = self.renderer.render(document.body)
        html = self.sanitizer.sanitize(html)
        html = rewrite_html_references(html, source, self.layout.home_md, routes)

        fallback = document.heading or self.config.site_title
        page_dir = output.parent
        model = PageModel(
            title=document.meta_str("title") or fallback,
            description=document.meta_str("description") or fallback,
            site_title=self.config.site_title,
            home_href=home_href(self.layout, output),
            nav_links=render_nav_links(navigation, output),
            stylesheet_href=relative_href(page_dir, stylesheet),
            content=html,
        )
        rendered = self.page_template.render(
            title=model.title,
            description=model.description,
            nav_html=self._render_nav(model) if navigation else "",
            stylesheet_href=model.stylesheet_href,
            content=model.content,
            site_title=model.site_title,
            home_href=model.home_href,
            nav_links=model.nav_links,
        )
        destination = self.layout.output_file(output)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(rendered, encoding="utf-8")
        return destination

    def _render_nav(self, model: PageModel) -> str:
        return self.nav_template.render(
            site_title=model.site_title,
            home_href=model.home_href,
            nav_links=model.nav_links,
        )

    def _render_all(
        self,
        routes: dict[PurePosixPath, PurePosixPath],
        navigation: list[NavEntry],
        stylesheet: PurePosixPath,
    ) -> list[Path]:
        """Render every routed page, inline or on a thread pool."""
        if self.jobs == 1:
            return [
                self.render_page(source, output, navigation, stylesheet, routes)
                for source, output in routes.items()
            ]
        with cf.ThreadPoolExecutor(max_workers=self.jobs) as pool:
            futures = [
                pool.submit(
                    self.render_page, source, output, navigation, stylesheet, routes
                )
                for source, output in routes.items()
            ]
            return [future.result() for future in futures]

    def _copy_stylesheet(self) -> PurePosixPath:
        """Copy the content-hashed stylesheet into the assets directory."""
        source = self.templates_dir / STYLESHEET_SOURCE
        if not source.is_file():
            source = DEFAULT_TEMPLATES_DIR / STYLESHEET_SOURCE
        css = source.read_bytes()
        digest = hashlib.sha1(css, usedforsecurity=False).hexdigest()[:8]
        stylesheet = PurePosixPath(ASSETS_DIR) / STYLESHEET_TEMPLATE.format(
            digest=digest
        )
        destination = self.layout.output_file(stylesheet)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(css)
        return stylesheet

    def _excluded_dirs(self) -> frozenset[Path]:
        """Return directories skipped during traversal besides the reserved names."""
        return frozenset({self.layout.output_root.resolve()})


__all__ = ["DEFAULT_TEMPLATES_DIR", "SiteGenerator"]
