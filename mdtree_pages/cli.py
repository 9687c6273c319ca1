"""Cyclopts CLI entrypoint for building static sites from Markdown trees.

The ``pages`` console script defined here renders every Markdown document
under a content root into a browsable HTML tree, and can list the
source-to-output routes without writing anything. Typical usage involves
running ``pages build`` locally or in CI from the repository root.

Examples
--------
Build the site for the current directory:

>>> from mdtree_pages.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory with four render workers:

>>> from mdtree_pages.cli import app
>>> app(["build", "--output-dir", "dist", "--jobs", "4"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import CONFIG_FILENAME, DEFAULT_OUTPUT_DIR, RENDER_DIR
from .config import SiteConfig, load_site_config
from .generator import SiteGenerator
from .generator.tree import find_markdown_files
from .layout import SiteLayout, plan_routes

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_layout(
    root: Path, config: Path | None, output_dir: Path | None
) -> tuple[SiteLayout, SiteConfig]:
    """Return the build layout and the loaded configuration for ``root``."""
    content_root = root.resolve()
    config_path = config or content_root / RENDER_DIR / CONFIG_FILENAME
    output_root = (output_dir or content_root / DEFAULT_OUTPUT_DIR).resolve()
    site_config = load_site_config(config_path, content_root=content_root)
    layout = SiteLayout(content_root, output_root, site_config.home_path)
    return layout, site_config


@app.command(help="Render the Markdown tree into a static HTML site.")
def build(
    *,
    root: typ.Annotated[
        Path, Parameter(help="Content root to render", env_var="INPUT_ROOT")
    ] = Path(),
    config: typ.Annotated[
        Path | None,
        Parameter(
            help="Path to site config (defaults to <root>/.render/config.yml)",
            env_var="INPUT_CONFIG",
        ),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(
            help="Output folder (defaults to <root>/_site)",
            env_var="INPUT_OUTPUT_DIR",
        ),
    ] = None,
    templates_dir: typ.Annotated[
        Path | None,
        Parameter(
            help="Template overrides (defaults to <root>/.render/template)",
            env_var="INPUT_TEMPLATES_DIR",
        ),
    ] = None,
    jobs: typ.Annotated[
        int, Parameter(help="Number of render worker threads", env_var="INPUT_JOBS")
    ] = 1,
    verbose: typ.Annotated[
        bool, Parameter(help="Log every page as it is built")
    ] = False,
) -> None:
    """Build the static site for a content root.

    Parameters
    ----------
    root : Path, optional
        Directory containing the Markdown tree; defaults to the current
        directory (overridable via ``INPUT_ROOT``).
    config : Path or None, optional
        Path to the YAML configuration; defaults to
        ``<root>/.render/config.yml``.
    output_dir : Path or None, optional
        Destination of the generated site; defaults to ``<root>/_site``.
    templates_dir : Path or None, optional
        Directory with ``page.html.jinja``, ``nav.html.jinja`` and
        ``style.css`` overrides; defaults to ``<root>/.render/template``.
    jobs : int, optional
        Render pages on this many worker threads.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes the site and prints one line per generated page.

    Raises
    ------
    SiteConfigError
        If the configuration is missing, unreadable, or incomplete.
    SiteBuildError
        If two documents collide or a document fails to render.
    """
    _configure_logging(verbose=verbose)
    layout, site_config = _resolve_layout(root, config, output_dir)
    generator = SiteGenerator(
        site_config, layout, templates_dir=templates_dir, jobs=jobs
    )
    result = generator.run()
    for path in result.pages:
        print(f"wrote {_format_path(path)}")
    print(f"output directory: {_format_path(layout.output_root)}")


@app.command(help="List where each Markdown document will be written.")
def routes(
    *,
    root: typ.Annotated[
        Path, Parameter(help="Content root to inspect", env_var="INPUT_ROOT")
    ] = Path(),
    config: typ.Annotated[
        Path | None,
        Parameter(
            help="Path to site config (defaults to <root>/.render/config.yml)",
            env_var="INPUT_CONFIG",
        ),
    ] = None,
) -> None:
    """Print ``source -> output`` for every Markdown document under ``root``."""
    layout, _site_config = _resolve_layout(root, config, None)
    sources = [
        layout.relative_source(path)
        for path in find_markdown_files(
            layout.content_root, exclude=frozenset({layout.output_root})
        )
    ]
    for source, output in plan_routes(sources, layout.home_md).items():
        print(f"{source} -> {output}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Returns
    -------
    None
        This function executes for its side effects of parsing CLI arguments
        and running the requested subcommand.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
