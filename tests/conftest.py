"""Shared fixtures for building throwaway Markdown trees on disk."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from mdtree_pages.config import load_site_config
from mdtree_pages.layout import SiteLayout

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from mdtree_pages.config import SiteConfig

DEFAULT_CONFIG = """
site_title: Fixture Site
home_md: README.md
nav: []
""".strip()


def write_tree(root: Path, files: cabc.Mapping[str, str | bytes]) -> None:
    """Write ``files`` (relative path -> contents) beneath ``root``."""
    for rel, contents in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(contents, bytes):
            path.write_bytes(contents)
        else:
            path.write_text(contents, encoding="utf-8")


@pytest.fixture
def make_site(
    tmp_path: Path,
) -> cabc.Callable[..., tuple[SiteConfig, SiteLayout]]:
    """Return a factory writing a content tree plus config and loading both."""

    def _make(
        files: cabc.Mapping[str, str | bytes], config: str = DEFAULT_CONFIG
    ) -> tuple[SiteConfig, SiteLayout]:
        content_root = tmp_path / "repo"
        write_tree(content_root, {**files, ".render/config.yml": config + "\n"})
        site_config = load_site_config(
            content_root / ".render" / "config.yml", content_root=content_root
        )
        layout = SiteLayout(content_root, content_root / "_site", site_config.home_path)
        return site_config, layout

    return _make
