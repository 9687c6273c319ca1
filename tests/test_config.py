"""Unit tests for loading and validating the site configuration."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from mdtree_pages.config import NavItemConfig, SiteConfigError, load_site_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_load_site_config_parses_nav_items(tmp_path: Path) -> None:
    """Bare keys and single-key mappings both become NavItemConfig entries."""
    (tmp_path / "README.md").write_text("# Home\n", encoding="utf-8")
    path = _write(
        tmp_path,
        """
site_title: Example
home_md: ./README.md
nav:
  - README.md
  - docs: Documentation
  - https://example.com: Website
""",
    )
    config = load_site_config(path, content_root=tmp_path)
    assert config.site_title == "Example"
    assert config.home_path == PurePosixPath("README.md")
    assert config.home_basename == "README.md"
    assert config.nav == [
        NavItemConfig("README.md"),
        NavItemConfig("docs", "Documentation"),
        NavItemConfig("https://example.com", "Website"),
    ]


def test_empty_nav_is_allowed(tmp_path: Path) -> None:
    """``nav`` is required but may be an empty list."""
    path = _write(tmp_path, "site_title: S\nhome_md: README.md\nnav: []")
    assert load_site_config(path).nav == []


@pytest.mark.parametrize(
    ("text", "fragment"),
    [
        ("home_md: README.md\nnav: []", "site_title"),
        ("site_title: S\nnav: []", "home_md"),
        ("site_title: S\nhome_md: README.md", "nav"),
        ("site_title: 3\nhome_md: README.md\nnav: []", "site_title"),
        ("site_title: S\nhome_md: README.md\nnav: docs", "nav"),
        ("site_title: S\nhome_md: README.md\nnav:\n  - {a: 1, b: 2}", r"nav\[0\]"),
        ("site_title: S\nhome_md: README.txt\nnav: []", "Markdown"),
        ("- just\n- a list", "mapping"),
    ],
)
def test_invalid_configuration_is_rejected(
    tmp_path: Path, text: str, fragment: str
) -> None:
    """Missing or mistyped required keys raise SiteConfigError."""
    with pytest.raises(SiteConfigError, match=fragment):
        load_site_config(_write(tmp_path, text))


def test_missing_home_document_is_rejected(tmp_path: Path) -> None:
    """home_md must exist beneath the content root when one is given."""
    path = _write(tmp_path, "site_title: S\nhome_md: README.md\nnav: []")
    with pytest.raises(SiteConfigError, match="does not exist"):
        load_site_config(path, content_root=tmp_path)


def test_missing_config_file_is_a_config_error(tmp_path: Path) -> None:
    """An unreadable configuration file is reported as SiteConfigError."""
    with pytest.raises(SiteConfigError, match="could not be read"):
        load_site_config(tmp_path / "absent.yml")


def test_malformed_yaml_is_a_config_error(tmp_path: Path) -> None:
    """YAML syntax errors never yield partial data."""
    path = _write(tmp_path, "site_title: [unclosed\nhome_md: README.md")
    with pytest.raises(SiteConfigError, match="not valid YAML"):
        load_site_config(path)
