"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mdtree_pages._constants import MARKDOWN_SUFFIX

from .helpers import _parse_nav, _require_str
from .models import SiteConfig, SiteConfigError


def load_site_config(path: Path, *, content_root: Path | None = None) -> SiteConfig:
    """Load the YAML configuration describing the site title, home page, and nav.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file (usually
        ``.render/config.yml`` inside the content root).
    content_root : Path, optional
        Root of the Markdown tree. When provided, ``home_md`` must name an
        existing Markdown file beneath it.

    Returns
    -------
    SiteConfig
        Parsed configuration with the navigation entries in declaration order.

    Raises
    ------
    SiteConfigError
        If the file cannot be read or parsed, the top-level structure is not a
        mapping, a required key is missing or has the wrong type, or the home
        document does not exist.

    Examples
    --------
    >>> from pathlib import Path
    >>> from mdtree_pages.config import load_site_config
    >>> config = load_site_config(Path(".render/config.yml"))  # doctest: +SKIP
    >>> config.home_md  # doctest: +SKIP
    'README.md'
    """
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except OSError as exc:
        msg = f"Configuration file '{path}' could not be read: {exc}"
        raise SiteConfigError(msg) from exc
    except YAMLError as exc:
        msg = f"Configuration file '{path}' is not valid YAML: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    config = SiteConfig(
        site_title=_require_str(raw, "site_title"),
        home_md=_require_str(raw, "home_md"),
        nav=_parse_nav(raw.get("nav")),
    )
    if not config.home_basename.lower().endswith(MARKDOWN_SUFFIX):
        msg = f"home_md must name a Markdown file; got '{config.home_md}'."
        raise SiteConfigError(msg)
    if content_root is not None and not (content_root / config.home_path).is_file():
        msg = f"home_md '{config.home_md}' does not exist under '{content_root}'."
        raise SiteConfigError(msg)
    return config


__all__ = ["load_site_config"]
