"""Load and validate the site configuration for Markdown tree builds.

This subpackage parses the content root's ``.render/config.yml`` file and
produces typed dataclasses (:class:`SiteConfig`, :class:`NavItemConfig`) that
the layout engine and generator consume. The primary entry point is
:func:`load_site_config`, which ensures ``site_title``, ``home_md`` and
``nav`` are present before any output is written.

Examples
--------
>>> from pathlib import Path
>>> from mdtree_pages.config import load_site_config
>>> site = load_site_config(Path(".render/config.yml"))  # doctest: +SKIP
>>> [item.key for item in site.nav]  # doctest: +SKIP
['README.md', 'docs', 'https://github.com/example/repo']
"""

from .loader import load_site_config
from .models import NavItemConfig, SiteConfig, SiteConfigError

__all__ = [
    "NavItemConfig",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]
