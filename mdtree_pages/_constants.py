"""Common literal values used across mdtree_pages.

These constants keep filenames, reserved directory names, and default paths
centralized so the layout engine, generator, CLI, and tests import the same
values without drifting. Intended for internal use within the mdtree_pages
package.

Examples
--------
>>> from mdtree_pages import _constants
>>> _constants.STYLESHEET_TEMPLATE.format(digest="0a1b2c3d")
'style.0a1b2c3d.css'
>>> ".git" in _constants.RESERVED_NAMES
True
"""

MARKDOWN_SUFFIX = ".md"
HOME_OUTPUT = "index.html"
PAGE_FILENAME = "index.html"
INDEX_STEM = "index"
README_FILENAME = "readme.md"
INDEX_STEMS = frozenset({INDEX_STEM, "readme"})
DIRECTORY_INDEX_CANDIDATES = ("README.md", "index.md")
RESERVED_NAMES = frozenset({".git", ".github", ".render", "_site", "node_modules"})
HIDDEN_PREFIX = "."

RENDER_DIR = ".render"
CONFIG_FILENAME = "config.yml"
TEMPLATE_DIRNAME = "template"
DEFAULT_OUTPUT_DIR = "_site"

PAGE_TEMPLATE = "page.html.jinja"
NAV_TEMPLATE = "nav.html.jinja"
STYLESHEET_SOURCE = "style.css"
ASSETS_DIR = "assets"
STYLESHEET_TEMPLATE = "style.{digest}.css"
HOME_FALLBACK_TITLE = "Home"
