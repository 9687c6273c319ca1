"""Behaviour tests for building a relocatable site from a Markdown tree.

The scenarios in ``site_build.feature`` write a small repository into a
temporary directory, run :class:`~mdtree_pages.generator.SiteGenerator` over
it, and inspect the written pages with BeautifulSoup. They cover the three
behaviours authors rely on most: nested pages linking home, configured
navigation titles, and images surviving the move to ``<name>/index.html``.

Usage
-----
Run ``pytest tests/bdd/test_site_build.py -v`` after installing the test
extra (``pip install -e .[test]``). No network access is required.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from mdtree_pages.generator import SiteGenerator

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "site_build.feature"
scenarios(FEATURE_FILE)

LOGO = b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 8 8"/>\n'

NAV_CONFIG = """
site_title: Fixture Site
home_md: README.md
nav:
  - docs: Docs
""".strip()


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _page(scenario_state: dict[str, object], relative: str) -> BeautifulSoup:
    output_root = typ.cast("Path", scenario_state["output_root"])
    html = (output_root / relative).read_text(encoding="utf-8")
    return BeautifulSoup(html, "html.parser")


@given("a content tree with a home README and a nested guide")
def given_nested_guide(make_site, scenario_state: dict[str, object]) -> None:
    """Write a home page and a guide two levels below it."""
    scenario_state["site"] = make_site(
        {
            "README.md": "# Home\n\nRead the [guide](docs/guide.md).\n",
            "docs/guide.md": "# Guide\n\nBack [home](../README.md).\n",
        }
    )


@given(parsers.parse('a content tree whose nav lists the docs directory as "{title}"'))
def given_nav_tree(make_site, scenario_state: dict[str, object], title: str) -> None:
    """Write a docs directory whose README heading differs from the nav title."""
    scenario_state["site"] = make_site(
        {
            "README.md": "# Home\n",
            "docs/README.md": "# Documentation\n",
            "docs/guide.md": "# Guide\n",
        },
        NAV_CONFIG.replace("Docs", title),
    )


@given("a content tree with an image referenced from the home page")
def given_image_tree(make_site, scenario_state: dict[str, object]) -> None:
    """Write a home page embedding ``./images/logo.svg``."""
    scenario_state["site"] = make_site(
        {
            "README.md": "# Home\n\n![Logo](./images/logo.svg)\n",
            "images/logo.svg": LOGO,
        }
    )


@when("I build the site")
def when_build(scenario_state: dict[str, object]) -> None:
    """Run the generator over the scenario's content tree."""
    config, layout = scenario_state["site"]  # type: ignore[misc]
    scenario_state["result"] = SiteGenerator(config, layout).run()
    scenario_state["output_root"] = layout.output_root


@then("the home page is written to index.html")
def then_home_written(scenario_state: dict[str, object]) -> None:
    """The home document lands at the root of the output."""
    assert (typ.cast("Path", scenario_state["output_root"]) / "index.html").is_file()


@then("the guide is written to docs/guide/index.html")
def then_guide_written(scenario_state: dict[str, object]) -> None:
    """The guide gets its own directory."""
    output_root = typ.cast("Path", scenario_state["output_root"])
    assert (output_root / "docs" / "guide" / "index.html").is_file()


@then(parsers.parse("the guide's home link points to \"{href}\""))
def then_guide_home_link(scenario_state: dict[str, object], href: str) -> None:
    """The authored ``../README.md`` link climbs out of the guide directory."""
    soup = _page(scenario_state, "docs/guide/index.html")
    link = soup.select_one("main.content a")
    assert link is not None
    assert link["href"] == href


@then(parsers.parse('every page shows a nav link titled "{title}"'))
def then_nav_title(scenario_state: dict[str, object], title: str) -> None:
    """The configured title is used instead of the README heading."""
    for relative in ("index.html", "docs/index.html", "docs/guide/index.html"):
        soup = _page(scenario_state, relative)
        titles = [a.get_text(strip=True) for a in soup.select("nav .site-links a")]
        assert titles == [title], relative


@then(parsers.parse('the nav link on the home page points to "{href}"'))
def then_nav_href(scenario_state: dict[str, object], href: str) -> None:
    """Directory entries link to the directory's index page."""
    soup = _page(scenario_state, "index.html")
    link = soup.select_one("nav .site-links a")
    assert link is not None
    assert link["href"] == href


@then(parsers.parse('the home page image source is "{src}"'))
def then_image_src(scenario_state: dict[str, object], src: str) -> None:
    """Asset references are relativized from the page's output directory."""
    soup = _page(scenario_state, "index.html")
    image = soup.select_one("main.content img")
    assert image is not None
    assert image["src"] == src


@then("the image is copied unchanged into the output")
def then_image_copied(scenario_state: dict[str, object]) -> None:
    """Non-Markdown files are mirrored byte for byte."""
    output_root = typ.cast("Path", scenario_state["output_root"])
    assert (output_root / "images" / "logo.svg").read_bytes() == LOGO
