"""Behaviour tests for menu link rewriting and active-trail marking.

The scenarios map a WordPress menus API response, move its links from the CMS
host to the frontend host and mark the items matching the current request
path, as a view layer would before rendering navigation.

Usage
-----
Run ``pytest tests/bdd/test_menu_active_items.py -v`` to execute only these
scenarios.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from headless_frontend.mapper import map_menu

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from headless_frontend.content import Menu, MenuItem

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "menu_active_items.feature"
)
scenarios(FEATURE_FILE)

CMS_HOST = "https://cms.example.com/"
FRONTEND_HOST = "https://www.example.com"

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps.

    Returns
    -------
    ScenarioState
        Mutable dictionary used to exchange state between ``given``, ``when``,
        and ``then`` steps.
    """
    return {}


def _walk(items: cabc.Iterable[MenuItem]) -> cabc.Iterator[MenuItem]:
    for item in items:
        yield item
        yield from _walk(item.children)


@given("a WordPress menu with a nested archive link")
def given_menu(scenario_state: ScenarioState) -> None:
    """Map a menus API response holding a nested archive link.

    Parameters
    ----------
    scenario_state : ScenarioState
        Mutable dictionary receiving the mapped ``menu``.
    """
    scenario_state["menu"] = map_menu(
        {
            "ID": 2,
            "name": "Main",
            "slug": "main",
            "items": [
                {"ID": 1, "title": "Home", "url": CMS_HOST},
                {
                    "ID": 3,
                    "title": "News",
                    "url": f"{CMS_HOST}news/",
                    "children": [
                        {
                            "ID": 4,
                            "title": "Archive",
                            "url": f"{CMS_HOST}news/archive",
                        }
                    ],
                },
            ],
        }
    )


@when("the menu links are moved to the frontend host")
def when_rewrite(scenario_state: ScenarioState) -> None:
    """Rewrite every menu link from the CMS host to the frontend host."""
    menu = typ.cast("Menu", scenario_state["menu"])
    menu.set_base_urls(CMS_HOST, FRONTEND_HOST)


@when(parsers.parse('the current path is "{path}"'))
def when_current_path(scenario_state: ScenarioState, path: str) -> None:
    """Mark the items whose URL ends with ``path``.

    Parameters
    ----------
    scenario_state : ScenarioState
        Shared dictionary holding the ``menu``.
    path : str
        Request path of the page being viewed.
    """
    menu = typ.cast("Menu", scenario_state["menu"])
    menu.set_active_items(path)


@when("the active items are cleared")
def when_cleared(scenario_state: ScenarioState) -> None:
    """Reset every active flag in the menu."""
    menu = typ.cast("Menu", scenario_state["menu"])
    menu.clear_active_items()


@then(parsers.parse('the active items are "{labels}"'))
def then_active_items(scenario_state: ScenarioState, labels: str) -> None:
    """Check the active trail in depth-first order, parents first.

    Parameters
    ----------
    scenario_state : ScenarioState
        Shared dictionary holding the ``menu``.
    labels : str
        Comma-separated labels expected to be active.
    """
    menu = typ.cast("Menu", scenario_state["menu"])
    expected = [label.strip() for label in labels.split(",")]
    actual = [item.label for item in menu.active_items()]
    assert actual == expected, f"expected active items {expected}, got {actual}"


@then("no menu item is active")
def then_none_active(scenario_state: ScenarioState) -> None:
    """Check that clearing removed every active flag."""
    menu = typ.cast("Menu", scenario_state["menu"])
    assert not any(item.active for item in _walk(menu)), "expected no active items"


@then("every menu link starts with the frontend host")
def then_links_rewritten(scenario_state: ScenarioState) -> None:
    """Check that no link still points at the CMS host."""
    menu = typ.cast("Menu", scenario_state["menu"])
    urls = [item.url for item in _walk(menu)]
    assert all(url.startswith(FRONTEND_HOST) for url in urls), (
        f"expected rewritten links, got {urls}"
    )
