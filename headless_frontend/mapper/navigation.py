"""Build menus and taxonomy terms from decoded CMS data."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ..content.menus import Menu, MenuItem
from ..content.taxonomies import Term, TermCollection
from .paths import MapperError


def map_menu(data: typ.Any) -> Menu:
    """Return a menu from a WordPress menus API response.

    The response holds ``ID`` (or ``id``), ``name``, ``slug``,
    ``description`` and ``items``; each item holds ``ID``/``id``, ``title``,
    ``url`` and optional nested ``children``.

    Raises
    ------
    MapperError
        If the response or one of its items is not a mapping.
    """
    if not isinstance(data, cabc.Mapping):
        msg = f"Cannot map a {type(data).__name__} into a menu"
        raise MapperError(msg)
    menu = Menu(
        id=_first(data, "ID", "id"),
        name=str(data.get("name") or ""),
        slug=str(data.get("slug") or ""),
        description=str(data.get("description") or ""),
    )
    for item in data.get("items") or []:
        menu.add(map_menu_item(item))
    return menu


def map_menu_item(data: typ.Any) -> MenuItem:
    """Return a menu item and its children."""
    if not isinstance(data, cabc.Mapping):
        msg = f"Cannot map a {type(data).__name__} into a menu item"
        raise MapperError(msg)
    item = MenuItem(
        id=_first(data, "ID", "id"),
        label=str(_first(data, "title", "label") or ""),
        url=str(data.get("url") or ""),
    )
    for child in data.get("children") or []:
        item.add(map_menu_item(child))
    return item


def map_terms(data: typ.Any) -> TermCollection:
    """Return terms from a taxonomy listing such as ``/wp/v2/categories``."""
    if isinstance(data, str) or not isinstance(data, cabc.Sequence):
        msg = f"Cannot map a {type(data).__name__} into taxonomy terms"
        raise MapperError(msg)
    terms = TermCollection()
    for record in data:
        if not isinstance(record, cabc.Mapping):
            msg = f"Cannot map a {type(record).__name__} into a taxonomy term"
            raise MapperError(msg)
        try:
            count = int(record.get("count") or 0)
        except (TypeError, ValueError) as exc:
            msg = f"Invalid term count {record.get('count')!r}"
            raise MapperError(msg) from exc
        terms.add(
            Term(
                id=_first(record, "id", "ID", "term_id"),
                name=str(record.get("name") or ""),
                slug=str(record.get("slug") or ""),
                link=str(record.get("link") or ""),
                count=count,
                description=str(record.get("description") or ""),
            )
        )
    return terms


def _first(data: cabc.Mapping[str, typ.Any], *keys: str) -> typ.Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


__all__ = ["map_menu", "map_menu_item", "map_terms"]
