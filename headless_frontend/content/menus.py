"""Navigation menus with base-URL rewriting and active-trail marking.

Examples
--------
>>> from headless_frontend.content.menus import Menu, MenuItem
>>> about = MenuItem(id=1, label="About", url="http://old.com/about/")
>>> menu = Menu(id=2, name="Main")
>>> menu.add(about)
>>> menu.set_base_urls("http://old.com/", "http://new.com/")
>>> menu.set_active_items("/about")
>>> about.url, about.active
('http://new.com/about/', True)
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .collections import SeekableCollection
from .url import rewrite_base_url, url_ends_with_path

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class MenuItemCollection(SeekableCollection["MenuItem"]):
    """Ordered children of a menu or menu item."""

    def set_base_urls(self, old_base: str, new_base: str) -> None:
        for item in self:
            item.set_base_urls(old_base, new_base)

    def set_active_items(self, current_path: str) -> None:
        for item in self:
            item.set_active_items(current_path)

    def clear_active_items(self) -> None:
        for item in self:
            item.clear_active_items()

    def active_items(self) -> list[MenuItem]:
        """Return every active item in depth-first order, parents first."""
        found: list[MenuItem] = []
        for item in self:
            if item.active:
                found.append(item)
            found.extend(item.children.active_items())
        return found


@dc.dataclass(slots=True)
class MenuItem:
    """A navigation link with optional nested children."""

    id: int | str | None
    label: str
    url: str
    active: bool = False
    children: MenuItemCollection = dc.field(default_factory=MenuItemCollection)

    def add(self, child: MenuItem) -> None:
        self.children.add(child)

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    def set_base_urls(self, old_base: str, new_base: str) -> None:
        """Rewrite this item's URL and its descendants' from one base to another."""
        self.children.set_base_urls(old_base, new_base)
        self.url = rewrite_base_url(self.url, old_base, new_base)

    def set_active_items(self, current_path: str) -> None:
        """Mark this item and any descendant whose URL ends with ``current_path``.

        Flags already set are kept; use :meth:`clear_active_items` to reset.
        """
        self.children.set_active_items(current_path)
        if url_ends_with_path(self.url, current_path):
            self.active = True

    def clear_active_items(self) -> None:
        self.children.clear_active_items()
        self.active = False


@dc.dataclass(slots=True)
class Menu:
    """Root of a navigation tree."""

    id: int | str | None
    name: str
    slug: str = ""
    description: str = ""
    children: MenuItemCollection = dc.field(default_factory=MenuItemCollection)

    def add(self, item: MenuItem) -> None:
        self.children.add(item)

    def __iter__(self) -> cabc.Iterator[MenuItem]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def set_base_urls(self, old_base: str, new_base: str) -> None:
        self.children.set_base_urls(old_base, new_base)

    def set_active_items(self, current_path: str) -> None:
        self.children.set_active_items(current_path)

    def clear_active_items(self) -> None:
        self.children.clear_active_items()

    def active_items(self) -> list[MenuItem]:
        return self.children.active_items()


__all__ = ["Menu", "MenuItem", "MenuItemCollection"]
