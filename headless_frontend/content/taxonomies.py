"""Taxonomy terms and ordered term collections."""

from __future__ import annotations

import dataclasses as dc

from .collections import SeekableCollection
from .url import rewrite_base_url


@dc.dataclass(slots=True)
class Term:
    """A taxonomy term such as a category or tag."""

    id: int | str | None
    name: str
    slug: str = ""
    link: str = ""
    count: int = 0
    description: str = ""

    def __str__(self) -> str:
        return self.name


class TermCollection(SeekableCollection[Term]):
    """Ordered terms from one taxonomy listing."""

    def set_base_urls(self, old_base: str, new_base: str) -> None:
        """Rewrite each term link from ``old_base`` to ``new_base``."""
        for term in self:
            term.link = rewrite_base_url(term.link, old_base, new_base)

    def get_by_slug(self, slug: str) -> Term | None:
        for term in self:
            if term.slug == slug:
                return term
        return None


__all__ = ["Term", "TermCollection"]
