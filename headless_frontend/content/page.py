"""Mapped page entities, their SEO head data and paged page collections."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import html
import typing as typ

from bs4 import BeautifulSoup

from .._constants import ALLOWED_META
from ..pagination import Pagination
from .collections import SeekableCollection
from .fields import ContentFieldCollection

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .url import UrlPattern

PUBLISHED_STATUS = "publish"
DEFAULT_EXCERPT_LENGTH = 200


class MetaTagNotAllowedError(ValueError):
    """Raised when a meta tag outside the allow-list is added to a head."""


@dc.dataclass(slots=True)
class Head:
    """SEO title and meta tags for a page.

    Only the names in ``ALLOWED_META`` may be set. ``og:*`` tags render with a
    ``property`` attribute, all others with ``name``.

    Examples
    --------
    >>> head = Head(title="About us")
    >>> head.add_meta("og:title", "About us")
    >>> head.meta_html("og:title")
    '<meta property="og:title" content="About us">'
    """

    title: str = ""
    meta: dict[str, str] = dc.field(default_factory=dict)

    def add_meta(self, name: str, content: object) -> None:
        """Set the meta tag ``name``.

        Raises
        ------
        MetaTagNotAllowedError
            If ``name`` is not an allowed meta tag.
        """
        key = name.strip().lower()
        if key not in ALLOWED_META:
            allowed = ", ".join(ALLOWED_META)
            msg = f"Meta tag {name!r} is not allowed. Allowed tags: {allowed}"
            raise MetaTagNotAllowedError(msg)
        self.meta[key] = "" if content is None else str(content)

    def get_meta(self, name: str) -> str | None:
        return self.meta.get(name.strip().lower())

    def meta_html(self, name: str) -> str:
        """Return the ``<meta>`` element for ``name``, or ``""`` when unset."""
        content = self.get_meta(name)
        if content is None:
            return ""
        key = name.strip().lower()
        attribute = "property" if key.startswith("og:") else "name"
        return (
            f'<meta {attribute}="{html.escape(key)}" '
            f'content="{html.escape(content)}">'
        )

    def all_meta_html(self) -> str:
        return "\n".join(self.meta_html(name) for name in self.meta)

    def __str__(self) -> str:
        parts = []
        if self.title:
            parts.append(f"<title>{html.escape(self.title)}</title>")
        if self.meta:
            parts.append(self.all_meta_html())
        return "\n".join(parts)


@dc.dataclass(slots=True)
class Page:
    """A single mapped content item."""

    id: int | None = None
    title: str = ""
    url_slug: str = ""
    date_published: dt.datetime | None = None
    date_modified: dt.datetime | None = None
    status: str = ""
    template: str = ""
    excerpt: str = ""
    content: ContentFieldCollection = dc.field(default_factory=ContentFieldCollection)
    head: Head = dc.field(default_factory=Head)
    content_type: str | None = None
    url_pattern: UrlPattern | None = None

    @property
    def is_published(self) -> bool:
        return self.status == PUBLISHED_STATUS

    @property
    def url(self) -> str | None:
        """Return the page URL rendered from ``url_pattern``, when one is set."""
        if self.url_pattern is None:
            return None
        return self.url_pattern.render(self)

    def get_excerpt(self, limit: int = DEFAULT_EXCERPT_LENGTH) -> str:
        """Return the excerpt, or trimmed plain-text content when there is none."""
        if self.excerpt:
            return self.excerpt
        return trim_content(str(self.content), limit)

    def __str__(self) -> str:
        return str(self.content)


def trim_content(content: str, limit: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Strip HTML from ``content`` and cut it at a word boundary near ``limit``.

    >>> trim_content("<p>The quick brown fox</p>", 12)
    'The quick'
    """
    text = BeautifulSoup(content, "html.parser").get_text(" ", strip=True)
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    boundary = text.rfind(" ", 0, limit + 1)
    cut = text[:boundary] if boundary > 0 else text[:limit]
    return cut.strip()


class PageCollection(SeekableCollection[Page]):
    """Ordered pages from one listing response, sharing a :class:`Pagination`."""

    def __init__(
        self,
        pages: cabc.Iterable[Page] = (),
        pagination: Pagination | None = None,
    ) -> None:
        super().__init__(pages)
        self.pagination = pagination or Pagination()


__all__ = [
    "Head",
    "MetaTagNotAllowedError",
    "Page",
    "PageCollection",
    "trim_content",
]
