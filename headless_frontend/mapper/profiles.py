"""Per-CMS mapping profiles for WordPress and Craft CMS.

A profile bundles what differs between CMS integrations: the mapping table,
the flexible content discriminator key, where pagination totals live and the
largest page size the API accepts. Everything else is shared.

Examples
--------
>>> from headless_frontend.mapper.profiles import WORDPRESS
>>> mapper = WORDPRESS.item_mapper()
>>> page = mapper.map({"id": 7, "title": {"rendered": "About"}, "slug": "about"})
>>> page.id, page.title, page.head.get_meta("og:title")
(7, 'About', 'About')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .._constants import (
    CRAFTCMS_COMPONENT_KEY,
    WORDPRESS_COMPONENT_KEY,
    WORDPRESS_MAX_PER_PAGE,
    WORDPRESS_TOTAL_HEADER,
)
from ..resolver import ContentFieldResolver
from .collection import CollectionMapper
from .item import ItemMapper, MappingTable
from .paths import CallableData, datetime_value, integer_value

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..content.url import UrlPattern
    from ..schema.models import ContentType, Schema
    from .collection import PaginationSource


def wordpress_mapping(mapper: ItemMapper) -> MappingTable:
    """Mapping for the WordPress REST API with legacy post-object fallbacks.

    Custom fields are read from the ACF ``acf`` block when a content type is
    set on the mapper.
    """
    table: dict[str, typ.Any] = {
        "id": integer_value("[id]", "[ID]"),
        "title": ["[title][rendered]", "[post_title]", "[post_name]"],
        "date_published": datetime_value("[date]", "[post_date]"),
        "date_modified": datetime_value("[modified]", "[post_modified]"),
        "status": ["[status]", "[post_status]"],
        "url_slug": ["[slug]", "[post_name]"],
        "excerpt": ["[excerpt][rendered]", "[post_excerpt]"],
        "template": ["[template]", "[page_template]"],
        "head.title": ["[title][rendered]", "[post_title]"],
        "head.meta": CallableData(mapper.map_head_meta),
    }
    if mapper.content_type is not None:
        table["content"] = CallableData(
            lambda item: mapper.map_content_fields(item.get("acf"))
        )
    return table


def craftcms_mapping(mapper: ItemMapper) -> MappingTable:
    """Mapping for Craft CMS entries, whose custom fields sit on the entry."""
    table: dict[str, typ.Any] = {
        "id": integer_value("[id]"),
        "title": "[title]",
        "url_slug": "[slug]",
        "date_published": datetime_value("[postDate]"),
        "date_modified": datetime_value("[dateUpdated]"),
        "status": "[status]",
        "head.title": "[title]",
        "head.meta": CallableData(mapper.map_head_meta),
    }
    if mapper.content_type is not None:
        table["content"] = CallableData(mapper.map_content_fields)
    return table


@dc.dataclass(frozen=True, slots=True)
class CmsProfile:
    """Settings and mapping table for one CMS integration."""

    name: str
    discriminator_key: str
    mapping_factory: cabc.Callable[[ItemMapper], MappingTable]
    pagination_source: PaginationSource = "headers"
    total_header: str = WORDPRESS_TOTAL_HEADER
    max_per_page: int | None = None
    collection_root: str | None = None
    per_page_param: str = "per_page"

    def resolver(self, schema: Schema | None = None) -> ContentFieldResolver:
        return ContentFieldResolver(self.discriminator_key, schema=schema)

    def item_mapper(
        self,
        content_type: ContentType | None = None,
        schema: Schema | None = None,
        url_pattern: UrlPattern | None = None,
    ) -> ItemMapper:
        """Return an item mapper configured for this CMS."""
        mapper = ItemMapper(
            content_type=content_type,
            resolver=self.resolver(schema),
            url_pattern=url_pattern,
        )
        mapper.set_mapping(self.mapping_factory(mapper))
        return mapper

    def collection_mapper(
        self,
        content_type: ContentType | None = None,
        schema: Schema | None = None,
        url_pattern: UrlPattern | None = None,
    ) -> CollectionMapper:
        """Return a collection mapper configured for this CMS."""
        return CollectionMapper(
            self.item_mapper(content_type, schema, url_pattern),
            self.max_per_page,
            pagination_source=self.pagination_source,
            total_header=self.total_header,
        )


WORDPRESS = CmsProfile(
    name="wordpress",
    discriminator_key=WORDPRESS_COMPONENT_KEY,
    mapping_factory=wordpress_mapping,
    pagination_source="headers",
    max_per_page=WORDPRESS_MAX_PER_PAGE,
)

CRAFTCMS = CmsProfile(
    name="craftcms",
    discriminator_key=CRAFTCMS_COMPONENT_KEY,
    mapping_factory=craftcms_mapping,
    pagination_source="body",
    collection_root="data",
    per_page_param="limit",
)

PROFILES: dict[str, CmsProfile] = {
    WORDPRESS.name: WORDPRESS,
    CRAFTCMS.name: CRAFTCMS,
}


def get_profile(name: str) -> CmsProfile:
    """Return the profile registered under ``name``.

    Raises
    ------
    KeyError
        If no profile has that name.
    """
    try:
        return PROFILES[name.strip().lower()]
    except KeyError as exc:
        msg = f"Unknown CMS profile '{name}'. Known profiles: {', '.join(PROFILES)}"
        raise KeyError(msg) from exc


__all__ = [
    "CRAFTCMS",
    "PROFILES",
    "WORDPRESS",
    "CmsProfile",
    "craftcms_mapping",
    "get_profile",
    "wordpress_mapping",
]
