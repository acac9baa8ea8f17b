"""Map decoded CMS responses into pages, collections, menus and terms.

Examples
--------
>>> from headless_frontend.mapper import CRAFTCMS
>>> mapper = CRAFTCMS.collection_mapper()
>>> pages = mapper.map(
...     {"data": [{"id": 1, "title": "News"}], "meta": {"total_results": 1}},
...     "data",
... )
>>> [page.title for page in pages], pages.pagination.total_pages
(['News'], 1)
"""

from .collection import PAGINATION_SOURCES, CollectionMapper, PaginationSource
from .item import MAPPING_TARGETS, ItemMapper, MappingTable
from .navigation import map_menu, map_menu_item, map_terms
from .paths import (
    CallableData,
    MapperError,
    PathExpression,
    Source,
    SourcePath,
    ValueTransform,
    as_source,
    datetime_value,
    integer_value,
)
from .profiles import CRAFTCMS, PROFILES, WORDPRESS, CmsProfile, get_profile

__all__ = [
    "CRAFTCMS",
    "MAPPING_TARGETS",
    "PAGINATION_SOURCES",
    "PROFILES",
    "WORDPRESS",
    "CallableData",
    "CmsProfile",
    "CollectionMapper",
    "ItemMapper",
    "MapperError",
    "MappingTable",
    "PaginationSource",
    "PathExpression",
    "Source",
    "SourcePath",
    "ValueTransform",
    "as_source",
    "datetime_value",
    "get_profile",
    "integer_value",
    "map_menu",
    "map_menu_item",
    "map_terms",
]
