"""Read pages, menus and terms for one content type from a CMS API.

Example
-------
.. code-block:: python

    from pathlib import Path
    from headless_frontend.mapper import WORDPRESS
    from headless_frontend.provider import RestDataProvider
    from headless_frontend.repository import ContentRepository
    from headless_frontend.schema import load_schema

    repository = ContentRepository(
        RestDataProvider("https://example.com/wp-json/wp/v2"),
        WORDPRESS,
        load_schema(Path("config/content.yaml")),
        "news",
    )
    pages = repository.list_pages(page=2)
    for page in pages:
        print(page.title)
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import DEFAULT_RESULTS_PER_PAGE
from .mapper.navigation import map_menu, map_terms

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .content.menus import Menu
    from .content.page import Page, PageCollection
    from .content.taxonomies import TermCollection
    from .content.url import UrlPattern
    from .mapper.profiles import CmsProfile
    from .provider import DataProvider
    from .schema.models import Schema

logger = logging.getLogger(__name__)

DEFAULT_MENUS_ENDPOINT = "menus"


class ContentRepository:
    """Fetch and map content of one content type.

    Parameters
    ----------
    provider : DataProvider
        Source of decoded API responses.
    profile : CmsProfile
        CMS settings and mapping table.
    schema : Schema
        Loaded content schema.
    content_type : str
        Name of the content type in ``schema``; its ``api_endpoint`` (or its
        name when unset) is the listing endpoint.
    url_pattern : UrlPattern, optional
        Pattern attached to mapped pages.
    menus_endpoint : str, optional
        Endpoint serving menus by id.
    """

    def __init__(
        self,
        provider: DataProvider,
        profile: CmsProfile,
        schema: Schema,
        content_type: str,
        *,
        url_pattern: UrlPattern | None = None,
        menus_endpoint: str = DEFAULT_MENUS_ENDPOINT,
    ) -> None:
        self.provider = provider
        self.profile = profile
        self.schema = schema
        self.content_type = schema.get_content_type(content_type)
        self.menus_endpoint = menus_endpoint.strip("/")
        self._item_mapper = profile.item_mapper(self.content_type, schema, url_pattern)
        self._collection_mapper = profile.collection_mapper(
            self.content_type, schema, url_pattern
        )

    @property
    def endpoint(self) -> str:
        return (self.content_type.api_endpoint or self.content_type.name).strip("/")

    def get_page(self, page_id: int | str) -> Page:
        """Return the item ``page_id`` of this content type."""
        response = self.provider.get(f"{self.endpoint}/{page_id}")
        return self._item_mapper.map(response.data)

    def list_pages(
        self,
        page: int = 1,
        results_per_page: int = DEFAULT_RESULTS_PER_PAGE,
        params: cabc.Mapping[str, typ.Any] | None = None,
    ) -> PageCollection:
        """Return one page of the content type listing with its pagination."""
        query: dict[str, typ.Any] = {
            "page": page,
            self.profile.per_page_param: results_per_page,
        }
        if params:
            query.update(params)
        response = self.provider.get(self.endpoint, query)
        pages = self._collection_mapper.map(
            response.data,
            self.profile.collection_root,
            page=page,
            results_per_page=results_per_page,
            response=response,
        )
        logger.info(
            "Listed %d %s items (page %d of %d)",
            len(pages),
            self.content_type.name,
            pages.pagination.page,
            pages.pagination.total_pages,
        )
        return pages

    def get_menu(self, menu_id: int | str) -> Menu:
        response = self.provider.get(f"{self.menus_endpoint}/{menu_id}")
        return map_menu(response.data)

    def list_terms(self, taxonomy: str) -> TermCollection:
        """Return every term of ``taxonomy`` (for example ``categories``)."""
        response = self.provider.get(taxonomy.strip("/"))
        return map_terms(response.data)


__all__ = ["ContentRepository"]
