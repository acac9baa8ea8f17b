"""Map a paged CMS listing into a :class:`PageCollection`."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from .._constants import DEFAULT_RESULTS_PER_PAGE, WORDPRESS_TOTAL_HEADER
from ..content.page import PageCollection
from ..pagination import Pagination, PaginationError
from .paths import MapperError, PathExpression

if typ.TYPE_CHECKING:
    from ..pagination import HeaderSource
    from .item import ItemMapper

logger = logging.getLogger(__name__)

PaginationSource = typ.Literal["headers", "body"]
PAGINATION_SOURCES: tuple[str, ...] = typ.get_args(PaginationSource)


class CollectionMapper:
    """Map each item of a listing and attach its pagination.

    Parameters
    ----------
    item_mapper : ItemMapper
        Mapper applied to every item in the listing.
    max_per_page : int, optional
        Largest page size the CMS accepts; larger requests are rejected.
    pagination_source : {"headers", "body"}, optional
        Where the total result count is read from by default.
    total_header : str, optional
        Response header carrying the total when reading from headers.
    """

    def __init__(
        self,
        item_mapper: ItemMapper,
        max_per_page: int | None = None,
        *,
        pagination_source: PaginationSource = "headers",
        total_header: str = WORDPRESS_TOTAL_HEADER,
    ) -> None:
        _check_source(pagination_source)
        self.item_mapper = item_mapper
        self.max_per_page = max_per_page
        self.pagination_source = pagination_source
        self.total_header = total_header

    def map(
        self,
        data: typ.Any,
        root_property: str | None = None,
        *,
        page: int = 1,
        results_per_page: int = DEFAULT_RESULTS_PER_PAGE,
        response: HeaderSource | None = None,
        pagination_source: PaginationSource | None = None,
    ) -> PageCollection:
        """Return the mapped pages of one listing response.

        Parameters
        ----------
        data : Any
            Decoded listing: a list of items, or a document holding the list
            under ``root_property``.
        root_property : str, optional
            Key or path expression locating the item list.
        page, results_per_page : int, optional
            Page requested from the CMS.
        response : HeaderSource, optional
            Response whose headers carry the total for header pagination.
            Without it the pagination is left empty.
        pagination_source : {"headers", "body"}, optional
            Overrides the mapper's default pagination source.

        Raises
        ------
        MapperError
            If the page size exceeds ``max_per_page``, the item list cannot be
            found, or the pagination metadata is invalid.
        """
        if self.max_per_page is not None and results_per_page > self.max_per_page:
            msg = (
                f"Results per page ({results_per_page}) cannot exceed "
                f"{self.max_per_page}"
            )
            raise MapperError(msg)

        source = pagination_source or self.pagination_source
        _check_source(source)
        items = _select_items(data, root_property)
        pages = PageCollection(self.item_mapper.map(item) for item in items)

        try:
            match source:
                case "headers" if response is not None:
                    pages.pagination = Pagination.from_headers(
                        response,
                        page=page,
                        results_per_page=results_per_page,
                        total_header=self.total_header,
                    )
                case "body" if isinstance(data, cabc.Mapping):
                    pages.pagination = Pagination.from_body_meta(
                        data, page=page, results_per_page=results_per_page
                    )
                case _:
                    pages.pagination = (
                        Pagination()
                        .set_results_per_page(results_per_page)
                        .set_page(page)
                    )
        except PaginationError as exc:
            msg = f"Invalid pagination for listing page {page}: {exc}"
            raise MapperError(msg) from exc

        logger.debug(
            "Mapped %d pages (page %d of %d)",
            len(pages),
            pages.pagination.page,
            pages.pagination.total_pages,
        )
        return pages


def _check_source(source: str) -> None:
    if source not in PAGINATION_SOURCES:
        msg = (
            f"Unknown pagination source {source!r}, expected one of: "
            f"{', '.join(PAGINATION_SOURCES)}"
        )
        raise MapperError(msg)


def _select_items(data: typ.Any, root_property: str | None) -> list[typ.Any]:
    items = data
    if root_property:
        if root_property.startswith("["):
            items = PathExpression(root_property).resolve(data)
        elif isinstance(data, cabc.Mapping):
            items = data.get(root_property)
        else:
            items = None
        if items is None:
            msg = f"Root property '{root_property}' not found in the response data"
            raise MapperError(msg)
    if isinstance(items, str) or not isinstance(items, cabc.Sequence):
        msg = f"Cannot map a {type(items).__name__} into a page collection"
        raise MapperError(msg)
    return list(items)


__all__ = ["PAGINATION_SOURCES", "CollectionMapper", "PaginationSource"]
