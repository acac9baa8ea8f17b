"""Page and result-count bookkeeping for paged CMS listings.

A :class:`Pagination` starts empty and is populated while a listing response
is mapped, either from response headers (``X-WP-Total`` style) or from body
metadata (``meta.total_results`` style). The total number of pages is derived
lazily from the total result count and the page size, and the current page is
validated against it.

Examples
--------
>>> from headless_frontend.pagination import Pagination
>>> pages = Pagination().set_total_results(1039).set_results_per_page(10)
>>> pages.total_pages
104
>>> pages.set_page(6).page_links()
[4, 5, 6, 7, 8]
"""

from __future__ import annotations

import collections.abc as cabc
import math
import typing as typ

from ._constants import (
    DEFAULT_PAGE_LINKS,
    DEFAULT_RESULTS_PER_PAGE,
    WORDPRESS_TOTAL_HEADER,
)


class PaginationError(ValueError):
    """Raised when a page number or page-size setting is out of range."""


class HeaderSource(typ.Protocol):
    """Response-like object exposing header lookups."""

    def has_header(self, name: str) -> bool: ...

    def get_header_line(self, name: str) -> str: ...


class Pagination:
    """Track the current page and derive page ranges for a result set."""

    def __init__(self) -> None:
        self._page = 1
        self._total_results = 0
        self._results_per_page = DEFAULT_RESULTS_PER_PAGE
        self._total_pages: int | None = None

    def __len__(self) -> int:
        return self.total_pages

    def __repr__(self) -> str:
        return (
            f"Pagination(page={self._page}, total_results={self._total_results}, "
            f"results_per_page={self._results_per_page})"
        )

    @property
    def page(self) -> int:
        """Return the current page number (1-based)."""
        return self._page

    @property
    def total_results(self) -> int:
        """Return the total number of results across all pages."""
        return self._total_results

    @property
    def results_per_page(self) -> int:
        """Return the configured page size."""
        return self._results_per_page

    @property
    def total_pages(self) -> int:
        """Return the number of pages, or 0 while the result set is unknown."""
        if self._total_pages is None:
            if self._total_results and self._results_per_page:
                self._total_pages = math.ceil(
                    self._total_results / self._results_per_page
                )
            else:
                return 0
        return self._total_pages

    def set_page(self, page: int) -> Pagination:
        """Set the current page.

        Set the page size before the page so the bounds check uses the right
        number of pages.

        Raises
        ------
        PaginationError
            If ``page`` is below 1, or beyond the known number of pages.
        """
        if page < 1:
            msg = f"Invalid page {page}, pages start at 1"
            raise PaginationError(msg)
        total_pages = self.total_pages
        if total_pages and page > total_pages:
            msg = (
                f"Invalid page {page}, only {total_pages} pages available. If you "
                "use a custom page size, set results_per_page before the page."
            )
            raise PaginationError(msg)
        self._page = page
        return self

    def set_total_results(self, total: int) -> Pagination:
        """Set the total result count and invalidate the cached page count."""
        if total < 0:
            msg = f"Total results cannot be negative, got {total}"
            raise PaginationError(msg)
        self._total_results = total
        self._total_pages = None
        return self

    def set_results_per_page(self, number: int) -> Pagination:
        """Set the page size and invalidate the cached page count."""
        if number < 1:
            msg = f"Results per page must be at least 1, got {number}"
            raise PaginationError(msg)
        self._results_per_page = number
        self._total_pages = None
        return self

    @property
    def is_first_page(self) -> bool:
        return self._page == 1

    @property
    def is_last_page(self) -> bool:
        return self._page == self.total_pages

    @property
    def from_result(self) -> int:
        """Return the 1-based index of the first result on the current page."""
        if self.is_first_page:
            return 1
        return (self._page - 1) * self._results_per_page + 1

    @property
    def to_result(self) -> int:
        """Return the index of the last result on the current page."""
        return min(self._page * self._results_per_page, self._total_results)

    @property
    def previous_page(self) -> int:
        return self._page if self.is_first_page else self._page - 1

    @property
    def next_page(self) -> int:
        return self._page if self.is_last_page else self._page + 1

    @property
    def first_page(self) -> int:
        return 1

    @property
    def last_page(self) -> int:
        return max(self.total_pages, 1)

    def page_links(self, max_pages: int = DEFAULT_PAGE_LINKS) -> list[int]:
        """Return a window of page numbers centred on the current page.

        Parameters
        ----------
        max_pages : int, optional
            Size of the window. Defaults to ``DEFAULT_PAGE_LINKS``.

        Returns
        -------
        list[int]
            Every page when there are no more than ``max_pages`` pages,
            otherwise exactly ``max_pages`` consecutive page numbers clamped to
            ``[1, total_pages]``.

        Raises
        ------
        PaginationError
            If ``max_pages`` is below 1.
        """
        if max_pages < 1:
            msg = f"Page link window must hold at least one page, got {max_pages}"
            raise PaginationError(msg)

        total_pages = self.total_pages
        if total_pages <= max_pages:
            return list(range(1, total_pages + 1))

        half = math.ceil(max_pages / 2)
        if self._page <= half:
            return list(range(1, max_pages + 1))

        start = self._page - half + 1
        end = self._page + (max_pages - half)
        if end > total_pages:
            end = total_pages
            start = end - max_pages + 1
        return list(range(start, end + 1))

    @classmethod
    def from_headers(
        cls,
        response: HeaderSource,
        *,
        page: int = 1,
        results_per_page: int = DEFAULT_RESULTS_PER_PAGE,
        total_header: str = WORDPRESS_TOTAL_HEADER,
    ) -> Pagination:
        """Build pagination from a total-results response header.

        The pagination is returned empty when the header is missing.

        Raises
        ------
        PaginationError
            If the header is not an integer, or ``page`` is out of range.
        """
        pagination = cls()
        if not response.has_header(total_header):
            return pagination
        raw_total = response.get_header_line(total_header).strip()
        try:
            total = int(raw_total)
        except ValueError as exc:
            msg = f"Header {total_header} is not an integer: {raw_total!r}"
            raise PaginationError(msg) from exc
        return (
            pagination.set_total_results(total)
            .set_results_per_page(results_per_page)
            .set_page(page)
        )

    @classmethod
    def from_body_meta(
        cls,
        data: cabc.Mapping[str, typ.Any],
        *,
        page: int = 1,
        results_per_page: int = DEFAULT_RESULTS_PER_PAGE,
    ) -> Pagination:
        """Build pagination from a ``meta`` block in the response body.

        ``meta.total_results`` holds the result count and the optional
        ``meta.limit`` overrides ``results_per_page``. The pagination is
        returned empty when no total is present.
        """
        pagination = cls()
        meta = data.get("meta")
        if not isinstance(meta, cabc.Mapping) or meta.get("total_results") is None:
            return pagination
        limit = meta.get("limit") or results_per_page
        try:
            total = int(meta["total_results"])
            per_page = int(limit)
        except (TypeError, ValueError) as exc:
            msg = f"Body meta is not an integer: {dict(meta)!r}"
            raise PaginationError(msg) from exc
        return (
            pagination.set_total_results(total)
            .set_results_per_page(per_page)
            .set_page(page)
        )


__all__ = ["HeaderSource", "Pagination", "PaginationError"]
