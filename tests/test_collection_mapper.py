"""Unit tests for mapping listings into paginated page collections."""

from __future__ import annotations

import typing as typ

import pytest

from headless_frontend.mapper import (
    CRAFTCMS,
    WORDPRESS,
    CollectionMapper,
    ItemMapper,
    MapperError,
)
from headless_frontend.provider import ApiResponse

if typ.TYPE_CHECKING:
    from headless_frontend.schema import Schema


def _wordpress_items(count: int) -> list[dict[str, typ.Any]]:
    return [
        {"id": index, "title": {"rendered": f"Post {index}"}, "slug": f"post-{index}"}
        for index in range(1, count + 1)
    ]


def test_headers_pagination_reads_total(schema: Schema) -> None:
    """WordPress listings read the total from the response headers."""
    mapper = WORDPRESS.collection_mapper(schema.get_content_type("news"), schema)
    response = ApiResponse(data=_wordpress_items(10), headers={"X-WP-Total": "95"})
    pages = mapper.map(response.data, page=2, results_per_page=10, response=response)

    assert [page.id for page in pages] == list(range(1, 11)), "expected source order"
    assert pages.pagination.total_results == 95, "expected the header total"
    assert pages.pagination.total_pages == 10, "expected 10 pages of 10"
    assert pages.pagination.page == 2, "expected the requested page"
    assert pages.pagination.from_result == 11, "expected page 2 to start at 11"


def test_headers_pagination_without_response_is_empty() -> None:
    """Without a response there is nothing to read the total from."""
    pages = WORDPRESS.collection_mapper().map(_wordpress_items(2), results_per_page=5)
    assert len(pages) == 2, "expected both items mapped"
    assert pages.pagination.total_pages == 0, "expected an empty pagination"
    assert pages.pagination.results_per_page == 5, "expected page size kept"


def test_pagination_without_totals_keeps_requested_page() -> None:
    """The requested page survives when no total is available."""
    pages = WORDPRESS.collection_mapper().map(_wordpress_items(1), page=3)
    assert pages.pagination.page == 3, f"expected page 3, got {pages.pagination.page}"
    assert not pages.pagination.is_last_page, "an unknown total has no last page"


def test_bad_field_does_not_stop_listing(schema: Schema) -> None:
    """An unreadable field only drops that field from its own item."""
    mapper = WORDPRESS.collection_mapper(schema.get_content_type("news"), schema)
    items = _wordpress_items(3)
    items[0]["acf"] = {"rating": "5"}
    items[1]["acf"] = {"rating": "Infinity", "subtitle": "Still here"}
    items[2]["acf"] = {"rating": "1e400"}
    pages = mapper.map(items)

    assert len(pages) == 3, "expected every item mapped"
    assert pages[0].content["rating"].value == 5, (  # type: ignore[attr-defined]
        "expected the readable rating kept"
    )
    assert "rating" not in pages[1].content, "expected the bad rating dropped"
    assert "subtitle" in pages[1].content, "expected the other fields kept"
    assert "rating" not in pages[2].content, "expected the bad rating dropped"


def test_invalid_body_meta_is_wrapped() -> None:
    """A non-numeric Craft meta block fails the listing with MapperError."""
    data = {"data": [], "meta": {"total_results": "n/a"}}
    with pytest.raises(MapperError, match="Invalid pagination"):
        CRAFTCMS.collection_mapper().map(data, CRAFTCMS.collection_root)


def test_body_pagination_reads_meta() -> None:
    """Craft listings read totals from the body meta block."""
    data = {
        "data": [{"id": 1, "title": "One"}, {"id": 2, "title": "Two"}],
        "meta": {"total_results": 30, "limit": 2},
    }
    pages = CRAFTCMS.collection_mapper().map(data, CRAFTCMS.collection_root, page=3)
    assert [page.title for page in pages] == ["One", "Two"], "expected item titles"
    assert pages.pagination.results_per_page == 2, "expected meta.limit"
    assert pages.pagination.total_pages == 15, "expected 15 pages of 2"
    assert pages.pagination.page == 3, "expected the requested page"


def test_pagination_source_can_be_overridden() -> None:
    """A call can read totals from the body even on a header profile."""
    data = {"items": _wordpress_items(1), "meta": {"total_results": 1}}
    pages = WORDPRESS.collection_mapper().map(
        data, "items", pagination_source="body"
    )
    assert pages.pagination.total_results == 1, "expected the body total"


def test_results_per_page_cannot_exceed_maximum() -> None:
    """WordPress refuses page sizes above 100."""
    with pytest.raises(MapperError, match="cannot exceed 100"):
        WORDPRESS.collection_mapper().map([], results_per_page=101)


def test_unknown_pagination_source_rejected() -> None:
    """Only header and body pagination are supported."""
    with pytest.raises(MapperError, match="Unknown pagination source"):
        CollectionMapper(ItemMapper(), pagination_source="cookies")  # type: ignore[arg-type]


def test_invalid_pagination_is_wrapped() -> None:
    """Requesting a page past the end fails the listing."""
    response = ApiResponse(data=[], headers={"X-WP-Total": "5"})
    with pytest.raises(MapperError, match="Invalid pagination for listing page 3"):
        WORDPRESS.collection_mapper().map(
            [], page=3, results_per_page=5, response=response
        )


@pytest.mark.parametrize(
    ("data", "root"),
    [({"data": []}, "items"), ({"data": "text"}, "data"), ("text", None)],
)
def test_item_list_must_be_found(data: object, root: str | None) -> None:
    """The listing must resolve to a list of items."""
    with pytest.raises(MapperError):
        CRAFTCMS.collection_mapper().map(data, root)


def test_collection_is_seekable() -> None:
    """Mapped collections support seeking and positional access."""
    pages = WORDPRESS.collection_mapper().map(_wordpress_items(3))
    pages.seek(2)
    assert pages.current.title == "Post 3", "expected seek to move the cursor"
    assert pages[0].url_slug == "post-1", "expected index access"
    with pytest.raises(IndexError, match="Invalid seek position"):
        pages.seek(3)
