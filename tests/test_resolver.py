"""Unit tests for resolving raw values into content fields."""

from __future__ import annotations

import logging
import typing as typ

import pytest

from headless_frontend.content.fields import (
    ArrayContent,
    Boolean,
    Date,
    Decimal,
    FlexibleContent,
    PlainArray,
    ShortText,
)
from headless_frontend.resolver import (
    ContentFieldResolutionError,
    ContentFieldResolver,
    craftcms_resolver,
    wordpress_resolver,
)
from headless_frontend.schema import (
    ArraySchemaField,
    FieldSet,
    FieldType,
    FlexibleSchemaField,
    SchemaField,
)

if typ.TYPE_CHECKING:
    from headless_frontend.schema import Schema


def _array_field() -> ArraySchemaField:
    return ArraySchemaField(
        "rows",
        FieldType.ARRAY,
        children={"a": SchemaField("a", FieldType.NUMBER)},
    )


def _flexible_field() -> FlexibleSchemaField:
    return FlexibleSchemaField(
        "blocks",
        FieldType.FLEXIBLE,
        components={
            "text_block": FieldSet(
                "text_block", {"content": SchemaField("content", FieldType.RICH_TEXT)}
            ),
            "quote": FieldSet(
                "quote",
                {
                    "quote_text": SchemaField("quote_text", FieldType.PLAIN_TEXT),
                    "author": SchemaField("author", FieldType.TEXT),
                },
            ),
        },
    )


def test_scalar_fields_are_coerced() -> None:
    """Scalars should construct the matching field type."""
    resolver = ContentFieldResolver()
    text = resolver.resolve(SchemaField("title", FieldType.TEXT), 42)
    assert text == ShortText("title", "42"), f"unexpected text field {text!r}"
    flag = resolver.resolve(SchemaField("flag", FieldType.BOOLEAN), "yes")
    assert flag == Boolean("flag", True), f"unexpected boolean field {flag!r}"


def test_uncoercible_value_resolves_to_none(caplog: pytest.LogCaptureFixture) -> None:
    """Bad values degrade to a missing field with a warning."""
    resolver = ContentFieldResolver()
    with caplog.at_level(logging.WARNING, logger="headless_frontend.resolver"):
        result = resolver.resolve(SchemaField("count", FieldType.NUMBER), "many")
    assert result is None, "expected None for a non-numeric number field"
    assert "Skipping content field 'count'" in caplog.text, "expected a warning"


@pytest.mark.parametrize(
    ("field_type", "value"),
    [
        (FieldType.NUMBER, "inf"),
        (FieldType.NUMBER, float("nan")),
        (FieldType.DECIMAL, "1e30"),
        (FieldType.DATE, 10**15),
        (FieldType.DATETIME, -(10**15)),
    ],
)
def test_out_of_range_values_resolve_to_none(
    field_type: FieldType, value: object
) -> None:
    """Values too large to represent degrade like any other bad value."""
    result = ContentFieldResolver().resolve(SchemaField("sample", field_type), value)
    assert result is None, f"expected None for {value!r} in a {field_type} field"


def test_null_value_resolves_to_none() -> None:
    """A null value never produces a field."""
    resolver = ContentFieldResolver()
    assert resolver.resolve(SchemaField("title", FieldType.TEXT), None) is None, (
        "expected None for a null value"
    )


def test_array_of_rows() -> None:
    """Each row becomes a collection of its declared children."""
    result = ContentFieldResolver().resolve(_array_field(), [{"a": 1}, {"a": 2}])
    assert isinstance(result, ArrayContent), f"expected ArrayContent, got {result!r}"
    assert len(result) == 2, f"expected 2 rows, got {len(result)}"
    assert [row["a"].value for row in result] == [1, 2], (  # type: ignore[attr-defined]
        "expected each row to resolve its number field"
    )


@pytest.mark.parametrize("value", [[], "text", {"a": 1}, ["not a row"]])
def test_array_without_rows_is_none(value: object) -> None:
    """Empty, non-list or row-less input resolves to None."""
    assert ContentFieldResolver().resolve(_array_field(), value) is None, (
        f"expected None for {value!r}"
    )


def test_array_tolerates_partial_rows() -> None:
    """Missing or null child keys are skipped within a row."""
    result = ContentFieldResolver().resolve(
        _array_field(), [{"a": 1}, {"b": 2}, {"a": None}]
    )
    assert isinstance(result, ArrayContent), "expected ArrayContent"
    assert [len(row) for row in result] == [1, 0, 0], (
        "expected partial rows to keep only present children"
    )


def test_plain_array_wraps_list() -> None:
    """Plain arrays keep the raw list."""
    field = SchemaField("tags", FieldType.PLAIN_ARRAY)
    result = ContentFieldResolver().resolve(field, ["a", 1])
    assert result == PlainArray("tags", ["a", 1]), f"unexpected result {result!r}"


def test_decimal_uses_field_then_global_options(schema: Schema) -> None:
    """Decimal precision and rounding fall back to global options."""
    resolver = ContentFieldResolver(schema=schema)
    news = schema.get_content_type("news")
    price = resolver.resolve(news["price"], "9.75")
    weight = resolver.resolve(news["weight"], "2.0005")
    assert price == Decimal("price", 9.7, precision=1, rounding="down"), (
        f"unexpected price {price!r}"
    )
    assert isinstance(weight, Decimal), "expected a decimal field"
    assert (weight.precision, weight.rounding, weight.value) == (3, "even", 2.0), (
        f"unexpected weight {weight!r}"
    )


def test_date_uses_format_option(schema: Schema) -> None:
    """The schema format option is used for date strings."""
    event_date = schema.get_content_type("news")["event_date"]
    result = ContentFieldResolver(schema=schema).resolve(event_date, "20240305")
    assert isinstance(result, Date), f"expected a Date, got {result!r}"
    assert str(result) == "2024-03-05", f"unexpected date {result!s}"


def test_flexible_skips_unknown_components() -> None:
    """Unknown or missing discriminators are skipped, order is kept."""
    records = [
        {"acf_fc_layout": "quote", "quote_text": "Hi", "author": "Ada"},
        {"acf_fc_layout": "carousel", "images": []},
        {"content": "<p>no layout</p>"},
        {"acf_fc_layout": "text_block", "content": "<p>Body</p>"},
    ]
    result = wordpress_resolver().resolve(_flexible_field(), records)
    assert isinstance(result, FlexibleContent), "expected FlexibleContent"
    assert [component.name for component in result] == ["quote", "text_block"], (
        "expected recognised components in source order"
    )
    assert result[0].content["author"].value == "Ada", (  # type: ignore[attr-defined]
        "expected component fields to resolve"
    )


def test_flexible_with_no_matches_is_none() -> None:
    """If no record matches a component the field resolves to None."""
    records = [{"acf_fc_layout": "carousel"}, {"acf_fc_layout": "gallery"}]
    assert wordpress_resolver().resolve(_flexible_field(), records) is None, (
        "expected None when nothing resolves"
    )


def test_discriminator_key_differs_per_cms() -> None:
    """Craft CMS reads the component from typeHandle."""
    craft = [{"typeHandle": "quote", "quote_text": "Hi"}]
    wordpress = [{"acf_fc_layout": "quote", "quote_text": "Hi"}]
    assert craftcms_resolver().resolve(_flexible_field(), craft) is not None, (
        "expected Craft records to resolve with typeHandle"
    )
    assert craftcms_resolver().resolve(_flexible_field(), wordpress) is None, (
        "expected WordPress records to be skipped by the Craft resolver"
    )


@pytest.mark.parametrize(
    "field_type",
    [FieldType.IMAGE, FieldType.RELATION, FieldType.RELATION_ARRAY],
)
def test_placeholder_types_resolve_to_none(field_type: FieldType) -> None:
    """Image and relation types are recognised but not resolved yet."""
    field = SchemaField("ref", field_type)
    assert ContentFieldResolver().resolve(field, {"id": 1}) is None, (
        f"expected None for placeholder type {field_type}"
    )


def test_missing_handler_raises(caplog: pytest.LogCaptureFixture) -> None:
    """A type without a handler is a configuration error."""
    field = SchemaField("clip", FieldType.VIDEO)
    with (
        caplog.at_level(logging.ERROR, logger="headless_frontend.resolver"),
        pytest.raises(ContentFieldResolutionError, match="video"),
    ):
        ContentFieldResolver().resolve(field, "clip.mp4")
    assert "No resolver registered" in caplog.text, "expected an error log entry"


def test_missing_handler_inside_array_propagates() -> None:
    """Configuration errors are not swallowed by nested resolution."""
    field = ArraySchemaField(
        "rows",
        FieldType.ARRAY,
        children={"clip": SchemaField("clip", FieldType.AUDIO)},
    )
    with pytest.raises(ContentFieldResolutionError):
        ContentFieldResolver().resolve(field, [{"clip": "a.mp3"}])


def test_registered_handler_overrides_default() -> None:
    """Handlers can be added or replaced per resolver."""
    resolver = ContentFieldResolver()
    resolver.register(
        FieldType.VIDEO,
        lambda _resolver, field, value: ShortText(field.name, f"video:{value}"),
    )
    result = resolver.resolve(SchemaField("clip", FieldType.VIDEO), "a.mp4")
    assert result == ShortText("clip", "video:a.mp4"), f"unexpected {result!r}"
    assert resolver.supports(FieldType.VIDEO), "expected VIDEO to be supported"


def test_resolution_is_deterministic() -> None:
    """Resolving the same input twice yields equal trees."""
    records = [{"acf_fc_layout": "quote", "quote_text": "Hi", "author": "Ada"}]
    first = wordpress_resolver().resolve(_flexible_field(), records)
    second = wordpress_resolver().resolve(_flexible_field(), records)
    assert first == second, "expected structurally equal content trees"
