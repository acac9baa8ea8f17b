"""Resolve raw CMS values into typed content fields using the schema.

:class:`ContentFieldResolver` dispatches on :class:`FieldType` through a
handler map. Scalar handlers coerce the raw value; ``array`` and ``flexible``
handlers recurse into their child schema fields. Values that cannot be
coerced resolve to ``None`` so one malformed CMS entry never aborts a whole
mapping, while a field type without a handler is a configuration error.

Examples
--------
>>> from headless_frontend.resolver import wordpress_resolver
>>> from headless_frontend.schema import FieldType, SchemaField
>>> resolver = wordpress_resolver()
>>> resolver.resolve(SchemaField("intro", FieldType.TEXT), "Hello").value
'Hello'
>>> resolver.resolve(SchemaField("count", FieldType.NUMBER), "not a number") is None
True
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from ._constants import (
    CRAFTCMS_COMPONENT_KEY,
    DEFAULT_COMPONENT_KEY,
    WORDPRESS_COMPONENT_KEY,
)
from .content import fields
from .schema.models import (
    ArraySchemaField,
    FieldType,
    FlexibleSchemaField,
    SchemaField,
)

if typ.TYPE_CHECKING:
    from .schema.models import Schema

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 2
DEFAULT_ROUNDING = "up"

FieldHandler = typ.Callable[
    ["ContentFieldResolver", SchemaField, typ.Any], "fields.ContentField | None"
]


class ContentFieldResolutionError(LookupError):
    """Raised when no handler is registered for a schema field type."""


class ContentFieldResolver:
    """Turn a schema field and a raw value into a content field.

    Parameters
    ----------
    discriminator_key : str, optional
        Record key naming the component of a flexible content block.
    schema : Schema, optional
        Schema whose global options back field options such as ``precision``.
    handlers : Mapping[FieldType, FieldHandler], optional
        Extra handlers, overriding the built-in ones for the same type.
    """

    def __init__(
        self,
        discriminator_key: str = DEFAULT_COMPONENT_KEY,
        schema: Schema | None = None,
        handlers: cabc.Mapping[FieldType, FieldHandler] | None = None,
    ) -> None:
        self.discriminator_key = discriminator_key
        self.schema = schema
        self._handlers: dict[FieldType, FieldHandler] = dict(DEFAULT_HANDLERS)
        if handlers:
            self._handlers.update(handlers)

    def register(self, field_type: FieldType, handler: FieldHandler) -> None:
        """Use ``handler`` for schema fields of ``field_type``."""
        self._handlers[field_type] = handler

    def supports(self, field_type: FieldType) -> bool:
        return field_type in self._handlers

    def resolve(self, field: SchemaField, value: typ.Any) -> fields.ContentField | None:
        """Return the content field for ``value``, or None when it cannot resolve.

        Raises
        ------
        ContentFieldResolutionError
            If no handler is registered for the field's type.
        """
        handler = self._handlers.get(field.field_type)
        if handler is None:
            msg = (
                f"No resolver registered for content field type "
                f"'{field.field_type}' (field '{field.name}')"
            )
            logger.error(msg)
            raise ContentFieldResolutionError(msg)
        if value is None:
            return None
        try:
            return handler(self, field, value)
        except fields.ContentFieldError as exc:
            logger.warning(
                "Skipping content field '%s' (%s): %s",
                field.name,
                field.field_type,
                exc,
            )
            return None

    def resolve_set(
        self, schema_fields: cabc.Iterable[SchemaField], data: cabc.Mapping[str, typ.Any]
    ) -> fields.ContentFieldCollection:
        """Resolve each schema field against the matching key of ``data``.

        Absent or null keys are skipped, as are values that do not resolve.
        """
        collection = fields.ContentFieldCollection()
        for schema_field in schema_fields:
            if data.get(schema_field.name) is None:
                continue
            resolved = self.resolve(schema_field, data[schema_field.name])
            if resolved is not None:
                collection.add(resolved)
        return collection

    def option(self, field: SchemaField, name: str, default: typ.Any = None) -> typ.Any:
        """Return a field option, else the schema-wide value, else ``default``."""
        value = field.get_option(name, self.schema)
        return default if value is None else value


def _resolve_text(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.ShortText:
    return fields.ShortText(field.name, value)


def _resolve_plaintext(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.PlainText:
    return fields.PlainText(field.name, value)


def _resolve_richtext(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.RichText:
    return fields.RichText(field.name, value)


def _resolve_number(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.Number:
    return fields.Number(field.name, value)


def _resolve_decimal(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.Decimal:
    return fields.Decimal(
        field.name,
        value,
        precision=resolver.option(field, "precision", DEFAULT_PRECISION),
        rounding=str(resolver.option(field, "round", DEFAULT_ROUNDING)),
    )


def _resolve_date(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.Date:
    return fields.Date(field.name, value, resolver.option(field, "format"))


def _resolve_datetime(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.DateTime:
    return fields.DateTime(field.name, value, resolver.option(field, "format"))


def _resolve_boolean(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.Boolean:
    return fields.Boolean(field.name, value)


def _resolve_plain_array(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.PlainArray:
    return fields.PlainArray(field.name, value)


def _resolve_array(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.ArrayContent | None:
    if not isinstance(field, ArraySchemaField):
        msg = f"Array field '{field.name}' has no child content fields"
        raise fields.ContentFieldError(msg)
    if not _is_record_list(value):
        return None

    array = fields.ArrayContent(field.name)
    for row in value:
        if not isinstance(row, cabc.Mapping):
            logger.debug("Skipping non-mapping row in array field '%s'", field.name)
            continue
        array.add_row(resolver.resolve_set(field, row))
    return array if len(array) else None


def _resolve_flexible(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> fields.FlexibleContent | None:
    if not isinstance(field, FlexibleSchemaField):
        msg = f"Flexible field '{field.name}' has no components"
        raise fields.ContentFieldError(msg)
    if not _is_record_list(value):
        return None

    key = resolver.discriminator_key
    flexible = fields.FlexibleContent(field.name)
    for record in value:
        if not isinstance(record, cabc.Mapping) or record.get(key) is None:
            logger.debug(
                "Skipping record without '%s' in flexible field '%s'", key, field.name
            )
            continue
        name = str(record[key])
        component_schema = field.get_component(name)
        if component_schema is None:
            logger.debug(
                "Skipping unknown component '%s' in flexible field '%s'",
                name,
                field.name,
            )
            continue
        flexible.add_component(
            fields.Component(name, resolver.resolve_set(component_schema, record))
        )
    return flexible if len(flexible) else None


def _resolve_placeholder(
    resolver: ContentFieldResolver, field: SchemaField, value: typ.Any
) -> None:
    logger.debug(
        "Content field type '%s' is not resolved yet, skipping '%s'",
        field.field_type,
        field.name,
    )


def _is_record_list(value: typ.Any) -> bool:
    return (
        isinstance(value, cabc.Sequence)
        and not isinstance(value, str | bytes)
        and len(value) > 0
    )


DEFAULT_HANDLERS: dict[FieldType, FieldHandler] = {
    FieldType.TEXT: _resolve_text,
    FieldType.PLAIN_TEXT: _resolve_plaintext,
    FieldType.RICH_TEXT: _resolve_richtext,
    FieldType.NUMBER: _resolve_number,
    FieldType.DECIMAL: _resolve_decimal,
    FieldType.DATE: _resolve_date,
    FieldType.DATETIME: _resolve_datetime,
    FieldType.BOOLEAN: _resolve_boolean,
    FieldType.PLAIN_ARRAY: _resolve_plain_array,
    FieldType.ARRAY: _resolve_array,
    FieldType.FLEXIBLE: _resolve_flexible,
    FieldType.IMAGE: _resolve_placeholder,
    FieldType.RELATION: _resolve_placeholder,
    FieldType.RELATION_ARRAY: _resolve_placeholder,
}


def wordpress_resolver(schema: Schema | None = None) -> ContentFieldResolver:
    """Return a resolver reading ACF flexible content layouts."""
    return ContentFieldResolver(WORDPRESS_COMPONENT_KEY, schema=schema)


def craftcms_resolver(schema: Schema | None = None) -> ContentFieldResolver:
    """Return a resolver reading Craft CMS matrix block types."""
    return ContentFieldResolver(CRAFTCMS_COMPONENT_KEY, schema=schema)


__all__ = [
    "DEFAULT_HANDLERS",
    "ContentFieldResolutionError",
    "ContentFieldResolver",
    "FieldHandler",
    "craftcms_resolver",
    "wordpress_resolver",
]
