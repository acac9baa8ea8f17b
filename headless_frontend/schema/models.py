"""Typed dataclasses describing the content schema loaded from YAML."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import re
import typing as typ

FIELD_NAME_PATTERN = re.compile(r"^[a-z0-9_-]+$", re.IGNORECASE)


class SchemaConfigError(ValueError):
    """Raised when the content schema configuration is invalid or incomplete."""


class FieldType(enum.StrEnum):
    """Vocabulary of content field type tags."""

    ARRAY = "array"
    AUDIO = "audio"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    DECIMAL = "decimal"
    DOCUMENT = "document"
    FLEXIBLE = "flexible"
    IMAGE = "image"
    NUMBER = "number"
    PLAIN_ARRAY = "plainarray"
    PLAIN_TEXT = "plaintext"
    RELATION = "relation"
    RELATION_ARRAY = "relation_array"
    RICH_TEXT = "richtext"
    TEXT = "text"
    TAXONOMY_TERMS = "taxonomyterms"
    VIDEO = "video"

    @classmethod
    def parse(cls, tag: str) -> FieldType:
        """Return the field type for ``tag``, ignoring case and underscores.

        >>> FieldType.parse("plainArray") is FieldType.PLAIN_ARRAY
        True
        >>> FieldType.parse("relationArray") is FieldType.RELATION_ARRAY
        True
        """
        normalized = _normalize_tag(tag)
        for member in cls:
            if _normalize_tag(member.value) == normalized:
                return member
        msg = f"Invalid content field type '{tag}'"
        raise ValueError(msg)


def _normalize_tag(tag: str) -> str:
    return tag.replace("_", "").lower()


def _validate_name(name: str) -> None:
    if not FIELD_NAME_PATTERN.match(name):
        msg = f"Invalid content field name: {name!r}"
        raise SchemaConfigError(msg)


@dc.dataclass(frozen=True, slots=True)
class SchemaField:
    """Describe a scalar content field and its options.

    Attributes
    ----------
    name : str
        Field name, unique within its parent.
    field_type : FieldType
        Type tag selecting how values are resolved.
    options : dict[str, Any]
        Remaining keys from the field definition (``precision``, ``format``,
        ``content_type``...).
    """

    name: str
    field_type: FieldType
    options: dict[str, typ.Any] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        _validate_name(self.name)

    def has_option(self, name: str) -> bool:
        return name in self.options

    def get_option(self, name: str, schema: Schema | None = None) -> typ.Any:
        """Return a local option, else the schema's global value, else None."""
        if name in self.options:
            return self.options[name]
        if schema is None:
            return None
        return schema.get_global(name)


@dc.dataclass(frozen=True, slots=True)
class FieldSet:
    """Ordered, named set of schema fields."""

    name: str
    fields: dict[str, SchemaField] = dc.field(default_factory=dict)

    def __iter__(self) -> cabc.Iterator[SchemaField]:
        return iter(self.fields.values())

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __getitem__(self, name: str) -> SchemaField:
        return self.fields[name]

    def get(self, name: str) -> SchemaField | None:
        return self.fields.get(name)


@dc.dataclass(frozen=True, slots=True)
class ArraySchemaField(SchemaField):
    """Repeating group of child schema fields."""

    children: dict[str, SchemaField] = dc.field(default_factory=dict)

    def __iter__(self) -> cabc.Iterator[SchemaField]:
        return iter(self.children.values())

    def __len__(self) -> int:
        return len(self.children)


@dc.dataclass(frozen=True, slots=True)
class FlexibleSchemaField(SchemaField):
    """Named component schemas selected per record by a discriminator."""

    components: dict[str, FieldSet] = dc.field(default_factory=dict)

    def __iter__(self) -> cabc.Iterator[FieldSet]:
        return iter(self.components.values())

    def __len__(self) -> int:
        return len(self.components)

    def has(self, component: str) -> bool:
        return component in self.components

    def get_component(self, component: str) -> FieldSet | None:
        return self.components.get(component)


@dc.dataclass(frozen=True, slots=True)
class ContentType(FieldSet):
    """Content type definition with its API endpoint and fields."""

    api_endpoint: str | None = None
    source_content_type: str | None = None
    taxonomies: list[str] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True)
class Schema:
    """Collection of content types alongside global field options."""

    content_types: dict[str, ContentType] = dc.field(default_factory=dict)
    global_options: dict[str, typ.Any] = dc.field(default_factory=dict)

    def __iter__(self) -> cabc.Iterator[ContentType]:
        return iter(self.content_types.values())

    def __len__(self) -> int:
        return len(self.content_types)

    def has_content_type(self, name: str) -> bool:
        return name in self.content_types

    def get_content_type(self, name: str) -> ContentType:
        """Return the named content type.

        Raises
        ------
        KeyError
            If the schema does not define ``name``.
        """
        try:
            return self.content_types[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.content_types))
            msg = f"Unknown content type '{name}'. Known content types: {available}"
            raise KeyError(msg) from exc

    def get_by_source_content_type(self, source: str) -> ContentType | None:
        """Return the content type mapped to a CMS-side content type name."""
        for content_type in self.content_types.values():
            if content_type.source_content_type == source:
                return content_type
        return None

    def get_global(self, name: str) -> typ.Any:
        return self.global_options.get(name)

    def has_global(self, name: str) -> bool:
        return name in self.global_options


__all__ = [
    "FIELD_NAME_PATTERN",
    "ArraySchemaField",
    "ContentType",
    "FieldSet",
    "FieldType",
    "FlexibleSchemaField",
    "Schema",
    "SchemaConfigError",
    "SchemaField",
]
