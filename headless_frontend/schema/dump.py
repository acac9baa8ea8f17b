"""Serialise schema dataclasses back to YAML.

The dumper mirrors the loader's layout so a dumped content type can be saved
as a ``content_fields`` file and loaded again. Output goes through a
round-trip ``ruamel.yaml`` instance so key order is preserved.

Example
-------
.. code-block:: python

    import sys
    from pathlib import Path
    from headless_frontend.schema import dump_content_type, load_schema

    schema = load_schema(Path("config/content.yaml"))
    dump_content_type(schema.get_content_type("news"), sys.stdout)
"""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from .models import ArraySchemaField, FlexibleSchemaField

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import ContentType, Schema, SchemaField


def field_to_mapping(field: SchemaField) -> CommentedMap:
    """Return the YAML mapping for a single schema field."""
    payload = CommentedMap()
    payload["type"] = field.field_type.value
    for key, value in field.options.items():
        payload[key] = value
    match field:
        case ArraySchemaField():
            payload["content_fields"] = _fields_to_mapping(field.children.values())
        case FlexibleSchemaField():
            components = CommentedMap()
            for name, component in field.components.items():
                components[name] = _fields_to_mapping(component)
            payload["components"] = components
    return payload


def content_type_to_mapping(content_type: ContentType) -> CommentedMap:
    """Return the YAML mapping for a content type with inline fields."""
    payload = CommentedMap()
    if content_type.api_endpoint:
        payload["api_endpoint"] = content_type.api_endpoint
    if content_type.source_content_type:
        payload["source_content_type"] = content_type.source_content_type
    if content_type.taxonomies:
        payload["taxonomies"] = list(content_type.taxonomies)
    payload["content_fields"] = _fields_to_mapping(content_type)
    return payload


def schema_to_mapping(schema: Schema) -> CommentedMap:
    """Return the YAML mapping for a whole schema."""
    document = CommentedMap()
    content_types = CommentedMap()
    for content_type in schema:
        content_types[content_type.name] = content_type_to_mapping(content_type)
    document["content_types"] = content_types
    document["global"] = CommentedMap(schema.global_options)
    return document


def dump_content_type(content_type: ContentType, stream: typ.TextIO) -> None:
    """Write the fields of ``content_type`` to ``stream`` as YAML."""
    _build_roundtrip_yaml().dump(_fields_to_mapping(content_type), stream)


def dump_schema(schema: Schema, stream: typ.TextIO) -> None:
    """Write ``schema`` to ``stream`` as a single YAML document."""
    _build_roundtrip_yaml().dump(schema_to_mapping(schema), stream)


def _fields_to_mapping(fields: cabc.Iterable[SchemaField]) -> CommentedMap:
    payload = CommentedMap()
    for field in fields:
        payload[field.name] = field_to_mapping(field)
    return payload


def _build_roundtrip_yaml() -> YAML:
    yaml = YAML()
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


__all__ = [
    "content_type_to_mapping",
    "dump_content_type",
    "dump_schema",
    "field_to_mapping",
    "schema_to_mapping",
]
