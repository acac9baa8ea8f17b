"""Load and validate the content schema describing CMS content types.

This subpackage parses the project's content schema YAML (``content.yaml``),
follows ``content_fields`` and ``config`` file references, and produces frozen
dataclasses (:class:`Schema`, :class:`ContentType`, :class:`SchemaField`,
etc.) that the resolver and mappers consume. The primary entry point is
:func:`load_schema`; :func:`dump_schema` writes a schema back out.

Examples
--------
>>> from pathlib import Path
>>> from headless_frontend.schema import load_schema
>>> schema = load_schema(Path("config/content.yaml"))  # doctest: +SKIP
>>> schema.get_content_type("news").api_endpoint  # doctest: +SKIP
'posts'
"""

from .dump import dump_content_type, dump_schema
from .loader import (
    load_content_fields,
    load_schema,
    parse_content_fields,
    parse_field,
    schema_from_mapping,
)
from .models import (
    ArraySchemaField,
    ContentType,
    FieldSet,
    FieldType,
    FlexibleSchemaField,
    Schema,
    SchemaConfigError,
    SchemaField,
)

__all__ = [
    "ArraySchemaField",
    "ContentType",
    "FieldSet",
    "FieldType",
    "FlexibleSchemaField",
    "Schema",
    "SchemaConfigError",
    "SchemaField",
    "dump_content_type",
    "dump_schema",
    "load_content_fields",
    "load_schema",
    "parse_content_fields",
    "parse_field",
    "schema_from_mapping",
]
