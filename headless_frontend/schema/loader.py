"""Load content schema YAML into typed schema dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

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

logger = logging.getLogger(__name__)


def load_schema(path: Path) -> Schema:
    """Load the YAML file describing content types and their fields.

    Parameters
    ----------
    path : Path
        Filesystem path to the schema file (for example, ``content.yaml``).
        Relative ``content_fields`` and ``config`` references are resolved
        against the directory holding this file.

    Returns
    -------
    Schema
        Parsed schema including every content type and the global options.

    Raises
    ------
    FileNotFoundError
        If the schema file does not exist at ``path``.
    SchemaConfigError
        If the YAML cannot be parsed, lacks the ``content_types`` or
        ``global`` roots, or contains an invalid field definition.

    Examples
    --------
    >>> from pathlib import Path
    >>> from headless_frontend.schema import load_schema
    >>> schema = load_schema(Path("config/content.yaml"))  # doctest: +SKIP
    >>> sorted(schema.content_types)  # doctest: +SKIP
    ['news', 'page']
    """
    raw = _read_yaml(path)
    if not isinstance(raw, cabc.Mapping):
        msg = f"Schema file '{path}' must contain a mapping at the top level."
        raise SchemaConfigError(msg)
    schema = schema_from_mapping(raw, config_dir=path.parent)
    logger.info(
        "Loaded content schema %s with %d content types", path, len(schema)
    )
    return schema


def schema_from_mapping(
    raw: cabc.Mapping[str, typ.Any], *, config_dir: Path | None = None
) -> Schema:
    """Build a :class:`Schema` from an already parsed mapping."""
    if "content_types" not in raw:
        msg = "Content schema must contain a root 'content_types' element"
        raise SchemaConfigError(msg)
    if "global" not in raw:
        msg = "Content schema must contain a root 'global' element"
        raise SchemaConfigError(msg)

    base_dir = config_dir or Path()
    content_types: dict[str, ContentType] = {}
    for name, payload in (raw.get("content_types") or {}).items():
        match payload:
            case cabc.Mapping():
                content_types[name] = _build_content_type(name, payload, base_dir)
            case None:
                content_types[name] = ContentType(name=name)
            case _:
                msg = f"Content type '{name}' must be a mapping"
                raise SchemaConfigError(msg)

    global_options = raw.get("global") or {}
    if not isinstance(global_options, cabc.Mapping):
        msg = "The 'global' element must be a mapping of option names to values"
        raise SchemaConfigError(msg)

    return Schema(content_types=content_types, global_options=dict(global_options))


def load_content_fields(path: Path) -> dict[str, SchemaField]:
    """Load a YAML file holding a mapping of field names to definitions."""
    data = _read_yaml(path)
    return parse_content_fields(data, config_dir=path.parent)


def parse_content_fields(
    data: object, *, config_dir: Path | None = None
) -> dict[str, SchemaField]:
    """Parse a mapping of field names to field definitions."""
    if not isinstance(data, cabc.Mapping):
        msg = "Content fields must be defined as a mapping of field names"
        raise SchemaConfigError(msg)
    base_dir = config_dir or Path()
    fields: dict[str, SchemaField] = {}
    for name, values in data.items():
        if not isinstance(values, cabc.Mapping):
            msg = (
                f"Content field '{name}' must be a mapping including the 'type' "
                f"property, {type(values).__name__} found"
            )
            raise SchemaConfigError(msg)
        fields[str(name)] = parse_field(str(name), values, config_dir=base_dir)
    return fields


def parse_field(
    name: str, data: cabc.Mapping[str, typ.Any], *, config_dir: Path | None = None
) -> SchemaField:
    """Build a schema field from its YAML definition.

    A definition holding a ``config`` key is replaced by the contents of that
    file, resolved relative to ``config_dir``.
    """
    base_dir = config_dir or Path()
    if "config" in data:
        include = base_dir / str(data["config"])
        loaded = _read_yaml(include)
        if not isinstance(loaded, cabc.Mapping):
            msg = f"Field config file '{include}' must contain a mapping"
            raise SchemaConfigError(msg)
        data = loaded
        base_dir = include.parent

    if "type" not in data:
        msg = f"You must set a 'type' for content field '{name}', e.g. type: plaintext"
        raise SchemaConfigError(msg)
    try:
        field_type = FieldType.parse(str(data["type"]))
    except ValueError as exc:
        raise SchemaConfigError(str(exc)) from exc

    match field_type:
        case FieldType.FLEXIBLE:
            components = data.get("components")
            if not components:
                msg = f"You must set a 'components' mapping for flexible field '{name}'"
                raise SchemaConfigError(msg)
            if not isinstance(components, cabc.Mapping):
                msg = f"Components of flexible field '{name}' must be a mapping"
                raise SchemaConfigError(msg)
            return FlexibleSchemaField(
                name=name,
                field_type=field_type,
                options=_extra_options(data, "components"),
                components={
                    str(key): FieldSet(
                        name=str(key),
                        fields=parse_content_fields(fields, config_dir=base_dir),
                    )
                    for key, fields in components.items()
                },
            )
        case FieldType.ARRAY:
            children = data.get("content_fields")
            if not children:
                msg = f"You must set a 'content_fields' mapping for array field '{name}'"
                raise SchemaConfigError(msg)
            return ArraySchemaField(
                name=name,
                field_type=field_type,
                options=_extra_options(data, "content_fields"),
                children=parse_content_fields(children, config_dir=base_dir),
            )
        case _:
            if field_type is FieldType.RELATION_ARRAY and "content_type" not in data:
                msg = (
                    f"You must set a 'content_type' for relation array field '{name}'"
                )
                raise SchemaConfigError(msg)
            return SchemaField(
                name=name, field_type=field_type, options=_extra_options(data)
            )


def _extra_options(
    data: cabc.Mapping[str, typ.Any], *structural: str
) -> dict[str, typ.Any]:
    """Return the keys of a field definition that are plain options."""
    reserved = {"type", *structural}
    return {str(key): value for key, value in data.items() if key not in reserved}


def _build_content_type(
    name: str, payload: cabc.Mapping[str, typ.Any], config_dir: Path
) -> ContentType:
    """Build a ContentType from its schema entry."""
    fields_ref = payload.get("content_fields")
    match fields_ref:
        case None:
            fields: dict[str, SchemaField] = {}
        case str():
            fields = load_content_fields(config_dir / fields_ref)
        case cabc.Mapping():
            fields = parse_content_fields(fields_ref, config_dir=config_dir)
        case _:
            msg = (
                f"Content type '{name}' must reference 'content_fields' as a file "
                "path or an inline mapping"
            )
            raise SchemaConfigError(msg)

    taxonomies = payload.get("taxonomies") or []
    if isinstance(taxonomies, str):
        taxonomies = [taxonomies]

    return ContentType(
        name=name,
        fields=fields,
        api_endpoint=_optional_str(payload.get("api_endpoint")),
        source_content_type=_optional_str(payload.get("source_content_type")),
        taxonomies=[str(taxonomy) for taxonomy in taxonomies],
    )


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _read_yaml(path: Path) -> typ.Any:
    if not path.exists():
        msg = f"Schema file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            return loader.load(handle)
    except YAMLError as exc:
        msg = f"Error parsing content schema YAML file {path}"
        raise SchemaConfigError(msg) from exc


__all__ = [
    "load_content_fields",
    "load_schema",
    "parse_content_fields",
    "parse_field",
    "schema_from_mapping",
]
