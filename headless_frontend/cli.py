"""Cyclopts CLI entrypoint for checking content schemas and mapping payloads.

The ``frontend`` console script defined here validates a content schema YAML
file and maps saved CMS API responses through it, printing the typed result
as JSON. Typical usage involves running ``frontend schema`` after editing
``content.yaml`` and ``frontend map`` against a captured API response while
building templates.

Examples
--------
List the content types of the default schema:

>>> from headless_frontend.cli import main
>>> main()  # doctest: +SKIP

Map a saved WordPress listing response:

>>> from headless_frontend.cli import app
>>> app(
...     ["map", "posts.json", "--content-type", "news", "--collection"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import json
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_RESULTS_PER_PAGE
from .content.fields import (
    ArrayContent,
    ContentField,
    ContentFieldCollection,
    Date,
    DateTime,
    FlexibleContent,
)
from .mapper.profiles import get_profile
from .schema import ArraySchemaField, FlexibleSchemaField, dump_content_type, load_schema

if typ.TYPE_CHECKING:
    from .content.page import Page, PageCollection
    from .schema import SchemaField

DEFAULT_CONFIG = Path("config/content.yaml")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(name="frontend", config=cyclopts.config.Env("FRONTEND_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


@app.command(help="Validate a content schema and list its content types.")
def schema(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the content schema", env_var="FRONTEND_CONFIG")
    ] = DEFAULT_CONFIG,
    content_type: typ.Annotated[
        str | None,
        Parameter(
            help="Dump one content type as YAML", env_var="FRONTEND_CONTENT_TYPE"
        ),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Load a content schema and describe it.

    Parameters
    ----------
    config : Path, optional
        Path to the schema YAML file (overridable via ``FRONTEND_CONFIG``).
    content_type : str or None, optional
        When set, the named content type is written to stdout as YAML
        instead of the summary listing.
    verbose : bool, optional
        Log at debug level.

    Raises
    ------
    SchemaConfigError
        If the schema is invalid.
    KeyError
        If ``content_type`` is not defined by the schema.
    """
    _configure_logging(verbose)
    loaded = load_schema(config)

    if content_type:
        dump_content_type(loaded.get_content_type(content_type), sys.stdout)
        return

    for definition in loaded:
        endpoint = definition.api_endpoint or "-"
        print(f"{definition.name} (endpoint: {endpoint}, fields: {len(definition)})")
        for field in definition:
            for line in _describe_field(field):
                print(f"  {line}")
    if loaded.global_options:
        options = ", ".join(f"{k}={v}" for k, v in loaded.global_options.items())
        print(f"global: {options}")


@app.command(name="map", help="Map a saved CMS JSON response and print the result.")
def map_payload(
    payload: typ.Annotated[Path, Parameter(help="JSON file holding the response")],
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the content schema", env_var="FRONTEND_CONFIG")
    ] = DEFAULT_CONFIG,
    content_type: typ.Annotated[
        str, Parameter(help="Content type to map", env_var="FRONTEND_CONTENT_TYPE")
    ],
    profile: typ.Annotated[
        typ.Literal["wordpress", "craftcms"],
        Parameter(help="CMS the response came from", env_var="FRONTEND_PROFILE"),
    ] = "wordpress",
    collection: typ.Annotated[
        bool, Parameter(help="Treat the payload as a listing")
    ] = False,
    root_property: typ.Annotated[
        str | None, Parameter(help="Key or [path] locating the item(s)")
    ] = None,
    page: typ.Annotated[int, Parameter(help="Listing page number")] = 1,
    results_per_page: typ.Annotated[
        int, Parameter(help="Listing page size")
    ] = DEFAULT_RESULTS_PER_PAGE,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Map ``payload`` through the schema and print it as JSON.

    Parameters
    ----------
    payload : Path
        JSON file holding a single item, or a listing with ``--collection``.
    config : Path, optional
        Path to the schema YAML file.
    content_type : str
        Content type describing the custom fields.
    profile : {"wordpress", "craftcms"}, optional
        CMS mapping profile. Defaults to ``wordpress``.
    collection : bool, optional
        Map the payload as a listing and include its pagination.
    root_property : str or None, optional
        Key or path expression locating the item or list in the payload;
        defaults to the profile's listing root for collections.
    page, results_per_page : int, optional
        Listing page the payload represents.
    verbose : bool, optional
        Log at debug level.

    Raises
    ------
    MapperError
        If the payload cannot be mapped.
    """
    _configure_logging(verbose)
    loaded = load_schema(config)
    cms = get_profile(profile)
    definition = loaded.get_content_type(content_type)
    data = json.loads(payload.read_text(encoding="utf-8"))

    if collection:
        pages = cms.collection_mapper(definition, loaded).map(
            data,
            root_property or cms.collection_root,
            page=page,
            results_per_page=results_per_page,
        )
        summary: dict[str, typ.Any] = _collection_to_data(pages)
    else:
        summary = _page_to_data(cms.item_mapper(definition, loaded).map(data, root_property))
    print(json.dumps(summary, indent=2, default=str))


def _describe_field(field: SchemaField, depth: int = 0) -> list[str]:
    indent = "  " * depth
    lines = [f"{indent}{field.name}: {field.field_type}"]
    match field:
        case ArraySchemaField():
            for child in field:
                lines.extend(_describe_field(child, depth + 1))
        case FlexibleSchemaField():
            for component in field:
                lines.append(f"{indent}  [{component.name}]")
                for child in component:
                    lines.extend(_describe_field(child, depth + 2))
    return lines


def _collection_to_data(pages: PageCollection) -> dict[str, typ.Any]:
    pagination = pages.pagination
    return {
        "pagination": {
            "page": pagination.page,
            "total_results": pagination.total_results,
            "results_per_page": pagination.results_per_page,
            "total_pages": pagination.total_pages,
        },
        "pages": [_page_to_data(item) for item in pages],
    }


def _page_to_data(page: Page) -> dict[str, typ.Any]:
    return {
        "id": page.id,
        "title": page.title,
        "url_slug": page.url_slug,
        "status": page.status,
        "date_published": _isoformat(page.date_published),
        "date_modified": _isoformat(page.date_modified),
        "template": page.template,
        "excerpt": page.excerpt,
        "head": {"title": page.head.title, "meta": dict(page.head.meta)},
        "content": _fields_to_data(page.content),
    }


def _fields_to_data(collection: ContentFieldCollection) -> dict[str, typ.Any]:
    return {field.name: _field_to_data(field) for field in collection}


def _field_to_data(field: ContentField) -> typ.Any:
    match field:
        case ArrayContent():
            return [_fields_to_data(row) for row in field]
        case FlexibleContent():
            return [
                {"component": component.name, "content": _fields_to_data(component.content)}
                for component in field
            ]
        case Date() | DateTime():
            return field.value.isoformat()
    value = getattr(field, "value", None)
    if isinstance(value, str | int | float | bool | cabc.Sequence | cabc.Mapping):
        return value
    return str(field)


def _isoformat(value: dt.datetime | None) -> str | None:
    return value.isoformat() if value else None


def main() -> None:
    """Invoke the Cyclopts application that powers the `frontend` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
