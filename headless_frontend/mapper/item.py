"""Map one raw CMS item into a :class:`Page`."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from ..content.fields import ContentField, ContentFieldCollection, parse_datetime
from ..content.page import Page
from ..resolver import ContentFieldResolver
from .paths import MapperError, PathExpression, as_source

if typ.TYPE_CHECKING:
    from ..content.url import UrlPattern
    from ..schema.models import ContentType
    from .paths import Source

logger = logging.getLogger(__name__)

MAPPING_TARGETS = frozenset(
    {
        "id",
        "title",
        "url_slug",
        "date_published",
        "date_modified",
        "status",
        "excerpt",
        "template",
        "content",
        "head.title",
        "head.meta",
    }
)

MappingTable = cabc.Mapping[str, typ.Any]


class ItemMapper:
    """Apply a mapping table and the content schema to single items.

    Parameters
    ----------
    mapping : Mapping[str, Source | str | Sequence[str]], optional
        Page attribute to source. Strings are path expressions and lists of
        strings are fallback chains; see :func:`as_source`.
    content_type : ContentType, optional
        Schema used by :meth:`map_content_fields`.
    resolver : ContentFieldResolver, optional
        Resolver for content fields. Defaults to a resolver using the
        ``component`` discriminator.
    url_pattern : UrlPattern, optional
        Pattern attached to every mapped page.

    Raises
    ------
    MapperError
        If the mapping names an unknown target or a malformed path.
    """

    def __init__(
        self,
        mapping: MappingTable | None = None,
        content_type: ContentType | None = None,
        resolver: ContentFieldResolver | None = None,
        url_pattern: UrlPattern | None = None,
    ) -> None:
        self.content_type = content_type
        self.resolver = resolver or ContentFieldResolver()
        self.url_pattern = url_pattern
        self.mapping: dict[str, Source] = {}
        if mapping:
            self.set_mapping(mapping)

    def set_mapping(self, mapping: MappingTable) -> None:
        """Replace the mapping table."""
        unknown = sorted(set(mapping) - MAPPING_TARGETS)
        if unknown:
            allowed = ", ".join(sorted(MAPPING_TARGETS))
            msg = f"Unknown mapping target(s) {', '.join(unknown)}. Allowed: {allowed}"
            raise MapperError(msg)
        self.mapping = {target: as_source(entry) for target, entry in mapping.items()}

    def map(self, data: typ.Any, root_property: str | None = None) -> Page:
        """Return a page built from ``data``.

        Parameters
        ----------
        data : Any
            Decoded item, or a document holding it under ``root_property``.
        root_property : str, optional
            Key or path expression (``[data][entry]``) locating the item.

        Raises
        ------
        MapperError
            If the item cannot be found or one of its values cannot be mapped.
        ContentFieldResolutionError
            If the schema uses a field type without a resolver.
        """
        item = _select_root(data, root_property)
        page = Page(
            content_type=self.content_type.name if self.content_type else None,
            url_pattern=self.url_pattern,
        )
        for target, source in self.mapping.items():
            try:
                value = source.resolve(item)
                if value is None:
                    continue
                self._assign(page, target, value)
            except (ValueError, TypeError) as exc:
                msg = f"Cannot map '{target}' from {type(item).__name__} item: {exc}"
                raise MapperError(msg) from exc
        logger.debug("Mapped page id=%s title=%r", page.id, page.title)
        return page

    def map_content_fields(
        self, data: cabc.Mapping[str, typ.Any] | None
    ) -> ContentFieldCollection:
        """Resolve every key of ``data`` declared by the content type.

        Keys without a schema field are skipped, as are null values and
        values that do not resolve.
        """
        if self.content_type is None:
            msg = "Set a content type before mapping custom content fields"
            raise MapperError(msg)
        collection = ContentFieldCollection()
        if not data:
            return collection
        if not isinstance(data, cabc.Mapping):
            msg = f"Content fields must be a mapping, {type(data).__name__} found"
            raise MapperError(msg)

        for name, value in data.items():
            schema_field = self.content_type.get(name)
            if schema_field is None:
                logger.debug(
                    "Content field definition not found for field '%s' in "
                    "content type '%s'",
                    name,
                    self.content_type.name,
                )
                continue
            resolved = self.resolver.resolve(schema_field, value)
            if resolved is not None:
                collection.add(resolved)
        return collection

    def map_head_meta(self, data: typ.Any) -> dict[str, str]:
        """Return head meta tags projected from the item (``og:title``)."""
        source = self.mapping.get("title")
        title = source.resolve(data) if source else None
        if title is None and isinstance(data, cabc.Mapping):
            title = data.get("title")
        if title is None or isinstance(title, cabc.Mapping):
            return {}
        return {"og:title": str(title)}

    def _assign(self, page: Page, target: str, value: typ.Any) -> None:
        match target.split("."):
            case ["id"]:
                page.id = int(value)
            case ["title" | "url_slug" | "status" | "excerpt" | "template" as name]:
                setattr(page, name, str(value))
            case ["date_published" | "date_modified" as name]:
                setattr(page, name, parse_datetime(value))
            case ["content"]:
                page.content = self._content_collection(value)
            case ["head", "title"]:
                page.head.title = str(value)
            case ["head", "meta"]:
                if not isinstance(value, cabc.Mapping):
                    msg = "Head meta must be a mapping of tag names to content"
                    raise TypeError(msg)
                for name, content in value.items():
                    page.head.add_meta(str(name), content)
            case _:
                msg = f"Unknown mapping target '{target}'"
                raise MapperError(msg)

    def _content_collection(self, value: typ.Any) -> ContentFieldCollection:
        match value:
            case ContentFieldCollection():
                return value
            case cabc.Mapping():
                return self.map_content_fields(value)
            case cabc.Iterable() if not isinstance(value, str):
                collection = ContentFieldCollection()
                for field in value:
                    if not isinstance(field, ContentField):
                        msg = f"Expected content fields, {type(field).__name__} found"
                        raise TypeError(msg)
                    collection.add(field)
                return collection
        msg = f"Cannot use {type(value).__name__} as page content"
        raise TypeError(msg)


def _select_root(data: typ.Any, root_property: str | None) -> cabc.Mapping[str, typ.Any]:
    item = data
    if root_property:
        if root_property.startswith("["):
            item = PathExpression(root_property).resolve(data)
        elif isinstance(data, cabc.Mapping):
            item = data.get(root_property)
        else:
            item = None
        if item is None:
            msg = f"Root property '{root_property}' not found in the response data"
            raise MapperError(msg)
    if not isinstance(item, cabc.Mapping):
        msg = f"Cannot map a {type(item).__name__} into a page, expected a mapping"
        raise MapperError(msg)
    return item


__all__ = ["MAPPING_TARGETS", "ItemMapper", "MappingTable"]
