"""Typed content model produced by the mappers.

Exports the resolved field types, the page and head entities, menus and
taxonomy terms consumed by view templates.
"""

from .collections import SeekableCollection
from .fields import (
    ArrayContent,
    Boolean,
    Component,
    ContentField,
    ContentFieldCollection,
    ContentFieldError,
    Date,
    DateTime,
    Decimal,
    FlexibleContent,
    Image,
    Number,
    PlainArray,
    PlainText,
    Relation,
    RelationArray,
    RichText,
    ShortText,
)
from .menus import Menu, MenuItem, MenuItemCollection
from .page import Head, MetaTagNotAllowedError, Page, PageCollection
from .taxonomies import Term, TermCollection
from .url import UrlPattern, UrlPatternError

__all__ = [
    "ArrayContent",
    "Boolean",
    "Component",
    "ContentField",
    "ContentFieldCollection",
    "ContentFieldError",
    "Date",
    "DateTime",
    "Decimal",
    "FlexibleContent",
    "Head",
    "Image",
    "Menu",
    "MenuItem",
    "MenuItemCollection",
    "MetaTagNotAllowedError",
    "Number",
    "Page",
    "PageCollection",
    "PlainArray",
    "PlainText",
    "Relation",
    "RelationArray",
    "RichText",
    "SeekableCollection",
    "ShortText",
    "Term",
    "TermCollection",
    "UrlPattern",
    "UrlPatternError",
]
