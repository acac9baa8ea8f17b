"""Path expressions and value sources for declarative mapping tables.

A path expression such as ``[title][rendered]`` walks nested mappings one
bracketed key at a time; digit keys also index into lists. Sources wrap
expressions with fallbacks, value conversion or custom callables so a mapping
table can read differently shaped CMS payloads.

Examples
--------
>>> from headless_frontend.mapper.paths import SourcePath, integer_value
>>> data = {"id": "42", "post_title": "Hello"}
>>> SourcePath("[title][rendered]", "[post_title]").resolve(data)
'Hello'
>>> integer_value("[id]").resolve(data)
42
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ

from ..content.fields import parse_datetime

PATH_SEGMENT = re.compile(r"\[([^\]]+)\]")


class MapperError(RuntimeError):
    """Raised when raw CMS data cannot be mapped into content objects."""


class Source(typ.Protocol):
    """Anything that can produce a value from one raw item."""

    def resolve(self, data: typ.Any) -> typ.Any: ...


@dc.dataclass(frozen=True, slots=True)
class PathExpression:
    """A parsed ``[key][key]`` expression."""

    expression: str
    keys: tuple[str, ...] = dc.field(init=False)

    def __post_init__(self) -> None:
        keys = tuple(PATH_SEGMENT.findall(self.expression))
        if not keys or "".join(f"[{key}]" for key in keys) != self.expression:
            msg = (
                f"Invalid path expression {self.expression!r}, expected bracketed "
                "keys such as '[title][rendered]'"
            )
            raise MapperError(msg)
        object.__setattr__(self, "keys", keys)

    def resolve(self, data: typ.Any) -> typ.Any:
        """Return the value at this path in ``data``, or None when absent."""
        current = data
        for key in self.keys:
            match current:
                case cabc.Mapping():
                    current = current.get(key)
                case cabc.Sequence() if not isinstance(current, str) and key.isdigit():
                    index = int(key)
                    current = current[index] if index < len(current) else None
                case _:
                    return None
            if current is None:
                return None
        return current

    def __str__(self) -> str:
        return self.expression


class SourcePath:
    """Ordered candidate paths; the first one giving a non-null value wins."""

    __slots__ = ("paths",)

    def __init__(self, *candidates: str) -> None:
        if not candidates:
            msg = "SourcePath needs at least one path expression"
            raise MapperError(msg)
        self.paths = tuple(PathExpression(candidate) for candidate in candidates)

    def resolve(self, data: typ.Any) -> typ.Any:
        for path in self.paths:
            value = path.resolve(data)
            if value is not None:
                return value
        return None

    def __repr__(self) -> str:
        joined = ", ".join(repr(path.expression) for path in self.paths)
        return f"SourcePath({joined})"


class ValueTransform:
    """Convert the value of another source; null values are passed through."""

    __slots__ = ("convert", "source")

    def __init__(
        self, source: Source, convert: cabc.Callable[[typ.Any], typ.Any]
    ) -> None:
        self.source = source
        self.convert = convert

    def resolve(self, data: typ.Any) -> typ.Any:
        value = self.source.resolve(data)
        if value is None:
            return None
        return self.convert(value)


class CallableData:
    """Compute a value from the whole raw item."""

    __slots__ = ("func",)

    def __init__(self, func: cabc.Callable[[typ.Any], typ.Any]) -> None:
        self.func = func

    def resolve(self, data: typ.Any) -> typ.Any:
        return self.func(data)


def integer_value(*candidates: str) -> ValueTransform:
    """Read the first non-null candidate path as an integer."""
    return ValueTransform(SourcePath(*candidates), int)


def datetime_value(*candidates: str, fmt: str | None = None) -> ValueTransform:
    """Read the first non-null candidate path as a datetime."""
    return ValueTransform(
        SourcePath(*candidates), lambda value: parse_datetime(value, fmt)
    )


def as_source(entry: Source | str | cabc.Sequence[str]) -> Source:
    """Return a source for a mapping-table entry.

    A string is a single path, a list or tuple of strings a fallback chain,
    and a bare callable is called with the whole item.
    """
    match entry:
        case str():
            return SourcePath(entry)
        case list() | tuple():
            return SourcePath(*entry)
        case _ if hasattr(entry, "resolve"):
            return typ.cast("Source", entry)
        case _ if callable(entry):
            return CallableData(entry)
    msg = f"Unsupported mapping source {entry!r}"
    raise MapperError(msg)


__all__ = [
    "CallableData",
    "MapperError",
    "PathExpression",
    "Source",
    "SourcePath",
    "ValueTransform",
    "as_source",
    "datetime_value",
    "integer_value",
]
