"""Resolved content field values.

Each field is a dataclass carrying the name of the schema field it was
resolved from and a value coerced to the field's Python type. Construction
raises :class:`ContentFieldError` when the name or the raw value is invalid,
so callers can treat a failed coercion as a missing field.

Examples
--------
>>> from headless_frontend.content.fields import Decimal, ShortText
>>> ShortText("title", "Hello\\nworld").value
'Helloworld'
>>> Decimal("price", "12.345", precision=2, rounding="down").value
12.34
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import decimal
import re
import typing as typ

FIELD_NAME_PATTERN = re.compile(r"^[a-z0-9_-]+$", re.IGNORECASE)
NEWLINES = re.compile(r"\r\n|\r|\n")

TRUE_STRINGS = frozenset({"1", "y", "yes", "true", "on"})
FALSE_STRINGS = frozenset({"", "0", "n", "no", "false", "off"})

ROUNDING_MODES: dict[str, str] = {
    "up": decimal.ROUND_HALF_UP,
    "down": decimal.ROUND_HALF_DOWN,
    "even": decimal.ROUND_HALF_EVEN,
    "odd": "odd",
}


class ContentFieldError(ValueError):
    """Raised when a content field cannot be built from its name or value."""


def _validate_name(name: str) -> None:
    if not FIELD_NAME_PATTERN.match(name):
        msg = f"Invalid content field name: {name!r}"
        raise ContentFieldError(msg)


def parse_datetime(value: object, fmt: str | None = None) -> dt.datetime:
    """Return a datetime parsed from ``value``.

    ``value`` may already be a datetime or date. Strings are read with
    ``fmt`` (``strftime`` directives) when given, otherwise as ISO 8601 with a
    trailing ``Z`` treated as UTC. Unix timestamps are read as UTC.

    Raises
    ------
    ContentFieldError
        If the value cannot be read as a datetime.
    """
    match value:
        case dt.datetime():
            return value
        case dt.date():
            return dt.datetime.combine(value, dt.time())
        case bool():
            pass
        case int() | float():
            try:
                return dt.datetime.fromtimestamp(value, tz=dt.UTC)
            except (OverflowError, OSError, ValueError) as exc:
                msg = f"Timestamp {value!r} is out of range"
                raise ContentFieldError(msg) from exc
        case str() as text:
            sanitized = text.strip()
            if sanitized:
                try:
                    if fmt:
                        return dt.datetime.strptime(sanitized, fmt)  # noqa: DTZ007
                    if sanitized.endswith("Z"):
                        sanitized = sanitized[:-1] + "+00:00"
                    return dt.datetime.fromisoformat(sanitized)
                except ValueError as exc:
                    msg = f"Cannot read {text!r} as a date"
                    raise ContentFieldError(msg) from exc
    msg = f"Cannot read {value!r} as a date"
    raise ContentFieldError(msg)


@dc.dataclass(slots=True)
class ContentField:
    """Base for every resolved field; holds the source schema field name."""

    field_type: typ.ClassVar[str] = "field"
    has_html: typ.ClassVar[bool] = False

    name: str

    def __post_init__(self) -> None:
        _validate_name(self.name)


@dc.dataclass(slots=True)
class ShortText(ContentField):
    """Single-line text; line breaks are removed."""

    field_type: typ.ClassVar[str] = "text"

    value: str = ""

    def __post_init__(self) -> None:
        _validate_name(self.name)
        self.value = NEWLINES.sub("", _coerce_str(self.value))

    def __str__(self) -> str:
        return self.value


@dc.dataclass(slots=True)
class PlainText(ContentField):
    field_type: typ.ClassVar[str] = "plaintext"

    value: str = ""

    def __post_init__(self) -> None:
        _validate_name(self.name)
        self.value = _coerce_str(self.value)

    def __str__(self) -> str:
        return self.value


@dc.dataclass(slots=True)
class RichText(ContentField):
    """HTML content, kept as received."""

    field_type: typ.ClassVar[str] = "richtext"
    has_html: typ.ClassVar[bool] = True

    value: str = ""

    def __post_init__(self) -> None:
        _validate_name(self.name)
        self.value = _coerce_str(self.value)

    def __str__(self) -> str:
        return self.value


@dc.dataclass(slots=True)
class Number(ContentField):
    field_type: typ.ClassVar[str] = "number"

    value: int = 0

    def __post_init__(self) -> None:
        _validate_name(self.name)
        self.value = _coerce_int(self.value)

    def __str__(self) -> str:
        return str(self.value)


@dc.dataclass(slots=True)
class Decimal(ContentField):
    """Floating point number rounded to ``precision`` places.

    ``rounding`` picks how halves are rounded: ``up`` (away from zero),
    ``down`` (towards zero), ``even`` or ``odd`` (to the nearest even or odd
    digit).
    """

    field_type: typ.ClassVar[str] = "decimal"

    value: float = 0.0
    precision: int = 2
    rounding: str = "up"

    def __post_init__(self) -> None:
        _validate_name(self.name)
        if self.rounding not in ROUNDING_MODES:
            allowed = ", ".join(ROUNDING_MODES)
            msg = f"Invalid rounding mode {self.rounding!r}, you must pass one of: {allowed}"
            raise ContentFieldError(msg)
        try:
            self.precision = int(self.precision)
        except (TypeError, ValueError) as exc:
            msg = f"Invalid decimal precision {self.precision!r}"
            raise ContentFieldError(msg) from exc
        self.value = _round_half(
            _coerce_decimal(self.value), self.precision, self.rounding
        )

    def __str__(self) -> str:
        return str(self.value)


@dc.dataclass(slots=True)
class Date(ContentField):
    """Calendar date; ``fmt`` gives the ``strptime`` format of string input."""

    field_type: typ.ClassVar[str] = "date"

    value: dt.date
    fmt: dc.InitVar[str | None] = None

    def __post_init__(self, fmt: str | None) -> None:
        _validate_name(self.name)
        if isinstance(self.value, dt.date) and not isinstance(
            self.value, dt.datetime
        ):
            return
        self.value = parse_datetime(self.value, fmt).date()

    def format(self, fmt: str) -> str:
        return self.value.strftime(fmt)

    def __str__(self) -> str:
        return self.value.isoformat()


@dc.dataclass(slots=True)
class DateTime(ContentField):
    field_type: typ.ClassVar[str] = "datetime"

    value: dt.datetime
    fmt: dc.InitVar[str | None] = None

    def __post_init__(self, fmt: str | None) -> None:
        _validate_name(self.name)
        self.value = parse_datetime(self.value, fmt)

    def format(self, fmt: str) -> str:
        return self.value.strftime(fmt)

    def __str__(self) -> str:
        return self.value.isoformat()


@dc.dataclass(slots=True)
class Boolean(ContentField):
    """Boolean read from a bool, a number or a yes/no style string."""

    field_type: typ.ClassVar[str] = "boolean"

    value: bool = False

    def __post_init__(self) -> None:
        _validate_name(self.name)
        self.value = _coerce_bool(self.value)

    def __bool__(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dc.dataclass(slots=True)
class PlainArray(ContentField):
    """List or mapping of plain values stored without per-element typing."""

    field_type: typ.ClassVar[str] = "plainarray"

    value: list[typ.Any] | dict[str, typ.Any] = dc.field(default_factory=list)

    def __post_init__(self) -> None:
        _validate_name(self.name)
        match self.value:
            case cabc.Mapping():
                self.value = dict(self.value)
            case str() | bytes():
                msg = f"Plain array field '{self.name}' needs a list, not a string"
                raise ContentFieldError(msg)
            case cabc.Sequence():
                self.value = list(self.value)
            case _:
                msg = (
                    f"Plain array field '{self.name}' needs a list or mapping, "
                    f"{type(self.value).__name__} found"
                )
                raise ContentFieldError(msg)

    def __iter__(self) -> cabc.Iterator[typ.Any]:
        return iter(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        values = self.value.values() if isinstance(self.value, dict) else self.value
        return ", ".join(str(item) for item in values)


@dc.dataclass(slots=True)
class Image(ContentField):
    """Image asset reference; not resolved from CMS data yet."""

    field_type: typ.ClassVar[str] = "image"

    url: str | None = None
    alt: str = ""

    def __str__(self) -> str:
        return self.url or ""


@dc.dataclass(slots=True)
class Relation(ContentField):
    """Reference to another content item; not resolved from CMS data yet."""

    field_type: typ.ClassVar[str] = "relation"

    content_type: str | None = None
    value: typ.Any = None

    def __str__(self) -> str:
        return "" if self.value is None else str(self.value)


@dc.dataclass(slots=True)
class RelationArray(ContentField):
    """References to other content items; not resolved from CMS data yet."""

    field_type: typ.ClassVar[str] = "relation_array"

    content_type: str | None = None
    items: list[typ.Any] = dc.field(default_factory=list)

    def __str__(self) -> str:
        return ", ".join(str(item) for item in self.items)


@dc.dataclass(slots=True)
class ContentFieldCollection:
    """Ordered mapping of field name to resolved content field.

    Adding a field whose name is already present replaces it in place.
    """

    fields: dict[str, ContentField] = dc.field(default_factory=dict)

    def add(self, field: ContentField) -> None:
        self.fields[field.name] = field

    def remove(self, name: str) -> None:
        self.fields.pop(name, None)

    def get(self, name: str) -> ContentField | None:
        return self.fields.get(name)

    def names(self) -> list[str]:
        return list(self.fields)

    def __getitem__(self, name: str) -> ContentField:
        return self.fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> cabc.Iterator[ContentField]:
        return iter(self.fields.values())

    def __len__(self) -> int:
        return len(self.fields)

    def __str__(self) -> str:
        return "".join(str(field) for field in self.fields.values())


@dc.dataclass(slots=True)
class ArrayContent(ContentField):
    """Repeating group: one :class:`ContentFieldCollection` per source row."""

    field_type: typ.ClassVar[str] = "array"

    rows: list[ContentFieldCollection] = dc.field(default_factory=list)

    def add_row(self, row: ContentFieldCollection) -> None:
        self.rows.append(row)

    def __iter__(self) -> cabc.Iterator[ContentFieldCollection]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> ContentFieldCollection:
        return self.rows[index]

    def __str__(self) -> str:
        return "".join(str(row) for row in self.rows)


@dc.dataclass(slots=True)
class Component:
    """One flexible content block, named after its component schema."""

    name: str
    content: ContentFieldCollection = dc.field(default_factory=ContentFieldCollection)

    def add(self, field: ContentField) -> None:
        self.content.add(field)

    def __len__(self) -> int:
        return len(self.content)

    def __str__(self) -> str:
        return str(self.content)


@dc.dataclass(slots=True)
class FlexibleContent(ContentField):
    """Ordered list of components selected per record by a discriminator."""

    field_type: typ.ClassVar[str] = "flexible"
    has_html: typ.ClassVar[bool] = True

    components: list[Component] = dc.field(default_factory=list)

    def add_component(self, component: Component) -> None:
        self.components.append(component)

    def __iter__(self) -> cabc.Iterator[Component]:
        return iter(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def __getitem__(self, index: int) -> Component:
        return self.components[index]

    def __str__(self) -> str:
        return "".join(str(component) for component in self.components)


def _coerce_str(value: object) -> str:
    match value:
        case str():
            return value
        case bool():
            return "1" if value else ""
        case int() | float():
            return str(value)
        case None:
            return ""
    msg = f"Cannot use a {type(value).__name__} as text"
    raise ContentFieldError(msg)


def _coerce_int(value: object) -> int:
    match value:
        case bool():
            return int(value)
        case int():
            return value
        case float():
            try:
                return int(value)
            except (OverflowError, ValueError) as exc:
                msg = f"Cannot read {value!r} as a number"
                raise ContentFieldError(msg) from exc
        case str() as text:
            try:
                return int(text.strip())
            except ValueError:
                pass
            try:
                return int(float(text.strip()))
            except (OverflowError, ValueError) as exc:
                msg = f"Cannot read {text!r} as a number"
                raise ContentFieldError(msg) from exc
    msg = f"Cannot read {value!r} as a number"
    raise ContentFieldError(msg)


def _coerce_decimal(value: object) -> decimal.Decimal:
    match value:
        case bool():
            pass
        case int() | float() | str():
            try:
                number = decimal.Decimal(str(value).strip())
            except decimal.InvalidOperation as exc:
                msg = f"Cannot read {value!r} as a decimal"
                raise ContentFieldError(msg) from exc
            if number.is_finite():
                return number
    msg = f"Cannot read {value!r} as a decimal"
    raise ContentFieldError(msg)


def _coerce_bool(value: object) -> bool:
    match value:
        case bool():
            return value
        case int() | float():
            return value != 0
        case str() as text:
            normalized = text.strip().lower()
            if normalized in TRUE_STRINGS:
                return True
            if normalized in FALSE_STRINGS:
                return False
        case None:
            return False
    msg = f"Cannot read {value!r} as a boolean"
    raise ContentFieldError(msg)


def _round_half(number: decimal.Decimal, precision: int, mode: str) -> float:
    try:
        return _quantize(number, precision, mode)
    except decimal.InvalidOperation as exc:
        msg = f"Cannot round {number} to {precision} decimal places"
        raise ContentFieldError(msg) from exc


def _quantize(number: decimal.Decimal, precision: int, mode: str) -> float:
    exponent = decimal.Decimal(1).scaleb(-precision)
    if mode != "odd":
        return float(number.quantize(exponent, rounding=ROUNDING_MODES[mode]))

    scaled = number.scaleb(precision)
    floor = scaled.to_integral_value(rounding=decimal.ROUND_FLOOR)
    if scaled - floor == decimal.Decimal("0.5"):
        rounded = floor if floor % 2 else floor + 1
    else:
        rounded = scaled.to_integral_value(rounding=decimal.ROUND_HALF_UP)
    return float(rounded.scaleb(-precision))


__all__ = [
    "ROUNDING_MODES",
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
    "Image",
    "Number",
    "PlainArray",
    "PlainText",
    "Relation",
    "RelationArray",
    "RichText",
    "ShortText",
    "parse_datetime",
]
