"""Ordered, seekable collections shared by pages, menus and terms."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

T = typ.TypeVar("T")


class SeekableCollection(typ.Generic[T]):
    """List-backed collection with a cursor that can be moved with ``seek``.

    Examples
    --------
    >>> items = SeekableCollection(["a", "b", "c"])
    >>> len(items), items[1]
    (3, 'b')
    >>> items.seek(2)
    'c'
    >>> items.current
    'c'
    """

    def __init__(self, items: cabc.Iterable[T] = ()) -> None:
        self._items: list[T] = list(items)
        self._position = 0

    def __iter__(self) -> cabc.Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SeekableCollection):
            return NotImplemented
        return type(self) is type(other) and self._items == other._items

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def add(self, item: T) -> None:
        """Append ``item`` to the end of the collection."""
        self._items.append(item)

    def seek(self, position: int) -> T:
        """Move the cursor to ``position`` and return the item there.

        Raises
        ------
        IndexError
            If ``position`` is outside the collection.
        """
        if not 0 <= position < len(self._items):
            msg = f"Invalid seek position ({position})"
            raise IndexError(msg)
        self._position = position
        return self._items[position]

    @property
    def position(self) -> int:
        return self._position

    @property
    def current(self) -> T:
        """Return the item under the cursor."""
        try:
            return self._items[self._position]
        except IndexError as exc:
            msg = "Cannot read the current item of an empty collection"
            raise IndexError(msg) from exc


__all__ = ["SeekableCollection"]
