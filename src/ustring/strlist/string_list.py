"""Owning, growable list of buffers."""

from __future__ import annotations

from typing import Iterator, List, Optional, Set

from ustring.buffer import Buffer, ErrorCode, equals
from ustring.buffer import copy as copy_buffer
from ustring.buffer.storage import is_live
from ustring.runtime.telemetry import record_event, span

LIST_DEFAULT_CAPACITY = 32


class StringList:
    """Ordered collection that owns every buffer pushed into it.

    Slots at or beyond ``size`` always hold ``None``. ``pop`` hands ownership
    of the last buffer back to the caller; ``drop`` releases everything still
    held.
    """

    __slots__ = ("_items", "_size", "_alive", "_owned")

    def __init__(self, capacity: int = LIST_DEFAULT_CAPACITY) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._items: List[Optional[Buffer]] = [None] * capacity
        self._size = 0
        self._alive = True
        self._owned: Set[int] = set()

    @classmethod
    def with_capacity(cls, capacity: int) -> "StringList":
        return cls(capacity)

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Buffer]:
        for index in range(self._size):
            item = self._items[index]
            assert item is not None
            yield item

    def __repr__(self) -> str:
        if not self._alive:
            return "StringList(<dropped>)"
        return f"StringList({[item.as_bytes() for item in self]!r})"

    def is_empty(self) -> bool:
        return self._size == 0

    def at(self, index: int) -> Optional[Buffer]:
        """Borrow the buffer at ``index``; ``None`` when out of range."""

        if not 0 <= index < self._size:
            return None
        return self._items[index]

    def push(self, buffer: Optional[Buffer]) -> ErrorCode:
        """Move ``buffer`` into the list. The caller must not drop it afterwards."""

        if not self._alive or not is_live(buffer):
            return ErrorCode.NULLPTR
        if id(buffer) in self._owned:
            return ErrorCode.ALIASED
        if self._size == len(self._items):
            grown = len(self._items) * 2 or LIST_DEFAULT_CAPACITY
            self._items.extend([None] * (grown - len(self._items)))
            record_event(
                "strlist::grow",
                level="debug",
                data={"from": self._size, "to": grown},
            )
        self._items[self._size] = buffer
        self._size += 1
        self._owned.add(id(buffer))
        return ErrorCode.OK

    def pop(self) -> Optional[Buffer]:
        """Detach the last buffer and transfer its ownership to the caller."""

        if self._size == 0:
            return None
        self._size -= 1
        buffer = self._items[self._size]
        self._items[self._size] = None
        self._owned.discard(id(buffer))
        return buffer

    def contains(self, buffer: Optional[Buffer]) -> bool:
        if not self._alive or not is_live(buffer):
            return False
        if buffer.is_empty():  # type: ignore[union-attr]
            return any(item.is_empty() for item in self)
        return any(equals(item, buffer) for item in self)

    def __contains__(self, buffer: object) -> bool:
        return isinstance(buffer, Buffer) and self.contains(buffer)

    def copy(self) -> Optional["StringList"]:
        return copy(self)

    def drop(self) -> None:
        """Drop every owned buffer, then the slot array. Safe to repeat."""

        for index in range(self._size):
            item = self._items[index]
            if item is not None:
                item.drop()
        self._items = []
        self._size = 0
        self._owned.clear()
        self._alive = False

    def __enter__(self) -> "StringList":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.drop()
        return False


def size(strings: Optional[StringList]) -> int:
    return strings.size if is_live(strings) else 0  # type: ignore[union-attr]


def is_empty(strings: Optional[StringList]) -> bool:
    return size(strings) == 0


def at(strings: Optional[StringList], index: int) -> Optional[Buffer]:
    return strings.at(index) if is_live(strings) else None  # type: ignore[union-attr]


def pop(strings: Optional[StringList]) -> Optional[Buffer]:
    return strings.pop() if is_live(strings) else None  # type: ignore[union-attr]


def contains(strings: Optional[StringList], buffer: Optional[Buffer]) -> bool:
    return is_live(strings) and strings.contains(buffer)  # type: ignore[union-attr]


def copy(other: Optional[StringList]) -> Optional[StringList]:
    """Deep copy; each buffer is duplicated. Absent sources give an empty list.

    Returns ``None`` if any element could not be allocated.
    """

    if not is_live(other):
        return StringList()
    assert other is not None
    with span(
        "strlist::copy",
        component="strlist",
        metadata={"size": other.size},
    ) as handle:
        duplicate = StringList(other.size)
        for item in other:
            cloned = copy_buffer(item)
            if cloned is None:
                handle.fail("element allocation failed")
                duplicate.drop()
                return None
            duplicate.push(cloned)
        return duplicate


__all__ = [
    "LIST_DEFAULT_CAPACITY",
    "StringList",
    "at",
    "contains",
    "copy",
    "is_empty",
    "pop",
    "size",
]
