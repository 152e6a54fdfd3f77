"""Growable ASCII byte buffer with explicit length and capacity."""

from __future__ import annotations

from typing import Optional

from ustring.runtime.telemetry import record_event

from . import scan
from .charset import BytePredicate, Text, snapshot
from .errors import ErrorCode
from .storage import DEFAULT_CAPACITY, allocate, grown_capacity, is_live


class Buffer:
    """Single-owner ASCII text value.

    Storage is a ``bytearray`` of exactly ``capacity`` bytes holding the
    content followed by a ``0x00`` terminator, so ``len(self) < capacity``
    whenever anything is allocated. Views of the storage are never handed
    out; every read returns a detached copy.
    """

    __slots__ = ("_data", "_len", "_alive")

    def __init__(self) -> None:
        self._data: Optional[bytearray] = None
        self._len = 0
        self._alive = True

    @classmethod
    def new(cls, text: Optional[Text] = None) -> Optional["Buffer"]:
        source = snapshot(text)
        if source is None:
            return cls.with_capacity(DEFAULT_CAPACITY)
        storage = allocate(grown_capacity(len(source), 0), reason="new")
        if storage is None:
            return None
        storage[: len(source)] = source
        return cls._adopt(storage, len(source))

    @classmethod
    def with_capacity(cls, capacity: int) -> Optional["Buffer"]:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        if capacity == 0:
            return cls()
        storage = allocate(capacity, reason="with_capacity")
        if storage is None:
            return None
        return cls._adopt(storage, 0)

    @classmethod
    def _adopt(cls, storage: bytearray, length: int) -> "Buffer":
        buffer = cls()
        buffer._data = storage
        buffer._len = length
        buffer._terminate()
        return buffer

    # -- lifecycle ---------------------------------------------------------

    @property
    def alive(self) -> bool:
        return self._alive

    def copy(self) -> Optional["Buffer"]:
        return copy(self)

    def drop(self) -> None:
        """Release storage; the handle reads as absent afterwards."""

        self._data = None
        self._len = 0
        self._alive = False

    def __enter__(self) -> "Buffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.drop()
        return False

    # -- read-only accessors ----------------------------------------------

    def __len__(self) -> int:
        return self._len

    @property
    def capacity(self) -> int:
        return 0 if self._data is None else len(self._data)

    def is_empty(self) -> bool:
        return self._len == 0

    def at(self, pos: int) -> int:
        """Byte at ``pos``, or 0 when ``pos`` is out of range."""

        if self._data is None or not 0 <= pos < self._len:
            return 0
        return self._data[pos]

    def as_bytes(self) -> bytes:
        if self._data is None:
            return b""
        return bytes(self._data[: self._len])

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __str__(self) -> str:
        return self.as_bytes().decode("ascii")

    def __repr__(self) -> str:
        if not self._alive:
            return "Buffer(<dropped>)"
        return f"Buffer({self.as_bytes()!r}, capacity={self.capacity})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        return equals(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __contains__(self, pattern: Text) -> bool:
        return scan.contains(self, pattern)

    # -- core mutation -----------------------------------------------------

    def append(self, text: Optional[Text]) -> ErrorCode:
        if not self._alive:
            return ErrorCode.NULLPTR
        # Detach the source first: it may be this very buffer.
        source = snapshot(text)
        if not source:
            return ErrorCode.OK
        new_len = self._len + len(source)
        status = self._reserve(new_len)
        if status is not ErrorCode.OK:
            return status
        assert self._data is not None
        self._data[self._len : new_len] = source
        self._set_length(new_len)
        return ErrorCode.OK

    def clear(self) -> ErrorCode:
        if not self._alive:
            return ErrorCode.NULLPTR
        self._set_length(0)
        return ErrorCode.OK

    def truncate(self, length: int) -> ErrorCode:
        if length < 0:
            raise ValueError("length must be non-negative")
        if not self._alive:
            return ErrorCode.NULLPTR
        if self._len > length:
            self._set_length(length)
        return ErrorCode.OK

    def shrink_to_fit(self) -> ErrorCode:
        if not self._alive:
            return ErrorCode.NULLPTR
        if self._data is None or len(self._data) == self._len + 1:
            return ErrorCode.OK
        storage = allocate(self._len + 1, reason="shrink_to_fit")
        if storage is None:
            return ErrorCode.OOM
        storage[: self._len] = self._data[: self._len]
        self._data = storage
        return ErrorCode.OK

    # -- scan / mutate algorithms -----------------------------------------

    def contains(self, pattern: Optional[Text]) -> bool:
        return scan.contains(self, pattern)

    def contains_fn(self, predicate: Optional[BytePredicate]) -> bool:
        return scan.contains_fn(self, predicate)

    def starts_with(self, pattern: Optional[Text]) -> bool:
        return scan.starts_with(self, pattern)

    def ends_with(self, pattern: Optional[Text]) -> bool:
        return scan.ends_with(self, pattern)

    def trim(self) -> ErrorCode:
        return scan.trim(self)

    def trim_matches(self, pattern: Optional[Text]) -> ErrorCode:
        return scan.trim_matches(self, pattern)

    def trim_matches_fn(self, predicate: Optional[BytePredicate]) -> ErrorCode:
        return scan.trim_matches_fn(self, predicate)

    def trim_start_matches(self, pattern: Optional[Text]) -> ErrorCode:
        return scan.trim_start_matches(self, pattern)

    def trim_start_matches_fn(self, predicate: Optional[BytePredicate]) -> ErrorCode:
        return scan.trim_start_matches_fn(self, predicate)

    def trim_end_matches(self, pattern: Optional[Text]) -> ErrorCode:
        return scan.trim_end_matches(self, pattern)

    def trim_end_matches_fn(self, predicate: Optional[BytePredicate]) -> ErrorCode:
        return scan.trim_end_matches_fn(self, predicate)

    def replace(
        self, pattern: Optional[Text], replacement: Optional[Text] = None
    ) -> ErrorCode:
        return scan.replace(self, pattern, replacement)

    def to_lowercase(self) -> ErrorCode:
        return scan.to_lowercase(self)

    def to_uppercase(self) -> ErrorCode:
        return scan.to_uppercase(self)

    # -- storage helpers used by the scan algorithms ----------------------

    def _reserve(self, length: int) -> ErrorCode:
        """Make room for ``length`` bytes plus terminator, doubling capacity."""

        current = self.capacity
        if length < current:
            return ErrorCode.OK
        capacity = grown_capacity(length, current)
        storage = allocate(capacity, reason="grow")
        if storage is None:
            return ErrorCode.OOM
        if self._data is not None:
            storage[: self._len] = self._data[: self._len]
        self._data = storage
        record_event(
            "buffer::grow",
            level="debug",
            data={"from": current, "to": capacity, "length": length},
        )
        return ErrorCode.OK

    def _replace_storage(self, storage: bytearray, length: int) -> None:
        self._data = storage
        self._set_length(length)

    def _set_length(self, length: int) -> None:
        self._len = length
        self._terminate()

    def _terminate(self) -> None:
        if self._data is not None:
            self._data[self._len] = 0


def length(buffer: Optional[Buffer]) -> int:
    return len(buffer) if is_live(buffer) else 0  # type: ignore[arg-type]


def capacity(buffer: Optional[Buffer]) -> int:
    return buffer.capacity if is_live(buffer) else 0  # type: ignore[union-attr]


def is_empty(buffer: Optional[Buffer]) -> bool:
    return not is_live(buffer) or buffer.is_empty()  # type: ignore[union-attr]


def at(buffer: Optional[Buffer], pos: int) -> int:
    return buffer.at(pos) if is_live(buffer) else 0  # type: ignore[union-attr]


def copy(source: Optional[Buffer]) -> Optional[Buffer]:
    """Independent copy sized to fit; absent or empty sources give a default buffer."""

    if not is_live(source) or source.is_empty():  # type: ignore[union-attr]
        return Buffer.with_capacity(DEFAULT_CAPACITY)
    content = source.as_bytes()  # type: ignore[union-attr]
    storage = allocate(len(content) + 1, reason="copy")
    if storage is None:
        return None
    storage[: len(content)] = content
    return Buffer._adopt(storage, len(content))


def concat(first: Optional[Buffer], second: Optional[Buffer]) -> Optional[Buffer]:
    first_empty = is_empty(first)
    second_empty = is_empty(second)
    if first_empty and second_empty:
        return Buffer.with_capacity(DEFAULT_CAPACITY)
    if second_empty:
        return copy(first)
    if first_empty:
        return copy(second)

    head = first.as_bytes()  # type: ignore[union-attr]
    tail = second.as_bytes()  # type: ignore[union-attr]
    total = len(head) + len(tail)
    storage = allocate(grown_capacity(total, 0), reason="concat")
    if storage is None:
        return None
    storage[: len(head)] = head
    storage[len(head) : total] = tail
    return Buffer._adopt(storage, total)


def equals(first: Optional[Buffer], second: Optional[Buffer]) -> bool:
    """Byte equality; any absent operand compares unequal, even to another."""

    if not is_live(first) or not is_live(second):
        return False
    return first.as_bytes() == second.as_bytes()  # type: ignore[union-attr]


def drop(buffer: Optional[Buffer]) -> None:
    if buffer is not None:
        buffer.drop()


__all__ = [
    "Buffer",
    "DEFAULT_CAPACITY",
    "at",
    "capacity",
    "concat",
    "copy",
    "drop",
    "equals",
    "is_empty",
    "length",
]
