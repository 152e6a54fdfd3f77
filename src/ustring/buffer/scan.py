"""Pattern scans and in-place mutations over a single buffer.

Every function accepts an absent (``None`` or dropped) buffer and degrades
to ``False`` or ``ErrorCode.NULLPTR`` instead of raising. Patterns are
snapshotted before the buffer is touched, so passing a buffer as its own
pattern is safe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from .charset import BytePredicate, Text, is_blank, lower_bytes, snapshot, upper_bytes
from .errors import ErrorCode
from .storage import allocate, grown_capacity, is_live

if TYPE_CHECKING:
    from .buffer import Buffer


def _content(buffer: "Buffer") -> bytearray:
    # Live view over the used region; callers never keep it across a resize.
    return buffer._data if buffer._data is not None else bytearray(1)


def contains(buffer: Optional["Buffer"], pattern: Optional[Text]) -> bool:
    if not is_live(buffer):
        return False
    needle = snapshot(pattern)
    if needle is None:
        return False
    size = len(buffer)
    if not needle:
        return True
    if len(needle) > size:
        return False
    return _content(buffer).find(needle, 0, size) != -1


def contains_fn(buffer: Optional["Buffer"], predicate: Optional[BytePredicate]) -> bool:
    if not is_live(buffer) or predicate is None:
        return False
    data = _content(buffer)
    return any(predicate(data[i]) for i in range(len(buffer)))


def starts_with(buffer: Optional["Buffer"], pattern: Optional[Text]) -> bool:
    if not is_live(buffer):
        return False
    needle = snapshot(pattern)
    if needle is None:
        return False
    if len(needle) > len(buffer):
        return False
    return _content(buffer).startswith(needle, 0, len(buffer))


def ends_with(buffer: Optional["Buffer"], pattern: Optional[Text]) -> bool:
    if not is_live(buffer):
        return False
    needle = snapshot(pattern)
    if needle is None:
        return False
    if len(needle) > len(buffer):
        return False
    return _content(buffer).endswith(needle, 0, len(buffer))


def trim(buffer: Optional["Buffer"]) -> ErrorCode:
    """Strip whitespace from both ends, shifting only if the front moved."""

    if not is_live(buffer):
        return ErrorCode.NULLPTR
    data = _content(buffer)
    front, back = 0, len(buffer)
    while front < back and is_blank(data[front]):
        front += 1
    while back > front and is_blank(data[back - 1]):
        back -= 1
    _shift_window(buffer, front, back)
    return ErrorCode.OK


def trim_matches(buffer: Optional["Buffer"], pattern: Optional[Text]) -> ErrorCode:
    """Remove every non-overlapping occurrence of ``pattern``, left to right."""

    if not is_live(buffer):
        return ErrorCode.NULLPTR
    needle = snapshot(pattern)
    if needle is None:
        return ErrorCode.NULLPTR
    size = len(buffer)
    if not needle or len(needle) > size:
        return ErrorCode.OK

    data = _content(buffer)
    read = write = 0
    while read < size:
        hit = data.find(needle, read, size)
        stop = size if hit == -1 else hit
        if write != read:
            data[write : write + (stop - read)] = data[read:stop]
        write += stop - read
        if hit == -1:
            break
        read = hit + len(needle)
    buffer._set_length(write)
    return ErrorCode.OK


def trim_matches_fn(
    buffer: Optional["Buffer"], predicate: Optional[BytePredicate]
) -> ErrorCode:
    if not is_live(buffer) or predicate is None:
        return ErrorCode.NULLPTR
    data = _content(buffer)
    write = 0
    for read in range(len(buffer)):
        byte = data[read]
        if predicate(byte):
            continue
        data[write] = byte
        write += 1
    buffer._set_length(write)
    return ErrorCode.OK


def trim_start_matches(buffer: Optional["Buffer"], pattern: Optional[Text]) -> ErrorCode:
    """Remove one leading occurrence of ``pattern``."""

    if not is_live(buffer):
        return ErrorCode.NULLPTR
    needle = snapshot(pattern)
    if needle is None:
        return ErrorCode.NULLPTR
    if needle and starts_with(buffer, needle):
        _shift_window(buffer, len(needle), len(buffer))
    return ErrorCode.OK


def trim_start_matches_fn(
    buffer: Optional["Buffer"], predicate: Optional[BytePredicate]
) -> ErrorCode:
    if not is_live(buffer) or predicate is None:
        return ErrorCode.NULLPTR
    data = _content(buffer)
    size = len(buffer)
    front = 0
    while front < size and predicate(data[front]):
        front += 1
    _shift_window(buffer, front, size)
    return ErrorCode.OK


def trim_end_matches(buffer: Optional["Buffer"], pattern: Optional[Text]) -> ErrorCode:
    """Remove one trailing occurrence of ``pattern``."""

    if not is_live(buffer):
        return ErrorCode.NULLPTR
    needle = snapshot(pattern)
    if needle is None:
        return ErrorCode.NULLPTR
    if needle and ends_with(buffer, needle):
        buffer._set_length(len(buffer) - len(needle))
    return ErrorCode.OK


def trim_end_matches_fn(
    buffer: Optional["Buffer"], predicate: Optional[BytePredicate]
) -> ErrorCode:
    if not is_live(buffer) or predicate is None:
        return ErrorCode.NULLPTR
    data = _content(buffer)
    back = len(buffer)
    while back > 0 and predicate(data[back - 1]):
        back -= 1
    if back != len(buffer):
        buffer._set_length(back)
    return ErrorCode.OK


def replace(
    buffer: Optional["Buffer"],
    pattern: Optional[Text],
    replacement: Optional[Text] = None,
) -> ErrorCode:
    """Substitute every non-overlapping ``pattern`` with ``replacement``.

    The result is assembled in fresh storage and swapped in only once it is
    complete; on allocation failure the buffer keeps its old content.
    """

    if not is_live(buffer):
        return ErrorCode.NULLPTR
    needle = snapshot(pattern)
    if needle is None:
        return ErrorCode.NULLPTR
    filler = snapshot(replacement) or b""
    size = len(buffer)
    if not needle or len(needle) > size:
        return ErrorCode.OK

    data = _content(buffer)
    hits: List[int] = []
    cursor = data.find(needle, 0, size)
    while cursor != -1:
        hits.append(cursor)
        cursor = data.find(needle, cursor + len(needle), size)
    if not hits:
        return ErrorCode.OK

    new_len = size + len(hits) * (len(filler) - len(needle))
    storage = allocate(grown_capacity(new_len, buffer.capacity), reason="replace")
    if storage is None:
        return ErrorCode.OOM

    read = write = 0
    for hit in hits:
        chunk = hit - read
        storage[write : write + chunk] = data[read:hit]
        write += chunk
        storage[write : write + len(filler)] = filler
        write += len(filler)
        read = hit + len(needle)
    storage[write:new_len] = data[read:size]
    buffer._replace_storage(storage, new_len)
    return ErrorCode.OK


def to_lowercase(buffer: Optional["Buffer"]) -> ErrorCode:
    if not is_live(buffer):
        return ErrorCode.NULLPTR
    size = len(buffer)
    if size:
        data = _content(buffer)
        data[:size] = lower_bytes(bytes(data[:size]))
    return ErrorCode.OK


def to_uppercase(buffer: Optional["Buffer"]) -> ErrorCode:
    if not is_live(buffer):
        return ErrorCode.NULLPTR
    size = len(buffer)
    if size:
        data = _content(buffer)
        data[:size] = upper_bytes(bytes(data[:size]))
    return ErrorCode.OK


def _shift_window(buffer: "Buffer", front: int, back: int) -> None:
    """Keep ``[front, back)`` as the new content, moving it to offset 0."""

    new_len = back - front
    if new_len and front:
        data = _content(buffer)
        data[:new_len] = data[front:back]
    if new_len != len(buffer):
        buffer._set_length(new_len)


__all__ = [
    "contains",
    "contains_fn",
    "ends_with",
    "replace",
    "starts_with",
    "to_lowercase",
    "to_uppercase",
    "trim",
    "trim_end_matches",
    "trim_end_matches_fn",
    "trim_matches",
    "trim_matches_fn",
    "trim_start_matches",
    "trim_start_matches_fn",
]
