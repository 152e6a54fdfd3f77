"""Split buffers into lists by delimiter class and join lists back together."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from ustring.buffer import Buffer
from ustring.buffer import copy as copy_buffer
from ustring.buffer.charset import WHITESPACE, Text, byte_set, snapshot
from ustring.buffer.storage import is_live
from ustring.runtime.telemetry import span

from .string_list import StringList

Delimiters = Union[Text, Iterable[int]]


def split(source: Optional[Buffer], delimiters: Optional[Delimiters]) -> Optional[StringList]:
    """Break ``source`` on runs of any delimiter byte.

    Leading, trailing and repeated delimiters never produce empty fields.
    An absent or empty source yields an empty list; an absent or empty
    delimiter set yields a single copy of the source.
    """

    if not is_live(source) or source.is_empty():  # type: ignore[union-attr]
        return StringList()
    assert source is not None

    separators = byte_set(delimiters)
    if not separators:
        whole = StringList()
        duplicate = copy_buffer(source)
        if duplicate is None:
            return None
        whole.push(duplicate)
        return whole

    with span(
        "strlist::split",
        component="strlist",
        metadata={"length": len(source), "delimiters": bytes(sorted(separators))},
    ) as handle:
        data = source.as_bytes()
        size = len(data)
        fields = StringList()
        front = 0
        while front < size:
            while front < size and data[front] in separators:
                front += 1
            back = front
            while back < size and data[back] not in separators:
                back += 1
            if back > front:
                field = Buffer.new(data[front:back])
                if field is None:
                    handle.fail("field allocation failed")
                    fields.drop()
                    return None
                fields.push(field)
            front = back
        handle.add_metadata("fields", fields.size)
        return fields


def split_whitespace(source: Optional[Buffer]) -> Optional[StringList]:
    return split(source, WHITESPACE)


def join(strings: Optional[StringList], separator: Optional[Text] = None) -> Optional[Buffer]:
    """Concatenate every element with ``separator`` between neighbours.

    The output is sized once up front from the element lengths.
    """

    if not is_live(strings) or strings.is_empty():  # type: ignore[union-attr]
        return Buffer.new(None)
    assert strings is not None

    glue = snapshot(separator) or b""
    with span(
        "strlist::join",
        component="strlist",
        metadata={"size": strings.size, "separator": glue},
    ):
        total = len(glue) * (strings.size - 1) + sum(len(item) for item in strings)
        result = Buffer.with_capacity(total + 1)
        if result is None:
            return None
        for index, item in enumerate(strings):
            if index:
                result.append(glue)
            result.append(item)
        return result


__all__ = ["Delimiters", "join", "split", "split_whitespace"]
