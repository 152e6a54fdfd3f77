"""ASCII byte classes, case mapping and input normalization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Optional, Union

if TYPE_CHECKING:
    from .buffer import Buffer

Text = Union[bytes, bytearray, memoryview, str, "Buffer"]
BytePredicate = Callable[[int], bool]

PLACEHOLDER = 0x3F  # '?'
CASE_SHIFT = 0x20
WHITESPACE = b" \t\n\v\r"

_WHITESPACE_SET = frozenset(WHITESPACE)
_NORMALIZE_TABLE = bytes(b if b <= 0x7F else PLACEHOLDER for b in range(256))
_LOWER_TABLE = bytes(b + CASE_SHIFT if 0x41 <= b <= 0x5A else b for b in range(256))
_UPPER_TABLE = bytes(b - CASE_SHIFT if 0x61 <= b <= 0x7A else b for b in range(256))


def is_ascii(byte: int) -> bool:
    return byte <= 0x7F


def is_blank(byte: int) -> bool:
    """Space, horizontal tab, line feed, vertical tab or carriage return."""

    return byte in _WHITESPACE_SET


def is_letter(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


def is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


def to_lower(byte: int) -> int:
    return _LOWER_TABLE[byte]


def to_upper(byte: int) -> int:
    return _UPPER_TABLE[byte]


def lower_bytes(data: bytes) -> bytes:
    return data.translate(_LOWER_TABLE)


def upper_bytes(data: bytes) -> bytes:
    return data.translate(_UPPER_TABLE)


def normalize(data: bytes) -> bytes:
    """Replace every byte outside 0x00-0x7F with the ``?`` placeholder."""

    return data.translate(_NORMALIZE_TABLE)


def snapshot(text: Optional[Text]) -> Optional[bytes]:
    """Return an immutable, normalized copy of ``text`` (``None`` if absent).

    Taking the copy up front is what makes self-referencing operations safe:
    once the bytes are detached, the destination buffer may be resized freely.
    """

    if text is None:
        return None
    if isinstance(text, str):
        return text.encode("ascii", errors="replace")
    if isinstance(text, (bytes, bytearray, memoryview)):
        return normalize(bytes(text))
    as_bytes = getattr(text, "as_bytes", None)
    if as_bytes is None:
        raise TypeError(f"Expected text-like value, got {type(text).__name__}")
    # A dropped buffer reads as absent.
    if not text.alive:
        return None
    return as_bytes()


def byte_set(delimiters: Optional[Union[Text, Iterable[int]]]) -> frozenset[int]:
    """Collect delimiter bytes from text or an iterable of byte values."""

    if delimiters is None:
        return frozenset()
    if isinstance(delimiters, (str, bytes, bytearray, memoryview)) or hasattr(
        delimiters, "as_bytes"
    ):
        return frozenset(snapshot(delimiters) or b"")
    values = set()
    for value in delimiters:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Delimiter {value!r} is not a byte value")
        values.add(_NORMALIZE_TABLE[value])
    return frozenset(values)


__all__ = [
    "BytePredicate",
    "PLACEHOLDER",
    "Text",
    "WHITESPACE",
    "byte_set",
    "is_ascii",
    "is_blank",
    "is_digit",
    "is_letter",
    "lower_bytes",
    "normalize",
    "snapshot",
    "to_lower",
    "to_upper",
    "upper_bytes",
]
