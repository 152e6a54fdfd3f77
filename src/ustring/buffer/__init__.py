"""Growable ASCII buffers and the algorithms that scan and mutate them."""

from . import charset, scan
from .buffer import (
    Buffer,
    at,
    capacity,
    concat,
    copy,
    drop,
    equals,
    is_empty,
    length,
)
from .errors import ErrorCode, UStringError, ensure_ok
from .storage import DEFAULT_CAPACITY

__all__ = [
    "Buffer",
    "DEFAULT_CAPACITY",
    "ErrorCode",
    "UStringError",
    "at",
    "capacity",
    "charset",
    "concat",
    "copy",
    "drop",
    "ensure_ok",
    "equals",
    "is_empty",
    "length",
    "scan",
]
