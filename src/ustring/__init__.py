"""Growable ASCII string buffers and owning string lists."""

from .buffer import Buffer, ErrorCode, UStringError, concat, copy, ensure_ok, equals
from .strlist import StringList, join, split, split_whitespace

__all__ = [
    "Buffer",
    "ErrorCode",
    "StringList",
    "UStringError",
    "buffer",
    "concat",
    "copy",
    "ensure_ok",
    "equals",
    "join",
    "playground",
    "runtime",
    "split",
    "split_whitespace",
    "strlist",
]

__version__ = "0.1.0"
