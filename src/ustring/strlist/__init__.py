"""Owning buffer lists plus split/join."""

from .split import Delimiters, join, split, split_whitespace
from .string_list import (
    LIST_DEFAULT_CAPACITY,
    StringList,
    at,
    contains,
    copy,
    is_empty,
    pop,
    size,
)

__all__ = [
    "Delimiters",
    "LIST_DEFAULT_CAPACITY",
    "StringList",
    "at",
    "contains",
    "copy",
    "is_empty",
    "join",
    "pop",
    "size",
    "split",
    "split_whitespace",
]
