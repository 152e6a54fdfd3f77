"""Allocation and growth policy shared by buffers and their algorithms."""

from __future__ import annotations

from typing import Any, Optional

from ustring.runtime.telemetry import record_event

DEFAULT_CAPACITY = 32


def grown_capacity(length: int, start: int) -> int:
    """Smallest doubling of ``start`` (or the default) strictly above ``length``."""

    capacity = start or DEFAULT_CAPACITY
    while length >= capacity:
        capacity *= 2
    return capacity


def allocate(capacity: int, *, reason: str) -> Optional[bytearray]:
    try:
        return bytearray(capacity)
    except MemoryError:
        record_event(
            "buffer::oom",
            level="error",
            data={"capacity": capacity, "reason": reason},
        )
        return None


def is_live(handle: Optional[Any]) -> bool:
    return handle is not None and handle.alive


__all__ = ["DEFAULT_CAPACITY", "allocate", "grown_capacity", "is_live"]
