"""Status codes returned by mutating buffer and list operations."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    OK = 0
    NULLPTR = 1  # absent operand, operation skipped
    OOM = 2  # allocation failed, target untouched
    ALIASED = 3  # buffer already owned by the target list


class UStringError(RuntimeError):
    """Raised by ``ensure_ok`` when an operation reports a failure code."""

    def __init__(self, message: str, *, code: ErrorCode) -> None:
        super().__init__(message)
        self.code = code


def ensure_ok(code: ErrorCode, *, operation: str = "operation") -> ErrorCode:
    if code is not ErrorCode.OK:
        raise UStringError(f"{operation} failed with {code.name}", code=code)
    return code


__all__ = ["ErrorCode", "UStringError", "ensure_ok"]
