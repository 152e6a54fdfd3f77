"""Command-line verbs evaluated against a playground session."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Dict, List, Optional

from ustring.buffer import Buffer, ErrorCode, UStringError, ensure_ok
from ustring.buffer.charset import BytePredicate, is_blank, is_digit, is_letter
from ustring.strlist import StringList, join, split, split_whitespace


@dataclass(slots=True)
class PlaygroundState:
    """Buffer and list the commands operate on."""

    buffer: Buffer = field(default_factory=lambda: _fresh(None))
    strings: StringList = field(default_factory=StringList)

    def replace_buffer(self, buffer: Optional[Buffer]) -> None:
        if buffer is None:
            raise UStringError("allocation failed", code=ErrorCode.OOM)
        self.buffer.drop()
        self.buffer = buffer

    def replace_strings(self, strings: Optional[StringList]) -> None:
        if strings is None:
            raise UStringError("allocation failed", code=ErrorCode.OOM)
        self.strings.drop()
        self.strings = strings

    def close(self) -> None:
        self.buffer.drop()
        self.strings.drop()


@dataclass(slots=True)
class CommandResult:
    status: str = "ok"
    message: Optional[str] = None
    changed: bool = False

    @property
    def failed(self) -> bool:
        return self.status.startswith("command_") and self.status != "command_empty"


CommandHandler = Callable[[PlaygroundState, List[str]], CommandResult]

CHARACTER_CLASSES: Dict[str, BytePredicate] = {
    "blank": is_blank,
    "digit": is_digit,
    "letter": is_letter,
}


def _fresh(text: Optional[str]) -> Buffer:
    buffer = Buffer.new(text)
    if buffer is None:
        raise UStringError("allocation failed", code=ErrorCode.OOM)
    return buffer


def submit_command_line(state: PlaygroundState, text: str) -> CommandResult:
    raw = text.strip()
    if not raw:
        return CommandResult(status="command_empty")
    try:
        parts = shlex.split(raw)
    except ValueError as exc:
        return CommandResult(status="command_parse_error", message=str(exc))
    command, args = parts[0], parts[1:]
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return CommandResult(status="command_unknown", message=command)
    try:
        return handler(state, args)
    except UStringError as exc:
        return CommandResult(status="command_failed", message=str(exc))


def command_names() -> List[str]:
    return sorted(_COMMAND_HANDLERS)


def _usage(command: str, usage: str) -> CommandResult:
    return CommandResult(status="command_usage", message=f"usage: {command} {usage}")


def _flag(value: bool) -> CommandResult:
    return CommandResult(message="true" if value else "false")


def _list_message(strings: StringList) -> str:
    return "[" + ", ".join(repr(str(item)) for item in strings) + "]"


def _handle_show(state: PlaygroundState, args: List[str]) -> CommandResult:
    del args
    return CommandResult(message=str(state.buffer))


def _handle_info(state: PlaygroundState, args: List[str]) -> CommandResult:
    del args
    buffer = state.buffer
    return CommandResult(
        message=(
            f"len={len(buffer)} cap={buffer.capacity} "
            f"items={state.strings.size} list_cap={state.strings.capacity}"
        )
    )


def _handle_set(state: PlaygroundState, args: List[str]) -> CommandResult:
    state.replace_buffer(Buffer.new(" ".join(args)))
    return CommandResult(changed=True)


def _handle_append(state: PlaygroundState, args: List[str]) -> CommandResult:
    if not args:
        return _usage("append", "TEXT")
    ensure_ok(state.buffer.append(" ".join(args)), operation="append")
    return CommandResult(changed=True)


def _handle_truncate(state: PlaygroundState, args: List[str]) -> CommandResult:
    if len(args) != 1 or not (args[0].isascii() and args[0].isdigit()):
        return _usage("truncate", "LENGTH")
    ensure_ok(state.buffer.truncate(int(args[0])), operation="truncate")
    return CommandResult(changed=True)


def _handle_simple(
    state: PlaygroundState, args: List[str], *, operation: str
) -> CommandResult:
    if args:
        return _usage(operation, "")
    method = getattr(state.buffer, operation.replace("-", "_"))
    ensure_ok(method(), operation=operation)
    return CommandResult(changed=True)


def _handle_pattern(
    state: PlaygroundState, args: List[str], *, operation: str, method_name: str
) -> CommandResult:
    if len(args) != 1:
        return _usage(operation, "PATTERN")
    ensure_ok(getattr(state.buffer, method_name)(args[0]), operation=operation)
    return CommandResult(changed=True)


def _handle_class(
    state: PlaygroundState, args: List[str], *, operation: str, method_name: str
) -> CommandResult:
    if len(args) != 1 or args[0] not in CHARACTER_CLASSES:
        return _usage(operation, "|".join(sorted(CHARACTER_CLASSES)))
    predicate = CHARACTER_CLASSES[args[0]]
    ensure_ok(getattr(state.buffer, method_name)(predicate), operation=operation)
    return CommandResult(changed=True)


def _handle_replace(state: PlaygroundState, args: List[str]) -> CommandResult:
    if len(args) not in {1, 2}:
        return _usage("replace", "PATTERN [REPLACEMENT]")
    replacement = args[1] if len(args) == 2 else None
    ensure_ok(state.buffer.replace(args[0], replacement), operation="replace")
    return CommandResult(changed=True)


def _handle_query(
    state: PlaygroundState, args: List[str], *, operation: str, method_name: str
) -> CommandResult:
    if len(args) != 1:
        return _usage(operation, "PATTERN")
    return _flag(getattr(state.buffer, method_name)(args[0]))


def _handle_has_class(state: PlaygroundState, args: List[str]) -> CommandResult:
    if len(args) != 1 or args[0] not in CHARACTER_CLASSES:
        return _usage("has-class", "|".join(sorted(CHARACTER_CLASSES)))
    return _flag(state.buffer.contains_fn(CHARACTER_CLASSES[args[0]]))


def _handle_split(state: PlaygroundState, args: List[str]) -> CommandResult:
    if len(args) != 1:
        return _usage("split", "DELIMITERS")
    state.replace_strings(split(state.buffer, args[0]))
    return CommandResult(message=_list_message(state.strings), changed=True)


def _handle_split_ws(state: PlaygroundState, args: List[str]) -> CommandResult:
    del args
    state.replace_strings(split_whitespace(state.buffer))
    return CommandResult(message=_list_message(state.strings), changed=True)


def _handle_join(state: PlaygroundState, args: List[str]) -> CommandResult:
    if len(args) > 1:
        return _usage("join", "[SEPARATOR]")
    state.replace_buffer(join(state.strings, args[0] if args else None))
    return CommandResult(changed=True)


def _handle_push(state: PlaygroundState, args: List[str]) -> CommandResult:
    item = Buffer.new(" ".join(args)) if args else state.buffer.copy()
    if item is None:
        raise UStringError("allocation failed", code=ErrorCode.OOM)
    ensure_ok(state.strings.push(item), operation="push")
    return CommandResult(message=_list_message(state.strings), changed=True)


def _handle_pop(state: PlaygroundState, args: List[str]) -> CommandResult:
    del args
    item = state.strings.pop()
    if item is None:
        return CommandResult(status="command_empty_list", message="list is empty")
    state.replace_buffer(item)
    return CommandResult(changed=True)


def _handle_list(state: PlaygroundState, args: List[str]) -> CommandResult:
    del args
    return CommandResult(message=_list_message(state.strings))


def _handle_help(state: PlaygroundState, args: List[str]) -> CommandResult:
    del state, args
    return CommandResult(message=" ".join(command_names()))


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "show": _handle_show,
    "info": _handle_info,
    "help": _handle_help,
    "set": _handle_set,
    "append": _handle_append,
    "truncate": _handle_truncate,
    "clear": partial(_handle_simple, operation="clear"),
    "shrink": partial(_handle_simple, operation="shrink-to-fit"),
    "trim": partial(_handle_simple, operation="trim"),
    "lower": partial(_handle_simple, operation="to-lowercase"),
    "upper": partial(_handle_simple, operation="to-uppercase"),
    "trim-matches": partial(
        _handle_pattern, operation="trim-matches", method_name="trim_matches"
    ),
    "trim-start": partial(
        _handle_pattern, operation="trim-start", method_name="trim_start_matches"
    ),
    "trim-end": partial(
        _handle_pattern, operation="trim-end", method_name="trim_end_matches"
    ),
    "strip-class": partial(
        _handle_class, operation="strip-class", method_name="trim_matches_fn"
    ),
    "trim-start-class": partial(
        _handle_class,
        operation="trim-start-class",
        method_name="trim_start_matches_fn",
    ),
    "trim-end-class": partial(
        _handle_class, operation="trim-end-class", method_name="trim_end_matches_fn"
    ),
    "replace": _handle_replace,
    "contains": partial(_handle_query, operation="contains", method_name="contains"),
    "starts-with": partial(
        _handle_query, operation="starts-with", method_name="starts_with"
    ),
    "ends-with": partial(_handle_query, operation="ends-with", method_name="ends_with"),
    "has-class": _handle_has_class,
    "split": _handle_split,
    "split-ws": _handle_split_ws,
    "join": _handle_join,
    "push": _handle_push,
    "pop": _handle_pop,
    "list": _handle_list,
}


__all__ = [
    "CHARACTER_CLASSES",
    "CommandResult",
    "PlaygroundState",
    "command_names",
    "submit_command_line",
]
