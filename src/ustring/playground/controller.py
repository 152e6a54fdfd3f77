"""UI-agnostic controller that routes command lines into a playground state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ustring.runtime.telemetry import span

from .commands import CommandResult, PlaygroundState, submit_command_line


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class PlaygroundHooks:
    """Callbacks a host (Textual app, terminal runner) uses to render state."""

    update_buffer: Callable[[str], None]
    update_list: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class PlaygroundController:
    def __init__(
        self,
        hooks: PlaygroundHooks,
        *,
        state: Optional[PlaygroundState] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.hooks = hooks
        self.state = state or PlaygroundState()
        self._logger_name = logger_name
        self._refresh()

    def submit(self, line: str) -> CommandResult:
        with span(
            "playground::command",
            logger_name=self._logger_name,
            component="playground",
            metadata={"line": line},
        ) as handle:
            result = submit_command_line(self.state, line)
            handle.add_metadata("status", result.status)
        self._log_state("command ->", line=line, status=result.status)
        if result.message is not None:
            self.hooks.update_status(result.message)
        else:
            self.hooks.update_status(result.status)
        if result.changed:
            self._refresh()
        return result

    def close(self) -> None:
        self.state.close()

    def _refresh(self) -> None:
        self.hooks.update_buffer(str(self.state.buffer))
        self.hooks.update_list(
            ", ".join(repr(str(item)) for item in self.state.strings)
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "length": len(self.state.buffer),
            "capacity": self.state.buffer.capacity,
            "items": self.state.strings.size,
        }


__all__ = ["PlaygroundController", "PlaygroundHooks"]
