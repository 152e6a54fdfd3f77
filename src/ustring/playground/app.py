"""Textual front end for the playground controller."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Optional

try:  # pragma: no cover - imported only when the TUI is launched
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use ustring.playground.app"
    ) from exc

from .commands import PlaygroundState
from .controller import PlaygroundController, PlaygroundHooks


@dataclass
class UIState:
    buffer_text: str = ""
    list_text: str = ""
    status_text: str = ""


class PlaygroundApp(App[None]):
    """Interactive buffer playground: type a command, watch the buffer change."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#list-view {
		height: 5;
		border: round $secondary;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, initial_text: Optional[str] = None) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_text = initial_text
        self.controller: PlaygroundController | None = None
        self._buffer_widget: Static | None = None
        self._list_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
            self._list_widget = Static("", id="list-view", markup=False)
            yield self._list_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Input(placeholder="command (try: help)", id="command-line")
        yield Footer()

    def on_mount(self) -> None:
        hooks = PlaygroundHooks(
            update_buffer=self._update_buffer,
            update_list=self._update_list,
            update_status=self._update_status,
        )
        self.controller = PlaygroundController(hooks, state=PlaygroundState())
        if self._initial_text is not None:
            self.controller.submit(f"set {shlex.quote(self._initial_text)}")

    def on_unmount(self) -> None:
        if self.controller:
            self.controller.close()
            self.controller = None

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.controller:
            return
        self.controller.submit(event.value)
        event.input.value = ""

    def _update_buffer(self, text: str) -> None:
        self._state.buffer_text = text
        if self._buffer_widget:
            self._buffer_widget.update(repr(self._state.buffer_text))

    def _update_list(self, text: str) -> None:
        self._state.list_text = text
        if self._list_widget:
            self._list_widget.update(f"[{self._state.list_text}]")

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(self._state.status_text)


__all__ = ["PlaygroundApp"]
