from __future__ import annotations

import io
from typing import List

import pytest

from ustring.playground import (
    PlaygroundController,
    PlaygroundHooks,
    PlaygroundState,
    command_names,
    submit_command_line,
)
from ustring.playground.cli import main, run_script


def run(state: PlaygroundState, *lines: str) -> list:
    return [submit_command_line(state, line) for line in lines]


def test_set_trim_and_show() -> None:
    state = PlaygroundState()
    results = run(state, "set '\n   foo bar\v  '", "trim", "show")

    assert [result.status for result in results] == ["ok", "ok", "ok"]
    assert results[-1].message == "foo bar"


def test_replace_and_queries() -> None:
    state = PlaygroundState()
    run(state, "set 'Pull and Push'", "replace and")

    assert str(state.buffer) == "Pull  Push"
    assert submit_command_line(state, "contains and").message == "false"
    assert submit_command_line(state, "starts-with Pull").message == "true"
    assert submit_command_line(state, "ends-with Pull").message == "false"
    assert submit_command_line(state, "has-class digit").message == "false"


def test_character_class_commands() -> None:
    state = PlaygroundState()
    run(state, "set '  12ab34  '", "trim-start-class blank", "trim-end-class blank")
    assert str(state.buffer) == "12ab34"

    run(state, "strip-class digit")
    assert str(state.buffer) == "ab"

    result = submit_command_line(state, "strip-class vowels")
    assert result.status == "command_usage"


def test_split_push_pop_join() -> None:
    state = PlaygroundState()
    split = run(state, "set ' .One, Two; Three'", "split ' .,;'")[-1]
    assert split.message == "['One', 'Two', 'Three']"

    run(state, "join -")
    assert str(state.buffer) == "One-Two-Three"

    run(state, "push Four", "pop")
    assert str(state.buffer) == "Four"
    assert state.strings.size == 3


def test_pop_on_empty_list_reports_failure() -> None:
    state = PlaygroundState()
    result = submit_command_line(state, "pop")

    assert result.status == "command_empty_list"
    assert result.failed


def test_unknown_and_malformed_commands() -> None:
    state = PlaygroundState()

    assert submit_command_line(state, "explode").status == "command_unknown"
    assert submit_command_line(state, "set 'unterminated").status == (
        "command_parse_error"
    )
    assert submit_command_line(state, "truncate many").status == "command_usage"
    assert submit_command_line(state, "   ").status == "command_empty"
    assert not submit_command_line(state, "   ").failed


def test_help_lists_commands() -> None:
    state = PlaygroundState()
    message = submit_command_line(state, "help").message

    assert message is not None
    assert message.split() == command_names()
    assert "split-ws" in command_names()


def test_controller_refreshes_hooks() -> None:
    buffers: List[str] = []
    statuses: List[str] = []
    lists: List[str] = []
    logs: List[str] = []
    hooks = PlaygroundHooks(
        update_buffer=buffers.append,
        update_list=lists.append,
        update_status=statuses.append,
        log=logs.append,
    )
    controller = PlaygroundController(hooks)

    controller.submit("set 'a b  c'")
    controller.submit("split-ws")
    controller.submit("info")

    assert buffers[0] == ""
    assert buffers[-1] == "a b  c"
    assert lists[-1] == "'a', 'b', 'c'"
    assert statuses[-1].startswith("len=6 cap=32 items=3")
    assert logs and logs[-1].startswith("command ->")

    controller.close()
    assert not controller.state.buffer.alive
    assert not controller.state.strings.alive


def test_run_script_writes_transcript() -> None:
    out = io.StringIO()
    results = run_script(["upper", "show"], initial_text="abc", out=out)

    assert [result.status for result in results] == ["ok", "ok"]
    lines = out.getvalue().splitlines()
    assert lines[0] == "upper -> ok"
    assert lines[1] == "show -> ok ABC"
    assert lines[-1] == "buffer: 'ABC'"


def test_main_exit_status(capsys) -> None:
    assert main(["--text", "x", "--run", "show"]) == 0
    assert "show -> ok x" in capsys.readouterr().out

    assert main(["--run", "nonsense"]) == 1


def test_run_script_follows_redirected_stdout(monkeypatch) -> None:
    redirected = io.StringIO()
    monkeypatch.setattr("sys.stdout", redirected)

    run_script(["show"], initial_text="late")

    assert "show -> ok late" in redirected.getvalue()


def test_truncate_rejects_non_ascii_digits() -> None:
    state = PlaygroundState()
    run(state, "set abcdef")

    for argument in ("²", "٣", "-1", "x"):
        result = submit_command_line(state, f"truncate {argument}")
        assert result.status == "command_usage"
    assert str(state.buffer) == "abcdef"

    assert submit_command_line(state, "truncate 3").status == "ok"
    assert str(state.buffer) == "abc"


def test_app_renders_from_ui_state() -> None:
    pytest.importorskip("textual")
    from ustring.playground.app import PlaygroundApp, UIState

    app = PlaygroundApp(initial_text="x")
    app._update_buffer("abc")
    app._update_list("'a', 'b'")
    app._update_status("ok")

    assert app._state == UIState(
        buffer_text="abc", list_text="'a', 'b'", status_text="ok"
    )
