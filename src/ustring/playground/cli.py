"""Entry point: run playground commands headlessly or launch the Textual UI."""

from __future__ import annotations

import argparse
import os
import shlex
import sys
from typing import List, Optional, Sequence, TextIO

from ustring.runtime import telemetry

from .commands import CommandResult, PlaygroundState
from .controller import PlaygroundController, PlaygroundHooks


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Experiment with ustring buffers and lists."
    )
    parser.add_argument(
        "--text",
        default=os.environ.get("USTRING_PLAYGROUND_TEXT"),
        help="Initial buffer content (default: $USTRING_PLAYGROUND_TEXT)",
    )
    parser.add_argument(
        "--run",
        action="append",
        default=[],
        metavar="COMMAND",
        help="Run a command without the UI; repeat to run several in order",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        help="Telemetry preset to install before running",
    )
    return parser.parse_args(argv)


def run_script(
    commands: Sequence[str],
    *,
    initial_text: Optional[str] = None,
    out: Optional[TextIO] = None,
) -> List[CommandResult]:
    """Evaluate ``commands`` in order, echoing each result to ``out`` or stdout."""

    out = out if out is not None else sys.stdout

    hooks = PlaygroundHooks(update_buffer=lambda _text: None)
    controller = PlaygroundController(hooks, state=PlaygroundState())
    results: List[CommandResult] = []
    try:
        if initial_text is not None:
            controller.submit(f"set {shlex.quote(initial_text)}")
        for line in commands:
            result = controller.submit(line)
            results.append(result)
            detail = result.message if result.message is not None else ""
            out.write(f"{line} -> {result.status} {detail}".rstrip() + "\n")
        out.write(f"buffer: {str(controller.state.buffer)!r}\n")
    finally:
        controller.close()
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    if args.run:
        results = run_script(args.run, initial_text=args.text)
        return 1 if any(result.failed for result in results) else 0

    from .app import PlaygroundApp

    PlaygroundApp(initial_text=args.text).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual demo
    raise SystemExit(main())
