"""Interactive and scripted front ends over the buffer API."""

from .commands import CommandResult, PlaygroundState, command_names, submit_command_line
from .controller import PlaygroundController, PlaygroundHooks

__all__ = [
    "CommandResult",
    "PlaygroundController",
    "PlaygroundHooks",
    "PlaygroundState",
    "command_names",
    "submit_command_line",
]
