"""Command dispatch for tasktxt.

This module sits between the CLI layer (cli.py) and the store (store.py).
It validates command arguments, calls into the store and returns the text
the CLI should print. Errors are raised as ``TaskError`` subclasses carrying
a one-line message.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from tasktxt.formatting import USAGE, render_list, render_report
from tasktxt.store import TaskError, TaskStore, ValidationError

logger = logging.getLogger(__name__)

INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")


class UnknownCommand(TaskError):
    """Command name is not one of the recognized commands."""

    def __init__(self, command: str):
        super().__init__(f'Error: Unknown command "{command}". Run "help" for usage.')
        self.command = command


@dataclass(frozen=True)
class Invocation:
    """Parsed process arguments.

    Attributes:
        command: Command name, or None when invoked without arguments
        args: Remaining command-specific arguments, verbatim
    """

    command: Optional[str] = None
    args: Tuple[str, ...] = field(default_factory=tuple)


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse a decimal integer argument, returning None if it isn't one."""
    if value is None or not INTEGER_RE.match(value.strip()):
        return None
    return int(value)


def cmd_add(store: TaskStore, args: Tuple[str, ...]) -> str:
    if not args:
        raise ValidationError("Error: Missing tasks string. Nothing added!")
    priority = parse_int(args[0])
    if priority is None or priority < 0:
        raise ValidationError(
            "Error: Priority must be a non-negative integer. Nothing added!"
        )
    task = store.add(" ".join(args[1:]), priority)
    return f'Added task: "{task.text}" with priority {task.priority}\n'


def cmd_ls(store: TaskStore, args: Tuple[str, ...]) -> str:
    return render_list(store.load_pending())


def cmd_del(store: TaskStore, args: Tuple[str, ...]) -> str:
    index = parse_int(args[0]) if args else None
    if index is None:
        raise ValidationError("Error: Missing NUMBER for deleting tasks.")
    store.delete(index)
    return f"Deleted task #{index}\n"


def cmd_done(store: TaskStore, args: Tuple[str, ...]) -> str:
    index = parse_int(args[0]) if args else None
    if index is None:
        raise ValidationError("Error: Missing NUMBER for marking tasks as done.")
    store.mark_done(index)
    return "Marked item as done.\n"


def cmd_help(store: TaskStore, args: Tuple[str, ...]) -> str:
    return USAGE


def cmd_report(store: TaskStore, args: Tuple[str, ...]) -> str:
    return render_report(store.load_pending(), store.load_completed())


COMMANDS: Dict[str, Callable[[TaskStore, Tuple[str, ...]], str]] = {
    "add": cmd_add,
    "ls": cmd_ls,
    "del": cmd_del,
    "done": cmd_done,
    "help": cmd_help,
    "report": cmd_report,
}


def dispatch(invocation: Invocation, store: TaskStore) -> str:
    """Run a single command against the store.

    Args:
        invocation: Parsed command name and arguments
        store: Task store rooted at the working directory

    Returns:
        Text to write to stdout

    Raises:
        TaskError: On invalid input, unknown command or failed write
    """
    command = invocation.command or "help"
    handler = COMMANDS.get(command)
    if handler is None:
        raise UnknownCommand(command)
    logger.debug(f"Dispatching {command} with args {invocation.args!r}")
    return handler(store, invocation.args)
