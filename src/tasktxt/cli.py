"""Command-line entry point for tasktxt.

Usage:
    task add 2 hello world
    task ls
    task del INDEX
    task done INDEX
    task help
    task report

Tasks are stored in task.txt and completed.txt in the current directory.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape

from tasktxt.lib import Invocation, dispatch
from tasktxt.store import TaskError, TaskStore


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    }
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.argument("command", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli(verbose: bool, command: Optional[str], args: Tuple[str, ...]):
    """Track pending and completed tasks in flat files."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=log_level)

    console = Console(highlight=False)
    store = TaskStore(Path.cwd())
    invocation = Invocation(command=command, args=tuple(args))

    try:
        output = dispatch(invocation, store)
    except TaskError as e:
        console.print(f"[red]{escape(e.message)}[/]", soft_wrap=True, emoji=False)
        sys.exit(1)

    click.echo(output, nl=False)


if __name__ == "__main__":
    cli()
