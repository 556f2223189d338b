"""Rendering of task lists into report text."""

from typing import List, Sequence

from tasktxt.utils import CompletedTask, Task, sort_tasks

EMPTY_PENDING = "There are no pending tasks!\n"

USAGE = """Usage :-
$ ./task add 2 hello world    # Add a new item with priority 2 and text "hello world" to the list
$ ./task ls                   # Show incomplete priority list items sorted by priority in ascending order
$ ./task del INDEX            # Delete the incomplete item with the given index
$ ./task done INDEX           # Mark the incomplete item with the given index as complete
$ ./task help                 # Show usage
$ ./task report               # Statistics
"""


def render_list(tasks: Sequence[Task]) -> str:
    """Render pending tasks as ``<n>. <text> [<priority>]`` lines.

    Tasks are sorted by priority first; numbering is 1-based. An empty list
    renders the no-pending-tasks sentinel.
    """
    lines: List[str] = [
        f"{n}. {task.text} [{task.priority}]\n"
        for n, task in enumerate(sort_tasks(tasks), start=1)
    ]
    return "".join(lines) or EMPTY_PENDING


def render_stats(tasks: Sequence[CompletedTask]) -> str:
    """Render tasks as numbered ``<n>. <text>`` lines, empty string if none."""
    return "".join(f"{n}. {task.text}\n" for n, task in enumerate(sort_tasks(tasks), start=1))


def render_report(pending: Sequence[Task], completed: Sequence[CompletedTask]) -> str:
    """Render pending and completed counts, each followed by its list."""
    return (
        f"Pending : {len(pending)}\n"
        + render_list(pending)
        + f"\nCompleted : {len(completed)}\n"
        + render_stats(completed)
    )
