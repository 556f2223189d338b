"""Data structures and flat-file codec for tasktxt.

Architecture:
- cli.py: Click command, output, exit codes
- lib.py: Command dispatch and argument validation
- store.py: Loading, mutating and persisting task files
- formatting.py: Report rendering
- utils.py: Data structures, line codec, helpers

Pending file lines look like ``<priority> <text>``; completed file lines are
the bare task text. Lines that don't match are skipped when decoding.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

LINE_SPLIT_RE = re.compile(r"\r?\n")
PENDING_LINE_RE = re.compile(r"^([0-9]+)\s(.*)$")
COMPLETED_LINE_RE = re.compile(r"^(\w.*)$")


@dataclass
class Task:
    """A pending task.

    Attributes:
        text: Free-text description, a single line
        priority: Non-negative priority, lower sorts first
    """

    text: str
    priority: int


@dataclass
class CompletedTask:
    """A completed task. Priority is dropped on completion."""

    text: str


AnyTask = TypeVar("AnyTask", Task, CompletedTask)


def sort_tasks(tasks: Iterable[AnyTask]) -> List[AnyTask]:
    """Return tasks in ascending priority order.

    The sort is stable, so tasks with equal priority keep insertion order.
    Completed tasks carry no priority and come back unchanged.
    """
    return sorted(tasks, key=lambda t: getattr(t, "priority", 0))


def decode_pending(content: str) -> List[Task]:
    """Parse pending-file content into tasks.

    Args:
        content: Raw file content

    Returns:
        Tasks in file order (not sorted)
    """
    tasks = []
    for line in LINE_SPLIT_RE.split(content):
        match = PENDING_LINE_RE.match(line)
        if match:
            tasks.append(Task(text=match.group(2), priority=int(match.group(1))))
    return tasks


def decode_completed(content: str) -> List[CompletedTask]:
    """Parse completed-file content. Lines must start with a word character."""
    return [
        CompletedTask(text=match.group(1))
        for match in map(COMPLETED_LINE_RE.match, LINE_SPLIT_RE.split(content))
        if match
    ]


def encode_pending(tasks: Iterable[Task]) -> str:
    return "".join(f"{task.priority} {task.text}\n" for task in sort_tasks(tasks))


def encode_completed(tasks: Iterable[CompletedTask]) -> str:
    return "".join(f"{task.text}\n" for task in tasks)


def read_text_file(path: Path) -> Optional[str]:
    """Read a UTF-8 file, returning None if it is missing or unreadable.

    Undecodable bytes become U+FFFD so the remaining lines are kept.
    """
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            return f.read()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return None


def write_text_atomic(path: Path, content: Union[str, bytes]) -> None:
    """Write content to path via a sibling temp file and an atomic replace.

    Raises:
        OSError: If the temp file can't be written or moved into place
    """
    temp_path = path.with_name(f".{path.name}.tmp")
    data = content.encode("utf-8") if isinstance(content, str) else content
    try:
        with open(temp_path, "wb") as f:
            f.write(data)
        temp_path.replace(path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
