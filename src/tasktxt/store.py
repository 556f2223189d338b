"""Task storage backed by two flat files in a working directory.

Pending tasks live in ``task.txt``, completed tasks in ``completed.txt``.
Both are read fresh for every operation and rewritten in full after any
change. Single-file writes are atomic (temp file + replace).

Marking a task done touches both files. The new contents of both are first
written to ``.task.journal`` and only then moved into place; the journal is
removed once both files are written. A journal found on load means the
previous ``done`` was interrupted, so it is replayed before reading. If the
replay fails, mutations refuse to run until it succeeds.

There is no cross-process locking: concurrent invocations race and the last
writer wins.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from tasktxt.utils import (
    CompletedTask,
    Task,
    decode_completed,
    decode_pending,
    encode_completed,
    encode_pending,
    read_text_file,
    sort_tasks,
    write_text_atomic,
)

logger = logging.getLogger(__name__)

PENDING_FILE = "task.txt"
COMPLETED_FILE = "completed.txt"
JOURNAL_FILE = ".task.journal"


class TaskError(Exception):
    """Base class for errors reported to the user as a single line."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskError):
    """Missing or malformed command input."""


class IndexOutOfRange(TaskError):
    """Index outside the 1-based range of the sorted pending list."""

    def __init__(self, message: str, index: int, size: int):
        super().__init__(message)
        self.index = index
        self.size = size


class StoreWriteError(TaskError):
    """A task file could not be written."""

    def __init__(self, operation: str):
        super().__init__(f"Cannot {operation} the item.")
        self.operation = operation


class TaskStore:
    """Load, mutate and persist the pending and completed task lists."""

    def __init__(self, root: Path):
        self.root = Path(root)
        self.pending_path = self.root / PENDING_FILE
        self.completed_path = self.root / COMPLETED_FILE
        self.journal_path = self.root / JOURNAL_FILE

    # -- loading --

    def load_pending(self) -> List[Task]:
        """Load pending tasks in file order. Never fails."""
        self.recover()
        content = read_text_file(self.pending_path)
        return decode_pending(content) if content else []

    def load_completed(self) -> List[CompletedTask]:
        """Load completed tasks in file order. Never fails."""
        self.recover()
        content = read_text_file(self.completed_path)
        return decode_completed(content) if content else []

    def recover(self, operation: Optional[str] = None) -> bool:
        """Replay an interrupted ``done`` transaction if its journal exists.

        Args:
            operation: Name of the mutation about to run. When given, a
                failed replay raises instead of letting the caller write
                over files the journal still has to update.

        Returns:
            True if a journal was found and fully replayed

        Raises:
            StoreWriteError: If the replay fails and ``operation`` is set
        """
        raw = read_text_file(self.journal_path)
        if raw is None:
            if operation and self.journal_path.is_file():
                raise StoreWriteError(operation)
            return False
        try:
            journal = json.loads(raw)
            pending = journal["pending"]
            completed = journal["completed"]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            # Journal was never completed, so neither task file was touched.
            logger.warning(f"Discarding incomplete journal {self.journal_path}: {e}")
            self._remove_journal()
            return False

        logger.warning(f"Replaying interrupted transaction from {self.journal_path}")
        try:
            write_text_atomic(self.pending_path, pending)
            write_text_atomic(self.completed_path, completed)
        except OSError as e:
            logger.warning(f"Could not replay journal: {e}")
            if operation:
                raise StoreWriteError(operation) from e
            return False
        self._remove_journal()
        return True

    # -- mutations --

    def add(self, text: str, priority: int) -> Task:
        """Append a new pending task and persist.

        Args:
            text: Task description, must be non-empty after trimming
            priority: Non-negative integer priority

        Raises:
            ValidationError: If text is empty or priority is negative
            StoreWriteError: If the pending file can't be written or a leftover
                journal can't be replayed
        """
        if isinstance(priority, bool) or not isinstance(priority, int) or priority < 0:
            raise ValidationError(
                "Error: Priority must be a non-negative integer. Nothing added!"
            )
        text = " ".join(text.splitlines()).strip()
        if not text:
            raise ValidationError("Error: Missing tasks string. Nothing added!")

        task = Task(text=text, priority=priority)
        self.recover("add")
        pending = self.load_pending()
        pending.append(task)
        self._write_pending(pending, "add")
        logger.debug(f"Added {task}")
        return task

    def delete(self, index: int) -> Task:
        """Delete the pending task at 1-based sorted position ``index``.

        Raises:
            IndexOutOfRange: If no task has that index
            StoreWriteError: If the pending file can't be written or a leftover
                journal can't be replayed
        """
        self.recover("delete")
        pending = sort_tasks(self.load_pending())
        self._check_index(
            index,
            pending,
            f"Error: task with index #{index} does not exist. Nothing deleted.",
        )
        task = pending.pop(index - 1)
        self._write_pending(pending, "delete")
        logger.debug(f"Deleted {task}")
        return task

    def mark_done(self, index: int) -> CompletedTask:
        """Move the pending task at sorted position ``index`` to completed.

        Both files are updated as one journaled transaction.

        Raises:
            IndexOutOfRange: If no task has that index
            StoreWriteError: If the journal or either file can't be written
        """
        self.recover("mark")
        pending = sort_tasks(self.load_pending())
        completed = self.load_completed()
        self._check_index(
            index,
            pending,
            f"Error: no incomplete item with index #{index} exists.",
        )
        task = pending.pop(index - 1)
        done = CompletedTask(text=task.text)
        completed.append(done)

        journal = {
            "pending": encode_pending(pending),
            "completed": encode_completed(completed),
        }
        try:
            write_text_atomic(self.journal_path, json.dumps(journal))
        except OSError as e:
            logger.debug(f"Could not write journal: {e}")
            raise StoreWriteError("mark") from e
        try:
            write_text_atomic(self.pending_path, journal["pending"])
            write_text_atomic(self.completed_path, journal["completed"])
        except OSError as e:
            # Journal stays behind and is replayed by the next load.
            logger.debug(f"Could not apply journal: {e}")
            raise StoreWriteError("mark") from e
        self._remove_journal()
        logger.debug(f"Completed {task}")
        return done

    # -- helpers --

    @staticmethod
    def _check_index(index: int, pending: List[Task], message: str) -> None:
        if not 1 <= index <= len(pending):
            raise IndexOutOfRange(message, index=index, size=len(pending))

    def _write_pending(self, pending: List[Task], operation: str) -> None:
        try:
            write_text_atomic(self.pending_path, encode_pending(pending))
        except OSError as e:
            logger.debug(f"Could not write {self.pending_path}: {e}")
            raise StoreWriteError(operation) from e

    def _remove_journal(self) -> None:
        try:
            self.journal_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove journal: {e}")
