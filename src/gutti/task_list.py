"""Ordered task list with 1-based, index-driven mutation."""

import logging
from typing import Iterator, List, Optional, Tuple

from .exceptions import IndexOutOfRange
from .storage import Storage
from .task import Task, mark_done, to_display_string, unmark


logger = logging.getLogger(__name__)


class TaskList:
    """Owns the in-memory tasks and flushes them after every mutation.

    Indexes taken and returned by the public methods are 1-based. When a
    storage is attached, the full list is rewritten after each successful
    mutation; a failed write is remembered as a warning and the in-memory
    list stays authoritative.
    """

    def __init__(self, tasks: Optional[List[Task]] = None, storage: Optional[Storage] = None):
        self._tasks: List[Task] = list(tasks) if tasks else []
        self.storage = storage
        self._warnings: List[str] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        """The task at 1-based ``index``, the number shown by ``list``."""
        return self._tasks[self._position(index)]

    def get(self, index: int) -> Task:
        return self[index]

    def add(self, task: Task) -> int:
        """Append a task and return the new count."""
        self._tasks.append(task)
        self._flush()
        return len(self._tasks)

    def mark_done(self, index: int) -> Task:
        task = self.get(index)
        mark_done(task)
        self._flush()
        return task

    def unmark(self, index: int) -> Task:
        task = self.get(index)
        unmark(task)
        self._flush()
        return task

    def delete(self, index: int) -> Task:
        """Remove and return the task; later tasks move up by one."""
        task = self._tasks.pop(self._position(index))
        self._flush()
        return task

    def list(self) -> List[str]:
        return [f"{number}. {to_display_string(task)}" for number, task in enumerate(self, start=1)]

    def find(self, keyword: str) -> List[Tuple[int, Task]]:
        """Tasks whose description contains ``keyword``, with their list index."""
        return [
            (number, task)
            for number, task in enumerate(self, start=1)
            if keyword in task.description
        ]

    def drain_warnings(self) -> List[str]:
        """Return and clear the persistence warnings collected so far."""
        warnings, self._warnings = self._warnings, []
        return warnings

    def _position(self, index: int) -> int:
        if index < 1 or index > len(self._tasks):
            raise IndexOutOfRange(index, len(self._tasks))
        return index - 1

    def _flush(self) -> None:
        if self.storage is None:
            return
        if not self.storage.save_tasks(self._tasks):
            self._warnings.append(
                f"Error saving tasks to file {self.storage.path}; changes are kept in memory only."
            )
