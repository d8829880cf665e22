"""Storage layer for Gutti using a flat text file, one task per line."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .config import ConfigModel
from .exceptions import CorruptedRecord
from .task import (
    DONE_ICON,
    NOT_DONE_ICON,
    Deadline,
    Event,
    Task,
    TaskKind,
    Todo,
    to_storage_line,
)


logger = logging.getLogger(__name__)

TAG_TO_KIND: Dict[str, TaskKind] = {f"[{kind.value}]": kind for kind in TaskKind}

# Keyword fragments of the storage format
BY_MARKER = " (by: "
FROM_MARKER = " (from: "
TO_MARKER = " to: "

# "[T][X] " is the fixed-width prefix in front of every description
PREFIX_LENGTH = 7


class TaskLineFormat:
    """Handles conversion between tasks and storage lines."""

    @staticmethod
    def encode(task: Task) -> str:
        """Convert a task to its storage line."""
        return to_storage_line(task)

    @staticmethod
    def decode(line: str) -> Task:
        """Parse a storage line back to a task.

        Raises:
            CorruptedRecord: If a structural marker is missing or out of
                order, or a required field is empty.
        """
        text = line.strip()
        if len(text) <= PREFIX_LENGTH - 1:
            raise CorruptedRecord(line, "line is too short")

        kind = TAG_TO_KIND.get(text[:3])
        if kind is None:
            raise CorruptedRecord(line, f"unknown type tag {text[:3]!r}")

        if text[3] != "[" or text[5] != "]" or text[4] not in (DONE_ICON, NOT_DONE_ICON):
            raise CorruptedRecord(line, "missing done marker")
        is_done = text[4] == DONE_ICON

        if text[6] != " ":
            raise CorruptedRecord(line, "missing space after done marker")
        body = text[PREFIX_LENGTH:]

        if kind is TaskKind.TODO:
            return Todo(body.strip(), is_done)
        if kind is TaskKind.DEADLINE:
            return TaskLineFormat._decode_deadline(line, body, is_done)
        return TaskLineFormat._decode_event(line, body, is_done)

    @staticmethod
    def can_store_deadline(by: str) -> bool:
        """Check that a deadline with this ``by`` decodes back unchanged."""
        # decode splits on the last " (by: ", so none may start after ours
        return BY_MARKER not in f"{BY_MARKER}{by})"[1:]

    @staticmethod
    def can_store_event(start: str, end: str) -> bool:
        """Check that an event with these times decodes back unchanged."""
        tail = f"{FROM_MARKER}{start}{TO_MARKER}{end})"
        if FROM_MARKER in tail[1:]:
            return False
        # the first " to: " after "(from: " closes the start field
        return f"{start}{TO_MARKER}".find(TO_MARKER) == len(start)

    @staticmethod
    def _decode_deadline(line: str, body: str, is_done: bool) -> Deadline:
        by_index = body.rfind(BY_MARKER)
        if by_index == -1:
            raise CorruptedRecord(line, "missing '(by: '")
        if not body.endswith(")"):
            raise CorruptedRecord(line, "missing closing ')'")

        description = body[:by_index].strip()
        by = body[by_index + len(BY_MARKER):-1].strip()
        if not description or not by:
            raise CorruptedRecord(line, "empty deadline field")
        return Deadline(description, by, is_done)

    @staticmethod
    def _decode_event(line: str, body: str, is_done: bool) -> Event:
        from_index = body.rfind(FROM_MARKER)
        if from_index == -1:
            raise CorruptedRecord(line, "missing '(from: '")
        to_index = body.find(TO_MARKER, from_index + len(FROM_MARKER))
        if to_index == -1:
            raise CorruptedRecord(line, "missing ' to: ' after '(from: '")
        if not body.endswith(")"):
            raise CorruptedRecord(line, "missing closing ')'")

        description = body[:from_index].strip()
        start = body[from_index + len(FROM_MARKER):to_index].strip()
        end = body[to_index + len(TO_MARKER):-1].strip()
        if not description or not start or not end:
            raise CorruptedRecord(line, "empty event field")
        return Event(description, start, end, is_done)


@dataclass
class LoadResult:
    """Tasks read from disk plus every line that had to be skipped."""
    tasks: List[Task] = field(default_factory=list)
    corrupted: List[CorruptedRecord] = field(default_factory=list)
    error: Optional[str] = None


class Storage:
    """File-based storage for Gutti.

    The whole file is read on load and rewritten on every save.
    """

    def __init__(self, config: ConfigModel):
        self.config = config

    @property
    def path(self) -> Path:
        return self.config.get_data_path()

    def load_tasks(self) -> LoadResult:
        """Load all tasks from the data file.

        A missing file is an empty list. Corrupted lines are skipped and
        collected in the result instead of aborting the load.
        """
        result = LoadResult()
        if not self.path.exists():
            logger.debug(f"No task file at {self.path}, starting empty")
            return result

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading task file {self.path}: {e}")
            result.error = f"Error reading file: {e}"
            return result

        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                result.tasks.append(TaskLineFormat.decode(line))
            except CorruptedRecord as e:
                record = CorruptedRecord(line, e.reason, line_number)
                logger.warning(f"{record.message} ({record.reason})")
                result.corrupted.append(record)

        logger.debug(f"Loaded {len(result.tasks)} tasks from {self.path}")
        return result

    def save_tasks(self, tasks: Iterable[Task]) -> bool:
        """Rewrite the data file with the given tasks.

        Returns False instead of raising when the file cannot be written.
        """
        content = "".join(TaskLineFormat.encode(task) + "\n" for task in tasks)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error saving tasks to {self.path}: {e}")
            return False

        logger.debug(f"Saved tasks to {self.path}")
        return True
