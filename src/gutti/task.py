"""Task data model for Gutti.

A task is one of three plain dataclasses (``Todo``, ``Deadline``,
``Event``). They share no base class; operations common to all of them are
module functions that dispatch on the ``kind`` tag.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class TaskKind(Enum):
    """Type tag of a task, as written inside the leading brackets."""
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


DONE_ICON = "X"
NOT_DONE_ICON = " "


@dataclass
class Todo:
    """A task with only a description."""

    description: str
    is_done: bool = False

    kind: ClassVar[TaskKind] = TaskKind.TODO


@dataclass
class Deadline:
    """A task that has to be done by a given time.

    ``by`` is kept verbatim; no date parsing happens anywhere.
    """

    description: str
    by: str
    is_done: bool = False

    kind: ClassVar[TaskKind] = TaskKind.DEADLINE


@dataclass
class Event:
    """A task that spans from ``start`` to ``end`` (both verbatim)."""

    description: str
    start: str
    end: str
    is_done: bool = False

    kind: ClassVar[TaskKind] = TaskKind.EVENT


Task = Union[Todo, Deadline, Event]


def mark_done(task: Task) -> None:
    """Mark the task as done. Marking a done task again is a no-op."""
    task.is_done = True


def unmark(task: Task) -> None:
    """Mark the task as not done. Unmarking an open task is a no-op."""
    task.is_done = False


def status_icon(task: Task) -> str:
    return DONE_ICON if task.is_done else NOT_DONE_ICON


def details(task: Task) -> str:
    """Variant-specific suffix appended after the description."""
    if task.kind is TaskKind.DEADLINE:
        return f" (by: {task.by})"
    if task.kind is TaskKind.EVENT:
        return f" (from: {task.start} to: {task.end})"
    return ""


def to_storage_line(task: Task) -> str:
    """Canonical single-line encoding, e.g. ``[D][X] report (by: Friday)``."""
    return f"[{task.kind.value}][{status_icon(task)}] {task.description}{details(task)}"


def to_display_string(task: Task) -> str:
    """Text shown on the console; identical to the storage line."""
    return to_storage_line(task)
