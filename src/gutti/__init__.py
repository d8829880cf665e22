"""Gutti - a chatty command-line task list with flat-file persistence."""

__version__ = "0.1.0"
__author__ = "Gutti Team"

from .task import Todo, Deadline, Event, Task, TaskKind
from .parser import Command, CommandType, parse_command
from .task_list import TaskList

__all__ = [
    "Todo",
    "Deadline",
    "Event",
    "Task",
    "TaskKind",
    "Command",
    "CommandType",
    "parse_command",
    "TaskList",
    "__version__",
]
