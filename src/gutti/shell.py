"""Command interpreter and read loop for Gutti."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .config import ConfigModel
from .exceptions import GuttiError, UnknownCommand
from .parser import Command, CommandType, parse_command, suggest_commands
from .storage import LoadResult, Storage
from .task import Deadline, Event, Task, Todo, to_display_string
from .task_list import TaskList
from .ui import Ui


logger = logging.getLogger(__name__)

FAREWELL = "Bye. Hope to see you again soon! Meow"


@dataclass
class Reply:
    """Output block produced by one input line."""
    lines: List[str] = field(default_factory=list)
    is_error: bool = False
    is_exit: bool = False


class Gutti:
    """Executes commands against a TaskList and reports results via a Ui."""

    def __init__(self, task_list: TaskList, ui: Optional[Ui] = None,
                 load_result: Optional[LoadResult] = None):
        self.task_list = task_list
        self.ui = ui
        self.load_result = load_result or LoadResult()
        self._handlers: Dict[CommandType, Callable[[Command], List[str]]] = {
            CommandType.EXIT: self._exit,
            CommandType.LIST: self._list,
            CommandType.MARK: self._mark,
            CommandType.UNMARK: self._unmark,
            CommandType.TODO: self._add_todo,
            CommandType.DEADLINE: self._add_deadline,
            CommandType.EVENT: self._add_event,
            CommandType.DELETE: self._delete,
            CommandType.FIND: self._find,
            CommandType.UNKNOWN: self._unknown,
        }

    @classmethod
    def from_config(cls, config: ConfigModel, ui: Optional[Ui] = None) -> "Gutti":
        """Build a session whose task list is loaded from the configured file."""
        storage = Storage(config)
        load_result = storage.load_tasks()
        task_list = TaskList(load_result.tasks, storage)
        return cls(task_list, ui or Ui(config), load_result)

    def execute(self, line: str) -> Reply:
        """Parse and run one line. Errors become an error reply."""
        try:
            command = parse_command(line)
            reply = Reply(self._handlers[command.type](command), is_exit=command.is_exit)
        except GuttiError as e:
            logger.debug(f"Command {line!r} failed: {e.__class__.__name__}: {e.message}")
            reply = Reply([e.message] + e.suggestions, is_error=True)

        reply.lines.extend(self.task_list.drain_warnings())
        return reply

    def run(self) -> None:
        """Read commands until ``bye`` or end of input."""
        if self.ui is None:
            raise RuntimeError("Gutti.run() needs a Ui")

        if self.ui.config.show_greeting:
            self.ui.show_greeting()
        self._report_load_problems()

        try:
            while True:
                line = self.ui.read_command()
                if line is None:
                    logger.debug("End of input, leaving")
                    break
                if not line.strip():
                    continue

                reply = self.execute(line)
                if reply.is_error:
                    self.ui.show_error(reply.lines)
                else:
                    self.ui.show_block(reply.lines)
                if reply.is_exit:
                    return
        except KeyboardInterrupt:
            logger.debug("Interrupted")

        self.ui.show_block([FAREWELL])

    def _report_load_problems(self) -> None:
        lines = [record.message for record in self.load_result.corrupted]
        if self.load_result.error:
            lines.insert(0, self.load_result.error)
        if lines:
            self.ui.show_error(lines)

    # -------------------- command handlers --------------------
    def _exit(self, command: Command) -> List[str]:
        return [FAREWELL]

    def _list(self, command: Command) -> List[str]:
        if not len(self.task_list):
            return ["Your list is empty."]
        return ["Here are the tasks in your list:"] + self.task_list.list()

    def _mark(self, command: Command) -> List[str]:
        task = self.task_list.mark_done(command.index)
        return ["Nice! I've marked this task as done:", f"  {to_display_string(task)}"]

    def _unmark(self, command: Command) -> List[str]:
        task = self.task_list.unmark(command.index)
        return ["OK, I've marked this task as not done yet:", f"  {to_display_string(task)}"]

    def _add_todo(self, command: Command) -> List[str]:
        return self._added(Todo(command.description))

    def _add_deadline(self, command: Command) -> List[str]:
        return self._added(Deadline(command.description, command.by))

    def _add_event(self, command: Command) -> List[str]:
        return self._added(Event(command.description, command.start, command.end))

    def _added(self, task: Task) -> List[str]:
        count = self.task_list.add(task)
        return [
            "Got it. I've added this task:",
            f"  {to_display_string(task)}",
            f"Now you have {count} tasks in the list.",
        ]

    def _delete(self, command: Command) -> List[str]:
        task = self.task_list.delete(command.index)
        return [
            "Meow. I've removed this task:",
            f"  {to_display_string(task)}",
            f"Now you have {len(self.task_list)} tasks in the list.",
        ]

    def _find(self, command: Command) -> List[str]:
        matches = self.task_list.find(command.keyword)
        if not matches:
            return ["No matching tasks found."]
        return ["Here are the matching tasks in your list:"] + [
            f"{number}. {to_display_string(task)}" for number, task in matches
        ]

    def _unknown(self, command: Command) -> List[str]:
        word = command.raw.split(" ", 1)[0]
        raise UnknownCommand(word, suggest_commands(command.raw))
