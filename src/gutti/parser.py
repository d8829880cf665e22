"""Command parser for Gutti.

Turns one raw input line into a :class:`Command`. Shape validation
(missing arguments, delimiter counts, numeric indexes) happens here, before
any task is constructed.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from fuzzywuzzy import fuzz, process

from .exceptions import InvalidFormat, InvalidIndex, MissingArgument
from .storage import TaskLineFormat


class CommandType(Enum):
    """Kinds of commands understood by the shell."""
    EXIT = "bye"
    LIST = "list"
    MARK = "mark"
    UNMARK = "unmark"
    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"
    DELETE = "delete"
    FIND = "find"
    UNKNOWN = "unknown"


@dataclass
class Command:
    """A parsed, validated request from one input line."""
    type: CommandType
    index: Optional[int] = None
    description: Optional[str] = None
    by: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    keyword: Optional[str] = None
    raw: str = ""

    @property
    def is_exit(self) -> bool:
        return self.type is CommandType.EXIT


# Matched against the whole trimmed line, ignoring case
EXACT_COMMANDS: Dict[str, CommandType] = {
    "bye": CommandType.EXIT,
    "list": CommandType.LIST,
}

# Matched case-sensitively against the full first token
ARGUMENT_COMMANDS: Dict[str, CommandType] = {
    "mark": CommandType.MARK,
    "unmark": CommandType.UNMARK,
    "todo": CommandType.TODO,
    "deadline": CommandType.DEADLINE,
    "event": CommandType.EVENT,
    "delete": CommandType.DELETE,
    "find": CommandType.FIND,
}

INDEX_COMMANDS = (CommandType.MARK, CommandType.UNMARK, CommandType.DELETE)

USAGE: Dict[CommandType, str] = {
    CommandType.EXIT: "bye",
    CommandType.LIST: "list",
    CommandType.MARK: "mark <index>",
    CommandType.UNMARK: "unmark <index>",
    CommandType.TODO: "todo <description>",
    CommandType.DEADLINE: "deadline <task description> /by <date/time>",
    CommandType.EVENT: "event <task description> /from <start time> /to <end time>",
    CommandType.DELETE: "delete <index>",
    CommandType.FIND: "find <keyword>",
}

BY_DELIMITER = " /by "
FROM_DELIMITER = " /from "
TO_DELIMITER = " /to "

INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")
EVENT_DELIMITERS = re.compile(r" /from | /to ")


def parse_command(line: str) -> Command:
    """Parse one input line into a Command.

    Lines that do not start with a known keyword give an UNKNOWN command;
    they are never an exception here.

    Raises:
        MissingArgument: Known keyword without an argument.
        InvalidFormat: Deadline/event argument with the wrong delimiters.
        InvalidIndex: Non-numeric index for mark, unmark or delete.
    """
    text = line.strip()

    exact = EXACT_COMMANDS.get(text.lower())
    if exact is not None:
        return Command(exact, raw=text)

    keyword, _, remainder = text.partition(" ")
    command_type = ARGUMENT_COMMANDS.get(keyword)
    if command_type is None:
        return Command(CommandType.UNKNOWN, raw=text)

    remainder = remainder.strip()
    if not remainder:
        raise MissingArgument(keyword.capitalize())

    if command_type in INDEX_COMMANDS:
        return Command(command_type, index=_parse_index(keyword, remainder), raw=text)
    if command_type is CommandType.TODO:
        return Command(command_type, description=remainder, raw=text)
    if command_type is CommandType.DEADLINE:
        return _parse_deadline(remainder, text)
    if command_type is CommandType.EVENT:
        return _parse_event(remainder, text)
    # only the separating space is dropped, the keyword keeps its own spacing
    search = line.lstrip().rstrip("\r\n").partition(" ")[2]
    return Command(CommandType.FIND, keyword=search, raw=text)


def _parse_index(keyword: str, value: str) -> int:
    if not INDEX_PATTERN.fullmatch(value):
        raise InvalidIndex(keyword, value)
    return int(value)


def _parse_deadline(remainder: str, raw: str) -> Command:
    parts = [part.strip() for part in remainder.split(BY_DELIMITER)]
    if len(parts) != 2 or not all(parts):
        raise InvalidFormat("deadline", USAGE[CommandType.DEADLINE])
    description, by = parts
    if not TaskLineFormat.can_store_deadline(by):
        raise InvalidFormat(
            "deadline",
            USAGE[CommandType.DEADLINE],
            ["The date/time cannot contain '(by: '."],
        )
    return Command(CommandType.DEADLINE, description=description, by=by, raw=raw)


def _parse_event(remainder: str, raw: str) -> Command:
    # "/from" has to come before "/to", each exactly once
    delimiters = EVENT_DELIMITERS.findall(remainder)
    parts = [part.strip() for part in EVENT_DELIMITERS.split(remainder)]
    if delimiters != [FROM_DELIMITER, TO_DELIMITER] or len(parts) != 3 or not all(parts):
        raise InvalidFormat("event", USAGE[CommandType.EVENT])
    description, start, end = parts
    if not TaskLineFormat.can_store_event(start, end):
        raise InvalidFormat(
            "event",
            USAGE[CommandType.EVENT],
            ["The start time cannot contain '(from: ' or ' to: ', the end time cannot contain '(from: '."],
        )
    return Command(
        CommandType.EVENT, description=description, start=start, end=end, raw=raw
    )


def known_keywords() -> List[str]:
    return list(EXACT_COMMANDS) + list(ARGUMENT_COMMANDS)


def suggest_commands(raw: str, limit: int = 2) -> List[str]:
    """Suggest keywords close to the first word of an unrecognised line."""
    word = raw.strip().split(" ", 1)[0]
    if not word:
        return []

    close_matches = process.extractBests(
        word.lower(), known_keywords(), scorer=fuzz.ratio, score_cutoff=70, limit=limit
    )
    return [f"Did you mean '{USAGE[_keyword_type(match[0])]}'?" for match in close_matches]


def _keyword_type(keyword: str) -> CommandType:
    return EXACT_COMMANDS.get(keyword) or ARGUMENT_COMMANDS[keyword]
