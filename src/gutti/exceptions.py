"""Error taxonomy for Gutti.

Every error raised while interpreting a command or reading the task file
derives from :class:`GuttiError`, so the shell can report it and keep
reading input.
"""

from typing import List, Optional


class GuttiError(Exception):
    """Base class for all recoverable Gutti errors."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(message)


class UnknownCommand(GuttiError):
    """The first word of the line is not a known command."""

    def __init__(self, word: str, suggestions: Optional[List[str]] = None):
        self.word = word
        super().__init__(
            "Meow me dumb dumb, me no understand that command.",
            suggestions,
        )


class MissingArgument(GuttiError):
    """A known command was given without its required argument."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(
            f"fishfishfish!!! The field of a {command} command cannot be empty."
        )


class InvalidFormat(GuttiError):
    """The argument does not split into the expected fields."""

    def __init__(self, command: str, usage: str, suggestions: Optional[List[str]] = None):
        self.command = command
        self.usage = usage
        super().__init__(f"Invalid format. Use: {usage}", suggestions)


class InvalidIndex(GuttiError):
    """The index argument is not a base-10 integer."""

    def __init__(self, command: str, value: str):
        self.command = command
        self.value = value
        super().__init__(
            f"Incorrect format for {command}! Ensure you typed: {command} <number>"
        )


class IndexOutOfRange(GuttiError):
    """The index is numeric but does not name a task in the list."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        if size == 0:
            detail = "the list is empty"
        else:
            detail = f"choose a number from 1 to {size}"
        super().__init__(f"No such task: {index} ({detail}).")


class CorruptedRecord(GuttiError):
    """A storage line cannot be decoded into a task."""

    def __init__(self, line: str, reason: str, line_number: Optional[int] = None):
        self.line = line
        self.reason = reason
        self.line_number = line_number
        if line_number is not None:
            message = f"Corrupted record on line {line_number}: {line}"
        else:
            message = f"Corrupted record: {line}"
        super().__init__(message)
