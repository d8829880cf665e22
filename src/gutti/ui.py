"""Console input/output for the Gutti shell."""

import sys
from typing import Iterable, Optional, TextIO

from rich.console import Console
from rich.text import Text

from .config import ConfigModel


class Ui:
    """Line-oriented console channel.

    Output is grouped in blocks: a separator line, the message lines, and a
    closing separator. Message text is printed literally, so task lines
    such as ``[T][X] ...`` are never read as rich markup, and never wrapped
    to the terminal width.
    """

    def __init__(
        self,
        config: ConfigModel,
        console: Optional[Console] = None,
        input_stream: Optional[TextIO] = None,
    ):
        self.config = config
        self.console = console or Console(no_color=config.no_color, highlight=False)
        self.input_stream = input_stream or sys.stdin

    def read_command(self) -> Optional[str]:
        """Read the next line, or None at end of input."""
        line = self.input_stream.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def show_block(self, lines: Iterable[str], style: Optional[str] = None) -> None:
        self._separator()
        for line in lines:
            self.console.print(Text(line, style=style or ""), soft_wrap=True)
        self._separator()

    def show_error(self, lines: Iterable[str]) -> None:
        self.show_block(lines, style="bold red")

    def show_greeting(self) -> None:
        self.show_block([f"Hello! I'm {self.config.bot_name}", "What can I do for you? Meow"])

    def _separator(self) -> None:
        self.console.print(Text(self.config.separator, style="dim"), soft_wrap=True)
