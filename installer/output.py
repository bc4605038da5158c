# -*- coding: utf-8 -*-
"""
Reporter - console output for the installer commands.

Commands and helpers write user-facing text through a Reporter rather than
printing directly, so the same helpers can drive a terminal or be captured
in tests.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, TextIO, Union

from rich.console import Console

Message = Union[str, List[str]]

COMMENT_STYLE = "yellow"
INFO_STYLE = "green"
ERROR_STYLE = "bold white on red"
TITLE_STYLE = "bold green"


class Reporter(ABC):
    """
    Abstract base class for the output capability used by the setup helpers.
    """

    @abstractmethod
    def write(self, chunk: str) -> None:
        """Write raw text without adding a newline (streamed process output)."""
        pass

    @abstractmethod
    def line(self, message: Message = "") -> None:
        """Write one line, or each line of a list."""
        pass

    @abstractmethod
    def comment(self, message: str) -> None:
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        """Write an error block."""
        pass

    @abstractmethod
    def title(self, message: str) -> None:
        """Write an underlined section title."""
        pass


class ConsoleReporter(Reporter):
    """
    Reporter printing through a Rich console.

    ``decorated`` forces styling on or off; when omitted Rich decides from
    whether ``stream`` is a terminal.
    """

    def __init__(
        self, stream: Optional[TextIO] = None, decorated: Optional[bool] = None
    ):
        self.console = Console(
            file=stream,
            force_terminal=decorated,
            soft_wrap=True,
            emoji=False,
        )

    @property
    def decorated(self) -> bool:
        return self.console.is_terminal

    def _print(self, text: str, style: Optional[str] = None) -> None:
        # Installer text may contain brackets and URLs; print it verbatim.
        self.console.print(text, style=style, markup=False, highlight=False)

    def write(self, chunk: str) -> None:
        # Process output keeps its own control characters and newlines.
        self.console.file.write(chunk)
        self.console.file.flush()

    def line(self, message: Message = "") -> None:
        lines = message if isinstance(message, list) else [message]
        for text in lines:
            self._print(text)

    def comment(self, message: str) -> None:
        self._print(message, COMMENT_STYLE)

    def info(self, message: str) -> None:
        self._print(message, INFO_STYLE)

    def error(self, message: str) -> None:
        self.line("")
        self._print(f" [ERROR] {message} ", ERROR_STYLE)
        self.line("")

    def title(self, message: str) -> None:
        self.line("")
        self._print(message, TITLE_STYLE)
        self._print("=" * len(message), INFO_STYLE)
        self.line("")
