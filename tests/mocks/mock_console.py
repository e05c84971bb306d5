"""
Recording console for testing.

Behaves like ConsoleUI (same quiet/verbose filtering) but keeps every
emitted status line in memory and renders data output into a buffer.
"""

import io
from typing import List, Tuple

from rich.console import Console

from android_netcfg.ui import ConsoleUI


class RecordingConsoleUI(ConsoleUI):
    """ConsoleUI that records (level, message) pairs."""

    def __init__(self, verbose: bool = True, quiet: bool = False):
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        super().__init__(
            verbose=verbose,
            quiet=quiet,
            console=Console(file=self.stdout, width=200, color_system=None),
            err_console=Console(file=self.stderr, width=200, color_system=None),
        )
        self.messages: List[Tuple[str, str]] = []

    def _emit(self, level: str, message: str):
        self.messages.append((level, message))
        super()._emit(level, message)

    def lines(self, level: str) -> List[str]:
        return [m for lvl, m in self.messages if lvl == level]

    def contains(self, level: str, text: str) -> bool:
        return any(text in m for m in self.lines(level))

    @property
    def output(self) -> str:
        """Everything printed to the data console."""
        return self.stdout.getvalue()
