"""
ConsoleUI - Rich-based leveled output.

Status messages ([INFO], [WARN], [ERROR], [VERBOSE], [DRY-RUN]) go to
stderr so that data printed on stdout (tables, JSON snapshots) stays
machine-readable.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel


class ConsoleUI:
    """
    Rich console interface for android-netcfg.
    """

    LEVEL_STYLES = {
        "info": ("INFO", "green"),
        "warn": ("WARN", "yellow"),
        "error": ("ERROR", "red"),
        "verbose": ("VERBOSE", "blue"),
        "dry_run": ("DRY-RUN", "magenta"),
    }

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.verbose_enabled = verbose
        self.quiet = quiet
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def _emit(self, level: str, message: str):
        tag, style = self.LEVEL_STYLES[level]
        self.err_console.print(f"[{style}]\\[{tag}][/] {escape(message)}", highlight=False)

    def info(self, message: str):
        if self.quiet:
            return
        self._emit("info", message)

    def warn(self, message: str):
        self._emit("warn", message)

    def error(self, message: str):
        self._emit("error", message)

    def verbose(self, message: str):
        if self.quiet or not self.verbose_enabled:
            return
        self._emit("verbose", message)

    def dry_run(self, message: str):
        self._emit("dry_run", message)

    def print(self, *args, **kwargs):
        """Print data to stdout."""
        self.console.print(*args, **kwargs)

    def print_banner(self, title: str, subtitle: str = ""):
        """Print a boxed banner."""
        if self.quiet:
            return
        body = f"[bold cyan]{escape(title)}[/]"
        if subtitle:
            body += f"\n[dim]{escape(subtitle)}[/]"
        self.err_console.print(Panel(body, border_style="cyan"))

    def blank(self):
        if self.quiet:
            return
        self.err_console.print()
