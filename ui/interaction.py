"""
InteractionManager - confirmation gate before mutating runs.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm


class InteractionManager:
    """
    Asks the user to confirm apply/restore runs.

    Dry-run and --yes bypass the prompt entirely; callers check that before
    calling confirm().
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def confirm(self, action: str, detail: str = "") -> bool:
        """
        Show a warning and ask for confirmation.

        Args:
            action: What is about to happen ("restore network settings from backup")
            detail: Extra line to show, e.g. the backup file

        Returns:
            True if the user answered yes
        """
        self.console.print()
        self.console.print(f"[yellow]WARNING:[/] This will {escape(action)}.")
        if detail:
            self.console.print(f"  {escape(detail)}")
        self.console.print()

        try:
            return Confirm.ask("Are you sure you want to continue?", default=False, console=self.console)
        except EOFError:
            return False
