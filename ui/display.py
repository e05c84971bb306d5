"""
ResultDisplay - renders read reports.

Formats:
- table: one rich table per category group
- compact: key=value lines
- json: the snapshot document
"""

import json
from typing import TYPE_CHECKING

from rich import box
from rich.markup import escape
from rich.table import Table

from ..schema.catalog import CATEGORY_TITLES
from .console import ConsoleUI

if TYPE_CHECKING:
    from ..sync.read import ReadReport


OUTPUT_FORMATS = ("table", "compact", "json")

MATCH_MARK = "[green]✓[/]"
MISMATCH_MARK = "[red]✗[/]"


def truncate(value: str, width: int) -> str:
    """Cut long values to width, ending with '...'."""
    if len(value) > width:
        return value[:width - 3] + "..."
    return value


class ResultDisplay:
    """
    Formats a ReadReport for output.
    """

    def __init__(self, ui: ConsoleUI):
        self.ui = ui

    def render(self, report: "ReadReport", output_format: str = "table"):
        if output_format == "json":
            self.render_json(report)
        elif output_format == "compact":
            self.render_compact(report)
        else:
            self.render_table(report)

    def render_table(self, report: "ReadReport"):
        for group in report.groups:
            title = f"{CATEGORY_TITLES[group.category_type]} - {group.category_name}"
            table = Table(title=escape(title), box=box.SIMPLE_HEAD, title_style="cyan", title_justify="left")
            table.add_column("Key", no_wrap=True)

            if report.compare:
                table.add_column("Current Value")
                table.add_column("Default Value")
                table.add_column("Match", justify="center")
            else:
                table.add_column("Current Value")

            for reading in group.readings:
                key = escape(reading.descriptor.key)
                if report.compare:
                    table.add_row(
                        key,
                        escape(truncate(reading.current, 30)),
                        escape(truncate(reading.descriptor.default, 30)),
                        MATCH_MARK if reading.matches_default else MISMATCH_MARK,
                    )
                else:
                    table.add_row(key, escape(truncate(reading.current, 50)))

            self.ui.print(table)

    def render_compact(self, report: "ReadReport"):
        for reading in report.readings():
            key = escape(reading.descriptor.key)
            current = escape(reading.current)
            if not report.compare:
                self.ui.print(f"{key}={current}", highlight=False, soft_wrap=True)
            elif reading.matches_default:
                self.ui.print(f"{MATCH_MARK} {key}={current}", highlight=False, soft_wrap=True)
            else:
                default = escape(reading.descriptor.default)
                self.ui.print(f"{MISMATCH_MARK} {key}={current} (default: {default})", highlight=False, soft_wrap=True)

    def render_json(self, report: "ReadReport"):
        # Plain write keeps the document byte-exact (no markup, no wrapping)
        self.ui.console.file.write(json.dumps(report.to_snapshot_dict(), indent=2) + "\n")
