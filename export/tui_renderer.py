"""Renderer für die Terminal-Anzeige des Wochenplans (rich).

Wird von ``main.py show`` und von ``WeekPlan.render_text_table`` verwendet.
"""

import io
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from export.helpers import build_rows, header_labels
from models.week_plan import PlanTable


def render_rich_table(
    table: PlanTable,
    day_labels: Optional[Sequence[str]] = None,
    title: Optional[str] = None,
    empty_text: str = "",
    show_weekend: bool = True,
) -> Table:
    """Baut eine rich-Tabelle: Zeit-Spalte + eine Spalte pro Tag."""
    rich_table = Table(title=title, box=box.ROUNDED, show_lines=True)
    rich_table.add_column("Zeit", style="bold", no_wrap=True)
    for label in header_labels(table, day_labels, show_weekend):
        rich_table.add_column(label, overflow="fold")

    for row in build_rows(table, empty_text, show_weekend):
        rich_table.add_row(*row)
    return rich_table


def render_text_table(
    table: PlanTable,
    day_labels: Optional[Sequence[str]] = None,
    title: Optional[str] = None,
    empty_text: str = "",
    show_weekend: bool = True,
    width: int = 120,
) -> str:
    """Wie render_rich_table, aber als einfacher Text ohne Farben."""
    console = Console(file=io.StringIO(), width=width, color_system=None)
    console.print(render_rich_table(table, day_labels, title, empty_text, show_weekend))
    return console.file.getvalue()
