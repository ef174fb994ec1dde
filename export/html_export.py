"""HTML-Export für den Wochenplan."""

from html import escape
from pathlib import Path
from typing import Optional, Sequence

from models.week_plan import PlanTable


def render_html(table: PlanTable, day_labels: Optional[Sequence[str]] = None) -> str:
    """Gibt den Wochenplan als <table> zurück.

    Spalten: Wochentage (Mo zuerst), Zeilen: Rasterzeiten aufsteigend.
    Ohne day_labels werden die kanonischen Namen ("Monday", …) verwendet.
    """
    labels = list(day_labels) if day_labels else [d.value for d in table.weekdays]
    lines = ["<table border='1'>"]

    lines.append("  <tr>")
    lines.append("    <th></th>")
    for label in labels[: len(table.weekdays)]:
        lines.append(f"    <th>{escape(label)}</th>")
    lines.append("  </tr>")

    for time, cells in table.rows():
        lines.append("  <tr>")
        lines.append(f"    <th>{time}</th>")
        for activity in cells:
            lines.append("    <td>")
            lines.append(f"      {escape(activity)}")
            lines.append("    </td>")
        lines.append("  </tr>")

    lines.append("</table>")
    return "\n".join(lines) + "\n"


def render_html_page(table: PlanTable, title: str,
                     day_labels: Optional[Sequence[str]] = None) -> str:
    """Vollständige HTML-Seite um die Tabelle herum."""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        "  <meta charset='utf-8'>\n"
        f"  <title>{escape(title)}</title>\n"
        "</head>\n"
        "<body>\n"
        f"<h1>{escape(title)}</h1>\n"
        f"{render_html(table, day_labels)}"
        "</body>\n"
        "</html>\n"
    )


def write_html(table: PlanTable, path: Path, title: str,
               day_labels: Optional[Sequence[str]] = None) -> Path:
    """Schreibt die HTML-Seite nach path (Verzeichnisse werden angelegt)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_html_page(table, title, day_labels))
    return path
