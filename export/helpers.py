"""Gemeinsame Hilfsfunktionen für Terminal-, Excel- und PDF-Export."""

import zlib
from datetime import date
from typing import Optional, Sequence

from models.activity import is_empty
from models.week_plan import PlanTable

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "free":   "F5F5F5",
    "header": "4472C4",
    "time":   "DDDDDD",
}

# Hintergrundfarben für belegte Slots; gleiche Aktivität → gleiche Farbe
ACTIVITY_PALETTE: list[str] = [
    "B3D4FF",
    "FFF2B3",
    "B3FFB3",
    "FFB3E6",
    "FFD4B3",
    "D4B3FF",
    "FFFFB3",
    "E0E0E0",
]


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def activity_color(activity: str) -> str:
    """Hex-Farbe für eine Zelle; stabil über Programmläufe hinweg."""
    if is_empty(activity):
        return COLORS["free"]
    idx = zlib.crc32(activity.encode("utf-8")) % len(ACTIVITY_PALETTE)
    return ACTIVITY_PALETTE[idx]


# ─── Tabellenzeilen ───────────────────────────────────────────────────────────

def visible_day_indices(table: PlanTable, show_weekend: bool = True) -> list[int]:
    """Spaltenindizes der anzuzeigenden Tage (ohne Sa/So wenn leer und abgewählt)."""
    n_days = len(table.weekdays)
    if show_weekend:
        return list(range(n_days))
    n_times = len(table.times)
    indices = []
    for day_idx in range(n_days):
        is_weekend = day_idx >= 5
        column = table.cells[day_idx * n_times:(day_idx + 1) * n_times]
        # Gebuchte Wochenenden werden immer gezeigt
        if is_weekend and all(is_empty(a) for a in column):
            continue
        indices.append(day_idx)
    return indices


def header_labels(
    table: PlanTable,
    day_labels: Optional[Sequence[str]] = None,
    show_weekend: bool = True,
) -> list[str]:
    """Spaltenköpfe ohne die Zeit-Spalte."""
    labels = list(day_labels) if day_labels else [d.value for d in table.weekdays]
    return [labels[i] for i in visible_day_indices(table, show_weekend)]


def build_rows(
    table: PlanTable,
    empty_text: str = "",
    show_weekend: bool = True,
) -> list[list[str]]:
    """Tabellenzeilen: [HH:MM, Mo, Di, …]; freie Slots als empty_text."""
    days = visible_day_indices(table, show_weekend)
    rows: list[list[str]] = []
    for time, cells in table.rows():
        row = [str(time)]
        for day_idx in days:
            activity = cells[day_idx]
            row.append(empty_text if is_empty(activity) else activity)
        rows.append(row)
    return rows
