"""Excel-Export für den Wochenplan (openpyxl)."""

from pathlib import Path

from config.schema import DisplayConfig
from models.week_plan import PlanTable

from export.helpers import (
    COLORS, activity_color, build_rows, header_labels, today_str,
)


class ExcelExporter:
    """Exportiert einen Wochenplan in eine Excel-Datei mit einem Blatt."""

    SHEET_TITLE = "Wochenplan"

    # Spaltenbreiten (Excel-Einheiten)
    COL_ZEIT_W = 8
    COL_DAY_W  = 20

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_SLOT_H   = 36

    def __init__(self, table: PlanTable, display: DisplayConfig):
        self.table   = table
        self.display = display
        self.labels  = header_labels(table, display.day_labels, display.show_weekend)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        """Erstellt die Excel-Datei."""
        from openpyxl import Workbook
        wb = Workbook()
        ws = wb.active
        ws.title = self.SHEET_TITLE

        self._setup_sheet(ws)
        self._write_header_row(ws)
        last_row = self._write_slot_rows(ws)
        ws.cell(row=last_row + 2, column=1,
                value=f"{self.display.title} – Stand {today_str()}")
        ws.freeze_panes = "B2"

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _setup_sheet(self, ws) -> None:
        """Setzt Spaltenbreiten."""
        from openpyxl.utils import get_column_letter
        ws.column_dimensions["A"].width = self.COL_ZEIT_W
        for col in range(2, 2 + len(self.labels)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

    def _write_header_row(self, ws) -> None:
        """Schreibt die Kopfzeile (Zeit | Mo | Di | …)."""
        from openpyxl.styles import Font
        headers = ["Zeit"] + self.labels
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[1].height = self.ROW_HEADER_H

    # ─── Raster ───────────────────────────────────────────────────────────────

    def _write_slot_rows(self, ws) -> int:
        """Schreibt eine Zeile pro Rasterzeit; gibt die letzte Excel-Zeile zurück."""
        from openpyxl.styles import Font

        border = self._thin_border()
        excel_row = 1   # Zeile 1 = Header
        raw_rows = build_rows(self.table, "", self.display.show_weekend)
        shown_rows = build_rows(
            self.table, self.display.empty_cell, self.display.show_weekend)

        for raw, shown in zip(raw_rows, shown_rows):
            excel_row += 1
            c = ws.cell(row=excel_row, column=1, value=shown[0])
            c.fill = self._fill(COLORS["time"])
            c.alignment = self._center_align(wrap=False)
            c.border = border
            c.font = Font(bold=True, size=9)

            for offset, (activity, text) in enumerate(zip(raw[1:], shown[1:])):
                c = ws.cell(row=excel_row, column=2 + offset, value=text or None)
                c.fill = self._fill(activity_color(activity))
                c.alignment = self._center_align()
                c.border = border
                c.font = Font(size=9)

            ws.row_dimensions[excel_row].height = self.ROW_SLOT_H

        return excel_row
