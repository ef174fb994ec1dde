"""PDF-Export für den Wochenplan (fpdf2)."""

from pathlib import Path

from config.schema import DisplayConfig
from models.week_plan import PlanTable

from export.helpers import (
    COLORS, activity_color, build_rows, header_labels, hex_to_rgb, today_str,
)


def _pdf_safe(text: str) -> str:
    """Ersetzt nicht-latin-1-fähige Zeichen für fpdf2-Built-in-Fonts."""
    text = (
        text
        .replace("—", " - ")   # em dash
        .replace("–", "-")      # en dash
        .replace("→", "->")     # Pfeil
    )
    return text.encode("latin-1", errors="replace").decode("latin-1")


# ─── A4-Querformat-Dimensionen ────────────────────────────────────────────────
# Landscape A4: 297 × 210 mm, nutzbare Breite (Margin 10 links+rechts): 277 mm

_PAGE_W       = 277   # mm
_COL_ZEIT_W   = 20    # mm
_ROW_HEADER_H = 8     # mm
_ROW_MAX_H    = 22    # mm
_ROW_MIN_H    = 6     # mm
_TABLE_TOP    = 24    # mm
_TABLE_BOTTOM = 190   # mm
_FONT_HEADER  = 9     # pt
_FONT_CONTENT = 7     # pt
_LINE_H       = 3.5   # mm pro Zeile bei 7pt


class PdfExporter:
    """Exportiert einen Wochenplan als einseitige PDF (A4 quer)."""

    def __init__(self, table: PlanTable, display: DisplayConfig):
        self.table   = table
        self.display = display
        self.labels  = header_labels(table, display.day_labels, display.show_weekend)
        n_days = max(len(self.labels), 1)
        self._day_w = (_PAGE_W - _COL_ZEIT_W) / n_days
        n_rows = max(len(table.times), 1)
        self._row_h = max(
            _ROW_MIN_H,
            min(_ROW_MAX_H, (_TABLE_BOTTOM - _TABLE_TOP - _ROW_HEADER_H) / n_rows),
        )

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        from fpdf import FPDF

        pdf = FPDF(orientation="L", unit="mm", format="A4")
        pdf.set_auto_page_break(auto=False)
        pdf.set_margins(left=10, top=10, right=10)
        pdf.add_page()

        pdf.set_font("Helvetica", "B", 12)
        pdf.set_xy(10, 10)
        pdf.cell(_PAGE_W - 40, 8, _pdf_safe(self.display.title), border=0, align="L")
        pdf.set_font("Helvetica", "", 8)
        pdf.cell(40, 8, today_str(), border=0, align="R")

        y = self._draw_header_row(pdf, 10, _TABLE_TOP)
        raw_rows = build_rows(self.table, "", self.display.show_weekend)
        shown_rows = build_rows(
            self.table, self.display.empty_cell, self.display.show_weekend)
        for raw, shown in zip(raw_rows, shown_rows):
            y = self._draw_slot_row(pdf, 10, y, raw, shown)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf.output(str(output_path))
        return output_path

    # ─── Zellen-Zeichnung ─────────────────────────────────────────────────────

    def _draw_cell(self, pdf, x: float, y: float, w: float, h: float,
                   text: str = "", bg_hex: str | None = None, bold: bool = False,
                   font_size: int = _FONT_CONTENT,
                   text_color: tuple[int, int, int] = (0, 0, 0)) -> None:
        """Zeichnet eine Zelle mit Hintergrund, Rand und zentriertem Text."""
        if bg_hex:
            pdf.set_fill_color(*hex_to_rgb(bg_hex))
            pdf.rect(x, y, w, h, style="F")

        pdf.set_draw_color(180, 180, 180)
        pdf.rect(x, y, w, h, style="D")

        if text:
            pdf.set_font("Helvetica", "B" if bold else "", font_size)
            pdf.set_text_color(*text_color)
            max_lines = max(1, int(h // _LINE_H))
            lines = [ln for ln in _pdf_safe(text).split("\n") if ln][:max_lines]
            y_text = y + max(0.5, (h - len(lines) * _LINE_H) / 2)
            for line in lines:
                pdf.set_xy(x, y_text)
                pdf.cell(w, _LINE_H, line[:40], border=0, align="C")
                y_text += _LINE_H
            pdf.set_text_color(0, 0, 0)

    def _draw_header_row(self, pdf, x: float, y: float) -> float:
        """Zeichnet die Kopfzeile und gibt die Y-Position danach zurück."""
        cols = [("Zeit", _COL_ZEIT_W)] + [(label, self._day_w) for label in self.labels]
        cx = x
        for label, w in cols:
            self._draw_cell(
                pdf, cx, y, w, _ROW_HEADER_H, label,
                bg_hex=COLORS["header"], bold=True,
                font_size=_FONT_HEADER, text_color=(255, 255, 255),
            )
            cx += w
        return y + _ROW_HEADER_H

    def _draw_slot_row(self, pdf, x: float, y: float,
                       raw: list[str], shown: list[str]) -> float:
        """Zeichnet eine Rasterzeile und gibt die Y-Position danach zurück."""
        self._draw_cell(pdf, x, y, _COL_ZEIT_W, self._row_h, shown[0],
                        bg_hex=COLORS["time"], bold=True)
        cx = x + _COL_ZEIT_W
        for activity, text in zip(raw[1:], shown[1:]):
            self._draw_cell(pdf, cx, y, self._day_w, self._row_h, text,
                            bg_hex=activity_color(activity))
            cx += self._day_w
        return y + self._row_h
