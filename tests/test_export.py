"""Tests für die Darstellung: HTML, Terminal-Tabelle, Excel und PDF."""

import pytest

from config.schema import DisplayConfig
from data.sample_plan import build_example_plan
from export import ExcelExporter, PdfExporter
from export.helpers import (
    COLORS, ACTIVITY_PALETTE, activity_color, build_rows, header_labels,
    hex_to_rgb, visible_day_indices,
)
from export.html_export import render_html, render_html_page, write_html
from export.tui_renderer import render_rich_table, render_text_table
from models.clock_time import ClockTime
from models.week_plan import WeekPlan
from models.weekday import Weekday


@pytest.fixture
def plan() -> WeekPlan:
    p = WeekPlan.create(ClockTime(8, 30), 90, 7)
    p.insert_range(Weekday.MONDAY, ClockTime(10, 0), 2, "Mathe")
    p.insert(Weekday.TUESDAY, ClockTime(8, 30), "Physik")
    return p


def _cell_line(html: str, time: str, day_idx: int) -> str:
    """Textzeile der Zelle (time, Tag) in der HTML-Ausgabe."""
    lines = html.splitlines()
    th = lines.index(f"    <th>{time}</th>")
    # Je Zelle drei Zeilen: <td>, Inhalt, </td>
    return lines[th + 1 + 3 * day_idx + 1].strip()


# ─── HTML ─────────────────────────────────────────────────────────────────────

class TestHtml:
    def test_structure(self, plan):
        html = plan.render_html()
        assert html.startswith("<table border='1'>")
        assert html.rstrip().endswith("</table>")
        assert html.count("<tr>") == 1 + 7
        assert html.count("<td>") == 7 * 7
        assert "    <th>Monday</th>" in html
        assert "    <th>Sunday</th>" in html

    def test_cells_in_correct_column(self, plan):
        """Tag = Spalte, Uhrzeit = Zeile."""
        html = plan.render_html()
        assert _cell_line(html, "08:30", 0) == ""
        assert _cell_line(html, "08:30", 1) == "Physik"
        assert _cell_line(html, "10:00", 0) == "Mathe"
        assert _cell_line(html, "11:30", 0) == "Mathe"
        assert _cell_line(html, "13:00", 0) == ""

    def test_rows_ascending(self, plan):
        html = plan.render_html()
        positions = [html.index(f"<th>{t}</th>") for t in plan.slot_times()]
        assert positions == sorted(positions)

    def test_escapes_activity(self):
        p = WeekPlan.create(ClockTime(8, 0), 60, 1)
        p.insert(Weekday.MONDAY, ClockTime(8, 0), "<b>R&D</b>")
        html = p.render_html()
        assert "&lt;b&gt;R&amp;D&lt;/b&gt;" in html
        assert "<b>" not in html

    def test_custom_labels(self, plan):
        html = render_html(plan.to_table(), ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"])
        assert "<th>Mo</th>" in html
        assert "<th>Monday</th>" not in html

    def test_page_and_file(self, plan, tmp_path):
        page = render_html_page(plan.to_table(), "Mein Plan")
        assert "<title>Mein Plan</title>" in page
        path = write_html(plan.to_table(), tmp_path / "out" / "plan.html", "Mein Plan")
        assert path.read_text(encoding="utf-8") == page

    def test_render_is_repeatable(self, plan):
        assert plan.render_html() == plan.render_html()


# ─── HELPERS ──────────────────────────────────────────────────────────────────

class TestHelpers:
    def test_hex_to_rgb(self):
        assert hex_to_rgb("4472C4") == (0x44, 0x72, 0xC4)
        assert hex_to_rgb("#FFFFFF") == (255, 255, 255)

    def test_activity_color(self):
        assert activity_color("") == COLORS["free"]
        assert activity_color("Mathe") in ACTIVITY_PALETTE
        assert activity_color("Mathe") == activity_color("Mathe")

    def test_build_rows(self, plan):
        rows = build_rows(plan.to_table(), empty_text="—")
        assert len(rows) == 7
        assert rows[0] == ["08:30", "—", "Physik", "—", "—", "—", "—", "—"]
        assert rows[1][:2] == ["10:00", "Mathe"]

    def test_hide_empty_weekend(self, plan):
        table = plan.to_table()
        assert visible_day_indices(table, show_weekend=False) == [0, 1, 2, 3, 4]
        assert header_labels(table, show_weekend=False)[-1] == "Friday"
        assert len(build_rows(table, show_weekend=False)[0]) == 1 + 5

    def test_booked_weekend_always_shown(self, plan):
        plan.insert(Weekday.SUNDAY, ClockTime(8, 30), "Sport")
        assert visible_day_indices(plan.to_table(), show_weekend=False) == [0, 1, 2, 3, 4, 6]


# ─── TERMINAL ─────────────────────────────────────────────────────────────────

class TestTextTable:
    def test_rich_table_columns(self, plan):
        table = render_rich_table(plan.to_table(), title="Plan")
        assert len(table.columns) == 1 + 7
        assert table.row_count == 7

    def test_text_table_content(self, plan):
        text = plan.render_text_table()
        assert "Monday" in text
        assert "Sunday" in text
        assert "10:00" in text
        assert "Mathe" in text
        assert "Physik" in text

    def test_text_table_without_colors(self, plan):
        text = render_text_table(plan.to_table(), day_labels=list("MDMDFSS"))
        assert "\x1b[" not in text


# ─── EXCEL / PDF ──────────────────────────────────────────────────────────────

class TestExcelExport:
    def test_export_cells(self, plan, tmp_path):
        from openpyxl import load_workbook

        path = ExcelExporter(plan.to_table(), DisplayConfig()).export(tmp_path / "plan.xlsx")
        ws = load_workbook(path)["Wochenplan"]
        assert ws["A1"].value == "Zeit"
        assert ws["B1"].value == "Mo"
        assert ws["H1"].value == "So"
        assert ws["A2"].value == "08:30"
        assert ws["C2"].value == "Physik"
        assert ws["B3"].value == "Mathe"
        assert ws["B4"].value == "Mathe"
        assert ws["B2"].value is None

    def test_export_empty_cell_text(self, plan, tmp_path):
        from openpyxl import load_workbook

        display = DisplayConfig(empty_cell="frei", show_weekend=False)
        path = ExcelExporter(plan.to_table(), display).export(tmp_path / "plan.xlsx")
        ws = load_workbook(path).active
        assert ws["B2"].value == "frei"
        assert ws["F1"].value == "Fr"
        assert ws["G1"].value is None


class TestPdfExport:
    def test_export_creates_pdf(self, plan, tmp_path):
        path = PdfExporter(plan.to_table(), DisplayConfig()).export(tmp_path / "out" / "plan.pdf")
        assert path.exists()
        assert path.read_bytes().startswith(b"%PDF")

    def test_export_example_plan_with_umlauts(self, tmp_path):
        plan = build_example_plan()
        plan.insert(Weekday.FRIDAY, ClockTime(8, 30), "Übung → Labor")
        path = PdfExporter(plan.to_table(), DisplayConfig(title="Wochenplan – WS")).export(
            tmp_path / "plan.pdf")
        assert path.stat().st_size > 0
