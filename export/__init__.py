"""Export-Modul: HTML, Terminal (rich), Excel (openpyxl) und PDF (fpdf2)."""

from export.excel_export import ExcelExporter
from export.pdf_export import PdfExporter

__all__ = ["ExcelExporter", "PdfExporter"]
