"""Serialize an export workbook to .xlsx bytes."""
import io
import logging

from openpyxl import Workbook as XlsxWorkbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from hotel_intel.schemas.report import Workbook

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_HEADER_FONT = Font(bold=True, size=11, color="FFFFFF")
_HEADER_FILL = PatternFill(start_color="3D1A11", end_color="3D1A11", fill_type="solid")
_SECTION_FONT = Font(bold=True, size=12, color="C04D2E")

# Rows whose first cell is one of these get section styling in the summary sheet
_SECTION_TITLES = {"PROPERTY SUMMARY", "OTA RATINGS"}
_MAX_COLUMN_WIDTH = 60


def _style_sheet(ws, header_row: int = 1) -> None:
    for cell in ws[header_row]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for row in ws.iter_rows():
        first = row[0]
        if first.value in _SECTION_TITLES:
            first.font = _SECTION_FONT

    for col_idx, column in enumerate(ws.iter_cols(), start=1):
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(col_idx)].width = min(longest + 2, _MAX_COLUMN_WIDTH)


def render_xlsx(workbook: Workbook) -> bytes:
    """Write every sheet of ``workbook`` into an in-memory .xlsx file."""
    wb = XlsxWorkbook()
    wb.remove(wb.active)

    for sheet in workbook.sheets:
        ws = wb.create_sheet(sheet.name)
        for row in sheet.rows:
            ws.append(row)
        # the summary sheet starts with a section title, its header is row 2
        _style_sheet(ws, header_row=2 if sheet.rows and sheet.rows[0][0] in _SECTION_TITLES else 1)

    buffer = io.BytesIO()
    wb.save(buffer)
    logger.info("Rendered %s.xlsx (%d sheets)", workbook.filename, len(workbook.sheets))
    return buffer.getvalue()
