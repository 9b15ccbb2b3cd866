# assetflow/utils/exporters/excel_report.py
from io import BytesIO
from typing import Iterable, Mapping

from openpyxl import Workbook
from openpyxl.styles import Font

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADERS = ["Group", "Count", "Subtotal"]
MONEY_FORMAT = "#,##0.00"


def build_report_workbook(
    title: str,
    groups: Iterable[Mapping],
    grand_total,
) -> bytes:
    """Render aggregated report groups as an .xlsx workbook."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Report"

    ws.append([title])
    ws.cell(row=1, column=1).font = Font(bold=True, size=14)

    ws.append(HEADERS)
    for cell in ws[2]:
        cell.font = Font(bold=True)

    total_count = 0
    for group in groups:
        ws.append([str(group["group"]), group["count"], float(group["subtotal"])])
        ws.cell(row=ws.max_row, column=3).number_format = MONEY_FORMAT
        total_count += group["count"]

    ws.append(["Grand Total", total_count, float(grand_total)])
    for cell in ws[ws.max_row]:
        cell.font = Font(bold=True)
    ws.cell(row=ws.max_row, column=3).number_format = MONEY_FORMAT

    ws.column_dimensions["A"].width = 48
    ws.column_dimensions["B"].width = 12
    ws.column_dimensions["C"].width = 18

    output = BytesIO()
    wb.save(output)
    return output.getvalue()
