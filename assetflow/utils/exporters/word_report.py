# assetflow/utils/exporters/word_report.py
from io import BytesIO
from typing import Iterable, Mapping

from docx import Document
from docx.shared import Pt

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

HEADERS = ["Group", "Count", "Subtotal"]


def _money(value) -> str:
    return f"{float(value):,.2f}"


def _bold_row(row) -> None:
    for cell in row.cells:
        for paragraph in cell.paragraphs:
            for run in paragraph.runs:
                run.bold = True


def build_report_docx(
    title: str,
    groups: Iterable[Mapping],
    grand_total,
) -> bytes:
    """Render aggregated report groups as a .docx document with one table."""
    document = Document()

    heading = document.add_paragraph()
    run = heading.add_run(title)
    run.bold = True
    run.font.size = Pt(14)

    table = document.add_table(rows=1, cols=len(HEADERS))
    table.style = "Table Grid"

    for cell, header in zip(table.rows[0].cells, HEADERS):
        cell.text = header
    _bold_row(table.rows[0])

    total_count = 0
    for group in groups:
        cells = table.add_row().cells
        cells[0].text = str(group["group"])
        cells[1].text = str(group["count"])
        cells[2].text = _money(group["subtotal"])
        total_count += group["count"]

    total_row = table.add_row()
    total_row.cells[0].text = "Grand Total"
    total_row.cells[1].text = str(total_count)
    total_row.cells[2].text = _money(grand_total)
    _bold_row(total_row)

    output = BytesIO()
    document.save(output)
    return output.getvalue()
