from decimal import Decimal
from io import BytesIO

from docx import Document
from openpyxl import load_workbook

from assetflow.utils.exporters.excel_report import build_report_workbook
from assetflow.utils.exporters.word_report import build_report_docx

GROUPS = [
    {"group": "Physics", "count": 3, "subtotal": Decimal("1250.50")},
    {"group": "Unknown", "count": 1, "subtotal": Decimal("49.50")},
]


def test_workbook_layout():
    content = build_report_workbook("Asset Report Grouped by Department", GROUPS, Decimal("1300.00"))
    ws = load_workbook(BytesIO(content)).active

    values = [list(r) for r in ws.iter_rows(values_only=True)]
    assert values[0][0] == "Asset Report Grouped by Department"
    assert values[1] == ["Group", "Count", "Subtotal"]
    assert values[2] == ["Physics", 3, 1250.5]
    assert values[3] == ["Unknown", 1, 49.5]
    assert values[4] == ["Grand Total", 4, 1300.0]


def test_docx_table_layout():
    content = build_report_docx("Asset Report Grouped by Vendor", GROUPS, Decimal("1300.00"))
    document = Document(BytesIO(content))

    assert document.paragraphs[0].text == "Asset Report Grouped by Vendor"
    table = document.tables[0]
    cells = [[c.text for c in row.cells] for row in table.rows]
    assert cells == [
        ["Group", "Count", "Subtotal"],
        ["Physics", "3", "1,250.50"],
        ["Unknown", "1", "49.50"],
        ["Grand Total", "4", "1,300.00"],
    ]


def test_empty_report_still_has_totals_row():
    ws = load_workbook(BytesIO(build_report_workbook("Empty", [], Decimal("0")))).active
    assert [list(r) for r in ws.iter_rows(min_row=2, values_only=True)] == [
        ["Group", "Count", "Subtotal"],
        ["Grand Total", 0, 0],
    ]
