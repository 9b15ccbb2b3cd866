from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetflow.models.assets.asset_models import Asset, AssetItem
from assetflow.schemas.reports.report_schemas import ReportOut, ReportGroupOut, ReportRowOut
from assetflow.services.masters.department_service import department_names
from assetflow.services.reports.report_core import expand_assets, aggregate_rows
from assetflow.utils.decimal_utils import percentage_of
from assetflow.utils.exporters.excel_report import build_report_workbook, XLSX_MEDIA_TYPE
from assetflow.utils.exporters.word_report import build_report_docx, DOCX_MEDIA_TYPE
from assetflow.core.exceptions import BadRequestError
from assetflow.constants.error_codes import ErrorCode
from assetflow.utils.logger import get_logger

logger = get_logger(__name__)

EXPORT_FORMATS = {
    "excel": (build_report_workbook, XLSX_MEDIA_TYPE, "xlsx"),
    "word": (build_report_docx, DOCX_MEDIA_TYPE, "docx"),
}


async def _select_assets(
    db: AsyncSession,
    *,
    academic_year: Optional[str] = None,
    department_id: Optional[int] = None,
    item_name: Optional[str] = None,
    vendor_name: Optional[str] = None,
):
    conditions = []

    if academic_year:
        conditions.append(Asset.academic_year == academic_year)
    if department_id:
        conditions.append(Asset.department_id == department_id)
    if item_name:
        conditions.append(
            Asset.items.any(AssetItem.item_name.icontains(item_name, autoescape=True))
        )
    if vendor_name:
        conditions.append(
            Asset.items.any(AssetItem.vendor_name.icontains(vendor_name, autoescape=True))
        )

    result = await db.execute(
        select(Asset)
        .where(*conditions)
        .order_by(Asset.created_at.asc(), Asset.id.asc())
    )
    return result.scalars().all()


async def build_report(db: AsyncSession, group_by: str, **filters) -> dict:
    """Aggregated report data shared by the JSON endpoint and the exports."""
    assets = await _select_assets(db, **filters)
    rows = expand_assets(assets)

    names = {}
    if group_by == "department":
        names = await department_names(db, {r["department_id"] for r in rows})

    report = aggregate_rows(rows, group_by, names)

    logger.info(
        "Report generated",
        extra={
            "group_by": group_by,
            "groups": len(report["data"]),
            "grand_total": str(report["grand_total"]),
        },
    )
    return report


def _map_report(group_by: str, report: dict) -> ReportOut:
    grand_total = report["grand_total"]
    return ReportOut(
        group_by=group_by,
        grand_total=grand_total,
        data=[
            ReportGroupOut(
                group=g["group"],
                group_key=g["group_key"],
                count=g["count"],
                subtotal=g["subtotal"],
                percentage=percentage_of(g["subtotal"], grand_total),
                rows=[ReportRowOut(**r) for r in g["rows"]],
            )
            for g in report["data"]
        ],
    )


async def generate_report(db: AsyncSession, group_by: str, **filters) -> ReportOut:
    report = await build_report(db, group_by, **filters)
    return _map_report(group_by, report)


async def export_report(
    db: AsyncSession,
    export_format: str,
    group_by: str,
    **filters,
) -> tuple[bytes, str, str]:
    """Return ``(content, media_type, filename)`` for a rendered report."""
    if export_format not in EXPORT_FORMATS:
        raise BadRequestError("Invalid format", ErrorCode.REPORT_INVALID_FORMAT)

    renderer, media_type, extension = EXPORT_FORMATS[export_format]

    report = await build_report(db, group_by, **filters)
    content = renderer(
        f"Asset Report Grouped by {group_by.capitalize()}",
        report["data"],
        report["grand_total"],
    )

    return content, media_type, f"asset-report.{extension}"
