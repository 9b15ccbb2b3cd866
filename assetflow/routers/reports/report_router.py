from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from assetflow.core.db import get_db
from assetflow.schemas.assets.asset_schemas import ACADEMIC_YEAR_PATTERN
from assetflow.schemas.reports.report_schemas import ReportOut
from assetflow.services.reports.report_service import generate_report, export_report
from assetflow.utils.get_user import get_current_user
from assetflow.utils.logger import get_logger

router = APIRouter(prefix="/reports", tags=["Reports"])
logger = get_logger(__name__)

GroupBy = Literal["department", "item", "vendor"]


def report_filters(
    academic_year: Optional[str] = Query(None, alias="academicYear", pattern=ACADEMIC_YEAR_PATTERN),
    department_id: Optional[int] = Query(None, alias="departmentId"),
    item_name: Optional[str] = Query(None, alias="itemName"),
    vendor_name: Optional[str] = Query(None, alias="vendorName"),
) -> dict:
    return {
        "academic_year": academic_year,
        "department_id": department_id,
        "item_name": item_name,
        "vendor_name": vendor_name,
    }


@router.get("", response_model=ReportOut)
async def report_api(
    group_by: GroupBy = Query(..., alias="groupBy"),
    filters: dict = Depends(report_filters),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("Generate report", extra={"group_by": group_by, **filters})

    return await generate_report(db, group_by, **filters)


@router.get("/export/{export_format}")
async def export_report_api(
    export_format: str,
    group_by: GroupBy = Query(..., alias="groupBy"),
    filters: dict = Depends(report_filters),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info(
        "Export report",
        extra={"format": export_format, "group_by": group_by, **filters},
    )

    content, media_type, filename = await export_report(
        db, export_format, group_by, **filters
    )
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
