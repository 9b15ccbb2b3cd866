from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetflow.core.db import get_db
from assetflow.schemas.masters.vendor_schemas import (
    VendorCreate,
    VendorUpdate,
    VendorOut,
)
from assetflow.services.masters.vendor_service import (
    list_vendors,
    create_vendor,
    update_vendor,
    delete_vendor,
)
from assetflow.utils.check_roles import require_role
from assetflow.utils.get_user import get_current_user
from assetflow.utils.response import APIResponse, success_response
from assetflow.utils.logger import get_logger

router = APIRouter(prefix="/vendors", tags=["Vendors"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[List[VendorOut]])
async def list_vendors_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    vendors = await list_vendors(db)
    return success_response("Vendors fetched successfully", vendors)


@router.post("", status_code=201, response_model=APIResponse[VendorOut])
async def create_vendor_api(
    payload: VendorCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(["admin"])),
):
    logger.info(
        "Create vendor",
        extra={"vendor_name": payload.name, "email": payload.email},
    )

    vendor = await create_vendor(db, payload)
    return success_response("Vendor created successfully", vendor)


@router.put("/{vendor_id}", response_model=APIResponse[VendorOut])
async def update_vendor_api(
    vendor_id: int,
    payload: VendorUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(["admin"])),
):
    logger.info("Update vendor", extra={"vendor_id": vendor_id})

    vendor = await update_vendor(db, vendor_id, payload)
    return success_response("Vendor updated successfully", vendor)


@router.delete("/{vendor_id}")
async def delete_vendor_api(
    vendor_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(["admin"])),
):
    logger.info("Delete vendor", extra={"vendor_id": vendor_id})

    await delete_vendor(db, vendor_id)
    return {"success": True, "message": "Vendor deleted successfully"}
