from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from assetflow.models.masters.vendor_models import Vendor
from assetflow.schemas.masters.vendor_schemas import (
    VendorCreate,
    VendorUpdate,
    VendorOut,
)
from assetflow.core.exceptions import ConflictError, NotFoundError
from assetflow.constants.error_codes import ErrorCode
from assetflow.utils.logger import get_logger

logger = get_logger(__name__)


async def _email_taken(db: AsyncSession, email: str, exclude_id: int | None = None) -> bool:
    stmt = select(Vendor.id).where(Vendor.email == email)
    if exclude_id is not None:
        stmt = stmt.where(Vendor.id != exclude_id)
    return bool(await db.scalar(stmt))


async def list_vendors(db: AsyncSession) -> list[VendorOut]:
    result = await db.execute(select(Vendor).order_by(Vendor.name.asc()))
    return [VendorOut.model_validate(v) for v in result.scalars().all()]


async def create_vendor(db: AsyncSession, payload: VendorCreate) -> VendorOut:
    email = payload.email.lower()

    if await _email_taken(db, email):
        raise ConflictError("Vendor already exists", ErrorCode.VENDOR_EXISTS)

    vendor = Vendor(**payload.model_dump(exclude={"email"}), email=email)
    db.add(vendor)

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Vendor already exists", ErrorCode.VENDOR_EXISTS)

    await db.commit()
    await db.refresh(vendor)

    logger.info("Vendor created", extra={"vendor_id": vendor.id})
    return VendorOut.model_validate(vendor)


async def update_vendor(
    db: AsyncSession,
    vendor_id: int,
    payload: VendorUpdate,
) -> VendorOut:
    vendor = await db.get(Vendor, vendor_id)
    if not vendor:
        raise NotFoundError("Vendor not found", ErrorCode.VENDOR_NOT_FOUND)

    email = payload.email.lower()
    if email != vendor.email and await _email_taken(db, email, vendor_id):
        raise ConflictError("Vendor already exists", ErrorCode.VENDOR_EXISTS)

    for field, value in payload.model_dump(exclude={"email"}).items():
        setattr(vendor, field, value)
    vendor.email = email

    await db.commit()
    await db.refresh(vendor)

    logger.info("Vendor updated", extra={"vendor_id": vendor_id})
    return VendorOut.model_validate(vendor)


async def delete_vendor(db: AsyncSession, vendor_id: int) -> None:
    vendor = await db.get(Vendor, vendor_id)
    if not vendor:
        raise NotFoundError("Vendor not found", ErrorCode.VENDOR_NOT_FOUND)

    await db.delete(vendor)
    await db.commit()

    logger.info("Vendor deleted", extra={"vendor_id": vendor_id})
