from datetime import datetime, timezone
from typing import List, Optional, Tuple, Union

from sqlalchemy import select, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from assetflow.models.assets.asset_models import Asset, AssetItem
from assetflow.models.assets.upload_models import Upload
from assetflow.models.masters.department_models import Department
from assetflow.models.enums.asset_type import AssetType
from assetflow.models.users.user_models import User

from assetflow.schemas.assets.asset_schemas import (
    AssetCreate,
    AssetUpdate,
    AssetItemIn,
    AssetOut,
    AssetItemOut,
    OfficerOut,
    AssetSummaryOut,
    AssetTypeSummary,
)

from assetflow.services.assets.asset_totals_core import compute_totals
from assetflow.services.assets.upload_service import (
    store_item_file,
    uploads_by_index,
    delete_uploads_from,
    load_upload,
)
from assetflow.core.exceptions import BadRequestError, NotFoundError
from assetflow.constants.error_codes import ErrorCode
from assetflow.utils.decimal_utils import to_decimal
from assetflow.utils.logger import get_logger

logger = get_logger(__name__)


# =========================
# MAPPERS
# =========================
def _map_item(item: AssetItem) -> AssetItemOut:
    return AssetItemOut(
        item_index=item.position,
        item_name=item.item_name,
        quantity=item.quantity,
        price_per_item=item.price_per_item,
        total_amount=item.total_amount,
        vendor_name=item.vendor_name or "",
        vendor_address=item.vendor_address or "",
        contact_number=item.contact_number or "",
        email=item.email or "",
        bill_no=item.bill_no or "",
        bill_date=item.bill_date,
        bill_file_url=item.bill_file_url,
        bill_file_id=item.bill_file_id,
        bill_file_name=item.bill_file_name,
    )


def _map_asset(asset: Asset) -> AssetOut:
    return AssetOut(
        id=asset.id,
        type=asset.type,
        department_id=asset.department_id,
        subcategory=asset.subcategory or "",
        academic_year=asset.academic_year,
        officer=OfficerOut(id=asset.officer_id or "", name=asset.officer_name or ""),
        items=[_map_item(i) for i in asset.items],
        grand_total=asset.grand_total,
        created_at=asset.created_at,
        updated_at=asset.updated_at,
    )


# =========================
# HELPERS
# =========================
async def _get_asset(
    db: AsyncSession,
    asset_id: int,
    *,
    fresh: bool = False,
) -> Asset:
    stmt = select(Asset).where(Asset.id == asset_id)
    if fresh:
        stmt = stmt.execution_options(populate_existing=True)

    asset = (await db.execute(stmt)).scalar_one_or_none()
    if not asset:
        raise NotFoundError("Asset not found", ErrorCode.ASSET_NOT_FOUND)
    return asset


async def _ensure_department(db: AsyncSession, department_id: int) -> None:
    exists = await db.scalar(
        select(Department.id).where(Department.id == department_id)
    )
    if not exists:
        raise BadRequestError(
            "Invalid departmentId",
            ErrorCode.ASSET_INVALID_DEPARTMENT,
        )


def _build_items(
    payload_items: List[AssetItemIn],
    uploads: Optional[dict[int, Upload]] = None,
) -> Tuple[List[AssetItem], object]:
    uploads = uploads or {}
    computed, grand_total = compute_totals(
        i.model_dump(exclude={"total_amount"}) for i in payload_items
    )

    items = []
    for position, data in enumerate(computed):
        upload = uploads.get(position)
        items.append(
            AssetItem(
                position=position,
                item_name=data["item_name"],
                quantity=data["quantity"],
                price_per_item=data["price_per_item"],
                total_amount=data["total_amount"],
                vendor_name=data["vendor_name"],
                vendor_address=data["vendor_address"],
                contact_number=data["contact_number"],
                email=str(data["email"]) if data["email"] else "",
                bill_no=data["bill_no"],
                bill_date=data["bill_date"],
                bill_file_url=data["bill_file_url"],
                bill_file_id=upload.id if upload else None,
                bill_file_name=upload.filename if upload else None,
            )
        )
    return items, grand_total


def _asset_filters(
    *,
    type: Optional[AssetType] = None,
    department_id: Optional[int] = None,
    subcategory: Optional[str] = None,
    vendor_name: Optional[str] = None,
    academic_year: Optional[str] = None,
    search: Optional[str] = None,
) -> list:
    conditions = []

    if type:
        conditions.append(Asset.type == type)
    if department_id:
        conditions.append(Asset.department_id == department_id)
    if subcategory:
        conditions.append(Asset.subcategory.icontains(subcategory, autoescape=True))
    if vendor_name:
        conditions.append(
            Asset.items.any(AssetItem.vendor_name.icontains(vendor_name, autoescape=True))
        )
    if academic_year:
        conditions.append(Asset.academic_year == academic_year)
    if search:
        conditions.append(
            or_(
                Asset.subcategory.icontains(search, autoescape=True),
                Asset.academic_year.icontains(search, autoescape=True),
                Asset.items.any(AssetItem.item_name.icontains(search, autoescape=True)),
                Asset.items.any(AssetItem.vendor_name.icontains(search, autoescape=True)),
            )
        )

    return conditions


# =========================
# CREATE
# =========================
async def create_asset(
    db: AsyncSession,
    payload: AssetCreate,
    user: User,
    files: Optional[List[Optional[dict]]] = None,
) -> int:
    files = files or []

    if len(files) > len(payload.items):
        raise BadRequestError(
            "More files than items",
            ErrorCode.FILE_INVALID,
        )

    await _ensure_department(db, payload.department_id)

    items, grand_total = _build_items(payload.items)

    asset = Asset(
        type=payload.type,
        department_id=payload.department_id,
        subcategory=payload.subcategory,
        academic_year=payload.academic_year,
        officer_id=str(user.id),
        officer_name=user.name,
        grand_total=grand_total,
        items=items,
    )
    db.add(asset)

    try:
        await db.flush()

        for index, staged in enumerate(files):
            if not staged:
                continue
            upload = await store_item_file(
                db,
                asset_id=asset.id,
                item_index=index,
                staged=staged,
            )
            items[index].bill_file_id = upload.id
            items[index].bill_file_name = upload.filename

        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(
            "Asset create failed; record and attached files rolled back",
            extra={"department_id": payload.department_id, "files": len(files)},
        )
        raise

    logger.info(
        "Asset created",
        extra={"asset_id": asset.id, "grand_total": str(grand_total)},
    )
    return asset.id


# =========================
# GET / LIST
# =========================
async def get_asset(db: AsyncSession, asset_id: int) -> AssetOut:
    asset = await _get_asset(db, asset_id)
    return _map_asset(asset)


async def list_assets(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = 10,
    **filters,
) -> Tuple[List[AssetOut], int]:
    conditions = _asset_filters(**filters)

    total = await db.scalar(
        select(func.count(Asset.id)).where(*conditions)
    )

    result = await db.execute(
        select(Asset)
        .where(*conditions)
        .order_by(Asset.created_at.desc(), Asset.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )

    return [_map_asset(a) for a in result.scalars().all()], total or 0


# =========================
# UPDATE
# =========================
async def update_asset(
    db: AsyncSession,
    asset_id: int,
    payload: AssetUpdate,
) -> AssetOut:
    asset = await _get_asset(db, asset_id)

    data = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True, exclude={"grand_total", "items"}).items()
        if v is not None
    }
    changes: list[str] = []

    if "department_id" in data and data["department_id"] != asset.department_id:
        await _ensure_department(db, data["department_id"])

    for field, value in data.items():
        if getattr(asset, field) != value:
            setattr(asset, field, value)
            changes.append(field)

    if payload.items is not None:
        uploads = await uploads_by_index(db, asset.id)

        # old rows must be gone before positions are reused
        asset.items.clear()
        await db.flush()

        items, grand_total = _build_items(payload.items, uploads)
        asset.items.extend(items)

        # files of items that no longer exist
        await delete_uploads_from(db, asset.id, len(items))

        asset.grand_total = grand_total
        changes.append("items")

    if not changes:
        return _map_asset(asset)

    asset.updated_at = datetime.now(timezone.utc)
    await db.commit()

    logger.info(
        "Asset updated",
        extra={"asset_id": asset_id, "changes": ", ".join(changes)},
    )

    asset = await _get_asset(db, asset_id, fresh=True)
    return _map_asset(asset)


# =========================
# DELETE
# =========================
async def delete_asset(db: AsyncSession, asset_id: int) -> None:
    asset = await _get_asset(db, asset_id)

    await delete_uploads_from(db, asset.id)
    await db.delete(asset)
    await db.commit()

    logger.info("Asset deleted", extra={"asset_id": asset_id})


# =========================
# SUMMARY
# =========================
async def get_asset_summary(db: AsyncSession) -> AssetSummaryOut:
    result = await db.execute(
        select(
            Asset.type,
            func.count(Asset.id),
            func.coalesce(func.sum(Asset.grand_total), 0),
        ).group_by(Asset.type)
    )

    by_type = {t.value: {"count": 0, "total_value": to_decimal(0)} for t in AssetType}
    for asset_type, count, total_value in result.all():
        key = asset_type.value if isinstance(asset_type, AssetType) else str(asset_type)
        by_type[key] = {"count": count, "total_value": to_decimal(total_value)}

    return AssetSummaryOut(
        total_assets=sum(v["count"] for v in by_type.values()),
        total_value=sum(v["total_value"] for v in by_type.values()),
        by_type={
            k: AssetTypeSummary(count=v["count"], total_value=v["total_value"])
            for k, v in by_type.items()
        },
    )


# =========================
# ITEM FILES
# =========================
def _item_at(asset: Asset, item_index: int) -> AssetItem:
    if item_index < 0 or item_index >= len(asset.items):
        raise NotFoundError("Item not found", ErrorCode.FILE_NOT_FOUND)
    return asset.items[item_index]


async def get_item_file(
    db: AsyncSession,
    asset_id: int,
    item_index: int,
) -> Union[Upload, str]:
    """Stored upload for the item, or its external bill URL."""
    asset = await _get_asset(db, asset_id)
    item = _item_at(asset, item_index)

    if item.bill_file_id:
        upload = await load_upload(db, item.bill_file_id)
        if upload:
            return upload

    if item.bill_file_url:
        return item.bill_file_url

    raise NotFoundError("File not found", ErrorCode.FILE_NOT_FOUND)


async def attach_item_file(
    db: AsyncSession,
    asset_id: int,
    item_index: int,
    staged: dict,
) -> AssetOut:
    asset = await _get_asset(db, asset_id)
    item = _item_at(asset, item_index)

    try:
        upload = await store_item_file(
            db,
            asset_id=asset.id,
            item_index=item_index,
            staged=staged,
        )
        item.bill_file_id = upload.id
        item.bill_file_name = upload.filename
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(
            "Item file replacement failed",
            extra={"asset_id": asset_id, "item_index": item_index},
        )
        raise

    asset = await _get_asset(db, asset_id, fresh=True)
    return _map_asset(asset)
