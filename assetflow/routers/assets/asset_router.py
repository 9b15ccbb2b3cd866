import re
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, File, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile as StarletteUploadFile

from assetflow.core.db import get_db
from assetflow.models.enums.asset_type import AssetType
from assetflow.schemas.assets.asset_schemas import (
    AssetCreate,
    AssetUpdate,
    AssetOut,
    AssetCreatedOut,
    AssetSummaryOut,
    ACADEMIC_YEAR_PATTERN,
)
from assetflow.services.assets.asset_service import (
    create_asset,
    list_assets,
    get_asset,
    update_asset,
    delete_asset,
    get_asset_summary,
    get_item_file,
    attach_item_file,
)
from assetflow.services.assets.upload_service import read_upload
from assetflow.utils.get_user import get_current_user
from assetflow.utils.response import (
    APIResponse,
    PaginatedResponse,
    success_response,
    paginated_response,
)
from assetflow.utils.logger import get_logger

router = APIRouter(prefix="/assets", tags=["Assets"])
logger = get_logger(__name__)

# positional parts: n-th file belongs to n-th item
POSITIONAL_FILE_FIELDS = ("files", "itemFiles[]", "billFiles")
INDEXED_FILE_FIELD = re.compile(r"^files\[(\d+)\]$")


async def _parse_create_request(request: Request) -> tuple[AssetCreate, list]:
    """Accept a JSON body, or multipart with a ``payload`` JSON part plus files."""
    content_type = request.headers.get("content-type", "")

    try:
        if content_type.startswith("multipart/form-data"):
            form = await request.form()
            raw = form.get("payload")
            payload = AssetCreate.model_validate_json(raw if isinstance(raw, str) and raw else "{}")

            files: list = []
            for field in POSITIONAL_FILE_FIELDS:
                files.extend(
                    v for v in form.getlist(field) if isinstance(v, StarletteUploadFile)
                )

            indexed = {}
            for key, value in form.multi_items():
                match = INDEXED_FILE_FIELD.match(key)
                if match and isinstance(value, StarletteUploadFile):
                    indexed[int(match.group(1))] = value

            if indexed:
                files.extend([None] * (max(indexed) + 1 - len(files)))
                for index, value in indexed.items():
                    files[index] = value
        else:
            payload = AssetCreate.model_validate_json(await request.body() or b"{}")
            files = []
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False))

    staged = [await read_upload(f) if f is not None else None for f in files]
    return payload, staged


@router.post("", status_code=201, response_model=AssetCreatedOut)
async def create_asset_api(
    request: Request,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    payload, staged = await _parse_create_request(request)

    logger.info(
        "Create asset",
        extra={
            "type": payload.type.value,
            "department_id": payload.department_id,
            "items": len(payload.items),
            "files": sum(1 for s in staged if s),
        },
    )

    asset_id = await create_asset(db, payload, user, staged)
    return AssetCreatedOut(message="Asset created successfully", id=asset_id)


@router.get("", response_model=PaginatedResponse[AssetOut])
async def list_assets_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    type: Optional[AssetType] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    department_id: Optional[int] = Query(None, alias="departmentId"),
    subcategory: Optional[str] = Query(None),
    vendor_name: Optional[str] = Query(None, alias="vendorName"),
    academic_year: Optional[str] = Query(None, alias="academicYear", pattern=ACADEMIC_YEAR_PATTERN),
    search: Optional[str] = Query(None),
):
    logger.info(
        "List assets",
        extra={"type": type, "page": page, "limit": limit, "search": search},
    )

    assets, total = await list_assets(
        db,
        page=page,
        limit=limit,
        type=type,
        department_id=department_id,
        subcategory=subcategory,
        vendor_name=vendor_name,
        academic_year=academic_year,
        search=search,
    )

    return paginated_response(
        "Assets fetched successfully",
        assets,
        page=page,
        limit=limit,
        total=total,
    )


@router.get("/summary/stats", response_model=AssetSummaryOut)
async def asset_summary_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await get_asset_summary(db)


@router.get("/{asset_id}", response_model=APIResponse[AssetOut])
async def get_asset_api(
    asset_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("Get asset", extra={"asset_id": asset_id})

    asset = await get_asset(db, asset_id)
    return success_response("Asset fetched successfully", asset)


@router.put("/{asset_id}", response_model=APIResponse[AssetOut])
async def update_asset_api(
    asset_id: int,
    payload: AssetUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("Update asset", extra={"asset_id": asset_id, "actor_id": user.id})

    asset = await update_asset(db, asset_id, payload)
    return success_response("Asset updated successfully", asset)


@router.delete("/{asset_id}")
async def delete_asset_api(
    asset_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("Delete asset", extra={"asset_id": asset_id, "actor_id": user.id})

    await delete_asset(db, asset_id)
    return {"success": True, "message": "Asset deleted successfully"}


@router.get("/{asset_id}/file/{item_index}")
async def get_item_file_api(
    asset_id: int,
    item_index: int,
    download: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stored = await get_item_file(db, asset_id, item_index)

    if isinstance(stored, str):
        return RedirectResponse(stored)

    disposition = "attachment" if download else "inline"
    return Response(
        content=stored.data,
        media_type=stored.content_type,
        headers={
            "Content-Disposition": f'{disposition}; filename="{stored.filename}"',
        },
    )


@router.put("/{asset_id}/file/{item_index}", response_model=APIResponse[AssetOut])
async def replace_item_file_api(
    asset_id: int,
    item_index: int,
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info(
        "Replace item file",
        extra={"asset_id": asset_id, "item_index": item_index, "actor_id": user.id},
    )

    staged = await read_upload(file)
    asset = await attach_item_file(db, asset_id, item_index, staged)
    return success_response("File uploaded successfully", asset)
