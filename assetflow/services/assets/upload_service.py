import os
import re
from typing import Optional

from fastapi import UploadFile
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from assetflow.models.assets.upload_models import Upload
from assetflow.core.config import ALLOWED_FILE_TYPES, MAX_FILE_BYTES
from assetflow.core.exceptions import BadRequestError
from assetflow.constants.error_codes import ErrorCode
from assetflow.utils.logger import get_logger

logger = get_logger(__name__)


def sanitize_filename(name: Optional[str]) -> str:
    base = os.path.basename((name or "").replace("\\", "/"))
    safe = re.sub(r"[^A-Za-z0-9._-]+", "_", base).strip("._")
    return safe or "file"


# =========================
# STAGING
# =========================
async def read_upload(file: UploadFile) -> dict:
    """Read and validate one multipart file part before anything is persisted."""
    if file.content_type not in ALLOWED_FILE_TYPES:
        raise BadRequestError(
            f"Invalid file type: {file.content_type}",
            ErrorCode.FILE_INVALID,
        )

    if file.filename and ("/" in file.filename or "\\" in file.filename):
        raise BadRequestError("Invalid filename", ErrorCode.FILE_INVALID)

    data = await file.read()

    if len(data) > MAX_FILE_BYTES:
        raise BadRequestError(
            f"File exceeds the {MAX_FILE_BYTES // (1024 * 1024)}MB limit",
            ErrorCode.FILE_INVALID,
        )

    return {
        "filename": sanitize_filename(file.filename),
        "content_type": file.content_type,
        "data": data,
    }


# =========================
# PERSISTENCE
# =========================
async def store_item_file(
    db: AsyncSession,
    *,
    asset_id: int,
    item_index: int,
    staged: dict,
) -> Upload:
    """Stage an upload for one item, replacing whatever was stored before."""
    await db.execute(
        delete(Upload).where(
            Upload.asset_id == asset_id,
            Upload.item_index == item_index,
        )
    )

    upload = Upload(
        filename=staged["filename"],
        content_type=staged["content_type"],
        size=len(staged["data"]),
        data=staged["data"],
        asset_id=asset_id,
        item_index=item_index,
    )
    db.add(upload)
    await db.flush()

    logger.info(
        "Stored item file",
        extra={"asset_id": asset_id, "item_index": item_index, "upload_id": upload.id},
    )
    return upload


async def uploads_by_index(db: AsyncSession, asset_id: int) -> dict[int, Upload]:
    result = await db.execute(
        select(Upload).where(Upload.asset_id == asset_id)
    )
    return {u.item_index: u for u in result.scalars()}


async def delete_uploads_from(db: AsyncSession, asset_id: int, first_index: int = 0) -> None:
    await db.execute(
        delete(Upload).where(
            Upload.asset_id == asset_id,
            Upload.item_index >= first_index,
        )
    )


async def load_upload(db: AsyncSession, upload_id: int) -> Optional[Upload]:
    return await db.scalar(
        select(Upload)
        .options(undefer(Upload.data))
        .where(Upload.id == upload_id)
    )
