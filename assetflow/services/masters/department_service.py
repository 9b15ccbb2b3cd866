from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from assetflow.models.masters.department_models import Department
from assetflow.models.assets.asset_models import Asset
from assetflow.schemas.masters.department_schemas import (
    DepartmentCreate,
    DepartmentUpdate,
    DepartmentOut,
)
from assetflow.core.exceptions import ConflictError, NotFoundError
from assetflow.constants.error_codes import ErrorCode
from assetflow.utils.logger import get_logger

logger = get_logger(__name__)


async def _get_department(db: AsyncSession, department_id: int) -> Department:
    department = await db.get(Department, department_id)
    if not department:
        raise NotFoundError(
            "Department not found",
            ErrorCode.DEPARTMENT_NOT_FOUND,
        )
    return department


async def _name_taken(db: AsyncSession, name: str, exclude_id: int | None = None) -> bool:
    stmt = select(Department.id).where(Department.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Department.id != exclude_id)
    return bool(await db.scalar(stmt))


# =========================
# LIST
# =========================
async def list_departments(db: AsyncSession) -> list[DepartmentOut]:
    result = await db.execute(select(Department).order_by(Department.name.asc()))
    return [DepartmentOut.model_validate(d) for d in result.scalars().all()]


async def department_names(db: AsyncSession, ids) -> dict[int, str]:
    ids = {i for i in ids if i is not None}
    if not ids:
        return {}
    result = await db.execute(
        select(Department.id, Department.name).where(Department.id.in_(ids))
    )
    return {row.id: row.name for row in result.all()}


# =========================
# CREATE
# =========================
async def create_department(db: AsyncSession, payload: DepartmentCreate) -> DepartmentOut:
    if await _name_taken(db, payload.name):
        raise ConflictError(
            "Department already exists",
            ErrorCode.DEPARTMENT_EXISTS,
        )

    department = Department(name=payload.name, type=payload.type)
    db.add(department)

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(
            "Department already exists",
            ErrorCode.DEPARTMENT_EXISTS,
        )

    await db.commit()
    await db.refresh(department)

    logger.info("Department created", extra={"department_id": department.id})
    return DepartmentOut.model_validate(department)


# =========================
# UPDATE
# =========================
async def update_department(
    db: AsyncSession,
    department_id: int,
    payload: DepartmentUpdate,
) -> DepartmentOut:
    department = await _get_department(db, department_id)

    if payload.name != department.name and await _name_taken(db, payload.name, department_id):
        raise ConflictError(
            "Department already exists",
            ErrorCode.DEPARTMENT_EXISTS,
        )

    department.name = payload.name
    department.type = payload.type

    await db.commit()
    await db.refresh(department)

    logger.info("Department updated", extra={"department_id": department_id})
    return DepartmentOut.model_validate(department)


# =========================
# DELETE
# =========================
async def delete_department(db: AsyncSession, department_id: int) -> None:
    department = await _get_department(db, department_id)

    in_use = await db.scalar(
        select(Asset.id).where(Asset.department_id == department_id).limit(1)
    )
    if in_use:
        raise ConflictError(
            "Department is in use",
            ErrorCode.DEPARTMENT_IN_USE,
        )

    await db.delete(department)
    await db.commit()

    logger.info("Department deleted", extra={"department_id": department_id})
