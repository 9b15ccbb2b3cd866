from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetflow.core.db import get_db
from assetflow.schemas.masters.department_schemas import (
    DepartmentCreate,
    DepartmentUpdate,
    DepartmentOut,
)
from assetflow.services.masters.department_service import (
    list_departments,
    create_department,
    update_department,
    delete_department,
)
from assetflow.utils.check_roles import require_role
from assetflow.utils.get_user import get_current_user
from assetflow.utils.response import APIResponse, success_response
from assetflow.utils.logger import get_logger

router = APIRouter(prefix="/departments", tags=["Departments"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[List[DepartmentOut]])
async def list_departments_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    departments = await list_departments(db)
    return success_response("Departments fetched successfully", departments)


@router.post("", status_code=201, response_model=APIResponse[DepartmentOut])
async def create_department_api(
    payload: DepartmentCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(["admin"])),
):
    logger.info(
        "Create department",
        extra={"department_name": payload.name, "department_type": payload.type.value},
    )

    department = await create_department(db, payload)
    return success_response("Department created successfully", department)


@router.put("/{department_id}", response_model=APIResponse[DepartmentOut])
async def update_department_api(
    department_id: int,
    payload: DepartmentUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(["admin"])),
):
    logger.info("Update department", extra={"department_id": department_id})

    department = await update_department(db, department_id, payload)
    return success_response("Department updated successfully", department)


@router.delete("/{department_id}")
async def delete_department_api(
    department_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(["admin"])),
):
    logger.info("Delete department", extra={"department_id": department_id})

    await delete_department(db, department_id)
    return {"success": True, "message": "Department deleted successfully"}
