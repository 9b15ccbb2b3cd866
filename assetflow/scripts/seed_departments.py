import asyncio

from sqlalchemy import select

from assetflow.core.db import AsyncSessionLocal, dispose_engine
from assetflow.core.logging import setup_logging
from assetflow.models.assets.asset_models import Asset
from assetflow.models.enums.department_type import DepartmentType
from assetflow.models.masters.department_models import Department
from assetflow.utils.logger import get_logger

logger = get_logger("scripts.seed_departments")

DEFAULT_DEPARTMENTS = [
    ("Department of Civil Engineering", DepartmentType.major),
    ("Department of Computer Science and Engineering (CSE)", DepartmentType.major),
    ("Department of Electronics and Communication Engineering (ECE)", DepartmentType.major),
    ("Department of Electrical and Electronics Engineering (EEE)", DepartmentType.major),
    ("Department of Information Science and Engineering (ISE)", DepartmentType.major),
    ("Department of Mechanical Engineering", DepartmentType.major),
    ("Department of Artificial Intelligence and Machine Learning (AIML, under CSE)", DepartmentType.major),
    ("Department of First Year Engineering", DepartmentType.academic),
    ("Department of Chemistry", DepartmentType.academic),
    ("Department of Physics", DepartmentType.academic),
    ("Department of Mathematics", DepartmentType.academic),
    ("Department of Electrical Maintenance", DepartmentType.service),
    ("Department of Civil Maintenance", DepartmentType.service),
    ("Office Administration", DepartmentType.service),
    ("Central Library", DepartmentType.service),
    ("Department of Sports and Physical Education", DepartmentType.service),
    ("Boys’ Hostel Administration", DepartmentType.service),
    ("Girls’ Hostel Administration", DepartmentType.service),
]


async def seed_departments() -> dict:
    """Make the department table match DEFAULT_DEPARTMENTS.

    Departments outside the list are removed unless an asset still
    references them; those are kept and reported.
    """
    wanted = dict(DEFAULT_DEPARTMENTS)
    stats = {"created": 0, "updated": 0, "removed": 0, "kept_in_use": 0}

    async with AsyncSessionLocal() as session:
        existing = (await session.execute(select(Department))).scalars().all()
        in_use = set(
            (await session.execute(select(Asset.department_id).distinct())).scalars().all()
        )

        seen = set()
        for department in existing:
            if department.name in wanted:
                seen.add(department.name)
                if department.type != wanted[department.name]:
                    department.type = wanted[department.name]
                    stats["updated"] += 1
            elif department.id in in_use:
                stats["kept_in_use"] += 1
                logger.warning(
                    "Department outside default list still in use",
                    extra={"department_id": department.id, "department_name": department.name},
                )
            else:
                await session.delete(department)
                stats["removed"] += 1

        for name, department_type in DEFAULT_DEPARTMENTS:
            if name not in seen:
                session.add(Department(name=name, type=department_type))
                stats["created"] += 1

        await session.commit()

    logger.info("Departments seeded", extra=stats)
    return stats


async def main():
    await seed_departments()
    await dispose_engine()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
