# Standard library imports
from collections.abc import Sequence
from uuid import UUID

# Third-party imports
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.models.employees.employee import Employee


async def get_employee_by_id(db: AsyncSession, employee_id: UUID) -> Employee | None:
    result = await db.execute(select(Employee).where(Employee.id == employee_id))
    return result.scalar_one_or_none()


async def get_employee_by_email(db: AsyncSession, email: str) -> Employee | None:
    """Case-insensitive lookup on the trimmed address."""
    result = await db.execute(select(Employee).where(func.lower(Employee.email) == email.strip().lower()))
    return result.scalars().first()


async def get_employees_by_ids(db: AsyncSession, employee_ids: Sequence[UUID]) -> dict[UUID, Employee]:
    if not employee_ids:
        return {}
    result = await db.execute(select(Employee).where(Employee.id.in_(set(employee_ids))))
    return {employee.id: employee for employee in result.scalars().all()}


async def count_active_employees(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Employee).where(Employee.is_active.is_(True)))
    return result.scalar_one()


async def get_active_employees(db: AsyncSession) -> Sequence[Employee]:
    result = await db.execute(select(Employee).where(Employee.is_active.is_(True)).order_by(Employee.email))
    return result.scalars().all()
