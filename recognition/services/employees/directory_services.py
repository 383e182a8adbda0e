# Standard library imports
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol
from uuid import UUID

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from recognition.db_selectors.employees import (
    count_active_employees,
    get_active_employees,
    get_employee_by_email,
    get_employee_by_id,
    get_employees_by_ids,
)
from recognition.models.employees.employee import Employee
from recognition.schemas.configuration.config_schemas import EligibilityConfigSchema
from recognition.services.voting.eligibility_services import is_voting_eligible


class EmployeeDirectory(Protocol):
    """Read-only view of the employee directory used by the voting core."""

    async def find_by_id(self, employee_id: UUID) -> Employee | None: ...

    async def find_by_email(self, email: str) -> Employee | None: ...

    async def find_many(self, employee_ids: Sequence[UUID]) -> dict[UUID, Employee]: ...

    async def count_active(self) -> int: ...

    async def find_all_active(self) -> Sequence[Employee]: ...

    async def find_eligible(self, config: EligibilityConfigSchema, now: datetime | None = None) -> list[Employee]: ...


class DatabaseEmployeeDirectory:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_by_id(self, employee_id: UUID) -> Employee | None:
        return await get_employee_by_id(self.db, employee_id)

    async def find_by_email(self, email: str) -> Employee | None:
        return await get_employee_by_email(self.db, email)

    async def find_many(self, employee_ids: Sequence[UUID]) -> dict[UUID, Employee]:
        return await get_employees_by_ids(self.db, employee_ids)

    async def count_active(self) -> int:
        return await count_active_employees(self.db)

    async def find_all_active(self) -> Sequence[Employee]:
        return await get_active_employees(self.db)

    async def find_eligible(self, config: EligibilityConfigSchema, now: datetime | None = None) -> list[Employee]:
        employees = await get_active_employees(self.db)
        return [employee for employee in employees if is_voting_eligible(employee, config, now)]
