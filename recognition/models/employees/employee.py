# Standard library imports
from datetime import datetime

# Third-party imports
from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

# Local application imports
from recognition.models.base import Base
from recognition.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class Employee(UUIDTimeStampMixin, Base):
    """Directory entry. Read-only from the voting core's point of view."""

    __tablename__ = "employees"

    email: Mapped[str] = mapped_column(String(320), index=True, unique=True, nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(120), nullable=True)

    department: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    company_code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    direct_reports_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    hire_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rehire_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    @property
    def display_name(self) -> str:
        if self.full_name:
            return self.full_name
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or self.email

    def __str__(self) -> str:
        return f"Employee: {self.display_name} - {self.email}"
