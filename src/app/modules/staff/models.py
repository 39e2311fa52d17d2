"""Staff database models."""

import datetime as dt
from decimal import Decimal
from enum import StrEnum
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    SmallInteger,
    String,
    Time,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import (
    DEFAULT_VACATION_DAYS,
    MAX_EMAIL_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_RUT_LENGTH,
)
from app.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class EmploymentType(StrEnum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    HOURLY = "HOURLY"
    CONTRACTOR = "CONTRACTOR"


class AttendanceStatus(StrEnum):
    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    APPROVED_PTO = "APPROVED_PTO"


class Staff(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """An employee. Staff are deactivated, never deleted.

    ``vacation_days_used`` grows as PTO requests are approved.
    """

    __tablename__ = "staff"
    __table_args__ = (
        Index(
            "uq_staff_tenant_rut",
            "tenant_id",
            "rut",
            unique=True,
            postgresql_where=text("rut IS NOT NULL"),
        ),
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH))
    phone: Mapped[str | None] = mapped_column(String(MAX_PHONE_LENGTH))
    rut: Mapped[str | None] = mapped_column(String(MAX_RUT_LENGTH))
    position: Mapped[str | None] = mapped_column(String(100))
    department: Mapped[str | None] = mapped_column(String(100), index=True)
    employment_type: Mapped[str] = mapped_column(
        String(32), nullable=False, default=EmploymentType.FULL_TIME
    )
    hourly_rate: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    base_salary: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    vacation_days_total: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_VACATION_DAYS
    )
    vacation_days_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    hire_date: Mapped[dt.date | None] = mapped_column(Date)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def vacation_days_available(self) -> int:
        return self.vacation_days_total - self.vacation_days_used

    def __repr__(self) -> str:
        return f"<Staff(id={self.id}, name={self.full_name})>"


class Shift(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """A work shift: weekly on ``day_of_week`` (0=Monday) or once on ``specific_date``."""

    __tablename__ = "shifts"

    staff_id: Mapped[UUID] = mapped_column(
        ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_of_week: Mapped[int | None] = mapped_column(SmallInteger)
    specific_date: Mapped[dt.date | None] = mapped_column(Date)
    start_time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    end_time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def applies_to(self, day: dt.date) -> bool:
        if not self.is_active:
            return False
        if self.is_recurring:
            return self.day_of_week == day.weekday()
        return self.specific_date == day


class Attendance(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """One worked (or excused) day of a staff member."""

    __tablename__ = "attendance"

    staff_id: Mapped[UUID] = mapped_column(
        ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True
    )
    shift_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("shifts.id", ondelete="SET NULL")
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    check_in: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True))
    check_out: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True))
    total_hours: Mapped[Decimal | None] = mapped_column(Numeric(6, 2))
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=AttendanceStatus.PRESENT
    )
    notes: Mapped[str | None] = mapped_column(String(500))
