"""Pydantic schemas for staff, shifts and attendance."""

import datetime as dt
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from app.modules.staff.models import AttendanceStatus, EmploymentType


# ============================================================
# Staff
# ============================================================


class StaffBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=32)
    rut: str | None = Field(None, description="Chilean RUT in any common spelling")
    position: str | None = Field(None, max_length=100)
    department: str | None = Field(None, max_length=100)
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    hourly_rate: Decimal | None = Field(None, ge=0)
    base_salary: Decimal | None = Field(None, ge=0)
    vacation_days_total: int = Field(15, ge=0)
    hire_date: dt.date | None = None


class StaffCreate(StaffBase):
    pass


class StaffUpdate(BaseModel):
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=32)
    rut: str | None = None
    position: str | None = Field(None, max_length=100)
    department: str | None = Field(None, max_length=100)
    employment_type: EmploymentType | None = None
    hourly_rate: Decimal | None = Field(None, ge=0)
    base_salary: Decimal | None = Field(None, ge=0)
    vacation_days_total: int | None = Field(None, ge=0)
    vacation_days_used: int | None = Field(None, ge=0)
    hire_date: dt.date | None = None
    is_active: bool | None = None


class StaffResponse(StaffBase):
    id: UUID
    tenant_id: UUID
    vacation_days_used: int
    vacation_days_available: int
    is_active: bool
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class StaffListResponse(BaseModel):
    items: list[StaffResponse]
    total: int
    page: int
    page_size: int


# ============================================================
# Shifts
# ============================================================


class ShiftCreate(BaseModel):
    """A recurring shift needs ``day_of_week``; a one-off needs ``specific_date``."""

    day_of_week: int | None = Field(None, ge=0, le=6, description="0=Monday .. 6=Sunday")
    specific_date: dt.date | None = None
    start_time: dt.time
    end_time: dt.time
    is_recurring: bool = True
    is_active: bool = True

    @model_validator(mode="after")
    def check_schedule(self) -> "ShiftCreate":
        if self.is_recurring and self.day_of_week is None:
            raise ValueError("Recurring shifts require day_of_week")
        if not self.is_recurring and self.specific_date is None:
            raise ValueError("One-off shifts require specific_date")
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ShiftResponse(ShiftCreate):
    id: UUID
    staff_id: UUID
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Attendance
# ============================================================


class CheckInRequest(BaseModel):
    shift_id: UUID | None = None
    status: AttendanceStatus = AttendanceStatus.PRESENT
    notes: str | None = Field(None, max_length=500)


class CheckOutRequest(BaseModel):
    notes: str | None = Field(None, max_length=500)


class AttendanceResponse(BaseModel):
    id: UUID
    staff_id: UUID
    shift_id: UUID | None
    date: dt.date
    check_in: dt.datetime | None
    check_out: dt.datetime | None
    total_hours: Decimal | None
    status: AttendanceStatus
    notes: str | None

    model_config = ConfigDict(from_attributes=True)
