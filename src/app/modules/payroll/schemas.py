"""Pydantic schemas for payroll."""

import datetime as dt
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.modules.payroll.models import PayrollStatus
from app.modules.staff.models import EmploymentType


class PayrollPeriod(BaseModel):
    staff_id: UUID
    period_start: dt.date
    period_end: dt.date


class PayrollCalculation(BaseModel):
    staff_id: UUID
    staff_name: str
    employment_type: EmploymentType
    period_start: dt.date
    period_end: dt.date
    total_hours: Decimal
    hourly_rate: Decimal | None
    base_salary: Decimal | None
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal


class PayrollRunCreate(PayrollPeriod):
    notes: str | None = None


class PayrollRunUpdate(BaseModel):
    status: PayrollStatus | None = None
    paid_at: dt.datetime | None = None
    notes: str | None = Field(None, max_length=2000)


class PayrollRunResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    staff_id: UUID
    period_start: dt.date
    period_end: dt.date
    total_hours: Decimal
    regular_pay: Decimal
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal
    total_pay: Decimal
    status: PayrollStatus
    paid_at: dt.datetime | None
    notes: str | None
    created_at: dt.datetime
    updated_at: dt.datetime


class PayrollRunListResponse(BaseModel):
    items: list[PayrollRunResponse]
    total: int
    page: int
    page_size: int
