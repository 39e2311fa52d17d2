"""Payroll service: pay calculation and payroll run lifecycle."""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from app.core.errors import BadRequestError, ForbiddenError, NotFoundError
from app.modules.notifications.models import NotificationTrigger
from app.modules.notifications.services import NotificationSvc
from app.modules.payroll.models import PayrollRun, PayrollStatus
from app.modules.payroll.repos import PayrollRepo
from app.modules.payroll.schemas import (
    PayrollCalculation,
    PayrollPeriod,
    PayrollRunCreate,
    PayrollRunResponse,
    PayrollRunUpdate,
)
from app.modules.staff.models import EmploymentType
from app.modules.staff.repos import StaffRepo


logger = structlog.get_logger()

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def money(value: Decimal | int | None) -> Decimal:
    return Decimal(value or 0).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class PayrollService:
    def __init__(
        self,
        repo: PayrollRepo,
        staff_repo: StaffRepo,
        notifications: NotificationSvc,
    ) -> None:
        self.repo = repo
        self.staff_repo = staff_repo
        self.notifications = notifications

    async def calculate(self, tenant_id: UUID, period: PayrollPeriod) -> PayrollCalculation:
        """Pay for a staff member over a period, from checked-out attendance.

        Hourly staff earn hours times rate; everyone else earns the base
        salary. Nothing is stored.

        Raises:
            BadRequestError: If the period ends before it starts
            NotFoundError: If the staff member is unknown
        """
        if period.period_end < period.period_start:
            raise BadRequestError(
                "Period end must not be before period start",
                error_code="invalid_date_range",
            )
        staff = await self.staff_repo.get(period.staff_id, tenant_id)
        if not staff:
            raise NotFoundError(
                "Staff member not found",
                resource="staff",
                resource_id=str(period.staff_id),
            )

        hours = money(
            await self.staff_repo.sum_hours(
                staff.id, tenant_id, period.period_start, period.period_end
            )
        )
        if staff.employment_type == EmploymentType.HOURLY:
            gross = money(hours * (staff.hourly_rate or 0))
        else:
            gross = money(staff.base_salary)
        deductions = ZERO

        return PayrollCalculation(
            staff_id=staff.id,
            staff_name=staff.full_name,
            employment_type=staff.employment_type,
            period_start=period.period_start,
            period_end=period.period_end,
            total_hours=hours,
            hourly_rate=staff.hourly_rate,
            base_salary=staff.base_salary,
            gross_pay=gross,
            deductions=deductions,
            net_pay=money(gross - deductions),
        )

    async def list_runs(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        staff_id: UUID | None = None,
        status: str | None = None,
    ) -> tuple[list[PayrollRun], int]:
        return await self.repo.list_runs(
            tenant_id, page=page, page_size=page_size, staff_id=staff_id, status=status
        )

    async def get_run(self, run_id: UUID, tenant_id: UUID) -> PayrollRun:
        run = await self.repo.get(run_id, tenant_id)
        if not run:
            raise NotFoundError(
                "Payroll run not found",
                resource="payroll_run",
                resource_id=str(run_id),
            )
        return run

    async def create_run(self, tenant_id: UUID, data: PayrollRunCreate) -> PayrollRun:
        calc = await self.calculate(tenant_id, data)
        run = await self.repo.create(
            PayrollRun(
                tenant_id=tenant_id,
                staff_id=calc.staff_id,
                period_start=calc.period_start,
                period_end=calc.period_end,
                total_hours=calc.total_hours,
                regular_pay=calc.gross_pay,
                gross_pay=calc.gross_pay,
                deductions=calc.deductions,
                net_pay=calc.net_pay,
                total_pay=calc.gross_pay,
                status=PayrollStatus.PENDING,
                notes=data.notes,
            )
        )
        logger.info(
            "payroll_run_created",
            run_id=str(run.id),
            staff_id=str(run.staff_id),
            gross_pay=str(run.gross_pay),
        )
        return run

    async def update_run(
        self, run_id: UUID, tenant_id: UUID, data: PayrollRunUpdate
    ) -> PayrollRun:
        run = await self.get_run(run_id, tenant_id)
        changes = data.model_dump(exclude_unset=True)
        becomes_paid = (
            changes.get("status") == PayrollStatus.PAID and run.status != PayrollStatus.PAID
        )

        for field, value in changes.items():
            setattr(run, field, value)
        if becomes_paid and run.paid_at is None:
            run.paid_at = dt.datetime.now(dt.UTC)

        run = await self.repo.update(run)

        if becomes_paid:
            logger.info("payroll_run_paid", run_id=str(run.id))
            entity = PayrollRunResponse.model_validate(run).model_dump(mode="json")
            await self.notifications.process_rules(
                tenant_id,
                NotificationTrigger.PAYROLL_PAID,
                entity,
                context_type="payroll_run",
                context_id=str(run.id),
            )
        return run

    async def delete_run(self, run_id: UUID, tenant_id: UUID) -> None:
        """Delete a run that has not been paid.

        Raises:
            ForbiddenError: If the run is PAID
        """
        run = await self.get_run(run_id, tenant_id)
        if run.status == PayrollStatus.PAID:
            raise ForbiddenError(
                "Paid payroll runs cannot be deleted",
                error_code="payroll_paid",
            )
        await self.repo.delete(run)


PayrollSvc = Annotated[PayrollService, Depends(PayrollService)]
