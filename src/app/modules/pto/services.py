"""PTO service for business logic."""

import datetime as dt
from collections.abc import Iterator
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from app.core.errors import BadRequestError, NotFoundError
from app.modules.notifications.models import NotificationTrigger
from app.modules.notifications.services import NotificationSvc
from app.modules.pto.models import PTORequest, PTOStatus
from app.modules.pto.repos import PTORepo
from app.modules.pto.schemas import PTOCreate, PTOResponse
from app.modules.staff.models import Attendance, AttendanceStatus, Staff
from app.modules.staff.repos import StaffRepo


logger = structlog.get_logger()


def days_in_range(start: dt.date, end: dt.date) -> int:
    """Calendar days from ``start`` to ``end``, both included."""
    return (end - start).days + 1


def iter_days(start: dt.date, end: dt.date) -> Iterator[dt.date]:
    day = start
    while day <= end:
        yield day
        day += dt.timedelta(days=1)


class PTOService:
    def __init__(
        self,
        repo: PTORepo,
        staff_repo: StaffRepo,
        notifications: NotificationSvc,
    ) -> None:
        self.repo = repo
        self.staff_repo = staff_repo
        self.notifications = notifications

    async def list_requests(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        staff_id: UUID | None = None,
        status: str | None = None,
    ) -> tuple[list[PTORequest], int]:
        return await self.repo.list_requests(
            tenant_id, page=page, page_size=page_size, staff_id=staff_id, status=status
        )

    async def get_request(
        self, request_id: UUID, tenant_id: UUID, lock: bool = False
    ) -> PTORequest:
        getter = self.repo.get_for_update if lock else self.repo.get
        request = await getter(request_id, tenant_id)
        if not request:
            raise NotFoundError(
                "PTO request not found",
                resource="pto_request",
                resource_id=str(request_id),
            )
        return request

    async def _get_staff(self, staff_id: UUID, tenant_id: UUID, lock: bool = False) -> Staff:
        getter = self.staff_repo.get_for_update if lock else self.staff_repo.get
        staff = await getter(staff_id, tenant_id)
        if not staff:
            raise NotFoundError(
                "Staff member not found",
                resource="staff",
                resource_id=str(staff_id),
            )
        return staff

    @staticmethod
    def _ensure_days_available(staff: Staff, days: int) -> None:
        available = staff.vacation_days_available
        if days > available:
            raise BadRequestError(
                f"Insufficient vacation days. Requested: {days}, Available: {available}",
                error_code="insufficient_pto",
                details={"requested": days, "available": available},
            )

    @staticmethod
    def _ensure_pending(request: PTORequest, action: str) -> None:
        if request.status != PTOStatus.PENDING:
            raise BadRequestError(
                f"Cannot {action} a {request.status.lower()} request",
                error_code="invalid_status",
                details={"status": request.status},
            )

    async def _fire(self, trigger: str, request: PTORequest, staff: Staff) -> None:
        entity: dict[str, Any] = PTOResponse.model_validate(request).model_dump(mode="json")
        entity["staff"] = {
            "id": str(staff.id),
            "first_name": staff.first_name,
            "last_name": staff.last_name,
            "full_name": staff.full_name,
            "email": staff.email,
        }
        await self.notifications.process_rules(
            request.tenant_id,
            trigger,
            entity,
            context_type="pto_request",
            context_id=str(request.id),
        )

    async def create_request(self, tenant_id: UUID, data: PTOCreate) -> PTORequest:
        """Create a PENDING request.

        Raises:
            NotFoundError: If the staff member is unknown
            BadRequestError: If the range is inverted or exceeds available days
        """
        if data.end_date < data.start_date:
            raise BadRequestError(
                "End date must not be before start date",
                error_code="invalid_date_range",
            )
        staff = await self._get_staff(data.staff_id, tenant_id)
        days = days_in_range(data.start_date, data.end_date)
        self._ensure_days_available(staff, days)

        request = await self.repo.create(
            PTORequest(
                tenant_id=tenant_id,
                staff_id=staff.id,
                start_date=data.start_date,
                end_date=data.end_date,
                days_requested=days,
                reason=data.reason,
                status=PTOStatus.PENDING,
            )
        )
        logger.info("pto_requested", pto_id=str(request.id), staff_id=str(staff.id), days=days)
        await self._fire(NotificationTrigger.PTO_REQUESTED, request, staff)
        return request

    async def approve_request(
        self, request_id: UUID, tenant_id: UUID, reviewer_id: UUID | None = None
    ) -> PTORequest:
        """Approve a pending request and book the days.

        The request row is locked before its status is checked, then the staff
        row while the balance is checked and incremented.
        Every scheduled shift in the range gets an APPROVED_PTO attendance.
        """
        request = await self.get_request(request_id, tenant_id, lock=True)
        self._ensure_pending(request, "approve")

        staff = await self._get_staff(request.staff_id, tenant_id, lock=True)
        self._ensure_days_available(staff, request.days_requested)

        request.status = PTOStatus.APPROVED
        request.reviewed_at = dt.datetime.now(dt.UTC)
        request.reviewed_by = reviewer_id
        staff.vacation_days_used += request.days_requested
        await self.staff_repo.update(staff)
        request = await self.repo.update(request)

        booked = await self._book_attendance(request, tenant_id)
        logger.info(
            "pto_approved",
            pto_id=str(request.id),
            staff_id=str(staff.id),
            attendance_records=booked,
        )
        await self._fire(NotificationTrigger.PTO_APPROVED, request, staff)
        return request

    async def _book_attendance(self, request: PTORequest, tenant_id: UUID) -> int:
        shifts = await self.staff_repo.list_shifts(request.staff_id, tenant_id, active_only=True)
        existing = {
            (record.shift_id, record.date): record
            for record in await self.staff_repo.list_attendance(
                request.staff_id, tenant_id, request.start_date, request.end_date
            )
        }

        new_records: list[Attendance] = []
        booked = 0
        for day in iter_days(request.start_date, request.end_date):
            for shift in shifts:
                if not shift.applies_to(day):
                    continue
                booked += 1
                if record := existing.get((shift.id, day)):
                    record.status = AttendanceStatus.APPROVED_PTO
                    await self.staff_repo.update_attendance(record)
                    continue
                new_records.append(
                    Attendance(
                        tenant_id=tenant_id,
                        staff_id=request.staff_id,
                        shift_id=shift.id,
                        date=day,
                        status=AttendanceStatus.APPROVED_PTO,
                    )
                )

        if new_records:
            await self.staff_repo.add_attendance(*new_records)
        return booked

    async def deny_request(
        self,
        request_id: UUID,
        tenant_id: UUID,
        denial_reason: str | None = None,
        reviewer_id: UUID | None = None,
    ) -> PTORequest:
        request = await self.get_request(request_id, tenant_id, lock=True)
        self._ensure_pending(request, "deny")

        request.status = PTOStatus.DENIED
        request.denial_reason = denial_reason
        request.reviewed_at = dt.datetime.now(dt.UTC)
        request.reviewed_by = reviewer_id
        request = await self.repo.update(request)
        logger.info("pto_denied", pto_id=str(request.id))

        staff = await self._get_staff(request.staff_id, tenant_id)
        await self._fire(NotificationTrigger.PTO_DENIED, request, staff)
        return request

    async def cancel_request(self, request_id: UUID, tenant_id: UUID) -> PTORequest:
        request = await self.get_request(request_id, tenant_id, lock=True)
        self._ensure_pending(request, "cancel")
        request.status = PTOStatus.CANCELLED
        return await self.repo.update(request)


PTOSvc = Annotated[PTOService, Depends(PTOService)]
