"""Unit tests for StaffService."""

import datetime as dt
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.core.errors import BadRequestError, ConflictError, NotFoundError, ValidationError
from app.modules.staff.models import AttendanceStatus
from app.modules.staff.schemas import (
    CheckInRequest,
    CheckOutRequest,
    ShiftCreate,
    StaffCreate,
    StaffUpdate,
)
from app.modules.staff.services import StaffService, hours_between, normalize_rut
from tests.factories.staff import AttendanceFactory, ShiftFactory, StaffFactory


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = lambda staff: staff
    repo.update.side_effect = lambda staff: staff
    repo.create_shift.side_effect = lambda shift: shift
    repo.add_attendance.side_effect = lambda *records: list(records)
    repo.update_attendance.side_effect = lambda record: record
    return repo


@pytest.fixture
def service(repo: AsyncMock) -> StaffService:
    return StaffService(repo)


def test_hours_between_rounds_to_two_places():
    start = dt.datetime(2026, 3, 2, 9, 0, tzinfo=dt.UTC)
    end = dt.datetime(2026, 3, 2, 17, 20, tzinfo=dt.UTC)

    assert hours_between(start, end) == Decimal("8.33")


def test_normalize_rut_formats_valid_rut():
    assert normalize_rut("123456785") == "12.345.678-5"


def test_normalize_rut_rejects_bad_check_digit():
    with pytest.raises(ValidationError) as exc_info:
        normalize_rut("12.345.678-9")

    assert exc_info.value.details["errors"][0]["field"] == "rut"


class TestStaffRecords:
    async def test_create_stores_formatted_rut(self, service, repo, tenant_id):
        repo.get_by_rut.return_value = None

        staff = await service.create_staff(
            tenant_id, StaffCreate(first_name="Camila", last_name="Rojas", rut="12345678-5")
        )

        assert staff.rut == "12.345.678-5"
        repo.get_by_rut.assert_awaited_once_with("12.345.678-5", tenant_id)

    async def test_create_with_taken_rut_conflicts(self, service, repo, tenant_id):
        repo.get_by_rut.return_value = StaffFactory.build(tenant_id=tenant_id)

        with pytest.raises(ConflictError) as exc_info:
            await service.create_staff(
                tenant_id, StaffCreate(first_name="A", last_name="B", rut="12.345.678-5")
            )

        assert exc_info.value.error_code == "rut_exists"

    async def test_update_to_same_rut_skips_uniqueness_check(self, service, repo, tenant_id):
        staff = StaffFactory.build(tenant_id=tenant_id, rut="12.345.678-5")
        repo.get.return_value = staff

        await service.update_staff(staff.id, tenant_id, StaffUpdate(rut="123456785"))

        repo.get_by_rut.assert_not_awaited()

    async def test_deactivate_keeps_record(self, service, repo, tenant_id):
        staff = StaffFactory.build(tenant_id=tenant_id, is_active=True)
        repo.get.return_value = staff

        result = await service.deactivate_staff(staff.id, tenant_id)

        assert result.is_active is False
        repo.update.assert_awaited_once_with(staff)

    async def test_other_tenant_staff_is_not_found(self, service, repo, tenant_id):
        repo.get.return_value = None

        with pytest.raises(NotFoundError):
            await service.get_staff(uuid4(), tenant_id)


class TestShifts:
    async def test_recurring_shift_drops_specific_date(self, service, repo, tenant_id):
        staff = StaffFactory.build(tenant_id=tenant_id)
        repo.get.return_value = staff
        data = ShiftCreate(
            day_of_week=2,
            specific_date=dt.date(2026, 3, 4),
            start_time=dt.time(9),
            end_time=dt.time(13),
        )

        shift = await service.create_shift(staff.id, tenant_id, data)

        assert shift.day_of_week == 2
        assert shift.specific_date is None
        assert shift.staff_id == staff.id

    def test_shift_must_end_after_start(self):
        with pytest.raises(ValueError):
            ShiftCreate(day_of_week=1, start_time=dt.time(17), end_time=dt.time(9))

    def test_one_off_shift_needs_date(self):
        with pytest.raises(ValueError):
            ShiftCreate(is_recurring=False, start_time=dt.time(9), end_time=dt.time(12))

    async def test_delete_unknown_shift(self, service, repo, tenant_id):
        repo.get_shift.return_value = None

        with pytest.raises(NotFoundError):
            await service.delete_shift(uuid4(), uuid4(), tenant_id)


class TestAttendance:
    async def test_check_in_opens_record(self, service, repo, tenant_id):
        staff = StaffFactory.build(tenant_id=tenant_id)
        repo.get.return_value = staff
        repo.get_open_attendance.return_value = None

        record = await service.check_in(
            staff.id, tenant_id, CheckInRequest(status=AttendanceStatus.LATE)
        )

        assert record.staff_id == staff.id
        assert record.check_in is not None
        assert record.check_out is None
        assert record.status == AttendanceStatus.LATE

    async def test_double_check_in_is_rejected(self, service, repo, tenant_id):
        staff = StaffFactory.build(tenant_id=tenant_id)
        repo.get.return_value = staff
        repo.get_open_attendance.return_value = AttendanceFactory.build(staff_id=staff.id)

        with pytest.raises(BadRequestError) as exc_info:
            await service.check_in(staff.id, tenant_id, CheckInRequest())

        assert exc_info.value.error_code == "already_checked_in"
        repo.add_attendance.assert_not_awaited()

    async def test_check_in_with_unknown_shift(self, service, repo, tenant_id):
        repo.get.return_value = StaffFactory.build(tenant_id=tenant_id)
        repo.get_open_attendance.return_value = None
        repo.get_shift.return_value = None

        with pytest.raises(NotFoundError):
            await service.check_in(uuid4(), tenant_id, CheckInRequest(shift_id=uuid4()))

    async def test_check_in_with_own_shift(self, service, repo, tenant_id):
        staff = StaffFactory.build(tenant_id=tenant_id)
        shift = ShiftFactory.build(tenant_id=tenant_id, staff_id=staff.id)
        repo.get.return_value = staff
        repo.get_open_attendance.return_value = None
        repo.get_shift.return_value = shift

        record = await service.check_in(staff.id, tenant_id, CheckInRequest(shift_id=shift.id))

        assert record.shift_id == shift.id

    async def test_check_out_computes_hours(self, service, repo, tenant_id):
        staff = StaffFactory.build(tenant_id=tenant_id)
        started = dt.datetime.now(dt.UTC) - dt.timedelta(hours=4)
        record = AttendanceFactory.build(staff_id=staff.id, check_in=started)
        repo.get.return_value = staff
        repo.get_open_attendance.return_value = record

        result = await service.check_out(staff.id, tenant_id, CheckOutRequest(notes="ok"))

        assert result.check_out is not None
        assert Decimal("3.99") <= result.total_hours <= Decimal("4.01")
        assert result.notes == "ok"

    async def test_check_out_without_check_in(self, service, repo, tenant_id):
        repo.get.return_value = StaffFactory.build(tenant_id=tenant_id)
        repo.get_open_attendance.return_value = None

        with pytest.raises(BadRequestError) as exc_info:
            await service.check_out(uuid4(), tenant_id, CheckOutRequest())

        assert exc_info.value.error_code == "not_checked_in"
