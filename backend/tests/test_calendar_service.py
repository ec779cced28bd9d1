"""근무일 달력 계산(주말/공휴일 제외)을 검증하는 테스트입니다."""

from datetime import date

import pytest

from internship_monitor.errors import ValidationError
from internship_monitor.services import calendar_service
from tests.conftest import BULAN, TAHUN, add_attendance


def test_working_days_skip_weekends():
    days = calendar_service.get_working_days(BULAN, TAHUN)
    assert len(days) == 20
    assert days[0] == date(2026, 2, 2)
    assert days[-1] == date(2026, 2, 27)
    assert all(day.weekday() < 5 for day in days)
    assert days == sorted(days)


def test_working_days_apply_holiday_predicate():
    holidays = {date(2026, 2, 17)}
    days = calendar_service.get_working_days(BULAN, TAHUN, holidays.__contains__)
    assert len(days) == 19
    assert date(2026, 2, 17) not in days


def test_working_days_can_be_empty_when_every_day_is_holiday():
    assert calendar_service.get_working_days(BULAN, TAHUN, lambda _day: True) == []


def test_working_days_are_deterministic():
    first = calendar_service.get_working_days(12, 2025)
    second = calendar_service.get_working_days(12, 2025)
    assert first == second
    assert len(first) == 23


def test_month_bounds_handles_leap_year():
    assert calendar_service.month_bounds(2, 2028) == (date(2028, 2, 1), date(2028, 2, 29))


def test_invalid_month_rejected():
    with pytest.raises(ValidationError):
        calendar_service.get_working_days(13, 2026)


@pytest.mark.parametrize("tahun", [0, 10000])
def test_year_outside_date_range_rejected(tahun):
    with pytest.raises(ValidationError) as excinfo:
        calendar_service.month_bounds(1, tahun)
    assert excinfo.value.status_code == 400


def test_hari_libur_records_mark_holidays(db, seed_users):
    add_attendance(db, seed_users["rina"].user_id, [date(2026, 2, 16)], status="Hari Libur")
    add_attendance(db, seed_users["rina"].user_id, [date(2026, 3, 2)], status="Hari Libur")

    is_holiday = calendar_service.build_holiday_predicate(db, BULAN, TAHUN, extra_holidays=[date(2026, 2, 17)])
    days = calendar_service.get_working_days(BULAN, TAHUN, is_holiday)

    assert is_holiday(date(2026, 2, 16))
    assert is_holiday(date(2026, 2, 17))
    assert not is_holiday(date(2026, 3, 2))
    assert len(days) == 18
