"""Calendar Service 도메인 서비스 레이어입니다. 월별 출석 의무일(근무일) 집합을 계산합니다."""

from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Callable, Iterable, Optional

from sqlalchemy.orm import Session

from internship_monitor.errors import ValidationError
from internship_monitor.models.attendance import AttendanceRecord, HARI_LIBUR

HolidayPredicate = Callable[[date], bool]

SATURDAY = 5
SUNDAY = 6


def _no_holidays(_day: date) -> bool:
    return False


def month_bounds(bulan: int, tahun: int) -> tuple[date, date]:
    if not 1 <= int(bulan) <= 12:
        raise ValidationError("Bulan harus antara 1-12.")
    if not MINYEAR <= int(tahun) <= MAXYEAR:
        raise ValidationError(f"Tahun harus antara {MINYEAR}-{MAXYEAR}.")
    last_day = calendar.monthrange(int(tahun), int(bulan))[1]
    return date(int(tahun), int(bulan), 1), date(int(tahun), int(bulan), last_day)


def get_working_days(bulan: int, tahun: int, is_holiday: Optional[HolidayPredicate] = None) -> list[date]:
    """Return the month's weekdays that are not holidays, in calendar order."""
    predicate = is_holiday or _no_holidays
    start, end = month_bounds(bulan, tahun)
    days: list[date] = []
    cursor = start
    while cursor <= end:
        if cursor.weekday() not in (SATURDAY, SUNDAY) and not predicate(cursor):
            days.append(cursor)
        cursor += timedelta(days=1)
    return days


def holiday_dates_from_attendance(db: Session, bulan: int, tahun: int) -> set[date]:
    start, end = month_bounds(bulan, tahun)
    rows = (
        db.query(AttendanceRecord.tanggal)
        .filter(
            AttendanceRecord.tanggal >= start,
            AttendanceRecord.tanggal <= end,
            AttendanceRecord.status == HARI_LIBUR,
        )
        .distinct()
        .all()
    )
    return {row[0] for row in rows}


def build_holiday_predicate(
    db: Session,
    bulan: int,
    tahun: int,
    extra_holidays: Iterable[date] = (),
) -> HolidayPredicate:
    """Load the month's holidays once and return a pure membership test.

    A date is a holiday when it is configured explicitly or when any attendance
    row on that date carries the "Hari Libur" status.
    """
    holidays = holiday_dates_from_attendance(db, bulan, tahun)
    holidays.update(extra_holidays)
    frozen = frozenset(holidays)
    return frozen.__contains__
