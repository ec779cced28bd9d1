"""Scoring Service 도메인 서비스 레이어입니다. 월별 출석 기록을 0~35 범위의 absen 점수로 환산합니다."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from internship_monitor.config import settings
from internship_monitor.logging_config import get_scoring_logger
from internship_monitor.models.attendance import AttendanceRecord, HADIR, TELAT
from internship_monitor.services import calendar_service
from internship_monitor.utils.helpers import round2

ABSEN_MAX = 35

STATUS_POINTS = {
    HADIR: 35,
    TELAT: 30,
}


@dataclass(frozen=True)
class AttendanceScore:
    absen: float
    total_working_days: int
    attended_days: int
    total_points: int
    avg_points: float


EMPTY_SCORE = AttendanceScore(absen=0, total_working_days=0, attended_days=0, total_points=0, avg_points=0)


def score_attendance(
    rows: Iterable[AttendanceRecord],
    working_days: Sequence[date],
    logger: Optional[logging.Logger] = None,
) -> AttendanceScore:
    """Score one user's month of attendance against its working-day set.

    Rows dated outside ``working_days`` are ignored. Rows are assumed unique per
    date; duplicates for the same day are counted twice.
    """
    logger = logger or get_scoring_logger()
    total_working_days = len(working_days)
    if total_working_days == 0:
        logger.debug("[absen] no working days, returning 0")
        return EMPTY_SCORE

    day_set = set(working_days)
    total_points = 0
    attended_days = 0
    for row in rows:
        if row.tanggal not in day_set:
            logger.debug("[absen] %s - not a working day (weekend/holiday)", row.tanggal)
            continue
        attended_days += 1
        points = STATUS_POINTS.get(row.status, 0)
        total_points += points
        logger.debug("[absen] %s - status=%s points=%s", row.tanggal, row.status, points)

    avg_points = total_points / total_working_days
    absen = min(round2(avg_points), ABSEN_MAX)
    logger.debug(
        "[absen] working_days=%s total_points=%s avg=%s absen=%s",
        total_working_days, total_points, avg_points, absen,
    )
    return AttendanceScore(
        absen=absen,
        total_working_days=total_working_days,
        attended_days=attended_days,
        total_points=total_points,
        avg_points=round2(avg_points),
    )


class AttendanceScorer:
    """Reads attendance and the working calendar for a session and scores users.

    Nothing is cached between calls; every score reflects the rows as they are now.
    """

    def __init__(
        self,
        db: Session,
        extra_holidays: Optional[Iterable[date]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.db = db
        self.extra_holidays = tuple(settings.HOLIDAYS if extra_holidays is None else extra_holidays)
        self.logger = logger or get_scoring_logger()

    def working_days(self, bulan: int, tahun: int) -> List[date]:
        is_holiday = calendar_service.build_holiday_predicate(self.db, bulan, tahun, self.extra_holidays)
        return calendar_service.get_working_days(bulan, tahun, is_holiday)

    def _month_rows(self, user_ids: Sequence[int], bulan: int, tahun: int) -> List[AttendanceRecord]:
        start, end = calendar_service.month_bounds(bulan, tahun)
        return (
            self.db.query(AttendanceRecord)
            .filter(
                AttendanceRecord.user_id.in_(list(user_ids)),
                AttendanceRecord.tanggal >= start,
                AttendanceRecord.tanggal <= end,
            )
            .order_by(AttendanceRecord.tanggal.asc())
            .all()
        )

    def score(self, user_id: int, bulan: int, tahun: int) -> AttendanceScore:
        return self.score_many([user_id], bulan, tahun)[user_id]

    def score_many(self, user_ids: Sequence[int], bulan: int, tahun: int) -> Dict[int, AttendanceScore]:
        """Score several users with one calendar lookup and one attendance query."""
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return {}
        days = self.working_days(bulan, tahun)
        self.logger.debug("[absen] %s/%s total working days: %s", bulan, tahun, len(days))
        if not days:
            return {user_id: EMPTY_SCORE for user_id in unique_ids}

        rows_by_user: Dict[int, List[AttendanceRecord]] = {user_id: [] for user_id in unique_ids}
        for row in self._month_rows(unique_ids, bulan, tahun):
            rows_by_user[row.user_id].append(row)

        scores = {}
        for user_id in unique_ids:
            self.logger.debug("[absen] user=%s bulan=%s/%s", user_id, bulan, tahun)
            scores[user_id] = score_attendance(rows_by_user[user_id], days, self.logger)
        return scores
