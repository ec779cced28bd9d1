"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from internship_monitor.models.user import User
from internship_monitor.models.attendance import AttendanceRecord
from internship_monitor.models.performance import PerformanceEvaluation

__all__ = [
    "User",
    "AttendanceRecord",
    "PerformanceEvaluation",
]
