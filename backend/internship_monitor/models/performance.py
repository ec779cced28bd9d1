"""월별 성과 평가(수동 입력 항목) 모델 정의입니다.

absen/hasil 은 저장하지 않는다. 출석 데이터가 소급 수정되어도 조회 시점에 항상 다시 계산된다.
"""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint,
)
from sqlalchemy.sql import func

from internship_monitor.database import Base

DRAFT = "Draft"
FINAL = "Final"
EVALUATION_STATUSES = (DRAFT, FINAL)

MANUAL_SCORE_MIN = 0
MANUAL_SCORE_MAX = 30


class PerformanceEvaluation(Base):
    __tablename__ = "performance_evaluations"

    evaluation_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    bulan = Column(Integer, nullable=False)
    tahun = Column(Integer, nullable=False)
    kuantitas = Column(Float, nullable=False, default=0)
    kualitas = Column(Float, nullable=False, default=0)
    laporan = Column(Boolean, nullable=False, default=False)
    status = Column(String(10), nullable=False, default=DRAFT)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("user_id", "bulan", "tahun", name="uq_performance_user_month"),
        CheckConstraint("bulan BETWEEN 1 AND 12", name="ck_performance_bulan"),
        CheckConstraint("tahun BETWEEN 1 AND 9999", name="ck_performance_tahun"),
        CheckConstraint("kuantitas BETWEEN 0 AND 30", name="ck_performance_kuantitas"),
        CheckConstraint("kualitas BETWEEN 0 AND 30", name="ck_performance_kualitas"),
        CheckConstraint("status IN ('Draft', 'Final')", name="ck_performance_status"),
    )
