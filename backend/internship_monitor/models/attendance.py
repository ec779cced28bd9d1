"""일자 기반 출석 기록 모델 정의입니다. 평가 엔진에서는 읽기 전용으로 사용합니다."""

from sqlalchemy import Column, Integer, Date, DateTime, String, ForeignKey, UniqueConstraint, Index
from sqlalchemy.sql import func

from internship_monitor.database import Base

HADIR = "Hadir"
TELAT = "Telat"
IZIN = "Izin"
SAKIT = "Sakit"
ALPHA = "Alpha"
TIDAK_HADIR = "Tidak Hadir"
HARI_LIBUR = "Hari Libur"
BELUM_ABSEN = "Belum Absen"

ATTENDANCE_STATUSES = (HADIR, TELAT, IZIN, SAKIT, ALPHA, TIDAK_HADIR, HARI_LIBUR, BELUM_ABSEN)


class AttendanceRecord(Base):
    __tablename__ = "attendance"

    attendance_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    tanggal = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default=HADIR)
    jam_masuk = Column(String(10), default="")
    jam_keluar = Column(String(10), default="")
    keterangan = Column(String(255), default="")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("user_id", "tanggal", name="uq_attendance_user_date"),
        Index("ix_attendance_tanggal_status", "tanggal", "status"),
    )
