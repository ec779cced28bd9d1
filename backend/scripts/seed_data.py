"""Seed the database with demo interns, one month of attendance and draft evaluations."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date
from internship_monitor.database import SessionLocal, engine, Base
import internship_monitor.models  # noqa: F401

from internship_monitor.models.attendance import AttendanceRecord, ALPHA, HADIR, IZIN, TELAT
from internship_monitor.models.performance import PerformanceEvaluation
from internship_monitor.models.user import User
from internship_monitor.services.auth_service import create_access_token
from internship_monitor.services.calendar_service import get_working_days


def seed(bulan: int = None, tahun: int = None):
    today = date.today()
    bulan = bulan or today.month
    tahun = tahun or today.year

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        users = [
            User(username="admin", name="Admin Magang", email="admin@magang.local", role="superadmin"),
            User(username="rina", name="Rina Wulandari", email="rina@magang.local", role="user",
                 instansi="Universitas Indonesia", jabatan="Mahasiswa"),
            User(username="budi", name="Budi Santoso", email="budi@magang.local", role="user",
                 instansi="Politeknik Negeri Jakarta", jabatan="Mahasiswa"),
            User(username="sari", name="Sari Putri", email="sari@magang.local", role="user",
                 instansi="SMK Negeri 1 Bogor", jabatan="Siswa"),
        ]
        db.add_all(users)
        db.flush()

        # Rina always present, Budi late every third day, Sari with a few absences
        patterns = {
            users[1].user_id: lambda i: HADIR,
            users[2].user_id: lambda i: TELAT if i % 3 == 0 else HADIR,
            users[3].user_id: lambda i: (IZIN if i % 7 == 0 else ALPHA if i % 5 == 0 else HADIR),
        }
        for index, day in enumerate(get_working_days(bulan, tahun)):
            for user_id, status_for in patterns.items():
                db.add(AttendanceRecord(user_id=user_id, tanggal=day, status=status_for(index),
                                        jam_masuk="08:00", jam_keluar="17:00"))

        db.add_all([
            PerformanceEvaluation(user_id=users[1].user_id, bulan=bulan, tahun=tahun,
                                  kuantitas=27, kualitas=28, laporan=True),
            PerformanceEvaluation(user_id=users[2].user_id, bulan=bulan, tahun=tahun,
                                  kuantitas=25, kualitas=24, laporan=True),
        ])
        db.commit()

        print(f"Seeded {len(users)} users with attendance for {bulan}/{tahun}.")
        print(f"Admin token: {create_access_token(users[0].user_id)}")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
