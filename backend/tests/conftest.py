import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from internship_monitor.database import Base, get_db
from internship_monitor.main import app
from internship_monitor.models.attendance import AttendanceRecord
from internship_monitor.models.user import User
from internship_monitor.services.auth_service import create_access_token

TEST_DB_URL = "sqlite:///./test_internship_monitor.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Februari 2026: 1 Feb jatuh pada hari Minggu, 20 hari kerja (2-6, 9-13, 16-20, 23-27)
BULAN = 2
TAHUN = 2026


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(username="admin", name="Admin", email="admin@magang.local", role="admin"),
        "superadmin": User(username="root", name="Super Admin", email="root@magang.local", role="superadmin"),
        "rina": User(username="rina", name="Rina", email="rina@magang.local", role="user", instansi="UI"),
        "budi": User(username="budi", name="Budi", email="budi@magang.local", role="user", instansi="PNJ"),
        "agus": User(username="agus", name="Agus", email="agus@magang.local", role="user", instansi="ITB"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


def add_attendance(db, user_id: int, days, status: str = "Hadir"):
    for day in days:
        db.add(AttendanceRecord(user_id=user_id, tanggal=day, status=status))
    db.commit()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.user_id)}"}
