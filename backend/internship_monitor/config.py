"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from datetime import date
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./internship_monitor.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480
    ADMIN_ROLES: List[str] = ["admin", "superadmin"]

    # Logging
    LOG_LEVEL: str = "INFO"
    # [scoring] per-day attendance traces are emitted at DEBUG
    SCORING_LOG_LEVEL: str = "INFO"

    # Public holidays on top of "Hari Libur" attendance markers
    HOLIDAYS: List[date] = []

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
