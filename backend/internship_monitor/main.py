"""FastAPI 애플리케이션 진입점. 미들웨어, 예외 처리기, API 라우터를 등록합니다."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from internship_monitor.config import settings
from internship_monitor.database import Base, engine
from internship_monitor.errors import EvaluationError
from internship_monitor.logging_config import configure_logging
from internship_monitor.routers import performance
from internship_monitor.schemas.common import fail
import internship_monitor.models  # noqa: F401 - 모델 import로 metadata 등록

configure_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Internship Monitoring - Penilaian Performa",
    description="Absen scoring, evaluasi bulanan dan ranking peserta magang",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(performance.router)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item not in ("body", "query", "path"))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Input tidak valid."


@app.exception_handler(EvaluationError)
async def evaluation_error_handler(request: Request, exc: EvaluationError):
    return JSONResponse(status_code=exc.status_code, content=fail(exc.message))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=fail(str(exc.detail)), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=fail(_validation_message(exc)))


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("[performance] unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=fail(f"Internal server error: {exc}"))


@app.on_event("startup")
def ensure_schema():
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Internship Monitoring - Penilaian Performa"}
