"""API 서버 실행 진입점입니다. `python -m internship_monitor` 또는 `internship-monitor` 명령으로 실행합니다."""

import uvicorn

from internship_monitor.config import settings


def main():
    uvicorn.run(
        "internship_monitor.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
