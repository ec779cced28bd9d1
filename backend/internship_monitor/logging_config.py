"""애플리케이션 로거 설정 유틸리티."""

from __future__ import annotations

import logging

from internship_monitor.config import Settings

PACKAGE_LOGGER = "internship_monitor"
SCORING_LOGGER = "internship_monitor.scoring"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level(name: str, default: int) -> int:
    value = logging.getLevelName(str(name or "").strip().upper())
    return value if isinstance(value, int) else default


def configure_logging(settings: Settings) -> None:
    """패키지 로거에 핸들러를 붙이고 설정 레벨을 적용한다."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(_level(settings.LOG_LEVEL, logging.INFO))
    get_scoring_logger(settings.SCORING_LOG_LEVEL)


def get_scoring_logger(level: str | None = None) -> logging.Logger:
    logger = logging.getLogger(SCORING_LOGGER)
    if level is not None:
        logger.setLevel(_level(level, logging.INFO))
    return logger
