"""서비스 레이어 패키지 초기화 모듈입니다."""

from internship_monitor.services import (
    auth_service,
    calendar_service,
    scoring_service,
    identity_service,
    evaluation_service,
    ranking_service,
)
