"""Performance 평가 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from internship_monitor.database import get_db
from internship_monitor.logging_config import get_scoring_logger
from internship_monitor.middleware.auth_middleware import require_admin
from internship_monitor.models.performance import FINAL
from internship_monitor.models.user import User
from internship_monitor.schemas.attendance import AbsenCalculationOut
from internship_monitor.schemas.common import ApiResponse, ok
from internship_monitor.schemas.performance import DeletedCountOut, EvaluationOut, EvaluationUpsert
from internship_monitor.services import evaluation_service, identity_service, ranking_service
from internship_monitor.services.scoring_service import AttendanceScorer
from internship_monitor.utils.helpers import resolve_period

router = APIRouter(prefix="/api/performance", tags=["performance"])


def get_scorer(db: Session = Depends(get_db)) -> AttendanceScorer:
    return AttendanceScorer(db, logger=get_scoring_logger())


@router.get("/calculate/{user_id}", response_model=ApiResponse[AbsenCalculationOut])
def calculate(
    user_id: int,
    bulan: Optional[int] = Query(None, ge=1, le=12),
    tahun: Optional[int] = Query(None, ge=1, le=9999),
    db: Session = Depends(get_db),
    scorer: AttendanceScorer = Depends(get_scorer),
    _current_user: User = Depends(require_admin),
):
    bulan, tahun = resolve_period(bulan, tahun)
    user = identity_service.get_user_summary(db, user_id)
    score = scorer.score(user_id, bulan, tahun)
    return ok({
        "user_id": user.user_id,
        "user_name": user.name,
        "bulan": bulan,
        "tahun": tahun,
        "absen": score.absen,
        "kuantitas": 0,
        "detail": asdict(score),
    })


@router.post("", response_model=ApiResponse[EvaluationOut])
def upsert_evaluation(
    data: EvaluationUpsert,
    db: Session = Depends(get_db),
    scorer: AttendanceScorer = Depends(get_scorer),
    _current_user: User = Depends(require_admin),
):
    evaluation = evaluation_service.upsert_evaluation(db, data)
    message = (
        "Penilaian berhasil difinalisasi."
        if evaluation.status == FINAL
        else "Draft penilaian berhasil disimpan."
    )
    return ok(ranking_service.project_one(db, evaluation, scorer), message)


@router.get("", response_model=ApiResponse[List[EvaluationOut]])
def list_evaluations(
    bulan: Optional[int] = Query(None, ge=1, le=12),
    tahun: Optional[int] = Query(None, ge=1, le=9999),
    db: Session = Depends(get_db),
    scorer: AttendanceScorer = Depends(get_scorer),
    _current_user: User = Depends(require_admin),
):
    bulan, tahun = resolve_period(bulan, tahun)
    return ok(ranking_service.list_evaluations(db, bulan, tahun, scorer))


@router.get("/ranking", response_model=ApiResponse[List[EvaluationOut]])
def list_ranking(
    bulan: Optional[int] = Query(None, ge=1, le=12),
    tahun: Optional[int] = Query(None, ge=1, le=9999),
    db: Session = Depends(get_db),
    scorer: AttendanceScorer = Depends(get_scorer),
    _current_user: User = Depends(require_admin),
):
    bulan, tahun = resolve_period(bulan, tahun)
    return ok(ranking_service.list_ranking(db, bulan, tahun, scorer))


@router.patch("/{evaluation_id}/reset", response_model=ApiResponse[EvaluationOut])
def reset_to_draft(
    evaluation_id: int,
    db: Session = Depends(get_db),
    scorer: AttendanceScorer = Depends(get_scorer),
    _current_user: User = Depends(require_admin),
):
    evaluation = evaluation_service.reset_to_draft(db, evaluation_id)
    return ok(ranking_service.project_one(db, evaluation, scorer), "Penilaian berhasil direset ke Draft.")


@router.delete("/delete-all-finals/{bulan}/{tahun}", response_model=ApiResponse[DeletedCountOut])
def delete_all_finals(
    bulan: int = Path(..., ge=1, le=12),
    tahun: int = Path(..., ge=1, le=9999),
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    deleted_count = evaluation_service.delete_all_final(db, bulan, tahun)
    return ok(
        {"deleted_count": deleted_count},
        f"Berhasil menghapus {deleted_count} penilaian final.",
    )


@router.delete("/{evaluation_id}", response_model=ApiResponse[None])
def delete_evaluation(
    evaluation_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    evaluation_service.delete_evaluation(db, evaluation_id)
    return ok(message="Penilaian draft berhasil dihapus.")
