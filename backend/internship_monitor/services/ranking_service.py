"""Ranking Service 도메인 서비스 레이어입니다. 저장된 평가와 실시간 absen 점수를 결합해 정렬된 결과를 만듭니다."""

from dataclasses import asdict
from typing import List, Sequence

from sqlalchemy.orm import Session

from internship_monitor.models.performance import PerformanceEvaluation
from internship_monitor.services import evaluation_service, identity_service
from internship_monitor.services.identity_service import OwnerRef
from internship_monitor.services.scoring_service import AttendanceScore, AttendanceScorer
from internship_monitor.utils.helpers import grade_for, round2

LAPORAN_BONUS = 5
HASIL_MAX = 100


def compute_hasil(absen: float, kuantitas: float, kualitas: float, laporan: bool) -> float:
    hasil = round2(absen + (kuantitas or 0) + (kualitas or 0) + (LAPORAN_BONUS if laporan else 0))
    assert 0 <= hasil <= HASIL_MAX, f"hasil out of range: {hasil}"
    return hasil


def project(evaluation: PerformanceEvaluation, owner: OwnerRef, score: AttendanceScore) -> dict:
    """Attach the derived absen/hasil/grade fields to a stored evaluation.

    Every read path (upsert response, listing, ranking) goes through here.
    """
    hasil = compute_hasil(score.absen, evaluation.kuantitas, evaluation.kualitas, evaluation.laporan)
    return {
        "evaluation_id": evaluation.evaluation_id,
        "user_id": owner.user_id,
        "user": asdict(owner.summary) if owner.summary is not None else None,
        "bulan": evaluation.bulan,
        "tahun": evaluation.tahun,
        "kuantitas": evaluation.kuantitas,
        "kualitas": evaluation.kualitas,
        "laporan": evaluation.laporan,
        "status": evaluation.status,
        "created_at": evaluation.created_at,
        "updated_at": evaluation.updated_at,
        "absen": score.absen,
        "hasil": hasil,
        "grade": grade_for(hasil),
    }


def _sort_key(view: dict):
    # hasil desc, then owner name asc (unresolved last), then id
    user = view["user"]
    name = user["name"].casefold() if user is not None else ""
    return (-view["hasil"], user is None, name, view["evaluation_id"])


def assemble(
    db: Session,
    evaluations: Sequence[PerformanceEvaluation],
    bulan: int,
    tahun: int,
    scorer: AttendanceScorer,
) -> List[dict]:
    owners = identity_service.resolve_owners(db, [evaluation.user_id for evaluation in evaluations])
    scores = scorer.score_many([owner.user_id for owner in owners], bulan, tahun)
    views = [
        project(evaluation, owner, scores[owner.user_id])
        for evaluation, owner in zip(evaluations, owners)
    ]
    return sorted(views, key=_sort_key)


def project_one(db: Session, evaluation: PerformanceEvaluation, scorer: AttendanceScorer) -> dict:
    return assemble(db, [evaluation], evaluation.bulan, evaluation.tahun, scorer)[0]


def list_evaluations(db: Session, bulan: int, tahun: int, scorer: AttendanceScorer) -> List[dict]:
    return assemble(db, evaluation_service.list_by_month(db, bulan, tahun), bulan, tahun, scorer)


def list_ranking(db: Session, bulan: int, tahun: int, scorer: AttendanceScorer) -> List[dict]:
    views = assemble(db, evaluation_service.list_final_by_month(db, bulan, tahun), bulan, tahun, scorer)
    for position, view in enumerate(views, start=1):
        view["rank"] = position
    return views
