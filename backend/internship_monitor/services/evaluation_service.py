"""Evaluation Service 도메인 서비스 레이어입니다. 수동 평가 항목 저장과 Draft/Final 상태 전이를 담당합니다.

모든 변경은 (user_id, bulan, tahun) 키 단위로 단일 SQL 문(upsert / 조건부 update / 조건부 delete)으로 처리되어
동시 요청에서도 중복 레코드나 Final 덮어쓰기가 생기지 않는다.
"""

import logging
from datetime import MAXYEAR, MINYEAR
from typing import List, Optional

from sqlalchemy import delete, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from internship_monitor.errors import ConflictError, InvalidStateError, NotFoundError, ValidationError
from internship_monitor.models.performance import (
    DRAFT,
    EVALUATION_STATUSES,
    FINAL,
    MANUAL_SCORE_MAX,
    MANUAL_SCORE_MIN,
    PerformanceEvaluation,
)
from internship_monitor.models.user import User
from internship_monitor.schemas.performance import EvaluationUpsert

logger = logging.getLogger(__name__)

FINALIZED_MESSAGE = "Penilaian sudah difinalisasi dan tidak bisa diubah."
DUPLICATE_MESSAGE = "Penilaian untuk user ini di bulan tersebut sudah ada."


def _check_manual_score(label: str, value: Optional[float]) -> None:
    if value is None:
        return
    if not MANUAL_SCORE_MIN <= value <= MANUAL_SCORE_MAX:
        raise ValidationError(f"{label} harus antara {MANUAL_SCORE_MIN}-{MANUAL_SCORE_MAX}.")


def _validate(data: EvaluationUpsert) -> None:
    if not data.user_id or not data.bulan or not data.tahun:
        raise ValidationError("userId, bulan, dan tahun wajib diisi.")
    if not 1 <= data.bulan <= 12:
        raise ValidationError("Bulan harus antara 1-12.")
    if not MINYEAR <= data.tahun <= MAXYEAR:
        raise ValidationError(f"Tahun harus antara {MINYEAR}-{MAXYEAR}.")
    _check_manual_score("Kuantitas", data.kuantitas)
    _check_manual_score("Kualitas", data.kualitas)
    if data.status is not None and data.status not in EVALUATION_STATUSES:
        raise ValidationError("Status harus Draft atau Final.")


def _manual_values(data: EvaluationUpsert) -> dict:
    return {
        "user_id": data.user_id,
        "bulan": data.bulan,
        "tahun": data.tahun,
        "kuantitas": data.kuantitas or 0,
        "kualitas": data.kualitas or 0,
        "laporan": bool(data.laporan),
        "status": data.status or DRAFT,
    }


def _dialect_upsert(db: Session, values: dict):
    """Build INSERT .. ON CONFLICT DO UPDATE guarded against overwriting Final records."""
    dialect = db.get_bind().dialect.name
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert as dialect_insert
    elif dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert as dialect_insert
    else:
        return None

    table = PerformanceEvaluation.__table__
    stmt = dialect_insert(table).values(**values)
    excluded = stmt.excluded
    return stmt.on_conflict_do_update(
        index_elements=[table.c.user_id, table.c.bulan, table.c.tahun],
        set_={
            "kuantitas": excluded.kuantitas,
            "kualitas": excluded.kualitas,
            "laporan": excluded.laporan,
            "status": excluded.status,
            "updated_at": func.now(),
        },
        where=or_(table.c.status != FINAL, excluded.status == FINAL),
    ).returning(table.c.evaluation_id)


def _insert_or_guarded_update(db: Session, values: dict) -> Optional[int]:
    table = PerformanceEvaluation.__table__
    try:
        with db.begin_nested():
            result = db.execute(insert(table).values(**values))
        return result.inserted_primary_key[0]
    except IntegrityError:
        pass

    stmt = (
        update(table)
        .where(
            table.c.user_id == values["user_id"],
            table.c.bulan == values["bulan"],
            table.c.tahun == values["tahun"],
        )
        .values(
            kuantitas=values["kuantitas"],
            kualitas=values["kualitas"],
            laporan=values["laporan"],
            status=values["status"],
            updated_at=func.now(),
        )
    )
    if values["status"] != FINAL:
        stmt = stmt.where(table.c.status != FINAL)
    if db.execute(stmt).rowcount == 0:
        return None
    return db.execute(
        select(table.c.evaluation_id).where(
            table.c.user_id == values["user_id"],
            table.c.bulan == values["bulan"],
            table.c.tahun == values["tahun"],
        )
    ).scalar_one()


def upsert_evaluation(db: Session, data: EvaluationUpsert) -> PerformanceEvaluation:
    _validate(data)
    if not db.query(User.user_id).filter(User.user_id == data.user_id).first():
        raise NotFoundError("User tidak ditemukan.")

    values = _manual_values(data)
    try:
        stmt = _dialect_upsert(db, values)
        if stmt is not None:
            row = db.execute(stmt).first()
            evaluation_id = row[0] if row else None
        else:
            evaluation_id = _insert_or_guarded_update(db, values)
        if evaluation_id is None:
            db.rollback()
            raise ConflictError(FINALIZED_MESSAGE)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("[performance] unique/constraint violation on upsert: %s", exc.orig)
        raise ConflictError(DUPLICATE_MESSAGE)

    logger.info(
        "[performance] saved evaluation id=%s user=%s %s/%s status=%s",
        evaluation_id, values["user_id"], values["bulan"], values["tahun"], values["status"],
    )
    return get_evaluation(db, evaluation_id)


def get_evaluation(db: Session, evaluation_id: int) -> PerformanceEvaluation:
    evaluation = (
        db.query(PerformanceEvaluation)
        .filter(PerformanceEvaluation.evaluation_id == evaluation_id)
        .first()
    )
    if not evaluation:
        raise NotFoundError("Penilaian tidak ditemukan.")
    return evaluation


def list_by_month(db: Session, bulan: int, tahun: int) -> List[PerformanceEvaluation]:
    return (
        db.query(PerformanceEvaluation)
        .filter(PerformanceEvaluation.bulan == bulan, PerformanceEvaluation.tahun == tahun)
        .order_by(PerformanceEvaluation.evaluation_id.asc())
        .all()
    )


def list_final_by_month(db: Session, bulan: int, tahun: int) -> List[PerformanceEvaluation]:
    return (
        db.query(PerformanceEvaluation)
        .filter(
            PerformanceEvaluation.bulan == bulan,
            PerformanceEvaluation.tahun == tahun,
            PerformanceEvaluation.status == FINAL,
        )
        .order_by(PerformanceEvaluation.evaluation_id.asc())
        .all()
    )


def reset_to_draft(db: Session, evaluation_id: int) -> PerformanceEvaluation:
    result = db.execute(
        update(PerformanceEvaluation)
        .where(
            PerformanceEvaluation.evaluation_id == evaluation_id,
            PerformanceEvaluation.status == FINAL,
        )
        .values(status=DRAFT, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        get_evaluation(db, evaluation_id)
        raise InvalidStateError("Hanya penilaian final yang bisa direset ke Draft.")
    db.commit()
    logger.info("[performance] evaluation id=%s reset to Draft", evaluation_id)
    return get_evaluation(db, evaluation_id)


def delete_evaluation(db: Session, evaluation_id: int) -> None:
    result = db.execute(
        delete(PerformanceEvaluation)
        .where(
            PerformanceEvaluation.evaluation_id == evaluation_id,
            PerformanceEvaluation.status == DRAFT,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        get_evaluation(db, evaluation_id)
        raise InvalidStateError("Penilaian final tidak bisa dihapus.")
    db.commit()
    logger.info("[performance] draft evaluation id=%s deleted", evaluation_id)


def delete_all_final(db: Session, bulan: int, tahun: int) -> int:
    result = db.execute(
        delete(PerformanceEvaluation)
        .where(
            PerformanceEvaluation.bulan == bulan,
            PerformanceEvaluation.tahun == tahun,
            PerformanceEvaluation.status == FINAL,
        )
        .execution_options(synchronize_session=False)
    )
    deleted_count = result.rowcount or 0
    db.commit()
    logger.info("[performance] deleted %s finalized evaluations for %s/%s", deleted_count, bulan, tahun)
    return deleted_count
