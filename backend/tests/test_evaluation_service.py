"""평가 저장소(upsert/Draft-Final 상태 전이/삭제) 규칙을 검증하는 테스트입니다."""

import pytest
from sqlalchemy import insert

from internship_monitor.errors import ConflictError, InvalidStateError, NotFoundError, ValidationError
from internship_monitor.models.performance import PerformanceEvaluation
from internship_monitor.schemas.performance import EvaluationUpsert
from internship_monitor.services import evaluation_service
from tests.conftest import BULAN, TAHUN


def _payload(user, **overrides):
    data = {"user_id": user.user_id, "bulan": BULAN, "tahun": TAHUN}
    data.update(overrides)
    return EvaluationUpsert(**data)


def _count(db):
    return db.query(PerformanceEvaluation).count()


def test_upsert_creates_draft_with_defaults(db, seed_users):
    evaluation = evaluation_service.upsert_evaluation(db, _payload(seed_users["rina"]))
    assert evaluation.status == "Draft"
    assert evaluation.kuantitas == 0
    assert evaluation.kualitas == 0
    assert evaluation.laporan is False
    assert evaluation.created_at is not None


def test_upsert_same_payload_twice_keeps_single_record(db, seed_users):
    payload = _payload(seed_users["rina"], kuantitas=20, kualitas=25, laporan=True)
    first = evaluation_service.upsert_evaluation(db, payload)
    first_id = first.evaluation_id
    second = evaluation_service.upsert_evaluation(db, payload)

    assert _count(db) == 1
    assert second.evaluation_id == first_id
    assert (second.kuantitas, second.kualitas, second.laporan, second.status) == (20, 25, True, "Draft")


def test_upsert_replaces_manual_fields(db, seed_users):
    rina = seed_users["rina"]
    evaluation_service.upsert_evaluation(db, _payload(rina, kuantitas=20, kualitas=25, laporan=True))
    updated = evaluation_service.upsert_evaluation(db, _payload(rina, kualitas=10))

    assert _count(db) == 1
    assert updated.kuantitas == 0
    assert updated.kualitas == 10
    assert updated.laporan is False


def test_same_user_different_month_is_separate_record(db, seed_users):
    rina = seed_users["rina"]
    evaluation_service.upsert_evaluation(db, _payload(rina))
    evaluation_service.upsert_evaluation(db, _payload(rina, bulan=3))
    assert _count(db) == 2


def test_non_final_write_onto_final_record_conflicts(db, seed_users):
    rina = seed_users["rina"]
    final = evaluation_service.upsert_evaluation(
        db, _payload(rina, kuantitas=28, kualitas=27, laporan=True, status="Final")
    )
    final_id = final.evaluation_id

    with pytest.raises(ConflictError):
        evaluation_service.upsert_evaluation(db, _payload(rina, kuantitas=1, status="Draft"))
    with pytest.raises(ConflictError):
        evaluation_service.upsert_evaluation(db, _payload(rina, kuantitas=1))

    stored = evaluation_service.get_evaluation(db, final_id)
    assert (stored.kuantitas, stored.kualitas, stored.laporan, stored.status) == (28, 27, True, "Final")


def test_final_write_onto_final_record_is_allowed(db, seed_users):
    rina = seed_users["rina"]
    evaluation_service.upsert_evaluation(db, _payload(rina, kuantitas=28, status="Final"))
    updated = evaluation_service.upsert_evaluation(db, _payload(rina, kuantitas=29, status="Final"))
    assert updated.kuantitas == 29
    assert updated.status == "Final"
    assert _count(db) == 1


@pytest.mark.parametrize("field, value", [("kuantitas", 31), ("kualitas", -1)])
def test_out_of_range_scores_rejected_before_write(db, seed_users, field, value):
    payload = EvaluationUpsert.model_construct(
        user_id=seed_users["rina"].user_id, bulan=BULAN, tahun=TAHUN, **{field: value}
    )
    with pytest.raises(ValidationError):
        evaluation_service.upsert_evaluation(db, payload)
    assert _count(db) == 0


def test_year_outside_date_range_rejected_before_write(db, seed_users):
    payload = EvaluationUpsert.model_construct(
        user_id=seed_users["rina"].user_id, bulan=BULAN, tahun=10000, kuantitas=10
    )
    with pytest.raises(ValidationError):
        evaluation_service.upsert_evaluation(db, payload)
    assert _count(db) == 0


def test_upsert_unknown_user_not_found(db, seed_users):
    with pytest.raises(NotFoundError):
        evaluation_service.upsert_evaluation(db, EvaluationUpsert(user_id=9999, bulan=BULAN, tahun=TAHUN))


def test_reset_to_draft_requires_final(db, seed_users):
    draft = evaluation_service.upsert_evaluation(db, _payload(seed_users["rina"]))
    with pytest.raises(InvalidStateError):
        evaluation_service.reset_to_draft(db, draft.evaluation_id)


def test_reset_to_draft_unknown_id(db, seed_users):
    with pytest.raises(NotFoundError):
        evaluation_service.reset_to_draft(db, 12345)


def test_reset_then_edit_final_record(db, seed_users):
    rina = seed_users["rina"]
    final = evaluation_service.upsert_evaluation(db, _payload(rina, kuantitas=28, status="Final"))
    reset = evaluation_service.reset_to_draft(db, final.evaluation_id)
    assert reset.status == "Draft"

    edited = evaluation_service.upsert_evaluation(db, _payload(rina, kuantitas=12))
    assert edited.kuantitas == 12
    assert edited.status == "Draft"


def test_delete_final_requires_reset_first(db, seed_users):
    final = evaluation_service.upsert_evaluation(db, _payload(seed_users["rina"], status="Final"))
    final_id = final.evaluation_id

    with pytest.raises(InvalidStateError):
        evaluation_service.delete_evaluation(db, final_id)
    assert _count(db) == 1

    evaluation_service.reset_to_draft(db, final_id)
    evaluation_service.delete_evaluation(db, final_id)
    assert _count(db) == 0


def test_delete_unknown_id(db, seed_users):
    with pytest.raises(NotFoundError):
        evaluation_service.delete_evaluation(db, 404)


def test_delete_all_final_only_touches_month_finals(db, seed_users):
    evaluation_service.upsert_evaluation(db, _payload(seed_users["rina"], status="Final"))
    evaluation_service.upsert_evaluation(db, _payload(seed_users["budi"], status="Final"))
    evaluation_service.upsert_evaluation(db, _payload(seed_users["agus"]))
    evaluation_service.upsert_evaluation(db, _payload(seed_users["rina"], bulan=3, status="Final"))

    assert evaluation_service.delete_all_final(db, BULAN, TAHUN) == 2
    remaining = {(e.user_id, e.bulan, e.status) for e in db.query(PerformanceEvaluation).all()}
    assert remaining == {
        (seed_users["agus"].user_id, BULAN, "Draft"),
        (seed_users["rina"].user_id, 3, "Final"),
    }


def test_list_final_by_month_filters_status(db, seed_users):
    evaluation_service.upsert_evaluation(db, _payload(seed_users["rina"], status="Final"))
    evaluation_service.upsert_evaluation(db, _payload(seed_users["budi"]))

    assert len(evaluation_service.list_by_month(db, BULAN, TAHUN)) == 2
    finals = evaluation_service.list_final_by_month(db, BULAN, TAHUN)
    assert [e.user_id for e in finals] == [seed_users["rina"].user_id]


def test_guarded_update_path_blocks_final_overwrite(db, seed_users):
    values = {
        "user_id": seed_users["rina"].user_id,
        "bulan": BULAN,
        "tahun": TAHUN,
        "kuantitas": 10,
        "kualitas": 10,
        "laporan": False,
        "status": "Final",
    }
    evaluation_id = evaluation_service._insert_or_guarded_update(db, values)
    db.commit()
    assert evaluation_id is not None

    assert evaluation_service._insert_or_guarded_update(db, {**values, "status": "Draft"}) is None
    db.rollback()

    same_id = evaluation_service._insert_or_guarded_update(db, {**values, "kuantitas": 15})
    db.commit()
    assert same_id == evaluation_id
    assert _count(db) == 1
    assert evaluation_service.get_evaluation(db, evaluation_id).kuantitas == 15


def test_raw_unique_violation_maps_to_conflict(db, seed_users, monkeypatch):
    rina = seed_users["rina"]
    evaluation_id = evaluation_service.upsert_evaluation(db, _payload(rina, kuantitas=12)).evaluation_id

    def plain_insert(_db, values):
        return insert(PerformanceEvaluation.__table__).values(**values)

    monkeypatch.setattr(evaluation_service, "_dialect_upsert", plain_insert)

    with pytest.raises(ConflictError) as excinfo:
        evaluation_service.upsert_evaluation(db, _payload(rina, kuantitas=25, status="Final"))

    assert excinfo.value.message == evaluation_service.DUPLICATE_MESSAGE
    assert excinfo.value.status_code == 409
    assert _count(db) == 1
    stored = evaluation_service.get_evaluation(db, evaluation_id)
    assert (stored.kuantitas, stored.kualitas, stored.status) == (12, 0, "Draft")
