"""출석 점수(absen) 계산 응답 스키마입니다."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class AttendanceScoreDetailOut(BaseModel):
    total_working_days: int
    attended_days: int
    total_points: int
    avg_points: float

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}


class AbsenCalculationOut(BaseModel):
    user_id: int
    user_name: str
    bulan: int
    tahun: int
    absen: float
    kuantitas: float = 0
    detail: AttendanceScoreDetailOut

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
