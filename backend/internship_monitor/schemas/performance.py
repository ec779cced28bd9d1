"""Performance 평가 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class EvaluationUpsert(BaseModel):
    user_id: int
    bulan: int = Field(..., ge=1, le=12)
    tahun: int = Field(..., ge=1, le=9999)
    kuantitas: Optional[float] = Field(None, ge=0, le=30)
    kualitas: Optional[float] = Field(None, ge=0, le=30)
    laporan: Optional[bool] = None
    status: Optional[Literal["Draft", "Final"]] = None

    model_config = _CAMEL


class UserSummaryOut(BaseModel):
    user_id: int
    name: str
    email: Optional[str] = None
    instansi: Optional[str] = None

    model_config = {**_CAMEL, "from_attributes": True}


class EvaluationOut(BaseModel):
    evaluation_id: int
    user_id: int
    user: Optional[UserSummaryOut] = None
    bulan: int
    tahun: int
    kuantitas: float
    kualitas: float
    laporan: bool
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    absen: float
    hasil: float
    grade: str
    rank: Optional[int] = None

    model_config = _CAMEL


class DeletedCountOut(BaseModel):
    deleted_count: int

    model_config = _CAMEL
