from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

GRADE_BANDS = (
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
)


def round2(value: float) -> float:
    """Half-up rounding to two decimals on the decimal representation."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def grade_for(hasil: float) -> str:
    for threshold, grade in GRADE_BANDS:
        if hasil >= threshold:
            return grade
    return "E"


def resolve_period(bulan: Optional[int], tahun: Optional[int], today: Optional[date] = None) -> Tuple[int, int]:
    today = today or date.today()
    return (bulan or today.month, tahun or today.year)
