"""Identity Service 레이어입니다. 평가 레코드의 소유자 참조를 표시용 사용자 요약으로 해석합니다."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from internship_monitor.errors import NotFoundError
from internship_monitor.models.user import User


@dataclass(frozen=True)
class UserSummary:
    user_id: int
    name: str
    email: Optional[str] = None
    instansi: Optional[str] = None


@dataclass(frozen=True)
class Unresolved:
    user_id: int

    @property
    def summary(self) -> Optional[UserSummary]:
        return None


@dataclass(frozen=True)
class Resolved:
    summary: UserSummary

    @property
    def user_id(self) -> int:
        return self.summary.user_id


OwnerRef = Union[Unresolved, Resolved]


def _summary(user: User) -> UserSummary:
    return UserSummary(user_id=user.user_id, name=user.name, email=user.email, instansi=user.instansi)


def get_user_summary(db: Session, user_id: int) -> UserSummary:
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise NotFoundError("User tidak ditemukan.")
    return _summary(user)


def resolve_owners(db: Session, user_ids: Iterable[int]) -> List[OwnerRef]:
    """Resolve owner ids positionally; ids with no user stay Unresolved."""
    ids = list(user_ids)
    if not ids:
        return []
    users: Dict[int, UserSummary] = {
        user.user_id: _summary(user)
        for user in db.query(User).filter(User.user_id.in_(set(ids))).all()
    }
    return [Resolved(users[user_id]) if user_id in users else Unresolved(user_id) for user_id in ids]
