"""SQLAlchemy-backed invite-list repository."""

from sqlalchemy.orm import Session

from app.domain import PreRegisteredUserRecord
from app.models import PreRegisteredUser
from app.repositories.base import SqlRepository


def to_pre_registered_record(row: PreRegisteredUser) -> PreRegisteredUserRecord:
    return PreRegisteredUserRecord(
        id=row.id,
        email=row.email,
        name=row.name,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlPreRegisteredUserRepository(SqlRepository):
    async def create(self, *, email: str, name: str) -> PreRegisteredUserRecord:
        return await self._run(self._create, email, name)

    async def list_all(self) -> list[PreRegisteredUserRecord]:
        return await self._run(self._list_all)

    @staticmethod
    def _create(db: Session, email: str, name: str) -> PreRegisteredUserRecord:
        row = PreRegisteredUser(email=email, name=name)
        db.add(row)
        db.commit()
        db.refresh(row)
        return to_pre_registered_record(row)

    @staticmethod
    def _list_all(db: Session) -> list[PreRegisteredUserRecord]:
        rows = db.query(PreRegisteredUser).order_by(PreRegisteredUser.id).all()
        return [to_pre_registered_record(r) for r in rows]
