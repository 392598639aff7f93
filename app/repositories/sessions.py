"""SQLAlchemy-backed session repository."""

from sqlalchemy.orm import Session

from app.domain import SessionRecord
from app.models import AuthSession
from app.repositories.base import SqlRepository


def to_session_record(row: AuthSession) -> SessionRecord:
    return SessionRecord(
        id=row.id,
        user_id=row.user_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlSessionRepository(SqlRepository):
    async def create(self, *, user_id: int) -> SessionRecord:
        return await self._run(self._create, user_id)

    async def find_by_id(self, session_id: int) -> SessionRecord | None:
        return await self._run(self._find_by_id, session_id)

    async def delete_by_id(self, session_id: int) -> int:
        """Delete one session; returns the number of rows removed (0 or 1)."""
        return await self._run(self._delete_by_id, session_id)

    @staticmethod
    def _create(db: Session, user_id: int) -> SessionRecord:
        row = AuthSession(user_id=user_id)
        db.add(row)
        db.commit()
        db.refresh(row)
        return to_session_record(row)

    @staticmethod
    def _find_by_id(db: Session, session_id: int) -> SessionRecord | None:
        row = db.query(AuthSession).filter(AuthSession.id == session_id).first()
        return to_session_record(row) if row else None

    @staticmethod
    def _delete_by_id(db: Session, session_id: int) -> int:
        deleted = (
            db.query(AuthSession)
            .filter(AuthSession.id == session_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted
