"""SQLAlchemy-backed user repository."""

from typing import Any

from sqlalchemy.orm import Session

from app.domain import Role, UserRecord
from app.models import User
from app.repositories.base import SqlRepository

# Columns callers may change through update().
UPDATABLE_FIELDS = frozenset({"name", "password_hash", "role"})


def to_user_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        email=user.email,
        name=user.name,
        password_hash=user.password_hash,
        role=Role(user.role),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class SqlUserRepository(SqlRepository):
    async def find_by_id(self, user_id: int) -> UserRecord | None:
        return await self._run(self._find_by_id, user_id)

    async def find_by_email(self, email: str) -> UserRecord | None:
        return await self._run(self._find_by_email, email)

    async def create(
        self, *, email: str, name: str, password_hash: str, role: str | Role = Role.USER
    ) -> UserRecord:
        """Insert a user. Raises UniqueConstraintViolation when the email is taken."""
        return await self._run(self._create, email, name, password_hash, Role.normalize(role))

    async def update(self, user_id: int, **fields: Any) -> UserRecord | None:
        """Update the given columns; returns None if the user does not exist."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update user fields: {', '.join(sorted(unknown))}")
        if "role" in fields:
            fields["role"] = Role.normalize(fields["role"])
        return await self._run(self._update, user_id, fields)

    async def count(self, **filters: Any) -> int:
        return await self._run(self._count, filters)

    async def list_all(self) -> list[UserRecord]:
        return await self._run(self._list_all)

    @staticmethod
    def _find_by_id(db: Session, user_id: int) -> UserRecord | None:
        user = db.query(User).filter(User.id == user_id).first()
        return to_user_record(user) if user else None

    @staticmethod
    def _find_by_email(db: Session, email: str) -> UserRecord | None:
        user = db.query(User).filter(User.email == email).first()
        return to_user_record(user) if user else None

    @staticmethod
    def _create(db: Session, email: str, name: str, password_hash: str, role: Role) -> UserRecord:
        user = User(email=email, name=name, password_hash=password_hash, role=role.value)
        db.add(user)
        db.commit()
        db.refresh(user)
        return to_user_record(user)

    @staticmethod
    def _update(db: Session, user_id: int, fields: dict[str, Any]) -> UserRecord | None:
        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value.value if isinstance(value, Role) else value)
        db.commit()
        db.refresh(user)
        return to_user_record(user)

    @staticmethod
    def _count(db: Session, filters: dict[str, Any]) -> int:
        return db.query(User).filter_by(**filters).count()

    @staticmethod
    def _list_all(db: Session) -> list[UserRecord]:
        return [to_user_record(u) for u in db.query(User).order_by(User.id).all()]
