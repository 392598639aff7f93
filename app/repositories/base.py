"""Repository contracts and the shared SQLAlchemy plumbing behind them."""

import asyncio
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from app.domain import PreRegisteredUserRecord, SessionRecord, UserRecord
from app.repositories.errors import ConstraintViolation, UniqueConstraintViolation

T = TypeVar("T")

# SQLSTATE unique_violation
PG_UNIQUE_VIOLATION = "23505"


class UserRepository(Protocol):
    async def find_by_id(self, user_id: int) -> UserRecord | None: ...

    async def find_by_email(self, email: str) -> UserRecord | None: ...

    async def create(self, *, email: str, name: str, password_hash: str, role: str = "USER") -> UserRecord: ...

    async def update(self, user_id: int, **fields: Any) -> UserRecord | None: ...

    async def count(self, **filters: Any) -> int: ...

    async def list_all(self) -> list[UserRecord]: ...


class SessionRepository(Protocol):
    async def create(self, *, user_id: int) -> SessionRecord: ...

    async def find_by_id(self, session_id: int) -> SessionRecord | None: ...

    async def delete_by_id(self, session_id: int) -> int: ...


class PreRegisteredUserRepository(Protocol):
    async def create(self, *, email: str, name: str) -> PreRegisteredUserRecord: ...

    async def list_all(self) -> list[PreRegisteredUserRecord]: ...


def translate_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    """Map a driver IntegrityError to a storage error; unique violations are distinguishable."""
    orig = exc.orig
    text = str(orig) if orig is not None else str(exc)
    pgcode = getattr(orig, "pgcode", None)
    if pgcode == PG_UNIQUE_VIOLATION or "UNIQUE constraint failed" in text or "duplicate key" in text:
        return UniqueConstraintViolation("Unique constraint violated", detail={"error": text})
    return ConstraintViolation("Integrity constraint violated", detail={"error": text})


class SqlRepository:
    """Runs each repository call in its own DB session on a worker thread."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    async def _run(self, fn: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(self._in_session, fn, *args)

    def _in_session(self, fn: Callable[..., T], *args: Any) -> T:
        with self._session_factory() as db:
            try:
                return fn(db, *args)
            except IntegrityError as e:
                db.rollback()
                raise translate_integrity_error(e) from e
            except Exception:
                db.rollback()
                raise
