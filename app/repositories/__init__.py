"""Persistence boundary: repository protocols and SQLAlchemy implementations."""

from app.repositories.base import (
    PreRegisteredUserRepository,
    SessionRepository,
    UserRepository,
)
from app.repositories.errors import ConstraintViolation, UniqueConstraintViolation
from app.repositories.pre_registered_users import SqlPreRegisteredUserRepository
from app.repositories.sessions import SqlSessionRepository
from app.repositories.users import SqlUserRepository

__all__ = [
    "ConstraintViolation",
    "PreRegisteredUserRepository",
    "SessionRepository",
    "SqlPreRegisteredUserRepository",
    "SqlSessionRepository",
    "SqlUserRepository",
    "UniqueConstraintViolation",
    "UserRepository",
]
