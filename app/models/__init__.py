"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.pre_registered_user import PreRegisteredUser
from app.models.session import AuthSession
from app.models.user import User

__all__ = ["Base", "AuthSession", "PreRegisteredUser", "User"]
