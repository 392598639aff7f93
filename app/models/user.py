"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base, epoch_now


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'USER' or 'ADMIN'. Timestamps are integer seconds since epoch.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="USER")
    created_at = Column(Integer, nullable=False, default=epoch_now)
    updated_at = Column(Integer, nullable=False, default=epoch_now, onupdate=epoch_now)
