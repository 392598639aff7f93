"""ORM model for refresh-token sessions. A row exists while its refresh token is valid."""

from sqlalchemy import Column, ForeignKey, Integer

from app.models.base import Base, epoch_now


class AuthSession(Base):
    __tablename__ = "sessions"
    # Session ids are token jti values and must never be reissued.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(Integer, nullable=False, default=epoch_now)
    updated_at = Column(Integer, nullable=False, default=epoch_now, onupdate=epoch_now)
