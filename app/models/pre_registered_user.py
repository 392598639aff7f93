"""ORM model for the invite list."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base, epoch_now


class PreRegisteredUser(Base):
    __tablename__ = "pre_registered_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(Integer, nullable=False, default=epoch_now)
    updated_at = Column(Integer, nullable=False, default=epoch_now, onupdate=epoch_now)
