"""SQLAlchemy declarative Base and shared model configuration."""

import time

from sqlalchemy.orm import DeclarativeBase


def epoch_now() -> int:
    """Current time as integer seconds since epoch (column default)."""
    return int(time.time())


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass
