"""Core app configuration, database, errors and security primitives."""

from app.core.config import Settings, get_settings
from app.core.database import build_engine, build_session_factory

__all__ = ["Settings", "get_settings", "build_engine", "build_session_factory"]
