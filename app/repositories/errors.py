"""Storage-layer errors, independent of the database driver."""

from typing import Any


class ConstraintViolation(Exception):
    """Raised when a storage-layer integrity constraint is violated."""

    def __init__(self, message: str, detail: dict[str, Any] | None = None) -> None:
        self.message = message
        self.detail = detail or {}
        super().__init__(message)


class UniqueConstraintViolation(ConstraintViolation):
    """Raised when an insert or update collides with a unique column (e.g. email)."""
