"""Business logic: authentication service, authorization gate and operations."""

from app.services.auth import AuthService
from app.services.gate import Operation, OperationGroup, OperationTable, RequestContext
from app.services.operations import build_operation_table

__all__ = [
    "AuthService",
    "Operation",
    "OperationGroup",
    "OperationTable",
    "RequestContext",
    "build_operation_table",
]
