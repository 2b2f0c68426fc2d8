"""Domain entities for the hierarchy viewer."""

from .core import EmployeeId, EmployeeNode, EmployeeRecord

__all__ = [
    "EmployeeId",
    "EmployeeNode",
    "EmployeeRecord",
]
