"""Exceptions raised while building or querying the employee table."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from .validator import ValidationReport


class HierarchyError(ValueError):
    """Base exception for malformed employee hierarchies."""

    def __init__(self, message: str, *, employee_id: Any = None) -> None:
        super().__init__(message)
        self.employee_id = employee_id


class DuplicateEmployeeError(HierarchyError):
    """Raised when an employee id occurs twice and duplicates are rejected."""


class HierarchyCycleError(HierarchyError):
    """Raised when an employee appears among their own supervisors."""


class UnknownEmployeeError(HierarchyError):
    """Raised when a selection does not match any employee in the table."""


class HierarchyValidationError(HierarchyError):
    """Raised when input validation fails before flattening."""

    def __init__(self, message: str, *, report: "ValidationReport") -> None:
        super().__init__(message)
        self.report = report


__all__ = [
    "HierarchyError",
    "DuplicateEmployeeError",
    "HierarchyCycleError",
    "UnknownEmployeeError",
    "HierarchyValidationError",
]
