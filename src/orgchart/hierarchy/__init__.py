"""Employee hierarchy public API."""

from __future__ import annotations

from .errors import (
    DuplicateEmployeeError,
    HierarchyCycleError,
    HierarchyError,
    HierarchyValidationError,
    UnknownEmployeeError,
)
from .flattener import HierarchyFlattener, flatten
from .io import export_table, load_employee_tree
from .main import build_employee_table
from .names import name_of
from .table import EmployeeTable
from .validator import TreeValidator, ValidationReport
from .views import (
    ChainEntry,
    ChainView,
    HierarchySession,
    SelectionOption,
    selection_options,
    supervisor_chain,
)

__all__ = [
    "flatten",
    "name_of",
    "build_employee_table",
    "load_employee_tree",
    "export_table",
    "HierarchyFlattener",
    "EmployeeTable",
    "TreeValidator",
    "ValidationReport",
    "HierarchySession",
    "SelectionOption",
    "ChainEntry",
    "ChainView",
    "selection_options",
    "supervisor_chain",
    "HierarchyError",
    "DuplicateEmployeeError",
    "HierarchyCycleError",
    "HierarchyValidationError",
    "UnknownEmployeeError",
]
