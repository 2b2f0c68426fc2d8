"""Top-level package for the organisational hierarchy viewer."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("orgchart")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .entities import EmployeeNode, EmployeeRecord
from .hierarchy import EmployeeTable, flatten, name_of

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "EmployeeNode",
    "EmployeeRecord",
    "EmployeeTable",
    "flatten",
    "name_of",
]
