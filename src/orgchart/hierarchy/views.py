"""Presentation-facing projections of the employee table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from orgchart.entities.core import EmployeeId
from orgchart.utils.logging import get_logger

from .errors import UnknownEmployeeError
from .names import name_of
from .table import EmployeeTable

_LOGGER = get_logger(module=__name__)


@dataclass(slots=True, frozen=True)
class SelectionOption:
    """One entry of the employee selection list."""

    id: EmployeeId
    label: str
    active: bool = False


@dataclass(slots=True, frozen=True)
class ChainEntry:
    id: EmployeeId | None
    name: str
    current: bool = False


@dataclass(slots=True, frozen=True)
class ChainView:
    """Supervisor chain for the selected employee.

    ``entries`` always ends with the selected employee, flagged as
    ``current``; when nothing is selected that entry carries an empty name.
    """

    entries: List[ChainEntry] = field(default_factory=list)

    @property
    def supervisors(self) -> List[ChainEntry]:
        return self.entries[:-1]

    @property
    def current(self) -> ChainEntry:
        return self.entries[-1]

    def names(self) -> List[str]:
        return [entry.name for entry in self.entries]


def selection_options(
    table: EmployeeTable | None,
    current: EmployeeId | None = None,
) -> List[SelectionOption]:
    """List every employee in table order, marking ``current`` as active."""

    if not table:
        return []
    return [
        SelectionOption(id=employee_id, label=name_of(employee_id, table), active=employee_id == current)
        for employee_id in table
    ]


def supervisor_chain(table: EmployeeTable | None, current: EmployeeId | None) -> ChainView:
    """Return the root-to-manager chain followed by ``current`` itself."""

    supervisors: tuple = ()
    if current is not None and current != "" and table:
        record = table.get(current)
        if record is not None:
            supervisors = record.supervisors
    entries = [ChainEntry(id=supervisor, name=name_of(supervisor, table)) for supervisor in supervisors]
    selected = current if current != "" else None
    entries.append(ChainEntry(id=selected, name=name_of(current, table), current=True))
    return ChainView(entries=entries)


class HierarchySession:
    """Holds a published table and the employee currently selected from it."""

    def __init__(self, table: EmployeeTable) -> None:
        self._table = table
        self._current: EmployeeId | None = None

    @property
    def table(self) -> EmployeeTable:
        return self._table

    @property
    def current(self) -> EmployeeId | None:
        return self._current

    def select(self, raw: Any) -> EmployeeId | None:
        """Select the employee matching ``raw``; an empty value clears the selection."""

        if raw is None or (isinstance(raw, str) and not raw.strip()):
            self.clear()
            return None
        employee_id = self._table.resolve(raw)
        if employee_id is None:
            raise UnknownEmployeeError(f"no employee with id '{raw}'", employee_id=raw)
        self._current = employee_id
        _LOGGER.debug("Selected employee", employee_id=employee_id)
        return employee_id

    def clear(self) -> None:
        self._current = None

    def options(self) -> List[SelectionOption]:
        return selection_options(self._table, self._current)

    def chain(self) -> ChainView:
        return supervisor_chain(self._table, self._current)


__all__ = [
    "SelectionOption",
    "ChainEntry",
    "ChainView",
    "selection_options",
    "supervisor_chain",
    "HierarchySession",
]
