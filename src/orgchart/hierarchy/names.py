"""Display-name lookups against a flattened employee table."""

from __future__ import annotations

from typing import Any, Mapping

from orgchart.entities.core import EmployeeId


def _name_part(record: Any, attribute: str, wire_name: str) -> str | None:
    if isinstance(record, Mapping):
        value = record.get(attribute, record.get(wire_name))
    else:
        value = getattr(record, attribute, None)
    return value if isinstance(value, str) else None


def name_of(employee_id: EmployeeId | None, table: Mapping[EmployeeId, Any] | None) -> str:
    """Return ``"<first> <last>"`` for ``employee_id`` or ``""`` when unavailable.

    An unset id (``None`` or ``""``), an unset or empty table, a missing
    record and a record without both name parts all yield an empty string;
    none of them is treated as an error.
    """

    if employee_id is None or employee_id == "" or not table:
        return ""
    record = table.get(employee_id)
    if record is None:
        return ""
    first_name = _name_part(record, "first_name", "firstName")
    last_name = _name_part(record, "last_name", "lastName")
    if first_name is None or last_name is None:
        return ""
    return f"{first_name} {last_name}"


__all__ = ["name_of"]
