"""Read-only lookup table produced by flattening an employee tree."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping

from orgchart.entities.core import EmployeeId, EmployeeRecord


class EmployeeTable(Mapping[EmployeeId, EmployeeRecord]):
    """Immutable mapping from employee id to :class:`EmployeeRecord`.

    Iteration follows insertion order, which for a flattened tree is the
    depth-first traversal order: the root first, then each subtree in the
    order its members were listed.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Mapping[EmployeeId, EmployeeRecord] | None = None) -> None:
        self._records: Mapping[EmployeeId, EmployeeRecord] = MappingProxyType(dict(records or {}))

    def __getitem__(self, employee_id: EmployeeId) -> EmployeeRecord:
        return self._records[employee_id]

    def __iter__(self) -> Iterator[EmployeeId]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"EmployeeTable({len(self)} employees)"

    @property
    def root(self) -> EmployeeRecord | None:
        for record in self._records.values():
            return record
        return None

    def records(self) -> Iterator[EmployeeRecord]:
        for record in self._records.values():
            yield record

    def resolve(self, raw: Any) -> EmployeeId | None:
        """Map a raw selection value onto a key of this table.

        Selection widgets and prompts hand back strings while the tree may
        use integer ids, so ``"3"`` resolves to ``3`` and vice versa.
        """

        if raw is None or raw == "":
            return None
        if raw in self._records:
            return raw
        if isinstance(raw, str):
            text = raw.strip()
            if text in self._records:
                return text
            if text.lstrip("-").isdigit() and int(text) in self._records:
                return int(text)
        elif isinstance(raw, int) and str(raw) in self._records:
            return str(raw)
        return None

    def statistics(self) -> Dict[str, int]:
        """Return structural statistics for reports and exports."""

        depths = [record.depth for record in self._records.values()]
        spans = [len(record.subordinates) for record in self._records.values()]
        return {
            "employee_count": len(self._records),
            "max_depth": max(depths, default=0),
            "leaf_count": sum(1 for span in spans if span == 0),
            "max_direct_reports": max(spans, default=0),
        }

    def adjacency(self) -> Dict[str, List[EmployeeId]]:
        return {str(key): list(record.subordinates) for key, record in self._records.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "employees": [record.model_dump(mode="json") for record in self._records.values()],
            "statistics": self.statistics(),
        }


__all__ = ["EmployeeTable"]
