"""Flatten a nested employee tree into a supervisor-chain lookup table."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

from orgchart.config.policies import HierarchyPolicy
from orgchart.entities.core import EmployeeId, EmployeeNode, EmployeeRecord
from orgchart.utils.logging import get_logger

from .errors import DuplicateEmployeeError, HierarchyCycleError
from .table import EmployeeTable

_LOGGER = get_logger(module=__name__)


class HierarchyFlattener:
    """Depth-first flattener producing one :class:`EmployeeRecord` per node.

    The traversal uses an explicit stack so that arbitrarily deep chains of
    command do not hit the interpreter recursion limit. Nodes are visited in
    pre-order with siblings in input order, which fixes both the order of the
    resulting table and the order of every ``subordinates`` tuple.
    """

    def __init__(self, policy: HierarchyPolicy | None = None) -> None:
        self._policy = policy or HierarchyPolicy()

    @property
    def policy(self) -> HierarchyPolicy:
        return self._policy

    def flatten(self, root: EmployeeNode | Mapping[str, Any]) -> EmployeeTable:
        """Build the employee table for ``root``.

        Raises:
            DuplicateEmployeeError: if an id repeats and the policy rejects duplicates.
            HierarchyCycleError: if an employee is listed beneath one of their own supervisors.
        """

        node = EmployeeNode.from_payload(root)
        records: Dict[EmployeeId, Dict[str, Any]] = {}
        skipped = 0

        stack: List[Tuple[EmployeeNode, Tuple[EmployeeId, ...]]] = [(node, ())]
        while stack:
            current, supervisors = stack.pop()
            if current.id in records and not self._accept_duplicate(current, supervisors):
                skipped += 1
                continue

            children = current.children()
            path = supervisors + (current.id,)
            for child in children:
                if child.id in path:
                    raise HierarchyCycleError(
                        f"employee '{child.id}' is listed beneath their own supervisor chain {list(path)}",
                        employee_id=child.id,
                    )

            records[current.id] = {
                "id": current.id,
                "first_name": current.first_name,
                "last_name": current.last_name,
                "supervisors": supervisors,
                "subordinates": tuple(child.id for child in children),
            }
            _LOGGER.debug(
                "Inserted employee record",
                employee_id=current.id,
                depth=len(supervisors),
                direct_reports=len(children),
            )
            stack.extend((child, path) for child in reversed(children))

        table = EmployeeTable(
            {employee_id: EmployeeRecord(**payload) for employee_id, payload in records.items()}
        )
        _LOGGER.info(
            "Flattened employee hierarchy",
            employees=len(table),
            skipped_duplicates=skipped,
            duplicate_policy=self._policy.duplicate_ids,
        )
        return table

    def _accept_duplicate(self, node: EmployeeNode, supervisors: Tuple[EmployeeId, ...]) -> bool:
        strategy = self._policy.duplicate_ids
        if strategy == "reject":
            raise DuplicateEmployeeError(
                f"employee id '{node.id}' appears more than once in the hierarchy",
                employee_id=node.id,
            )
        if strategy == "keep_first":
            _LOGGER.warning(
                "Skipping duplicate employee and their reports",
                employee_id=node.id,
                supervisors=list(supervisors),
            )
            return False
        _LOGGER.warning("Overwriting duplicate employee record", employee_id=node.id)
        return True


def flatten(
    root: EmployeeNode | Mapping[str, Any],
    policy: HierarchyPolicy | None = None,
) -> EmployeeTable:
    """Flatten ``root`` with ``policy`` (defaults to last-write-wins duplicates)."""

    return HierarchyFlattener(policy).flatten(root)


__all__ = ["HierarchyFlattener", "flatten"]
