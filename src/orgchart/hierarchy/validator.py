"""Boundary validation of employee trees before they are flattened."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Set, Tuple

from orgchart.config.policies import HierarchyPolicy
from orgchart.entities.core import EmployeeId, EmployeeNode
from orgchart.utils.logging import get_logger

_LOGGER = get_logger(module=__name__)


@dataclass(slots=True)
class ValidationReport:
    """Structured validation output used by the CLI and the service entry point."""

    passed: bool
    violations: List[dict] = field(default_factory=list)
    warnings: List[dict] = field(default_factory=list)
    tree_stats: dict = field(default_factory=dict)
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict:
        return {
            "passed": self.passed,
            "violations": list(self.violations),
            "warnings": list(self.warnings),
            "tree_stats": dict(self.tree_stats),
            "generated_at": self.generated_at,
        }


class TreeValidator:
    """Checks the preconditions the flattener relies on.

    Duplicate ids are only fatal when the policy rejects them; under the
    ``overwrite`` and ``keep_first`` strategies they are reported as warnings.
    An id repeated on its own supervisor path is always a violation.
    """

    def __init__(self, policy: HierarchyPolicy | None = None) -> None:
        self._policy = policy or HierarchyPolicy()

    @property
    def policy(self) -> HierarchyPolicy:
        return self._policy

    def run(self, root: EmployeeNode) -> ValidationReport:
        violations: List[dict] = []
        warnings: List[dict] = []
        seen: Set[EmployeeId] = set()
        node_count = 0
        max_depth = 0

        stack: List[Tuple[EmployeeNode, Tuple[EmployeeId, ...]]] = [(root, ())]
        while stack:
            node, supervisors = stack.pop()
            node_count += 1
            max_depth = max(max_depth, len(supervisors))

            if node.id in supervisors:
                violations.append(
                    {
                        "code": "cycle-detected",
                        "employee_id": node.id,
                        "detail": f"employee appears beneath their own supervisor chain {list(supervisors)}",
                    }
                )
                continue

            if node.id in seen:
                finding = {
                    "code": "duplicate-id",
                    "employee_id": node.id,
                    "detail": f"id repeats; duplicate policy is '{self._policy.duplicate_ids}'",
                }
                if self._policy.duplicate_ids == "reject":
                    violations.append(finding)
                else:
                    warnings.append(finding)
            seen.add(node.id)

            for part, value in (("first_name", node.first_name), ("last_name", node.last_name)):
                if not value.strip():
                    violations.append(
                        {
                            "code": "blank-name",
                            "employee_id": node.id,
                            "detail": f"{part} must contain non-whitespace characters",
                        }
                    )

            path = supervisors + (node.id,)
            stack.extend((child, path) for child in reversed(node.children()))

        tree_stats: Dict[str, int] = {}
        if self._policy.include_tree_stats:
            tree_stats = {
                "node_count": node_count,
                "distinct_ids": len(seen),
                "max_depth": max_depth,
            }
        report = ValidationReport(
            passed=not violations,
            violations=violations,
            warnings=warnings,
            tree_stats=tree_stats,
        )
        _LOGGER.info(
            "Employee tree validation completed",
            passed=report.passed,
            violations=len(report.violations),
            warnings=len(report.warnings),
        )
        return report


__all__ = ["TreeValidator", "ValidationReport"]
