"""Public entry point that turns an employee tree file into a published table."""

from __future__ import annotations

from pathlib import Path

from orgchart.config.settings import Settings, get_settings
from orgchart.utils.logging import get_logger, log_timing, logging_context

from .errors import HierarchyValidationError
from .flattener import HierarchyFlattener
from .io import load_employee_tree
from .table import EmployeeTable
from .validator import TreeValidator

_LOGGER = get_logger(module=__name__)


def build_employee_table(
    source: str | Path | None = None,
    *,
    settings: Settings | None = None,
) -> EmployeeTable:
    """Load, validate and flatten the employee tree.

    The returned table is complete and immutable; nothing is handed out while
    flattening is still in progress.
    """

    cfg = settings or get_settings()
    policy = cfg.policies.hierarchy
    path = Path(source) if source is not None else cfg.employee_tree_file

    with logging_context(step="hierarchy-flatten"):
        root = load_employee_tree(path)
        if policy.validate_input:
            report = TreeValidator(policy).run(root)
            if not report.passed:
                codes = sorted({violation["code"] for violation in report.violations})
                raise HierarchyValidationError(
                    f"employee tree '{path}' failed validation: {', '.join(codes)}",
                    report=report,
                )
        with log_timing("flatten", logger_=_LOGGER):
            table = HierarchyFlattener(policy).flatten(root)

    _LOGGER.info(
        "Employee table ready",
        source=str(path),
        employees=len(table),
        policy_version=cfg.policy_version,
    )
    return table


__all__ = ["build_employee_table"]
