"""Loading employee trees and exporting flattened tables."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, MutableMapping

import yaml

from orgchart.entities.core import EmployeeNode
from orgchart.utils.helpers import ensure_directory, serialize_json
from orgchart.utils.logging import get_logger

from .table import EmployeeTable

_LOGGER = get_logger(module=__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def _read_payload(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        if path.suffix.lower() in _YAML_SUFFIXES:
            try:
                return yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise ValueError(f"invalid YAML in {path}: {exc}") from exc
        return json.load(handle)


def load_employee_tree(path_like: str | Path) -> EmployeeNode:
    """Read a nested employee tree from a JSON or YAML file."""

    path = Path(path_like)
    if not path.exists():
        raise FileNotFoundError(f"employee tree file not found: {path}")
    payload = _read_payload(path)
    if not isinstance(payload, MutableMapping):
        raise ValueError(f"employee tree file '{path}' must contain a mapping at the top level")
    root = EmployeeNode.from_payload(payload)
    _LOGGER.info("Loaded employee tree", path=str(path), root_id=root.id)
    return root


def _dot_label(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def export_table(
    table: EmployeeTable,
    output_path: str | Path,
    *,
    format: str = "json",
) -> Path:
    path = Path(output_path)
    ensure_directory(path.parent)
    format = format.lower()
    if format == "json":
        serialize_json(table.to_dict(), path)
    elif format == "adjacency":
        serialize_json(table.adjacency(), path)
    elif format == "dot":
        lines = ["digraph orgchart {"]
        for record in table.records():
            lines.append(f'  "{_dot_label(str(record.id))}" [label="{_dot_label(record.full_name)}"];')
        for record in table.records():
            for subordinate in record.subordinates:
                lines.append(f'  "{_dot_label(str(record.id))}" -> "{_dot_label(str(subordinate))}";')
        lines.append("}")
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    else:
        raise ValueError(f"unsupported table export format: {format}")
    _LOGGER.info("Exported employee table", path=str(path), format=format, employees=len(table))
    return path.resolve()


__all__ = ["load_employee_tree", "export_table"]
