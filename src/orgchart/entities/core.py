"""Core domain entities for the organisational hierarchy."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Set, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

EmployeeId = Union[int, str]


class EmployeeNode(BaseModel):
    """One employee of the input tree together with their direct reports.

    The wire format uses ``firstName``/``lastName``; both those names and the
    snake_case attribute names are accepted on input. An absent
    ``subordinates`` list and an empty one are equivalent.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: EmployeeId = Field(..., description="Unique, opaque employee identifier")
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    subordinates: List["EmployeeNode"] | None = Field(
        default=None,
        description="Direct reports in display order.",
    )

    @field_validator("id")
    @classmethod
    def _reject_blank_id(cls, value: EmployeeId) -> EmployeeId:
        if isinstance(value, str) and not value.strip():
            raise ValueError("employee id must contain non-whitespace characters")
        return value

    @classmethod
    def from_payload(cls, payload: Any) -> "EmployeeNode":
        """Validate a nested mapping one level at a time, leaves first.

        pydantic validates self-referencing models recursively and gives up a
        few hundred levels down, so children are built before their parent and
        handed over as finished instances. Raises ``ValueError`` when a mapping
        contains itself.
        """

        if isinstance(payload, cls):
            return payload
        if not isinstance(payload, Mapping):
            return cls.model_validate(payload)

        built: Dict[int, EmployeeNode] = {}
        on_path: Set[int] = set()
        stack: List[Tuple[Mapping[str, Any], bool]] = [(payload, False)]
        while stack:
            item, expanded = stack.pop()
            reports = item.get("subordinates")
            if not expanded:
                if id(item) in built:
                    continue
                on_path.add(id(item))
                stack.append((item, True))
                if isinstance(reports, list):
                    for child in reports:
                        if not isinstance(child, Mapping):
                            continue
                        if id(child) in on_path:
                            raise ValueError(f"employee payload '{child.get('id')}' contains itself")
                        stack.append((child, False))
                continue

            fields = dict(item)
            if isinstance(reports, list):
                fields["subordinates"] = [
                    built.get(id(child), child) if isinstance(child, Mapping) else child
                    for child in reports
                ]
            built[id(item)] = cls.model_validate(fields)
            on_path.discard(id(item))
        return built[id(payload)]

    def children(self) -> List["EmployeeNode"]:
        return list(self.subordinates or [])


class EmployeeRecord(BaseModel):
    """Flattened employee entry annotated with supervisor chain and direct reports."""

    model_config = ConfigDict(frozen=True)

    id: EmployeeId
    first_name: str
    last_name: str
    supervisors: Tuple[EmployeeId, ...] = Field(
        default=(),
        description="Supervisor ids ordered from the root down to the immediate manager.",
    )
    subordinates: Tuple[EmployeeId, ...] = Field(
        default=(),
        description="Direct report ids in input order.",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def depth(self) -> int:
        return len(self.supervisors)

    @property
    def is_root(self) -> bool:
        return not self.supervisors

    @property
    def is_leaf(self) -> bool:
        return not self.subordinates

    @property
    def manager_id(self) -> EmployeeId | None:
        return self.supervisors[-1] if self.supervisors else None


__all__ = ["EmployeeId", "EmployeeNode", "EmployeeRecord"]
