"""Hierarchy flattening and display policy models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class HierarchyPolicy(BaseModel):
    """Configuration controlling how an employee tree is flattened."""

    duplicate_ids: Literal["overwrite", "keep_first", "reject"] = Field(
        default="overwrite",
        description="Strategy applied when the same employee id appears more than once.",
    )
    validate_input: bool = Field(
        default=True,
        description="Run the tree validator before flattening and refuse invalid trees.",
    )
    include_tree_stats: bool = Field(default=True)


class DisplayPolicy(BaseModel):
    """Presentation settings for selection lists and supervisor chains."""

    placeholder: str = Field(default="Select an employee", min_length=1)
    chain_arrow: str = Field(default="\U0001F86B", min_length=1)
    current_marker_style: str = Field(default="bold magenta")

    @field_validator("placeholder", "chain_arrow")
    @classmethod
    def _strip(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("display labels must contain non-whitespace characters")
        return cleaned
