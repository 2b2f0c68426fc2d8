"""Shared helpers used across the orgchart CLI modules."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import reduce
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

import typer
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel

from orgchart.config.settings import Settings, deep_merge

console = Console()


class CLIError(RuntimeError):
    """Exception raised for user-facing CLI errors."""


@dataclass(slots=True)
class CLIState:
    """Resolved settings shared by every subcommand through ``typer.Context``."""

    settings: Settings
    environment: str


def parse_override(argument: str) -> Dict[str, Any]:
    """Turn ``policies.hierarchy.duplicate_ids=reject`` into a nested mapping.

    The value is JSON-decoded when possible (``false``, ``3``, ``["a"]``) and
    kept as text otherwise.
    """

    key, separator, raw = argument.partition("=")
    if not separator:
        raise typer.BadParameter(f"override '{argument}' is not of the form dotted.key=value")
    segments = [segment.strip() for segment in key.split(".")]
    if not all(segments):
        raise typer.BadParameter(f"override key '{key}' has an empty segment")
    try:
        value: Any = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return reduce(lambda nested, segment: {segment: nested}, reversed(segments), value)


def merge_overrides(overrides: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Fold overrides left to right; later ones win on conflicting leaves."""

    return reduce(deep_merge, overrides, {})


def configure_state(
    ctx: typer.Context,
    *,
    environment: str | None,
    overrides: Iterable[Mapping[str, Any]],
) -> CLIState:
    """Build :class:`Settings` from ``overrides`` and store it on ``ctx.obj``."""

    payload = merge_overrides(overrides)
    if environment:
        payload["environment"] = environment
    try:
        settings = Settings(**payload)
    except ValueError as exc:
        raise CLIError(f"Invalid configuration: {exc}") from exc
    ctx.obj = CLIState(settings=settings, environment=settings.environment)
    return ctx.obj


def get_state(ctx: typer.Context) -> CLIState:
    state = ctx.find_object(CLIState)
    if state is None:
        raise CLIError("CLI context is not initialised")
    return state


def render_report(title: str, payload: Mapping[str, Any], *, passed: bool) -> None:
    console.print(Panel(JSON.from_data(payload), title=title, border_style="green" if passed else "red"))


def existing_file(path: Path | str, *, label: str) -> Path:
    """Return ``path`` made absolute, or raise :class:`CLIError` if it is not a file."""

    target = Path(path).expanduser().resolve()
    if not target.is_file():
        raise CLIError(f"{label} not found: {target}")
    return target
