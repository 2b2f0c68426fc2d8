"""Commands for browsing and exporting the employee hierarchy."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.table import Table

from orgchart.config.policies import DisplayPolicy
from orgchart.hierarchy import (
    ChainView,
    EmployeeTable,
    HierarchyError,
    HierarchySession,
    TreeValidator,
    build_employee_table,
    export_table,
    load_employee_tree,
    name_of,
)

from .common import CLIError, CLIState, console, existing_file, get_state, render_report

app = typer.Typer(
    add_completion=False,
    help="Browse supervisor chains and export the flattened employee table.",
    no_args_is_help=True,
)

_SOURCE_HELP = "Employee tree file (JSON or YAML); defaults to employee_tree under paths.data_dir."


def _source_path(state: CLIState, source: Optional[Path]) -> Path:
    if source is not None:
        return existing_file(source, label="Employee tree")
    return existing_file(state.settings.employee_tree_file, label="Employee tree")


def _load_table(state: CLIState, source: Optional[Path]) -> EmployeeTable:
    path = _source_path(state, source)
    try:
        return build_employee_table(path, settings=state.settings)
    except HierarchyError as exc:
        raise CLIError(str(exc)) from exc
    except ValidationError as exc:
        raise CLIError(f"Employee tree '{path}' is malformed: {exc.error_count()} schema error(s)") from exc
    except ValueError as exc:
        raise CLIError(str(exc)) from exc


def _render_chain(view: ChainView, display: DisplayPolicy) -> None:
    for entry in view.supervisors:
        console.print(entry.name, markup=False)
        console.print(f"  {display.chain_arrow}")
    final = view.current
    console.print(final.name or display.placeholder, style=display.current_marker_style, markup=False)


@app.command("employees")
def list_employees(
    ctx: typer.Context,
    source: Optional[Path] = typer.Option(None, "--source", "-s", help=_SOURCE_HELP),
) -> None:
    """List every employee in hierarchy order."""

    state = get_state(ctx)
    table = _load_table(state, source)
    session = HierarchySession(table)

    listing = Table(title="Employees")
    listing.add_column("ID", style="cyan", no_wrap=True)
    listing.add_column("Name")
    listing.add_column("Reports to")
    listing.add_column("Direct reports", justify="right")
    for option in session.options():
        record = table[option.id]
        listing.add_row(
            str(option.id),
            option.label,
            name_of(record.manager_id, table) or "-",
            str(len(record.subordinates)),
        )
    console.print(listing)


@app.command("chain")
def show_chain(
    ctx: typer.Context,
    employee_id: str = typer.Argument(..., help="Identifier of the employee to inspect."),
    source: Optional[Path] = typer.Option(None, "--source", "-s", help=_SOURCE_HELP),
) -> None:
    """Show the supervisor chain leading to an employee."""

    state = get_state(ctx)
    session = HierarchySession(_load_table(state, source))
    try:
        session.select(employee_id)
    except HierarchyError as exc:
        raise CLIError(str(exc)) from exc
    _render_chain(session.chain(), state.settings.policies.display)


@app.command("browse")
def browse(
    ctx: typer.Context,
    source: Optional[Path] = typer.Option(None, "--source", "-s", help=_SOURCE_HELP),
) -> None:
    """Interactively select employees and print their supervisor chains."""

    state = get_state(ctx)
    display = state.settings.policies.display
    session = HierarchySession(_load_table(state, source))
    for option in session.options():
        console.print(f"[cyan]{option.id}[/cyan]  {option.label}")

    while True:
        raw = typer.prompt(f"{display.placeholder} (blank to quit)", default="", show_default=False)
        if not raw.strip():
            break
        try:
            session.select(raw)
        except HierarchyError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            continue
        _render_chain(session.chain(), display)


@app.command("validate")
def validate(
    ctx: typer.Context,
    source: Optional[Path] = typer.Option(None, "--source", "-s", help=_SOURCE_HELP),
) -> None:
    """Check an employee tree for duplicate ids, cycles and blank names."""

    state = get_state(ctx)
    path = _source_path(state, source)
    try:
        root = load_employee_tree(path)
    except ValueError as exc:
        raise CLIError(f"Employee tree '{path}' could not be loaded: {exc}") from exc

    report = TreeValidator(state.settings.policies.hierarchy).run(root)
    render_report(
        "Validation passed" if report.passed else "Validation failed",
        report.to_dict(),
        passed=report.passed,
    )
    if not report.passed:
        raise typer.Exit(code=1)


@app.command("export")
def export(
    ctx: typer.Context,
    output: Path = typer.Argument(..., help="Destination file; relative paths land in paths.output_dir."),
    format: str = typer.Option("json", "--format", "-f", help="json, adjacency or dot."),
    source: Optional[Path] = typer.Option(None, "--source", "-s", help=_SOURCE_HELP),
) -> None:
    """Write the flattened employee table to disk."""

    state = get_state(ctx)
    table = _load_table(state, source)
    try:
        written = export_table(table, state.settings.output_file(output), format=format)
    except ValueError as exc:
        raise CLIError(str(exc)) from exc
    console.print(f"[green]Exported {len(table)} employees to[/green] {written}")


__all__ = ["app"]
