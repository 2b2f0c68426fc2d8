"""Primary Typer application wiring the orgchart CLI."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

import click
import typer
from rich.table import Table

from orgchart.utils.logging import DEFAULT_LEVEL, configure_logging

from . import hierarchy
from .common import CLIError, configure_state, console, parse_override


class OrgChartTyper(typer.Typer):
    """Typer subclass that supports registering exception handlers."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._exception_handlers: list[tuple[type[BaseException], Callable[[BaseException], Any]]] = []

    def exception_handler(
        self, exception_type: type[BaseException]
    ) -> Callable[[Callable[[BaseException], Any]], Callable[[BaseException], Any]]:
        def decorator(handler: Callable[[BaseException], Any]) -> Callable[[BaseException], Any]:
            self._exception_handlers.append((exception_type, handler))
            return handler

        return decorator

    def _resolve_handler(self, exception: BaseException) -> Callable[[BaseException], Any] | None:
        for registered_type, handler in self._exception_handlers:
            if isinstance(exception, registered_type):
                return handler
        return None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().__call__(*args, **kwargs)
        except BaseException as exc:
            handler = self._resolve_handler(exc)
            if handler is None:
                raise
            result = handler(exc)
            if isinstance(result, BaseException):
                raise result
            return result


app = OrgChartTyper(
    add_completion=False,
    help="""
    Inspect an organisational hierarchy: list employees, show supervisor
    chains, validate employee trees and export the flattened table.
    """.strip(),
    no_args_is_help=True,
)


@app.exception_handler(CLIError)
def handle_cli_error(exception: CLIError) -> typer.Exit:
    """Render ``CLIError`` messages without stack traces."""

    console.print(f"[bold red]Error:[/bold red] {exception}")
    return typer.Exit(code=2)


@app.callback()
def main(
    ctx: typer.Context,
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Active configuration environment (development, testing, production).",
        show_default=False,
    ),
    override: List[str] = typer.Option(  # noqa: B008 - Typer callback signature
        [],
        "--override",
        "-o",
        metavar="KEY=VALUE",
        help="Configuration override in dotted.key=value notation (repeatable).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Console and file log level (default WARNING, or INFO with --verbose).",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Emit verbose diagnostic output for CLI operations.",
    ),
) -> None:
    """Configure shared CLI state prior to executing subcommands."""

    state = configure_state(
        ctx,
        environment=environment,
        overrides=[parse_override(item) for item in override],
    )
    default_level = "INFO" if verbose else DEFAULT_LEVEL
    configure_logging(state.settings, level=log_level or default_level)

    if verbose:
        table = Table(title="CLI Context", show_header=False, box=None)
        table.add_row("Environment", state.environment)
        table.add_row("Employee tree", str(state.settings.employee_tree_file))
        table.add_row("Output directory", str(state.settings.paths.resolved("output_dir")))
        table.add_row("Duplicate ids", state.settings.policies.hierarchy.duplicate_ids)
        table.add_row("Policy version", state.settings.policy_version)
        console.print(table)


app.add_typer(hierarchy.app, name="hierarchy", help="Employee hierarchy commands")


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Console-script entry point returning the process exit status.

    Registered exception handlers turn :class:`CLIError` into ``typer.Exit(2)``;
    this converts that exit, and click usage errors, into a plain status code.
    """

    try:
        return app(
            prog_name="orgchart",
            args=list(argv) if argv is not None else None,
            standalone_mode=False,
        ) or 0
    except typer.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        console.print("[bold red]Aborted.[/bold red]")
        return 1
