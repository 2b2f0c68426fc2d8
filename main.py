"""Compatibility entry point delegating to the Typer-powered CLI."""

from __future__ import annotations

from orgchart.cli.main import run as main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
