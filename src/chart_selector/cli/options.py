"""Shared CLI options."""

from __future__ import annotations

import typer

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
ChartOption = typer.Option("", "--chart", "-c", help="Chart name (required for HTTP/S repositories)")
ConstraintOption = typer.Option("", "--constraint", "-C", help="Semver constraint, e.g. '^1.2.0' (default: latest)")
UsernameOption = typer.Option(None, "--username", "-u", envvar="CSEL_USERNAME", help="Repository username")
PasswordOption = typer.Option(None, "--password", "-p", envvar="CSEL_PASSWORD", help="Repository password")
TimeoutOption = typer.Option(None, "--timeout", "-t", help="Overall deadline in seconds")
