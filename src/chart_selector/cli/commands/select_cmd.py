"""csel select <repo-url> - Select the best matching chart version."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from chart_selector.cli.credentials import cli_credentials
from chart_selector.cli.options import (
    ChartOption,
    ConstraintOption,
    OutputOption,
    PasswordOption,
    TimeoutOption,
    UsernameOption,
)
from chart_selector.core.classifier import classify_repository
from chart_selector.core.errors import ChartSelectorError
from chart_selector.core.version_selector import select_chart_version
from chart_selector.models.repo import SelectionResult
from chart_selector.output.formatters import output_selection

console = Console()


def select(
    repo_url: str = typer.Argument(help="Repository URL (http://, https:// or oci://)"),
    chart: str = ChartOption,
    constraint: str = ConstraintOption,
    username: Optional[str] = UsernameOption,
    password: Optional[str] = PasswordOption,
    timeout: Optional[float] = TimeoutOption,
    output: str = OutputOption,
    fail_on_no_match: bool = typer.Option(
        False, "--fail-on-no-match", help="Exit with code 2 when no version satisfies the constraint"
    ),
) -> None:
    """Select the greatest chart version satisfying a constraint."""
    try:
        protocol = classify_repository(repo_url)
        creds, resolver = cli_credentials(repo_url, username, password)
        with console.status("[bold cyan]Fetching chart versions…"):
            version = select_chart_version(
                repo_url,
                chart,
                constraint,
                creds,
                credential_resolver=resolver,
                timeout=timeout,
            )
    except ChartSelectorError as err:
        typer.echo(str(err), err=True)
        raise typer.Exit(code=1)

    result = SelectionResult(
        repo_url=repo_url,
        chart_name=chart,
        constraint=constraint,
        protocol=protocol,
        version=version,
    )
    output_selection(result, output)

    if fail_on_no_match and not result.matched:
        raise typer.Exit(code=2)
