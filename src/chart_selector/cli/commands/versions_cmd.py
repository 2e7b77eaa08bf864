"""csel versions <repo-url> - List the versions a repository offers."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from chart_selector.cli.credentials import cli_credentials
from chart_selector.cli.options import ChartOption, OutputOption, PasswordOption, TimeoutOption, UsernameOption
from chart_selector.core.classifier import classify_repository
from chart_selector.core.errors import ChartSelectorError
from chart_selector.core.version_selector import list_chart_versions
from chart_selector.output.formatters import output_versions

console = Console()


def versions(
    repo_url: str = typer.Argument(help="Repository URL (http://, https:// or oci://)"),
    chart: str = ChartOption,
    username: Optional[str] = UsernameOption,
    password: Optional[str] = PasswordOption,
    timeout: Optional[float] = TimeoutOption,
    output: str = OutputOption,
) -> None:
    """List raw chart versions in repository order."""
    try:
        protocol = classify_repository(repo_url)
        creds, resolver = cli_credentials(repo_url, username, password)
        with console.status("[bold cyan]Fetching chart versions…"):
            found = list_chart_versions(
                repo_url,
                chart,
                creds,
                credential_resolver=resolver,
                timeout=timeout,
            )
    except ChartSelectorError as err:
        typer.echo(str(err), err=True)
        raise typer.Exit(code=1)

    output_versions(repo_url, chart, protocol, found, output)
