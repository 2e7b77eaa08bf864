"""csel deps <home> <chart-path> - Update chart dependencies with helm."""

from __future__ import annotations

import typer

from chart_selector.core.errors import ChartSelectorError
from chart_selector.core.dependency_updater import update_chart_dependencies


def deps(
    home_path: str = typer.Argument(help="Directory helm should use as HOME"),
    chart_path: str = typer.Argument(help="Path to the chart directory"),
) -> None:
    """Run `helm dependency update` for a chart with an isolated HOME."""
    try:
        output = update_chart_dependencies(home_path, chart_path)
    except ChartSelectorError as err:
        typer.echo(str(err), err=True)
        raise typer.Exit(code=1)
    typer.echo(output.rstrip())
