"""Rich table builders for each command."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table

from chart_selector.models import RepositoryProtocol
from chart_selector.models.repo import SelectionResult
from chart_selector.output.themes import styled_protocol, styled_version


def selection_panel(result: SelectionResult) -> Panel:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Repository", result.repo_url)
    table.add_row("Protocol", styled_protocol(result.protocol))
    if result.chart_name:
        table.add_row("Chart", result.chart_name)
    table.add_row("Constraint", result.constraint or "[dim](latest)[/dim]")
    table.add_row("Version", styled_version(result.version))

    border = "green" if result.matched else "yellow"
    return Panel(table, title="[bold]Chart Version[/bold]", border_style=border)


def versions_table(repo_url: str, chart_name: str, protocol: RepositoryProtocol, versions: list[str]) -> Table:
    title = f"{chart_name} @ {repo_url}" if chart_name else repo_url
    table = Table(title=title, expand=False, caption=f"{len(versions)} version(s), {protocol.value}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Version", style="magenta", no_wrap=True)
    for i, v in enumerate(versions, 1):
        table.add_row(str(i), v)
    return table
