"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="csel",
    help="Chart Selector - Resolve Helm chart versions from HTTP/S and OCI repositories.",
    no_args_is_help=True,
)


@app.callback()
def root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _register_commands() -> None:
    from chart_selector.cli.commands.select_cmd import select
    from chart_selector.cli.commands.versions_cmd import versions
    from chart_selector.cli.commands.deps_cmd import deps

    app.command("select", help="Select the best matching chart version")(select)
    app.command("versions", help="List the versions a repository offers")(versions)
    app.command("deps", help="Update chart dependencies with helm")(deps)


_register_commands()


def main() -> None:
    app()
