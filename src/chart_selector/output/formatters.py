"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console

from chart_selector.models import RepositoryProtocol
from chart_selector.models.repo import SelectionResult

console = Console()


def _selection_to_dict(r: SelectionResult) -> dict[str, Any]:
    return {
        "repository": r.repo_url,
        "protocol": r.protocol.value,
        "chart": r.chart_name or None,
        "constraint": r.constraint or None,
        "version": r.version or None,
    }


def output_selection(result: SelectionResult, fmt: str) -> None:
    if fmt == "json":
        console.print_json(json.dumps(_selection_to_dict(result), indent=2))
    elif fmt == "yaml":
        console.print(yaml.dump(_selection_to_dict(result), default_flow_style=False))
    else:
        from chart_selector.output.tables import selection_panel
        console.print(selection_panel(result))


def output_versions(
    repo_url: str,
    chart_name: str,
    protocol: RepositoryProtocol,
    versions: list[str],
    fmt: str,
) -> None:
    if fmt == "json":
        console.print_json(json.dumps(versions, indent=2))
    elif fmt == "yaml":
        console.print(yaml.dump(versions, default_flow_style=False))
    else:
        from chart_selector.output.tables import versions_table
        console.print(versions_table(repo_url, chart_name, protocol, versions))
