"""Protocol and outcome color maps."""

from chart_selector.models import RepositoryProtocol

PROTOCOL_COLORS: dict[RepositoryProtocol, str] = {
    RepositoryProtocol.CLASSIC_HTTP: "cyan",
    RepositoryProtocol.OCI: "magenta",
}


def styled_protocol(protocol: RepositoryProtocol) -> str:
    color = PROTOCOL_COLORS.get(protocol, "white")
    return f"[{color}]{protocol.value}[/{color}]"


def styled_version(version: str) -> str:
    if not version:
        return "[yellow]no match[/yellow]"
    return f"[green bold]{version}[/green bold]"
