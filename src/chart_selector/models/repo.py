"""Repository, credential and selection models."""

from __future__ import annotations

from dataclasses import dataclass, field

from chart_selector.models import RepositoryProtocol


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)

    @property
    def is_anonymous(self) -> bool:
        return not self.username and not self.password


@dataclass(frozen=True)
class RepositoryReference:
    url: str
    protocol: RepositoryProtocol
    chart_name: str | None = None


@dataclass(frozen=True)
class RegistryReference:
    """A parsed ``registry/repository[:tag|@digest]`` OCI reference."""

    registry: str
    repository: str
    reference: str = ""

    @property
    def host(self) -> str:
        return self.registry

    def __str__(self) -> str:
        if not self.reference:
            return f"{self.registry}/{self.repository}"
        sep = "@" if ":" in self.reference else ":"
        return f"{self.registry}/{self.repository}{sep}{self.reference}"


@dataclass
class SelectionResult:
    repo_url: str
    chart_name: str
    constraint: str
    protocol: RepositoryProtocol
    version: str  # "" when no version satisfies the constraint

    @property
    def matched(self) -> bool:
        return bool(self.version)
