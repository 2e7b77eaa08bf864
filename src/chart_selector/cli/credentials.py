"""Credential lookup for CLI invocations."""

from __future__ import annotations

from chart_selector.core.classifier import classify_repository
from chart_selector.core.credentials import (
    CredentialResolver,
    HelmRegistryConfigResolver,
    StaticCredentialResolver,
    repository_credentials,
)
from chart_selector.models import RepositoryProtocol
from chart_selector.models.repo import Credentials


def cli_credentials(
    repo_url: str,
    username: str | None,
    password: str | None,
) -> tuple[Credentials | None, CredentialResolver | None]:
    """Explicit flags win; otherwise fall back to what helm itself has stored."""
    if username or password:
        creds = Credentials(username or "", password or "")
        return creds, StaticCredentialResolver(creds)
    if classify_repository(repo_url) is RepositoryProtocol.OCI:
        return None, HelmRegistryConfigResolver()
    return repository_credentials(repo_url), None
