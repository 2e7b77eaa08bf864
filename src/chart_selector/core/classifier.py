"""Repository URL classification."""

from __future__ import annotations

from chart_selector.core.errors import InvalidInputError
from chart_selector.models import RepositoryProtocol
from chart_selector.models.repo import RepositoryReference
from chart_selector.utils.urls import redact_url

_PREFIXES: tuple[tuple[str, RepositoryProtocol], ...] = (
    ("http://", RepositoryProtocol.CLASSIC_HTTP),
    ("https://", RepositoryProtocol.CLASSIC_HTTP),
    ("oci://", RepositoryProtocol.OCI),
)


def classify_repository(repo_url: str) -> RepositoryProtocol:
    """Return the protocol a repository URL speaks, judged by its scheme prefix."""
    for prefix, protocol in _PREFIXES:
        if repo_url.startswith(prefix):
            return protocol
    raise InvalidInputError(f"repository URL {redact_url(repo_url)!r} is invalid")


def build_reference(repo_url: str, chart_name: str | None = None) -> RepositoryReference:
    """Classify *repo_url* and pair it with the chart name its protocol needs.

    Classic repositories host many charts, so a chart name is mandatory. An
    OCI URL already names the chart, so any chart name given is dropped.
    """
    protocol = classify_repository(repo_url)
    if protocol is RepositoryProtocol.CLASSIC_HTTP:
        if not chart_name:
            raise InvalidInputError(
                f"a chart name is required for classic repository {redact_url(repo_url)!r}"
            )
        return RepositoryReference(url=repo_url, protocol=protocol, chart_name=chart_name)
    return RepositoryReference(url=repo_url, protocol=protocol, chart_name=None)
