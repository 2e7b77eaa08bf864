"""Select a chart version from a classic Helm repository or an OCI registry."""

from __future__ import annotations

import logging

from chart_selector.config.settings import settings
from chart_selector.core.classic_repo import fetch_classic_versions
from chart_selector.core.classifier import build_reference
from chart_selector.core.credentials import CredentialResolver, StaticCredentialResolver
from chart_selector.core.errors import ChartSelectorError
from chart_selector.core.oci_repo import fetch_oci_versions
from chart_selector.core.resolver import resolve_version
from chart_selector.core.transport import Deadline, HttpTransport, RequestsTransport
from chart_selector.models import ParsePolicy, RepositoryProtocol
from chart_selector.models.repo import Credentials
from chart_selector.utils.urls import redact_url

logger = logging.getLogger(__name__)


def list_chart_versions(
    repo_url: str,
    chart_name: str = "",
    credentials: Credentials | None = None,
    *,
    transport: HttpTransport | None = None,
    credential_resolver: CredentialResolver | None = None,
    timeout: float | None = None,
) -> list[str]:
    """Return the raw, unsorted versions a repository offers for a chart.

    For classic (HTTP/S) repositories *chart_name* is required. For OCI
    repositories the URL names the chart and *chart_name* is ignored.
    """
    ref = build_reference(repo_url, chart_name)
    if ref.protocol is RepositoryProtocol.OCI and chart_name:
        logger.debug("Ignoring chart name %r for OCI repository %s", chart_name, redact_url(repo_url))

    deadline = Deadline(timeout)
    owns_transport = transport is None
    transport = transport or RequestsTransport()
    try:
        if ref.protocol is RepositoryProtocol.CLASSIC_HTTP:
            return fetch_classic_versions(
                ref.url, ref.chart_name, credentials, transport=transport, deadline=deadline
            )
        return fetch_oci_versions(
            ref.url,
            credential_resolver or StaticCredentialResolver(credentials),
            transport=transport,
            deadline=deadline,
        )
    except ChartSelectorError as err:
        raise err.with_context(
            f"error retrieving versions of chart {chart_name!r} from repository {redact_url(repo_url)!r}"
        ) from err
    finally:
        if owns_transport:
            transport.close()


def select_chart_version(
    repo_url: str,
    chart_name: str = "",
    constraint: str = "",
    credentials: Credentials | None = None,
    *,
    transport: HttpTransport | None = None,
    credential_resolver: CredentialResolver | None = None,
    timeout: float | None = None,
    policy: ParsePolicy | None = None,
) -> str:
    """Return the semantically greatest chart version satisfying *constraint*.

    With an empty *constraint* the greatest version overall is returned. When
    versions exist but none satisfies the constraint, the empty string is
    returned. *credentials* may be ``None`` for public repositories; for an
    OCI registry a *credential_resolver* takes precedence over them.

    Raises:
        InvalidInputError: unsupported URL, missing chart name, bad constraint.
        ChartNotFoundError: chart missing from the index, or no versions at all.
        UpstreamError: the repository or registry could not be queried.
        VersionParseError: a listed version is not a semantic version.
    """
    versions = list_chart_versions(
        repo_url,
        chart_name,
        credentials,
        transport=transport,
        credential_resolver=credential_resolver,
        timeout=timeout,
    )
    try:
        return resolve_version(
            versions,
            constraint,
            policy=policy or ParsePolicy.from_setting(settings.parse_policy),
        )
    except ChartSelectorError as err:
        raise err.with_context(
            f"error determining latest version of chart {chart_name!r} from repository {redact_url(repo_url)!r}"
        ) from err
