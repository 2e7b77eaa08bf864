"""Chart versions from classic (HTTP/S) Helm repositories."""

from __future__ import annotations

import logging

import yaml

from chart_selector.core.errors import ChartNotFoundError, UpstreamError
from chart_selector.core.transport import Deadline, HttpTransport, RequestsTransport
from chart_selector.models.repo import Credentials
from chart_selector.utils.urls import redact_url

logger = logging.getLogger(__name__)

# Index files can be huge, so prefer the C loader. The base loader keeps every
# scalar a string: "1.10" must not turn into the float 1.1.
_YamlLoader = getattr(yaml, "CBaseLoader", yaml.BaseLoader)

INDEX_FILE = "index.yaml"


def index_url(repo_url: str) -> str:
    return f"{repo_url.rstrip('/')}/{INDEX_FILE}"


def fetch_classic_versions(
    repo_url: str,
    chart_name: str,
    credentials: Credentials | None = None,
    *,
    transport: HttpTransport | None = None,
    deadline: Deadline | None = None,
) -> list[str]:
    """Return every version of *chart_name* listed in the repository index.

    Versions come back in index order, duplicates included.
    """
    transport = transport or RequestsTransport()
    deadline = deadline or Deadline()
    url = index_url(repo_url)
    safe = redact_url(url)

    auth = None
    if credentials is not None:
        auth = (credentials.username, credentials.password)

    res = transport.get(url, auth=auth, timeout=deadline.request_timeout(url))
    if res.status_code != 200:
        raise UpstreamError(
            f"received unexpected HTTP {res.status_code} when querying repository index at {safe!r}",
            status_code=res.status_code,
        )

    entries = _parse_entries(res.content, safe)
    if chart_name not in entries:
        raise ChartNotFoundError(
            f"no versions of chart {chart_name!r} found in repository index from {safe!r}"
        )

    chart_entries = entries[chart_name] or []
    versions = [_entry_version(e) for e in chart_entries]
    logger.debug("Found %d versions of %s in %s", len(versions), chart_name, safe)
    return versions


def _parse_entries(content: bytes, safe_url: str) -> dict:
    """Load the ``entries`` mapping of an index document."""
    try:
        data = yaml.load(content, Loader=_YamlLoader)
    except yaml.YAMLError as exc:
        raise UpstreamError(f"error unmarshaling repository index from {safe_url!r}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise UpstreamError(f"error unmarshaling repository index from {safe_url!r}: not a mapping")
    entries = data.get("entries") or {}
    if not isinstance(entries, dict):
        raise UpstreamError(
            f"error unmarshaling repository index from {safe_url!r}: 'entries' is not a mapping"
        )
    return entries


def _entry_version(entry) -> str:
    if isinstance(entry, dict):
        version = entry.get("version", "")
        return "" if version is None else str(version)
    return ""
