"""Tests for reading chart versions out of a classic repository index."""

import pytest

from chart_selector.core.classic_repo import fetch_classic_versions, index_url
from chart_selector.core.errors import ChartNotFoundError, UpstreamError
from chart_selector.core.transport import Deadline
from chart_selector.models.repo import Credentials

from conftest import make_response

REPO = "https://charts.example.com"
INDEX = f"{REPO}/index.yaml"

INDEX_YAML = """\
apiVersion: v1
entries:
  nginx:
    - name: nginx
      version: 1.0.0
      appVersion: "1.21"
    - name: nginx
      version: 1.10
    - name: nginx
      version: 1.2.0
    - name: nginx
      version: 1.0.0
  redis:
    - version: 17.0.0
generated: "2024-01-01T00:00:00Z"
"""


@pytest.fixture
def index_transport(transport):
    transport.add(INDEX, make_response(INDEX, 200, INDEX_YAML))
    return transport


def test_index_url_trims_trailing_slash():
    assert index_url("https://charts.example.com/stable/") == "https://charts.example.com/stable/index.yaml"
    assert index_url(REPO) == INDEX


def test_returns_versions_in_index_order_with_duplicates(index_transport):
    versions = fetch_classic_versions(REPO, "nginx", transport=index_transport)
    assert versions == ["1.0.0", "1.10", "1.2.0", "1.0.0"]


def test_trailing_slash_repo_url(index_transport):
    assert fetch_classic_versions(REPO + "/", "redis", transport=index_transport) == ["17.0.0"]
    assert index_transport.calls[0].url == INDEX


def test_anonymous_request_sends_no_auth(index_transport):
    fetch_classic_versions(REPO, "nginx", transport=index_transport)
    assert index_transport.calls[0].auth is None


def test_credentials_become_basic_auth(index_transport):
    fetch_classic_versions(REPO, "nginx", Credentials("bob", "hunter2"), transport=index_transport)
    assert index_transport.calls[0].auth == ("bob", "hunter2")


def test_json_index_is_accepted(transport):
    transport.add(INDEX, make_response(INDEX, 200, {"entries": {"app": [{"version": "0.1.0"}, {"version": "0.2.0"}]}}))
    assert fetch_classic_versions(REPO, "app", transport=transport) == ["0.1.0", "0.2.0"]


def test_missing_chart_is_not_found(index_transport):
    with pytest.raises(ChartNotFoundError) as exc_info:
        fetch_classic_versions(REPO, "postgres", transport=index_transport)
    message = str(exc_info.value)
    assert "'postgres'" in message
    assert INDEX in message


@pytest.mark.parametrize("status", [401, 403, 404, 500])
def test_non_200_is_upstream_failure(transport, status):
    transport.add(INDEX, make_response(INDEX, status, b"nope"))
    with pytest.raises(UpstreamError) as exc_info:
        fetch_classic_versions(REPO, "nginx", transport=transport)
    assert exc_info.value.status_code == status
    assert f"HTTP {status}" in str(exc_info.value)
    assert INDEX in str(exc_info.value)


@pytest.mark.parametrize("body", ["entries: [unclosed", "- just\n- a list\n", "entries: not-a-mapping"])
def test_unparsable_index_is_upstream_failure(transport, body):
    transport.add(INDEX, make_response(INDEX, 200, body))
    with pytest.raises(UpstreamError, match="error unmarshaling repository index"):
        fetch_classic_versions(REPO, "nginx", transport=transport)


def test_empty_index_has_no_charts(transport):
    transport.add(INDEX, make_response(INDEX, 200, b""))
    with pytest.raises(ChartNotFoundError):
        fetch_classic_versions(REPO, "nginx", transport=transport)


def test_request_timeout_comes_from_settings(index_transport):
    fetch_classic_versions(REPO, "nginx", transport=index_transport)
    assert index_transport.calls[0].timeout == 5.0


def test_request_timeout_is_capped_by_deadline(index_transport):
    fetch_classic_versions(REPO, "nginx", transport=index_transport, deadline=Deadline(2.0))
    assert 0 < index_transport.calls[0].timeout <= 2.0


def test_expired_deadline_issues_no_request(index_transport):
    with pytest.raises(UpstreamError, match="deadline"):
        fetch_classic_versions(REPO, "nginx", transport=index_transport, deadline=Deadline(0))
    assert index_transport.calls == []
