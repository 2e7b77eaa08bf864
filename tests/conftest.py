"""Shared fixtures: an in-memory HTTP transport so no test touches the network."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import parse_qsl, urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from chart_selector.config.settings import settings
from chart_selector.core.transport import HttpResponse


def make_response(
    url: str,
    status_code: int = 200,
    body: Any = b"",
    headers: dict[str, str] | None = None,
) -> HttpResponse:
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    return HttpResponse(
        url=url,
        status_code=status_code,
        content=body,
        headers=CaseInsensitiveDict(headers or {}),
    )


@dataclass
class Call:
    url: str
    headers: dict[str, str]
    auth: tuple[str, str] | None
    params: dict[str, Any] | None
    timeout: float | None


class _RoutingAdapter(BaseAdapter):
    """Answers requests sent through ``FakeTransport.session`` from its routes."""

    def __init__(self, transport: FakeTransport):
        super().__init__()
        self.transport = transport

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        query = urlsplit(request.url).query
        call = Call(
            url=request.url,
            headers=dict(request.headers),
            auth=None,
            params=dict(parse_qsl(query)) or None,
            timeout=timeout,
        )
        res = self.transport.dispatch(call)
        response = requests.Response()
        response.status_code = res.status_code
        response.reason = "OK" if res.status_code < 400 else "Error"
        response._content = res.content
        response.headers = CaseInsensitiveDict(res.headers)
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


@dataclass
class FakeTransport:
    """Routes requests by URL (query string excluded) to canned responses or handlers.

    Plain GETs arrive through ``get``; registry clients use ``session``.
    """

    routes: dict[str, Any] = field(default_factory=dict)
    calls: list[Call] = field(default_factory=list)
    session: requests.Session = field(default_factory=requests.Session)

    def __post_init__(self):
        adapter = _RoutingAdapter(self)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def add(self, url: str, response: HttpResponse | Callable[[Call], HttpResponse]) -> None:
        self.routes[url] = response

    def get(self, url, *, headers=None, auth=None, params=None, timeout=None) -> HttpResponse:
        return self.dispatch(Call(url=url, headers=dict(headers or {}), auth=auth, params=params, timeout=timeout))

    def dispatch(self, call: Call) -> HttpResponse:
        self.calls.append(call)
        route = self.routes.get(call.url.split("?", 1)[0])
        if route is None:
            return make_response(call.url, 404, b"not found")
        if callable(route):
            return route(call)
        return route


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from the developer's real helm configuration."""
    monkeypatch.setattr(settings, "helm_config_dir", tmp_path / "helm")
    monkeypatch.setattr(settings, "request_timeout", 5.0)
    monkeypatch.setattr(settings, "oci_auth_backend", "token")
    monkeypatch.setattr(settings, "parse_policy", "strict")
    monkeypatch.setattr(settings, "plain_http_registries", ["localhost", "127.0.0.1"])
