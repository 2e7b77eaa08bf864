"""HTTP transport seam used by the repository fetchers."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Protocol

import requests
from requests.structures import CaseInsensitiveDict

from chart_selector.config.settings import settings
from chart_selector.core.errors import UpstreamError
from chart_selector.utils.urls import redact_url

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    url: str
    status_code: int
    content: bytes = b""
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)


class HttpTransport(Protocol):
    """Anything that can perform a GET and hand back an ``HttpResponse``.

    ``session`` is the ``requests.Session`` registry clients drive directly.
    """

    session: requests.Session

    def get(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse: ...


class Deadline:
    """Wall-clock budget shared by every request of one resolution call."""

    def __init__(self, seconds: float | None = None):
        self.seconds = seconds
        self._expires_at = None if seconds is None else time.monotonic() + seconds

    def remaining(self) -> float | None:
        if self._expires_at is None:
            return None
        return self._expires_at - time.monotonic()

    def request_timeout(self, url: str) -> float:
        """Timeout for the next request, or ``UpstreamError`` when the budget is spent."""
        remaining = self.remaining()
        if remaining is None:
            return settings.request_timeout
        if remaining <= 0:
            raise UpstreamError(
                f"deadline of {self.seconds}s exceeded before requesting {redact_url(url)!r}"
            )
        return min(settings.request_timeout, remaining)


class RequestsTransport:
    """``HttpTransport`` backed by a pooled ``requests.Session``."""

    def __init__(self, session: requests.Session | None = None):
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = settings.user_agent

    def get(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        safe = redact_url(url)
        logger.debug("GET %s", safe)
        try:
            res = self.session.get(
                url,
                headers=headers,
                auth=auth,
                params=params,
                timeout=timeout if timeout is not None else settings.request_timeout,
                allow_redirects=True,
            )
        except requests.Timeout as exc:
            raise UpstreamError(f"request to {safe!r} timed out") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            raise UpstreamError(f"request to {safe!r} failed: {type(exc).__name__}") from exc
        logger.debug("GET %s -> %d", safe, res.status_code)
        return HttpResponse(
            url=res.url or url,
            status_code=res.status_code,
            content=res.content,
            headers=CaseInsensitiveDict(res.headers),
        )

    def close(self) -> None:
        self.session.close()


class BoundedSession(requests.Session):
    """Session sharing the pools of *base* whose every request honours *deadline*.

    Library clients that drive a session themselves get the same timeout
    and error mapping as ``RequestsTransport.get``.
    """

    def __init__(self, base: requests.Session, deadline: Deadline):
        super().__init__()
        self.headers.update(base.headers)
        self.adapters = base.adapters
        self.deadline = deadline

    def request(self, method, url, *args, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.deadline.request_timeout(url)
        safe = redact_url(url)
        logger.debug("%s %s", method, safe)
        try:
            res = super().request(method, url, *args, **kwargs)
        except requests.Timeout as exc:
            raise UpstreamError(f"request to {safe!r} timed out") from exc
        except requests.RequestException as exc:
            raise UpstreamError(f"request to {safe!r} failed: {type(exc).__name__}") from exc
        logger.debug("%s %s -> %d", method, safe, res.status_code)
        return res
