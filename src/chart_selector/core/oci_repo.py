"""Chart versions (tags) from repositories inside OCI registries, listed through oras."""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

import oras.container
import oras.provider
import requests

from chart_selector.config.settings import settings
from chart_selector.core.credentials import CredentialResolver, StaticCredentialResolver
from chart_selector.core.errors import InvalidInputError, UpstreamError
from chart_selector.core.transport import BoundedSession, Deadline, HttpTransport, RequestsTransport
from chart_selector.models.repo import RegistryReference
from chart_selector.utils.urls import redact_url

logger = logging.getLogger(__name__)

OCI_SCHEME = "oci://"

# Registries whose API lives on a different host than the one users type.
_API_HOSTS = {"docker.io": "registry-1.docker.io"}


def parse_registry_reference(repo_url: str) -> RegistryReference:
    """Parse ``oci://registry/repository[:tag|@digest]`` into its parts."""
    raw = repo_url[len(OCI_SCHEME):] if repo_url.startswith(OCI_SCHEME) else repo_url
    registry, sep, rest = raw.partition("/")
    if not sep or not registry or not rest:
        raise InvalidInputError(f"error parsing repository URL {repo_url!r}: missing repository")
    try:
        container = oras.container.Container(raw)
    except ValueError as exc:
        raise InvalidInputError(f"error parsing repository URL {repo_url!r}: {exc}") from exc

    repository = container.repository
    if container.namespace:
        repository = f"{container.namespace}/{repository}"
    reference = ""
    if container.digest:
        reference = container.digest
    elif container.tag and raw.endswith(f":{container.tag}"):
        reference = container.tag
    ref = RegistryReference(registry=container.registry or "", repository=repository, reference=reference)

    # Container parsing stops at the first thing it cannot read; anything it
    # skipped or defaulted makes the reference malformed.
    if str(ref) != raw or repository != repository.lower():
        raise InvalidInputError(f"error parsing repository URL {repo_url!r}: invalid reference")
    return ref


def fetch_oci_versions(
    repo_url: str,
    credential_resolver: CredentialResolver | None = None,
    *,
    transport: HttpTransport | None = None,
    deadline: Deadline | None = None,
) -> list[str]:
    """Return every tag of the repository *repo_url* points at, page by page."""
    ref = parse_registry_reference(repo_url)
    transport = transport or RequestsTransport()
    registry = _ChartRegistry(ref, BoundedSession(transport.session, deadline or Deadline()))

    creds = (credential_resolver or StaticCredentialResolver())(ref.host)
    if creds is not None and not creds.is_anonymous:
        registry.auth.set_basic_auth(creds.username, creds.password)

    host = _API_HOSTS.get(ref.registry, ref.registry)
    container = oras.container.Container(f"{host}/{ref.repository}")
    try:
        tags = registry.get_tags(container)
    except UpstreamError:
        raise
    except Exception as exc:  # oras reports registry failures as plain exceptions
        if registry.status_code is not None and registry.status_code != 200:
            raise UpstreamError(
                f"received unexpected HTTP {registry.status_code} when listing tags of {str(ref)!r}",
                status_code=registry.status_code,
            ) from exc
        raise UpstreamError(f"error listing tags of {str(ref)!r}: {exc}") from exc

    logger.debug("Listed %d tags of %s in %d page(s)", len(tags), ref, len(registry.pages))
    return [str(t) for t in tags]


class _ChartRegistry(oras.provider.Registry):
    """oras registry client for a single listing call.

    Requests go through the caller's session under the call deadline and a
    failed request surfaces at once; oras's own retry loop is not used.
    """

    def __init__(self, ref: RegistryReference, session: requests.Session):
        insecure = ref.registry.split(":")[0] in settings.plain_http_registries
        super().__init__(hostname=ref.registry, insecure=insecure, auth_backend=settings.oci_auth_backend)
        self.session = session
        self.auth.session = session
        self.ref = ref
        self.pages: list[str] = []
        self.status_code: int | None = None

    def do_request(self, url, method="GET", data=None, headers=None, json=None, stream=False):
        is_tag_page = urlsplit(url).path.endswith("/tags/list")
        if is_tag_page:
            if url in self.pages:
                raise UpstreamError(f"registry pagination loops back to {redact_url(url)!r}")
            self.pages.append(url)

        headers = dict(headers or {})
        response = self._send(method, url, headers, data, json, stream)
        if is_tag_page:
            self.status_code = response.status_code
        if response.status_code in (401, 404):
            headers, changed = self.auth.authenticate_request(response, headers)
            if changed:
                response = self._send(method, url, headers, data, json, stream)

        if is_tag_page:
            self.status_code = response.status_code
            if response.status_code == 200:
                self._check_tag_page(url, response)
        return response

    def _send(self, method, url, headers, data, json, stream) -> requests.Response:
        return self.session.request(method, url, data=data, json=json, headers=headers, stream=stream)

    def _check_tag_page(self, url: str, response: requests.Response) -> None:
        try:
            page = response.json().get("tags")
        except (ValueError, AttributeError) as exc:
            raise UpstreamError(f"error decoding tag list from {redact_url(url)!r}: {exc}") from exc
        if page is not None and not isinstance(page, list):
            raise UpstreamError(
                f"error decoding tag list from {redact_url(url)!r}: tags is a {type(page).__name__}, not a list"
            )
        logger.debug("Tag page %d of %s: %d tags", len(self.pages), self.ref, len(page or []))
