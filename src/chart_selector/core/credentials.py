"""Per-host credential resolution for chart repositories and OCI registries."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Protocol

import yaml

from chart_selector.config.settings import settings
from chart_selector.models.repo import Credentials

logger = logging.getLogger(__name__)


class CredentialResolver(Protocol):
    """Return credentials for a registry host, or ``None`` for anonymous access."""

    def __call__(self, host: str) -> Credentials | None: ...


class StaticCredentialResolver:
    """Hand the same credentials (possibly none) to every host."""

    def __init__(self, credentials: Credentials | None = None):
        self.credentials = credentials

    def __call__(self, host: str) -> Credentials | None:
        return self.credentials


class HelmRegistryConfigResolver:
    """Look up credentials stored by ``helm registry login``.

    Helm keeps them in a docker-style ``config.json`` whose ``auths`` map is
    keyed by registry host, each entry carrying a base64 ``user:password``.
    """

    def __init__(self, config_file: Path | None = None):
        self.config_file = config_file or settings.registry_config_file
        self._auths: dict[str, dict] | None = None

    def _load(self) -> dict[str, dict]:
        if self._auths is not None:
            return self._auths
        self._auths = {}
        if not self.config_file.exists():
            return self._auths
        try:
            data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.debug("Failed to parse registry config %s", self.config_file, exc_info=True)
            return self._auths
        auths = data.get("auths") if isinstance(data, dict) else None
        if isinstance(auths, dict):
            self._auths = auths
        else:
            logger.debug("Ignoring registry config %s without an auths map", self.config_file)
        return self._auths

    def __call__(self, host: str) -> Credentials | None:
        auths = self._load()
        entry = auths.get(host) or auths.get(f"https://{host}")
        if not isinstance(entry, dict) or not entry:
            return None
        if entry.get("username"):
            return Credentials(entry["username"], entry.get("password", ""))
        encoded = entry.get("auth", "")
        if not encoded:
            return None
        try:
            username, _, password = base64.b64decode(encoded).decode("utf-8").partition(":")
        except (binascii.Error, UnicodeDecodeError):
            logger.debug("Malformed auth entry for registry %s", host)
            return None
        return Credentials(username, password)


def repository_credentials(repo_url: str, repos_file: Path | None = None) -> Credentials | None:
    """Find credentials for a classic repository in Helm's repositories.yaml."""
    repos_file = repos_file or settings.repositories_file
    if not repos_file.exists():
        return None
    try:
        data = yaml.safe_load(repos_file.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        logger.debug("Failed to parse repositories.yaml", exc_info=True)
        return None
    if not isinstance(data, dict) or not isinstance(data.get("repositories"), list):
        return None

    wanted = repo_url.rstrip("/")
    for repo in data["repositories"]:
        if not isinstance(repo, dict) or (repo.get("url") or "").rstrip("/") != wanted:
            continue
        if repo.get("username") or repo.get("password"):
            return Credentials(repo.get("username", ""), repo.get("password", ""))
        return None
    return None
