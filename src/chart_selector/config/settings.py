"""Application configuration and defaults."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path


def _default_helm_config_dir() -> Path:
    """Return the Helm config directory, matching helm's own resolution order."""
    config_home = os.environ.get("HELM_CONFIG_HOME", "")
    if config_home:
        return Path(config_home)
    system = platform.system()
    if system == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "helm"
        return Path.home() / "AppData" / "Roaming" / "helm"
    if system == "Darwin":
        xdg = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg:
            return Path(xdg) / "helm"
        return Path.home() / "Library" / "Preferences" / "helm"
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / "helm"
    return Path.home() / ".config" / "helm"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    helm_config_dir: Path = field(default_factory=_default_helm_config_dir)
    request_timeout: float = field(default_factory=lambda: _env_float("CSEL_REQUEST_TIMEOUT", 30.0))
    oci_auth_backend: str = field(default_factory=lambda: os.environ.get("CSEL_OCI_AUTH_BACKEND", "token"))  # oras "token" or "basic"
    parse_policy: str = field(default_factory=lambda: os.environ.get("CSEL_PARSE_POLICY", "strict"))  # "strict" or "skip"
    plain_http_registries: list[str] = field(
        default_factory=lambda: _env_list("CSEL_PLAIN_HTTP_REGISTRIES", "localhost,127.0.0.1")
    )
    helm_binary: str = field(default_factory=lambda: os.environ.get("CSEL_HELM_BINARY", "helm"))
    default_output: str = "table"
    user_agent: str = "chart-selector"

    @property
    def repositories_file(self) -> Path:
        return self.helm_config_dir / "repositories.yaml"

    @property
    def registry_config_file(self) -> Path:
        return self.helm_config_dir / "registry" / "config.json"


# Global singleton
settings = Settings()
