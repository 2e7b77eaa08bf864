"""Semver parsing and ordering utilities."""

from __future__ import annotations

import re
from typing import Any

from semantic_version import Version

from chart_selector.core.errors import VersionParseError

# Same leniency as Helm: optional "v", minor and patch may be omitted,
# leading zeros are tolerated.
_LOOSE_SEMVER = re.compile(
    r"^v?(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+))?"
    r"(?:\.(?P<patch>\d+))?"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def _strip_zeros(identifier: str) -> str:
    return str(int(identifier)) if identifier.isdigit() else identifier


def parse_version(v: str) -> Version:
    """Parse a version string into a normalised ``semantic_version.Version``.

    Raises:
        VersionParseError: if *v* is not a semantic version.
    """
    m = _LOOSE_SEMVER.match(v.strip())
    if m is None:
        raise VersionParseError(f"error parsing version {v!r}: invalid semantic version", raw=v)
    normalised = f"{int(m['major'])}.{int(m['minor'] or 0)}.{int(m['patch'] or 0)}"
    if m["prerelease"]:
        normalised += "-" + ".".join(_strip_zeros(p) for p in m["prerelease"].split("."))
    if m["build"]:
        normalised += f"+{m['build']}"
    try:
        return Version(normalised)
    except ValueError as exc:
        raise VersionParseError(f"error parsing version {v!r}: {exc}", raw=v) from exc


def version_key(v: Version) -> Any:
    """Sort key implementing SemVer precedence (build metadata ignored)."""
    return v.precedence_key[:4]


def compare_versions(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 as *a* sorts before, equal to or after *b*."""
    ka, kb = version_key(a), version_key(b)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def sort_versions(versions: list[Version]) -> list[Version]:
    """Stable ascending sort; equal versions keep their input order."""
    return sorted(versions, key=version_key)
