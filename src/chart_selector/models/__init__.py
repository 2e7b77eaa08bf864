"""Data models for Chart Selector."""

from __future__ import annotations

import enum


class RepositoryProtocol(enum.Enum):
    CLASSIC_HTTP = "classic-http"
    OCI = "oci"


class ParsePolicy(enum.Enum):
    """How the resolver treats candidates that are not semantic versions."""

    STRICT = "strict"
    SKIP_INVALID = "skip"

    @classmethod
    def from_setting(cls, value: str) -> ParsePolicy:
        for policy in cls:
            if policy.value == value.strip().lower():
                return policy
        return cls.STRICT
