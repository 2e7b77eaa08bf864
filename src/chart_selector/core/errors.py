"""Error taxonomy for chart version selection."""

from __future__ import annotations

import copy


class ChartSelectorError(Exception):
    """Base class for every failure raised by chart_selector."""

    def with_context(self, context: str) -> ChartSelectorError:
        """Return a copy of this error, same type and attributes, prefixed with *context*."""
        wrapped = copy.copy(self)
        wrapped.args = (f"{context}: {self}",)
        return wrapped


class InvalidInputError(ChartSelectorError):
    """Unsupported repository URL, bad chart name or malformed constraint."""


class ChartNotFoundError(ChartSelectorError):
    """The chart or any version of it could not be found."""


class UpstreamError(ChartSelectorError):
    """A repository or registry request failed or returned garbage."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class VersionParseError(ChartSelectorError):
    """A candidate version string is not a semantic version."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class DependencyUpdateError(ChartSelectorError):
    """``helm dependency update`` failed."""
