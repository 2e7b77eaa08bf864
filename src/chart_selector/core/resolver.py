"""Pick the winning chart version from a list of candidates."""

from __future__ import annotations

import logging

from semantic_version import Version

from chart_selector.core.errors import ChartNotFoundError, VersionParseError
from chart_selector.models import ParsePolicy
from chart_selector.utils.constraints import Constraint
from chart_selector.utils.version_compare import parse_version, sort_versions

logger = logging.getLogger(__name__)


def parse_candidates(raw_versions: list[str], policy: ParsePolicy = ParsePolicy.STRICT) -> list[Version]:
    """Parse every candidate according to *policy*.

    Under ``STRICT`` the first unparsable entry aborts with
    ``VersionParseError``, even when valid higher versions are present.
    ``SKIP_INVALID`` drops such entries with a warning instead.
    """
    parsed: list[Version] = []
    for raw in raw_versions:
        try:
            parsed.append(parse_version(raw))
        except VersionParseError:
            if policy is ParsePolicy.STRICT:
                raise
            logger.warning("Skipping candidate %r: not a semantic version", raw)
    return parsed


def resolve_version(
    raw_versions: list[str],
    constraint: str = "",
    *,
    policy: ParsePolicy = ParsePolicy.STRICT,
) -> str:
    """Return the greatest candidate satisfying *constraint*.

    With no constraint the greatest candidate wins and an empty candidate
    list raises ``ChartNotFoundError``. With a constraint, ``""`` means no
    candidate satisfied it; that is not an error.
    """
    ordered = sort_versions(parse_candidates(raw_versions, policy))

    if not constraint:
        if not ordered:
            raise ChartNotFoundError("no versions available")
        return str(ordered[-1])

    predicate = Constraint.parse(constraint)
    for v in reversed(ordered):
        if predicate.check(v):
            logger.debug("Constraint %r selected %s out of %d candidates", constraint, v, len(ordered))
            return str(v)

    logger.debug("Constraint %r matched none of %d candidates", constraint, len(ordered))
    return ""
