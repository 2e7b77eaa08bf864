"""Semver range constraints.

Supports the range syntax Helm users write in chart requirements:

* exact pins: ``1.2.3``, ``=1.2.3``, ``==1.2.3`` and exclusions ``!=1.2.3``
* comparisons: ``>``, ``>=``, ``<``, ``<=`` (also ``=>`` / ``=<``)
* caret ``^1.2.3`` (same major, also for ``^0.x``) and tilde ``~1.2.3`` / ``~>1.2.3``
  (same minor)
* wildcards ``1.2.x``, ``1.*``, ``1`` and ``*``; ``1.2`` means the concrete ``1.2.0``
* hyphen ranges ``1.2 - 1.4.5``
* conjunctions separated by commas or spaces, disjunctions separated by ``||``

A prerelease version only satisfies a comparator whose own version carries a
prerelease, so ``^1.0.0`` never selects ``2.0.0-beta`` or ``1.5.0-rc.1``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from semantic_version import Version

from chart_selector.core.errors import InvalidInputError, VersionParseError
from chart_selector.utils.version_compare import parse_version, version_key

_WILDCARDS = frozenset({"x", "X", "*"})

_HYPHEN_RANGE = re.compile(r"(?P<low>[^\s,|]+)\s+-\s+(?P<high>[^\s,|]+)")

_TERM = re.compile(
    r"(?P<op>!=|==|>=|<=|=>|=<|~>|[=><~^])?\s*"
    r"(?P<version>[vV]?[0-9xX*]+(?:\.[0-9xX*]+){0,2}"
    r"(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?)"
)

_SEPARATOR = re.compile(r"\s*,?\s*")


@dataclass(frozen=True)
class _Bound:
    version: Version
    inclusive: bool


@dataclass(frozen=True)
class _Term:
    """One comparator, normalised to an interval (optionally negated)."""

    text: str
    lower: _Bound | None = None
    upper: _Bound | None = None
    negate: bool = False
    prerelease: bool = False

    def check(self, v: Version) -> bool:
        if not self.negate and v.prerelease and not self.prerelease:
            return False
        inside = True
        key = version_key(v)
        if self.lower is not None:
            low = version_key(self.lower.version)
            inside = key >= low if self.lower.inclusive else key > low
        if inside and self.upper is not None:
            high = version_key(self.upper.version)
            inside = key <= high if self.upper.inclusive else key < high
        return not inside if self.negate else inside


class Constraint:
    """A parsed range expression; ``check`` tells whether a version satisfies it."""

    def __init__(self, text: str, groups: list[list[_Term]]):
        self.text = text
        self._groups = groups

    @classmethod
    def parse(cls, text: str) -> Constraint:
        """Parse *text*, raising ``InvalidInputError`` on malformed syntax."""
        if not text or not text.strip():
            raise InvalidInputError(f"error parsing constraint {text!r}: empty constraint")
        groups = []
        for alternative in text.split("||"):
            groups.append(_parse_group(text, alternative))
        return cls(text, groups)

    def check(self, v: Version) -> bool:
        return any(all(term.check(v) for term in group) for group in self._groups)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Constraint({self.text!r})"


def _parse_group(text: str, group: str) -> list[_Term]:
    group = _HYPHEN_RANGE.sub(lambda m: f">={m['low']}, <={m['high']}", group.strip())
    if not group:
        raise InvalidInputError(f"error parsing constraint {text!r}: empty range")

    terms: list[_Term] = []
    pos = 0
    while pos < len(group):
        m = _TERM.match(group, pos)
        if m is None:
            raise InvalidInputError(
                f"error parsing constraint {text!r}: unexpected input at {group[pos:]!r}"
            )
        terms.append(_build_term(text, m["op"] or "", m["version"]))
        pos = _SEPARATOR.match(group, m.end()).end()
        if pos == m.end() and pos < len(group):
            raise InvalidInputError(
                f"error parsing constraint {text!r}: expected separator at {group[pos:]!r}"
            )
    return terms


def _split_partial(text: str, raw: str) -> tuple[list[int | None], str]:
    """Split ``1.2-rc.1`` into ([1, 2, 0], "-rc.1") and ``1.x`` into ([1, None, None], "").

    Only a missing minor or an ``x``/``*`` component is a wildcard: ``1``
    stands for ``1.x``, while ``1.2`` is the concrete ``1.2.0``.
    """
    raw = raw.lstrip("vV")
    suffix = ""
    for marker in ("-", "+"):
        idx = raw.find(marker)
        if idx != -1:
            raw, suffix = raw[:idx], raw[idx:] + suffix
    parts: list[int | None] = []
    for piece in raw.split("."):
        if piece in _WILDCARDS:
            parts.append(None)
        elif piece.isdigit():
            if parts and parts[-1] is None:
                raise InvalidInputError(
                    f"error parsing constraint {text!r}: number after wildcard in {raw!r}"
                )
            parts.append(int(piece))
        else:
            raise InvalidInputError(f"error parsing constraint {text!r}: invalid version {raw!r}")
    if len(parts) == 2 and parts[1] is not None:
        parts.append(0)
    while len(parts) < 3:
        parts.append(None)
    if suffix and None in parts:
        raise InvalidInputError(
            f"error parsing constraint {text!r}: prerelease on partial version {raw!r}"
        )
    return parts, suffix


def _build_term(text: str, op: str, raw: str) -> _Term:
    parts, suffix = _split_partial(text, raw)
    major, minor, patch = parts
    # Number of leading concrete components: 0 for "*", 1 for "1.x", 3 for "1.2".
    precision = next((i for i, p in enumerate(parts) if p is None), 3)
    term_text = f"{op}{raw}"

    try:
        floor = parse_version(f"{major or 0}.{minor or 0}.{patch or 0}{suffix}")
    except VersionParseError as exc:
        raise InvalidInputError(f"error parsing constraint {text!r}: {exc}") from exc
    prerelease = bool(floor.prerelease)

    def _next(level: int) -> Version:
        if level <= 1:
            return Version(f"{(major or 0) + 1}.0.0")
        return Version(f"{major}.{minor + 1}.0")

    def _term(lower=None, upper=None, negate=False) -> _Term:
        return _Term(term_text, lower, upper, negate, prerelease)

    if op in ("", "=", "==", "!="):
        negate = op == "!="
        if precision == 0:
            return _term(negate=negate)
        if precision == 3:
            return _term(_Bound(floor, True), _Bound(floor, True), negate)
        return _term(_Bound(floor, True), _Bound(_next(precision), False), negate)

    if op in (">=", "=>"):
        return _term(lower=_Bound(floor, True))

    if op == ">":
        return _term(lower=_Bound(floor, False))

    if op in ("<", "<=", "=<"):
        if precision == 3:
            return _term(upper=_Bound(floor, op != "<"))
        if precision == 0:
            if op == "<":
                raise InvalidInputError(f"error parsing constraint {text!r}: {term_text!r} matches nothing")
            return _term()
        # A wildcard upper bound covers the whole wildcard range.
        return _term(upper=_Bound(_next(precision), False))

    if op in ("~", "~>"):
        if precision == 0:
            return _term()
        if precision == 3 and not (major or minor or patch):
            return _term(lower=_Bound(floor, True))
        return _term(_Bound(floor, True), _Bound(_next(1 if precision == 1 else 2), False))

    # op == "^": same major, whatever the major is.
    return _term(_Bound(floor, True), _Bound(_next(1), False))
