"""Tests for semver parsing and precedence."""

import pytest

from chart_selector.core.errors import VersionParseError
from chart_selector.utils.version_compare import compare_versions, parse_version, sort_versions


class TestParseVersion:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1.2.3", "1.2.3"),
            ("v1.2.3", "1.2.3"),
            ("1.2", "1.2.0"),
            ("1", "1.0.0"),
            ("1.2.3-beta.1", "1.2.3-beta.1"),
            ("1.2.3-beta.1+build.5", "1.2.3-beta.1+build.5"),
            ("0.0.0", "0.0.0"),
            ("01.2.3", "1.2.3"),
            ("1.02.0", "1.2.0"),
            ("1.0.0-01", "1.0.0-1"),
            ("1.0.0-rc.007+build.5", "1.0.0-rc.7+build.5"),
        ],
    )
    def test_accepts_semver_and_helm_shorthand(self, raw, expected):
        assert str(parse_version(raw)) == expected

    @pytest.mark.parametrize("raw", ["not-a-version", "", "latest", "1.2.3.4", "1..2", "1.2.3-", "1.-2.3"])
    def test_rejects_garbage(self, raw):
        with pytest.raises(VersionParseError) as exc_info:
            parse_version(raw)
        assert exc_info.value.raw == raw
        assert repr(raw) in str(exc_info.value)


class TestPrecedence:
    def test_semver_spec_ordering(self):
        expected = [
            "0.9.9",
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
        ]
        shuffled = [expected[i] for i in (8, 3, 0, 6, 1, 7, 2, 5, 4)]
        ordered = sort_versions([parse_version(v) for v in shuffled])
        assert [str(v) for v in ordered] == expected

    def test_numeric_components_compare_numerically(self):
        assert compare_versions(parse_version("1.10.0"), parse_version("1.9.0")) == 1
        assert compare_versions(parse_version("2.0.0"), parse_version("10.0.0")) == -1

    def test_prerelease_sorts_before_release(self):
        assert compare_versions(parse_version("2.0.0-beta"), parse_version("2.0.0")) == -1
        assert compare_versions(parse_version("2.0.0-beta"), parse_version("1.9.9")) == 1

    def test_build_metadata_is_ignored(self):
        assert compare_versions(parse_version("1.0.0+a"), parse_version("1.0.0+b")) == 0

    def test_sort_is_stable_for_equal_versions(self):
        ordered = sort_versions([parse_version(v) for v in ["1.0.0+b", "0.1.0", "1.0.0+a"]])
        assert [str(v) for v in ordered] == ["0.1.0", "1.0.0+b", "1.0.0+a"]
