"""Unit tests for version-aware ordering."""

import pytest

from artifact_catalog.lib.catalog.types import VersionRecord
from artifact_catalog.lib.catalog.versions import newest_first, version_key


class TestNewestFirst:
    """Tests for newest_first()."""

    def test_basic_order(self) -> None:
        records = [VersionRecord("1.0"), VersionRecord("2.0"), VersionRecord("1.9")]
        assert [r.number for r in newest_first(records)] == ["2.0", "1.9", "1.0"]

    def test_numeric_not_lexicographic(self) -> None:
        records = [VersionRecord("1.9.0"), VersionRecord("1.10.0"), VersionRecord("1.2.0")]
        assert [r.number for r in newest_first(records)] == ["1.10.0", "1.9.0", "1.2.0"]

    def test_prerelease_below_release(self) -> None:
        records = [VersionRecord("2.0.0-rc.1"), VersionRecord("2.0.0"), VersionRecord("1.9.9")]
        assert [r.number for r in newest_first(records)] == ["2.0.0", "2.0.0-rc.1", "1.9.9"]

    def test_repackaged_release_above_release(self) -> None:
        records = [VersionRecord("3.3.7"), VersionRecord("3.3.7-1")]
        assert [r.number for r in newest_first(records)] == ["3.3.7-1", "3.3.7"]


class TestVersionKey:
    """Tests for version_key()."""

    def test_unparseable_uses_leading_release(self) -> None:
        assert version_key("2.0.0-beta-foo-bar") > version_key("1.9")
        assert version_key("2.0.0-beta-foo-bar") < version_key("2.0.0")

    @pytest.mark.parametrize("number", ["", "latest", "master-SNAPSHOT"])
    def test_no_numbers_sorts_lowest(self, number: str) -> None:
        assert version_key(number) < version_key("0.0.1")

    def test_total_order_on_ties(self) -> None:
        assert version_key("1.0") != version_key("1.0.0")
        assert sorted(["1.0.0", "1.0"], key=version_key) == ["1.0", "1.0.0"]
