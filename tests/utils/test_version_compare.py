"""Tests for Maven-style version comparison."""

from __future__ import annotations

import pytest

from gitversioning.utils.version_compare import ComparableVersion, compare_versions


@pytest.mark.unit
class TestCompareVersions:
	"""Ordering of version strings."""

	@pytest.mark.parametrize(
		("lower", "higher"),
		[
			("1", "2"),
			("1.2", "1.10"),
			("1.0.9", "1.1"),
			("1-alpha", "1-beta"),
			("1-beta", "1-rc"),
			("1-rc", "1-SNAPSHOT"),
			("1-SNAPSHOT", "1"),
			("1", "1-sp"),
			("1-alpha1", "1-alpha2"),
			("1-a1", "1-b1"),
			("v1", "v2"),
			("v1.9", "v1.10"),
			("1-foo", "1-zzz"),
			("1-sp", "1-foo"),
		],
	)
	def test_order(self, lower: str, higher: str) -> None:
		"""The lower version sorts first."""
		assert compare_versions(lower, higher) == -1
		assert compare_versions(higher, lower) == 1

	@pytest.mark.parametrize(
		("left", "right"),
		[
			("1", "1.0"),
			("1", "1.0.0"),
			("1-ga", "1"),
			("1-final", "1.0"),
			("1-release", "1"),
			("1-cr1", "1-rc1"),
			("1.0-RC1", "1-rc-1"),
		],
	)
	def test_equal(self, left: str, right: str) -> None:
		"""Trailing zeros, aliases and case do not matter."""
		assert compare_versions(left, right) == 0
		assert ComparableVersion(left) == ComparableVersion(right)
		assert hash(ComparableVersion(left)) == hash(ComparableVersion(right))

	def test_sorting(self) -> None:
		"""Versions sort naturally."""
		versions = ["1.10", "1.2", "1.2-rc1", "1.1", "2-alpha"]

		assert sorted(versions, key=ComparableVersion) == ["1.1", "1.2-rc1", "1.2", "1.10", "2-alpha"]

	def test_arbitrary_strings(self) -> None:
		"""Strings without digits still compare."""
		assert compare_versions("", "") == 0
		assert compare_versions("abc", "abd") == -1
		assert compare_versions("main", "1.0") == -1
