"""Extract semantic version components from arbitrary strings."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Lazy prefix: the first digit run starts the version, e.g. "v1.2.3-rc1" -> 1.2.3 / rc1.
VERSION_PATTERN = re.compile(
	r".*?(?P<version>(?P<core>(?P<major>\d+)(?:\.(?P<minor>\d+)(?:\.(?P<patch>\d+))?)?)(?:-(?P<label>.*))?)|"
)

_SIGNED_INTEGER = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class VersionMatch:
	"""
	Version components found in a string.

	Numeric components default to ``"0"`` and the label to ``""``. ``version``
	and ``core`` are None when the string contains no digits at all.

	"""

	version: str | None = None
	core: str | None = None
	major: str = "0"
	minor: str = "0"
	patch: str = "0"
	label: str = ""


def match_version(text: str) -> VersionMatch:
	"""Return the version components of ``text``; never fails."""
	match = VERSION_PATTERN.search(text)
	if match is None or match.group("version") is None:
		return VersionMatch()
	return VersionMatch(
		version=match.group("version"),
		core=match.group("core"),
		major=match.group("major") or "0",
		minor=match.group("minor") or "0",
		patch=match.group("patch") or "0",
		label=match.group("label") or "",
	)


def increase(number: str, increment: int) -> str:
	"""
	Add ``increment`` to a numeric string, keeping its zero padding.

	An empty string counts as ``"0"``; non-numeric content counts as zero but
	its length is still used as the minimum width.

	Examples:
	    >>> increase("007", 1)
	    '008'
	    >>> increase("9", 1)
	    '10'
	    >>> increase("", 1)
	    '1'

	"""
	width = len(number) or 1
	value = int(number) if _SIGNED_INTEGER.fullmatch(number) else 0
	return f"{value + increment:0{width}d}"
