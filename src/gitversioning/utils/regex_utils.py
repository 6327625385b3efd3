"""Regular expression helpers shared by rule matching and placeholder generation."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# Java-style named group, e.g. "(?<version>.*)"; lookbehinds start with "=" or "!".
_JAVA_GROUP_PATTERN = re.compile(r"(?<!\\)\(\?<(?P<name>[a-zA-Z][a-zA-Z0-9_]*)>")

MATCH_ALL = re.compile(r".*")


def compile_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
	"""
	Compile a rule pattern.

	Both ``(?P<name>...)`` and ``(?<name>...)`` named groups are accepted.

	Args:
	    pattern: Pattern text or an already compiled pattern

	Returns:
	    The compiled pattern

	Raises:
	    re.error: If the pattern is not a valid regular expression

	"""
	if isinstance(pattern, re.Pattern):
		return pattern
	return re.compile(_JAVA_GROUP_PATTERN.sub(r"(?P<\g<name>>", pattern))


def pattern_groups(pattern: re.Pattern[str]) -> list[str]:
	"""Return group keys of ``pattern``: positional indexes followed by group names."""
	groups = [str(index) for index in range(1, pattern.groups + 1)]
	groups.extend(name for name in pattern.groupindex if name not in groups)
	return groups


def pattern_group_values(pattern: re.Pattern[str], text: str) -> dict[str, str]:
	"""
	Map group index and group name to the value matched in ``text``.

	The first occurrence found by searching ``text`` is used. Groups that did
	not participate in the match are left out.

	Args:
	    pattern: Compiled pattern
	    text: Text to search

	Returns:
	    Mapping of group key to matched value, empty when nothing matches

	"""
	result: dict[str, str] = {}
	match = pattern.search(text)
	if match is None:
		return result
	for index in range(1, pattern.groups + 1):
		value = match.group(index)
		if value is not None:
			result[str(index)] = value
	for name in pattern.groupindex:
		value = match.group(name)
		if value is not None:
			result[name] = value
	return result
