"""Placeholder substitution for format strings."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from collections.abc import Mapping

PLACEHOLDER_PATTERN = re.compile(r"\$\{(?P<key>[^}:]+)(?::(?P<modifier>[-+])(?P<value>[^}]*))?\}")


def substitute_text(text: str, replacements: Mapping[str, str]) -> str:
	"""
	Replace placeholders in ``text``.

	Supported forms:
	    ``${key}``            value of ``key``
	    ``${key:-fallback}``  value of ``key``, or ``fallback`` if it is missing
	    ``${key:+override}``  ``override`` if ``key`` is present

	Replacement values are inserted literally and never re-scanned.
	Placeholders without a value are removed.

	Args:
	    text: Format string
	    replacements: Placeholder values by key

	Returns:
	    The substituted text

	"""

	def replace(match: re.Match[str]) -> str:
		replacement = replacements.get(match.group("key"))
		modifier = match.group("modifier")
		if modifier == "-" and replacement is None:
			replacement = match.group("value")
		elif modifier == "+" and replacement is not None:
			replacement = match.group("value")
		return replacement if replacement is not None else ""

	return PLACEHOLDER_PATTERN.sub(replace, text)


def slugify(value: str) -> str:
	"""Replace path separators so ``value`` can be used in file and artifact names."""
	return value.replace("/", "-")
