"""
Maven-style version comparison.

Versions are split into numeric and qualifier items separated by ``.`` and
``-`` (and by transitions between digits and letters). Numeric items compare
numerically, well-known qualifiers compare by release maturity
(``alpha < beta < milestone < rc < snapshot < "" < sp``), unknown qualifiers
sort after known ones in lexical order. Trailing zeros and empty qualifiers
are ignored, so ``1.0`` equals ``1`` and ``1-ga`` equals ``1``.

"""

from __future__ import annotations

from functools import total_ordering

QUALIFIERS = ("alpha", "beta", "milestone", "rc", "snapshot", "", "sp")
QUALIFIER_ALIASES = {"ga": "", "final": "", "release": "", "cr": "rc"}
SHORT_QUALIFIERS = {"a": "alpha", "b": "beta", "m": "milestone"}
RELEASE_VERSION_INDEX = str(QUALIFIERS.index(""))


def _comparable_qualifier(qualifier: str) -> str:
	if qualifier in QUALIFIERS:
		return str(QUALIFIERS.index(qualifier))
	return f"{len(QUALIFIERS)}-{qualifier}"


class _IntItem:
	__slots__ = ("value",)

	def __init__(self, value: int) -> None:
		self.value = value

	def is_null(self) -> bool:
		return self.value == 0

	def compare(self, other: _Item | None) -> int:
		if other is None:
			return 0 if self.value == 0 else 1
		if isinstance(other, _IntItem):
			return (self.value > other.value) - (self.value < other.value)
		return 1

	def __repr__(self) -> str:
		return str(self.value)


class _StringItem:
	__slots__ = ("value",)

	def __init__(self, value: str, *, followed_by_digit: bool) -> None:
		if followed_by_digit and len(value) == 1:
			value = SHORT_QUALIFIERS.get(value, value)
		self.value = QUALIFIER_ALIASES.get(value, value)

	def is_null(self) -> bool:
		return _comparable_qualifier(self.value) == RELEASE_VERSION_INDEX

	def compare(self, other: _Item | None) -> int:
		left = _comparable_qualifier(self.value)
		if other is None:
			return (left > RELEASE_VERSION_INDEX) - (left < RELEASE_VERSION_INDEX)
		if isinstance(other, _StringItem):
			right = _comparable_qualifier(other.value)
			return (left > right) - (left < right)
		return -1

	def __repr__(self) -> str:
		return self.value


class _ListItem(list):
	def is_null(self) -> bool:
		return len(self) == 0

	def normalize(self) -> None:
		for index in range(len(self) - 1, -1, -1):
			item = self[index]
			if item.is_null():
				del self[index]
			elif not isinstance(item, _ListItem):
				break

	def compare(self, other: _Item | None) -> int:
		if other is None:
			return 0 if not self else self[0].compare(None)
		if isinstance(other, _IntItem):
			return -1
		if isinstance(other, _StringItem):
			return 1
		for index in range(max(len(self), len(other))):
			left = self[index] if index < len(self) else None
			right = other[index] if index < len(other) else None
			if left is None:
				result = 0 if right is None else -right.compare(None)
			else:
				result = left.compare(right)
			if result != 0:
				return result
		return 0


_Item = _IntItem | _StringItem | _ListItem


def _parse_item(text: str, *, is_digit: bool) -> _Item:
	if is_digit:
		return _IntItem(int(text))
	return _StringItem(text, followed_by_digit=False)


def _parse(version: str) -> _ListItem:
	items = _ListItem()
	current = items
	stack = [current]
	is_digit = False
	start = 0

	for index, char in enumerate(version):
		if char in ".-":
			if index == start:
				current.append(_IntItem(0))
			else:
				current.append(_parse_item(version[start:index], is_digit=is_digit))
			start = index + 1
			if char == "-":
				sublist = _ListItem()
				current.append(sublist)
				current = sublist
				stack.append(current)
		elif char.isdigit() and char.isascii():
			if not is_digit and index > start:
				current.append(_StringItem(version[start:index], followed_by_digit=True))
				start = index
				sublist = _ListItem()
				current.append(sublist)
				current = sublist
				stack.append(current)
			is_digit = True
		else:
			if is_digit and index > start:
				current.append(_parse_item(version[start:index], is_digit=True))
				start = index
				sublist = _ListItem()
				current.append(sublist)
				current = sublist
				stack.append(current)
			is_digit = False

	if len(version) > start:
		current.append(_parse_item(version[start:], is_digit=is_digit))

	while stack:
		stack.pop().normalize()
	return items


@total_ordering
class ComparableVersion:
	"""Orderable wrapper around an arbitrary version string."""

	__slots__ = ("_items", "value")

	def __init__(self, value: str) -> None:
		"""Parse ``value``; any string is accepted."""
		self.value = value
		self._items = _parse(value.lower())

	def compare(self, other: ComparableVersion) -> int:
		"""Return a negative, zero or positive number like a classic comparator."""
		return self._items.compare(other._items)

	def __eq__(self, other: object) -> bool:
		"""Versions are equal when their normalized items compare equal."""
		if not isinstance(other, ComparableVersion):
			return NotImplemented
		return self.compare(other) == 0

	def __lt__(self, other: ComparableVersion) -> bool:
		"""Order by version items."""
		return self.compare(other) < 0

	def __hash__(self) -> int:
		"""Hash the canonical item representation."""
		return hash(repr(self._items))

	def __repr__(self) -> str:
		"""Show the original value."""
		return f"ComparableVersion({self.value!r})"


def compare_versions(left: str, right: str) -> int:
	"""Compare two version strings, returning -1, 0 or 1."""
	result = ComparableVersion(left).compare(ComparableVersion(right))
	return (result > 0) - (result < 0)
