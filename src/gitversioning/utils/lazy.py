"""Compute-once value holder with explicit invalidation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
	from collections.abc import Callable

T = TypeVar("T")

_UNSET = object()


class Lazy(Generic[T]):
	"""
	Holds either an unevaluated factory or its cached result.

	The factory runs on the first ``get()``. The cached value is kept until
	``reset()`` is called; nothing refreshes it implicitly.

	"""

	__slots__ = ("_factory", "_value")

	def __init__(self, factory: Callable[[], T]) -> None:
		"""Create a holder around ``factory``."""
		self._factory = factory
		self._value: object = _UNSET

	@classmethod
	def of(cls, value: T) -> Lazy[T]:
		"""Create an already evaluated holder."""
		holder = cls(lambda: value)
		holder._value = value
		return holder

	@property
	def evaluated(self) -> bool:
		"""Whether the factory has already run."""
		return self._value is not _UNSET

	def get(self) -> T:
		"""Return the cached value, computing it on first access."""
		if self._value is _UNSET:
			self._value = self._factory()
		return self._value  # type: ignore[return-value]

	def reset(self, factory: Callable[[], T] | None = None) -> None:
		"""Drop the cached value, optionally swapping in a new factory."""
		if factory is not None:
			self._factory = factory
		self._value = _UNSET
