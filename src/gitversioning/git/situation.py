"""Snapshot of the repository state a version is derived from."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gitversioning.errors import InvalidRefFormatError
from gitversioning.git.describe import GitDescription, describe
from gitversioning.git.ref_store import BRANCH_REF_PREFIX, EPOCH, NO_COMMIT, TAG_REF_PREFIX
from gitversioning.utils.lazy import Lazy
from gitversioning.utils.regex_utils import MATCH_ALL

if TYPE_CHECKING:
	import re
	from datetime import datetime
	from pathlib import Path

	from gitversioning.git.ref_store import GitRefStore

logger = logging.getLogger(__name__)

REF_PREFIX = "refs/"


def normalize_branch(branch: str) -> str:
	"""
	Strip ``refs/heads/`` or, failing that, ``refs/`` from a branch value.

	Raises:
	    InvalidRefFormatError: If ``branch`` is a tag ref

	"""
	if branch.startswith(TAG_REF_PREFIX):
		msg = f"Invalid branch ref {branch}"
		raise InvalidRefFormatError(msg)
	if branch.startswith(BRANCH_REF_PREFIX):
		return branch.removeprefix(BRANCH_REF_PREFIX)
	# other refs e.g. GitHub pull requests refs/pull/1000/head
	return branch.removeprefix(REF_PREFIX)


def normalize_tag(tag: str) -> str:
	"""
	Strip ``refs/tags/`` from a tag value.

	Raises:
	    InvalidRefFormatError: If ``tag`` is a ref outside ``refs/tags/``

	"""
	if tag.startswith(REF_PREFIX) and not tag.startswith(TAG_REF_PREFIX):
		msg = f"Invalid tag ref {tag}"
		raise InvalidRefFormatError(msg)
	return tag.removeprefix(TAG_REF_PREFIX)


class GitSituation:
	"""
	Branch, tags, cleanliness and description of HEAD.

	Expensive values are read lazily and cached. Branch and tags may be
	overridden before rendering; assigning ``describe_tag_pattern`` discards the
	cached description.

	"""

	def __init__(self, store: GitRefStore) -> None:
		"""Capture HEAD of the repository behind ``store``."""
		self.store = store
		self.root_directory: Path = store.root_directory

		head = store.head_commit()
		self.has_commit = head is not None
		self.rev: str = head if head is not None else NO_COMMIT

		self._timestamp: Lazy[datetime] = Lazy(self._read_timestamp)
		self._branch: str | None = store.branch()
		self._tag_map: Lazy[dict[str, list[str]]] = Lazy(store.reverse_tag_map)
		self._tags: Lazy[list[str]] = Lazy(self._read_tags)
		self._clean: Lazy[bool] = Lazy(store.is_clean)
		self._describe_tag_pattern: re.Pattern[str] = MATCH_ALL
		self._description: Lazy[GitDescription] = Lazy(self._describe)

	# ----- repository reads -----

	def _read_timestamp(self) -> datetime:
		if not self.has_commit:
			return EPOCH
		return self.store.commit_timestamp(self.rev)

	def _read_tags(self) -> list[str]:
		if not self.has_commit:
			return []
		return list(self._tag_map.get().get(self.rev, []))

	def _describe(self) -> GitDescription:
		head = self.rev if self.has_commit else None
		return describe(self.store, head, self._describe_tag_pattern, self._tag_map.get())

	# ----- accessors -----

	@property
	def timestamp(self) -> datetime:
		"""Commit time of HEAD in UTC, the epoch for an empty repository."""
		return self._timestamp.get()

	@property
	def branch(self) -> str | None:
		"""Effective branch name, None when detached."""
		return self._branch

	@property
	def is_detached(self) -> bool:
		"""Whether no branch is checked out."""
		return self._branch is None

	@property
	def tags(self) -> list[str]:
		"""Effective tags pointing at HEAD."""
		return self._tags.get()

	@property
	def is_clean(self) -> bool:
		"""Whether the working tree has no changes."""
		return self._clean.get()

	@property
	def describe_tag_pattern(self) -> re.Pattern[str]:
		"""Pattern tags must match to be used for the description."""
		return self._describe_tag_pattern

	@describe_tag_pattern.setter
	def describe_tag_pattern(self, pattern: re.Pattern[str]) -> None:
		self._describe_tag_pattern = pattern
		self._description.reset()

	@property
	def description(self) -> GitDescription:
		"""Nearest matching tag of HEAD."""
		return self._description.get()

	# ----- overrides -----

	def set_branch(self, branch: str | None) -> None:
		"""Override the branch; None detaches."""
		logger.debug("Override git branch with %s", branch)
		self._branch = normalize_branch(branch) if branch is not None else None

	def set_tags(self, tags: list[str]) -> None:
		"""Replace the tags pointing at HEAD."""
		logger.debug("Override git tags with %s", tags)
		self._tags = Lazy.of([normalize_tag(tag) for tag in tags])

	def add_tag(self, tag: str) -> None:
		"""Add a tag to the ones pointing at HEAD, keeping the existing ones lazy."""
		logger.debug("Add git tag %s", tag)
		final_tag = normalize_tag(tag)
		current_tags = self._tags
		self._tags = Lazy(lambda: [*current_tags.get(), final_tag])
