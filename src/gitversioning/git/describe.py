"""Find the nearest tag reachable along first parents, like ``git describe``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gitversioning.errors import ShallowRepositoryDescribeError
from gitversioning.git.ref_store import NO_COMMIT

if TYPE_CHECKING:
	import re

	from gitversioning.git.ref_store import GitRefStore

logger = logging.getLogger(__name__)

ROOT_TAG = "root"


@dataclass(frozen=True)
class GitDescription:
	"""Nearest matching tag of a commit and the number of commits in between."""

	commit: str
	tag: str
	distance: int

	@property
	def short_commit(self) -> str:
		"""First seven characters of the described commit."""
		return self.commit[:7]

	def __str__(self) -> str:
		"""Render as ``<tag>-<distance>-g<short commit>``."""
		return f"{self.tag}-{self.distance}-g{self.short_commit}"


def describe(
	store: GitRefStore,
	commit_id: str | None,
	tag_pattern: re.Pattern[str],
	tag_map: dict[str, list[str]] | None = None,
) -> GitDescription:
	"""
	Describe ``commit_id`` by the nearest first-parent ancestor tag matching ``tag_pattern``.

	Args:
	    store: Repository to read from
	    commit_id: Commit to start from, None for an empty repository
	    tag_pattern: Tag names must fully match this pattern
	    tag_map: Commit to ordered tag names, read from ``store`` when omitted

	Returns:
	    GitDescription: The matching tag and its distance, or the ``root`` tag
	    with the number of walked commits when no tag matches

	Raises:
	    ShallowRepositoryDescribeError: If no tag matches in a shallow repository

	"""
	if commit_id is None:
		return GitDescription(NO_COMMIT, ROOT_TAG, 0)

	if tag_map is None:
		tag_map = store.reverse_tag_map()

	distance = 0
	for rev in store.walk_first_parent(commit_id):
		for tag in tag_map.get(rev, ()):
			if tag_pattern.fullmatch(tag):
				logger.debug("Found tag %s at distance %d from %s", tag, distance, commit_id)
				return GitDescription(commit_id, tag, distance)
		distance += 1

	if store.is_shallow():
		msg = f"Couldn't find a tag matching '{tag_pattern.pattern}' in shallow git repository"
		raise ShallowRepositoryDescribeError(msg)
	return GitDescription(commit_id, ROOT_TAG, distance)
