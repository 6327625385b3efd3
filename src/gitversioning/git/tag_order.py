"""Deterministic ordering of tags pointing at the same commit."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key

from gitversioning.utils.version_compare import compare_versions


@dataclass(frozen=True)
class TagRef:
	"""A tag reference as read from the repository."""

	name: str
	commit: str
	annotated: bool = False
	tagger_time: int | None = None


def compare_tags(tag1: TagRef, tag2: TagRef) -> int:
	"""
	Compare two tags for describe purposes; lower sorts first.

	Annotated tags sort before lightweight tags, the most recently tagged
	annotated tag first. Otherwise the higher version sorts first, and the tag
	name decides what is left.

	"""
	if tag1.annotated and not tag2.annotated:
		return -1
	if tag2.annotated and not tag1.annotated:
		return 1
	if tag1.annotated:
		time1 = tag1.tagger_time or 0
		time2 = tag2.tagger_time or 0
		if time1 != time2:
			return -1 if time1 > time2 else 1
	result = -compare_versions(tag1.name, tag2.name)
	if result != 0:
		return result
	return (tag1.name > tag2.name) - (tag1.name < tag2.name)


def order_tags(tags: list[TagRef]) -> list[TagRef]:
	"""Return ``tags`` in describe order."""
	return sorted(tags, key=cmp_to_key(compare_tags))


def group_tags_by_commit(tags: list[TagRef]) -> dict[str, list[str]]:
	"""Map each commit to the names of the tags pointing at it, in describe order."""
	grouped: dict[str, list[TagRef]] = {}
	for tag in tags:
		grouped.setdefault(tag.commit, []).append(tag)
	return {commit: [tag.name for tag in order_tags(commit_tags)] for commit, commit_tags in grouped.items()}
