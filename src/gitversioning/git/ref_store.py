"""Read-only access to repository primitives using pygit2."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from pygit2 import Oid, Tag
from pygit2 import GitError as Pygit2GitError
from pygit2.enums import FileStatus, SortMode
from pygit2.repository import Repository

from gitversioning.errors import GitError
from gitversioning.git.tag_order import TagRef, group_tags_by_commit

if TYPE_CHECKING:
	from collections.abc import Iterator

logger = logging.getLogger(__name__)

NO_COMMIT = "0" * 40
EPOCH = datetime.fromtimestamp(0, tz=UTC)

TAG_REF_PREFIX = "refs/tags/"
BRANCH_REF_PREFIX = "refs/heads/"


class GitRefStore:
	"""Repository reads needed to derive a version."""

	def __init__(self, repo: Repository) -> None:
		"""Wrap an already opened repository."""
		self.repo = repo

	@classmethod
	def open(cls, path: Path | str | None = None) -> GitRefStore:
		"""
		Open the repository containing ``path``.

		Args:
		    path: Directory inside the repository, defaults to the working directory

		Returns:
		    GitRefStore: Store backed by the opened repository

		Raises:
		    GitError: If ``path`` is not inside a git repository

		"""
		repo_path = Path(path) if path is not None else Path.cwd()
		try:
			return cls(Repository(str(repo_path)))
		except (Pygit2GitError, KeyError) as e:
			msg = f"Not a git repository: {repo_path}"
			logger.exception(msg)
			raise GitError(msg) from e

	@property
	def root_directory(self) -> Path:
		"""Working tree root, or the git directory of a bare repository."""
		return Path(self.repo.workdir or self.repo.path)

	def head_commit(self) -> str | None:
		"""Return the HEAD commit id, or None for an empty repository."""
		if self.repo.head_is_unborn:
			return None
		return str(self.repo.head.target)

	def branch(self) -> str | None:
		"""Return the checked out branch name, or None when HEAD is detached."""
		if self.repo.head_is_detached:
			return None
		if self.repo.head_is_unborn:
			target = self.repo.references["HEAD"].target
			return str(target).removeprefix(BRANCH_REF_PREFIX)
		return self.repo.head.shorthand

	def commit_timestamp(self, commit_id: str) -> datetime:
		"""Return the committer time of ``commit_id`` in UTC."""
		try:
			commit = self.repo[Oid(hex=commit_id)]
		except (KeyError, ValueError) as e:
			msg = f"Unknown commit: {commit_id}"
			raise GitError(msg) from e
		return datetime.fromtimestamp(commit.commit_time, tz=UTC)

	def tag_refs(self) -> list[TagRef]:
		"""Read all tags, peeling annotated tags to the object they finally point at."""
		tags = []
		for ref_name in self.repo.references:
			if not ref_name.startswith(TAG_REF_PREFIX):
				continue
			ref = self.repo.references[ref_name].resolve()
			target = self.repo[ref.target]
			annotated = isinstance(target, Tag)
			tagger_time = None
			if annotated and target.tagger is not None:
				tagger_time = target.tagger.time
			tags.append(
				TagRef(
					name=ref_name.removeprefix(TAG_REF_PREFIX),
					commit=str(ref.peel().id),
					annotated=annotated,
					tagger_time=tagger_time,
				)
			)
		return tags

	def reverse_tag_map(self) -> dict[str, list[str]]:
		"""Map commit ids to the names of the tags pointing at them, in describe order."""
		return group_tags_by_commit(self.tag_refs())

	def tags_point_at(self, commit_id: str) -> list[str]:
		"""Return the names of the tags pointing at ``commit_id``."""
		return self.reverse_tag_map().get(commit_id, [])

	def walk_first_parent(self, commit_id: str) -> Iterator[str]:
		"""Yield ``commit_id`` and its first-parent ancestors, nearest first."""
		walker = self.repo.walk(Oid(hex=commit_id), SortMode.NONE)
		walker.simplify_first_parent()
		for commit in walker:
			yield str(commit.id)

	def is_clean(self) -> bool:
		"""Whether the working tree has no modified, staged or untracked files."""
		try:
			status = self.repo.status()
		except Pygit2GitError as e:
			msg = f"Failed to read working tree status of {self.root_directory}"
			logger.exception(msg)
			raise GitError(msg) from e
		return all(flags in (FileStatus.CURRENT, FileStatus.IGNORED) for flags in status.values())

	def is_shallow(self) -> bool:
		"""Whether the repository is a shallow clone."""
		return bool(self.repo.is_shallow)
