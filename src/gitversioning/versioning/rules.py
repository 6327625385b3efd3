"""Ref rules and selection of the rule matching the current git situation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import cmp_to_key
from typing import TYPE_CHECKING

from gitversioning.utils.version_compare import compare_versions

if TYPE_CHECKING:
	import re

	from gitversioning.git.situation import GitSituation

logger = logging.getLogger(__name__)


class RefType(str, Enum):
	"""Kind of git ref a version is derived from."""

	BRANCH = "branch"
	TAG = "tag"
	COMMIT = "commit"


@dataclass(frozen=True)
class RuleDescription:
	"""How to version a ref of ``type`` whose name fully matches ``pattern``; no pattern matches anything."""

	type: RefType
	pattern: re.Pattern[str] | None = None
	describe_tag_pattern: re.Pattern[str] | None = None
	version_format: str | None = None
	property_formats: dict[str, str] = field(default_factory=dict)
	update_properties: bool | None = None

	def matches(self, name: str) -> bool:
		"""Whether ``name`` fully matches the rule pattern."""
		return self.pattern is None or self.pattern.fullmatch(name) is not None


@dataclass(frozen=True)
class ResolvedVersionContext:
	"""The ref a version is derived from and the rule that matched it."""

	commit: str
	ref_type: RefType
	ref_name: str
	rule: RuleDescription


def sort_tags_ascending(tags: list[str]) -> list[str]:
	"""Sort tag names from lowest to highest version."""
	return sorted(tags, key=cmp_to_key(compare_versions))


def match_rule(
	situation: GitSituation,
	rules: list[RuleDescription],
	*,
	consider_tags_on_branches: bool = False,
	rev_rule: RuleDescription | None = None,
) -> ResolvedVersionContext | None:
	"""
	Select the first rule matching the effective ref of ``situation``.

	Tag rules only apply to a detached HEAD, unless ``consider_tags_on_branches``
	is set; the tags are tried from lowest to highest version. Branch rules only
	apply when a branch is checked out.

	Args:
	    situation: Resolved git situation
	    rules: Rules in priority order
	    consider_tags_on_branches: Also try tag rules while on a branch
	    rev_rule: Catch-all rule used for the commit when nothing else matches

	Returns:
	    The resolved context, or None if no rule matches and there is no catch-all

	"""
	sorted_tags: list[str] | None = None
	for rule in rules:
		if rule.type is RefType.TAG:
			if not (situation.is_detached or consider_tags_on_branches):
				continue
			if sorted_tags is None:
				sorted_tags = sort_tags_ascending(situation.tags)
			for tag in sorted_tags:
				if rule.matches(tag):
					return ResolvedVersionContext(situation.rev, RefType.TAG, tag, rule)
		elif rule.type is RefType.BRANCH:
			branch = situation.branch
			if branch is not None and rule.matches(branch):
				return ResolvedVersionContext(situation.rev, RefType.BRANCH, branch, rule)
		else:
			msg = f"Unexpected ref type: {rule.type}"
			raise ValueError(msg)

	if rev_rule is not None:
		logger.debug("No ref rule matched, falling back to rev rule")
		return ResolvedVersionContext(situation.rev, RefType.COMMIT, situation.rev, rev_rule)
	return None
