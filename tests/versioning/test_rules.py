"""Tests for rule selection."""

from __future__ import annotations

import pytest

from gitversioning.utils.regex_utils import compile_pattern
from gitversioning.versioning.rules import RefType, RuleDescription, match_rule, sort_tags_ascending
from tests.base import HEAD_COMMIT, GitTestBase


def branch_rule(pattern: str | None = None, version: str | None = None) -> RuleDescription:
	return RuleDescription(RefType.BRANCH, compile_pattern(pattern) if pattern else None, version_format=version)


def tag_rule(pattern: str | None = None, version: str | None = None) -> RuleDescription:
	return RuleDescription(RefType.TAG, compile_pattern(pattern) if pattern else None, version_format=version)


@pytest.mark.unit
class TestMatchRule(GitTestBase):
	"""Rule priority and eligibility."""

	def test_second_branch_rule_matches(self) -> None:
		"""Branch names are matched against rules in order."""
		situation = self.mock_situation(branch="release/2.0")
		rules = [branch_rule("main"), branch_rule("release/.*")]

		context = match_rule(situation, rules)

		assert context is not None
		assert context.rule is rules[1]
		assert context.ref_type is RefType.BRANCH
		assert context.ref_name == "release/2.0"
		assert context.commit == HEAD_COMMIT

	def test_pattern_must_match_fully(self) -> None:
		"""A rule pattern matching a substring does not match."""
		situation = self.mock_situation(branch="main-backup")

		assert match_rule(situation, [branch_rule("main")]) is None

	def test_rule_without_pattern_matches_any_branch(self) -> None:
		"""A missing pattern matches everything."""
		situation = self.mock_situation(branch="whatever")
		rule = branch_rule()

		context = match_rule(situation, [rule])

		assert context is not None
		assert context.rule is rule

	def test_tag_rules_ineligible_on_branch(self) -> None:
		"""Tags are ignored while a branch is checked out."""
		situation = self.mock_situation(branch="main", tag_map={HEAD_COMMIT: ["v1.0.0"]})

		assert match_rule(situation, [tag_rule("v.*")]) is None

	def test_tag_rules_considered_on_branch(self) -> None:
		"""The tags-on-branches flag makes tag rules eligible."""
		situation = self.mock_situation(branch="main", tag_map={HEAD_COMMIT: ["v1.0.0"]})
		rules = [tag_rule("v.*"), branch_rule("main")]

		context = match_rule(situation, rules, consider_tags_on_branches=True)

		assert context is not None
		assert context.ref_type is RefType.TAG
		assert context.ref_name == "v1.0.0"

	def test_branch_rules_ineligible_when_detached(self) -> None:
		"""A detached HEAD has no branch to match."""
		situation = self.mock_situation(branch=None)

		assert match_rule(situation, [branch_rule()]) is None

	def test_lowest_tag_version_tried_first(self) -> None:
		"""With several matching tags, the lowest version wins."""
		situation = self.mock_situation(branch=None, tag_map={HEAD_COMMIT: ["v1.10.0", "v1.2.0", "v1.9.0"]})

		context = match_rule(situation, [tag_rule(r"v\d+\.\d+\.\d+")])

		assert context is not None
		assert context.ref_name == "v1.2.0"

	def test_rule_order_before_tag_order(self) -> None:
		"""The first rule with any matching tag wins."""
		situation = self.mock_situation(branch=None, tag_map={HEAD_COMMIT: ["v1.0.0", "stable"]})
		rules = [tag_rule("stable"), tag_rule("v.*")]

		context = match_rule(situation, rules)

		assert context is not None
		assert context.ref_name == "stable"

	def test_rev_rule_fallback(self) -> None:
		"""Without a matching rule, the rev rule versions the commit."""
		situation = self.mock_situation(branch=None)
		rev_rule = RuleDescription(RefType.COMMIT, version_format="${commit}")

		context = match_rule(situation, [branch_rule()], rev_rule=rev_rule)

		assert context is not None
		assert context.ref_type is RefType.COMMIT
		assert context.ref_name == HEAD_COMMIT
		assert context.rule is rev_rule

	def test_no_match(self) -> None:
		"""No rule and no rev rule is not an error."""
		assert match_rule(self.mock_situation(), []) is None


@pytest.mark.unit
def test_sort_tags_ascending() -> None:
	"""Tags sort by version, not lexically."""
	assert sort_tags_ascending(["v10", "v2", "v1.5"]) == ["v1.5", "v2", "v10"]


@pytest.mark.unit
def test_rule_matches() -> None:
	"""Rules use full match semantics."""
	rule = branch_rule("feature/.+")

	assert rule.matches("feature/x")
	assert not rule.matches("feature/")
	assert not rule.matches("my-feature/x")
