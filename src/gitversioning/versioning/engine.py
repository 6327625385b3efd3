"""Derive the project version and property values from the git situation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gitversioning.config.command_options import (
	OPTION_DISABLE,
	OPTION_GIT_BRANCH,
	OPTION_GIT_REF,
	OPTION_GIT_TAG,
	OPTION_UPDATE_PROPERTIES,
	get_command_option,
	parse_bool,
)
from gitversioning.git.ref_resolver import resolve_refs
from gitversioning.git.situation import GitSituation
from gitversioning.utils.regex_utils import compile_pattern
from gitversioning.versioning.placeholder_map import (
	format_placeholders,
	git_properties,
	global_placeholders,
	property_placeholders,
)
from gitversioning.versioning.placeholders import slugify, substitute_text
from gitversioning.versioning.rules import RefType, ResolvedVersionContext, RuleDescription, match_rule

if TYPE_CHECKING:
	import re
	from collections.abc import Mapping

	from gitversioning.config.config_schema import PatchConfigSchema, VersioningConfigSchema
	from gitversioning.git.ref_store import GitRefStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersioningResult:
	"""Rendered output of one versioning run."""

	context: ResolvedVersionContext
	version: str | None = None
	properties: dict[str, str] = field(default_factory=dict)
	git_properties: dict[str, str] = field(default_factory=dict)
	update_properties: bool = False


def _rule_from_config(
	config: VersioningConfigSchema,
	ref_type: RefType,
	pattern: str | None,
	patch: PatchConfigSchema,
) -> RuleDescription:
	"""Compile a rule, inheriting unset options from the global configuration."""
	describe_tag_pattern = patch.describe_tag_pattern or config.describe_tag_pattern
	update_properties = patch.update_properties
	if update_properties is None:
		update_properties = config.update_properties
	return RuleDescription(
		type=ref_type,
		pattern=compile_pattern(pattern) if pattern is not None else None,
		describe_tag_pattern=compile_pattern(describe_tag_pattern) if describe_tag_pattern is not None else None,
		version_format=patch.version,
		property_formats=dict(patch.properties),
		update_properties=update_properties,
	)


def rules_from_config(config: VersioningConfigSchema) -> tuple[list[RuleDescription], RuleDescription | None]:
	"""Return the ref rules in priority order and the catch-all rev rule, if any."""
	rules = [_rule_from_config(config, ref.type, ref.pattern, ref) for ref in config.refs.rules]
	rev_rule = _rule_from_config(config, RefType.COMMIT, None, config.rev) if config.rev is not None else None
	return rules, rev_rule


class GitVersioning:
	"""
	Render version and property formats for the repository behind a ref store.

	Command options (``git.branch``, ``git.tag``, ``git.ref``,
	``versioning.disable``, ``versioning.updateProperties``) are taken from
	``options`` first and from their ``VERSIONING_*`` environment variables
	otherwise.

	"""

	def __init__(
		self,
		store: GitRefStore,
		config: VersioningConfigSchema,
		options: Mapping[str, str | None] | None = None,
		environ: Mapping[str, str] | None = None,
	) -> None:
		"""Prepare a run; nothing is read from the repository yet."""
		self.store = store
		self.config = config
		self.options = dict(options or {})
		self.environ = dict(os.environ if environ is None else environ)
		self.rules, self.rev_rule = rules_from_config(config)
		self.project_version_pattern: re.Pattern[str] | None = (
			compile_pattern(config.project_version_pattern) if config.project_version_pattern is not None else None
		)

	def _command_option(self, name: str) -> str | None:
		return get_command_option(name, self.options, self.environ)

	def is_disabled(self) -> bool:
		"""Whether versioning is disabled by command option or, failing that, by configuration."""
		command_option_disable = self._command_option(OPTION_DISABLE)
		if command_option_disable is not None:
			if parse_bool(command_option_disable):
				logger.warning("skip - versioning is disabled by command option")
				return True
			return False
		if self.config.disable:
			logger.warning("skip - versioning is disabled by config option")
			return True
		return False

	def git_situation(self) -> GitSituation:
		"""Read the repository situation and apply overrides and CI environment."""
		situation = GitSituation(self.store)
		resolve_refs(
			situation,
			override_branch=self._command_option(OPTION_GIT_BRANCH),
			override_tag=self._command_option(OPTION_GIT_TAG),
			provided_ref=self._command_option(OPTION_GIT_REF),
			environ=self.environ,
		)
		return situation

	def update_properties_option(self, rule: RuleDescription) -> bool:
		"""Whether the caller should persist the rendered values."""
		option = self._command_option(OPTION_UPDATE_PROPERTIES)
		if option is not None:
			return parse_bool(option)
		return bool(rule.update_properties)

	def apply(
		self,
		project_version: str = "unspecified",
		project_properties: Mapping[str, str | None] | None = None,
	) -> VersioningResult | None:
		"""
		Resolve the git situation and render the matching rule's formats.

		Args:
		    project_version: Current project version, available as ``${version}``
		    project_properties: Current property values, available as ``${value}``

		Returns:
		    VersioningResult: Rendered values, or None when versioning is disabled
		    or no rule matches

		Raises:
		    InvalidRefFormatError: If an override or provided ref is malformed
		    ShallowRepositoryDescribeError: If describe fails in a shallow clone

		"""
		if self.is_disabled():
			return None

		situation = self.git_situation()
		if logger.isEnabledFor(logging.DEBUG):
			logger.debug("git situation:")
			logger.debug("  root directory: %s", situation.root_directory)
			logger.debug("  head commit: %s", situation.rev)
			logger.debug("  head commit timestamp: %s", situation.timestamp)
			logger.debug("  head branch: %s", situation.branch)
			logger.debug("  head tags: %s", situation.tags)

		context = match_rule(
			situation,
			self.rules,
			consider_tags_on_branches=self.config.refs.consider_tags_on_branches,
			rev_rule=self.rev_rule,
		)
		if context is None:
			logger.warning("skip - no matching ref configuration and no rev configuration defined")
			logger.warning("git refs:")
			logger.warning("  branch: %s", situation.branch)
			logger.warning("  tags: %s", situation.tags)
			logger.warning("defined ref configurations:")
			for rule in self.rules:
				pattern = rule.pattern.pattern if rule.pattern is not None else None
				logger.warning("  %-6s - pattern: %s", rule.type.name, pattern)
			return None

		rule = context.rule
		logger.info("matching ref: %s - %s", context.ref_type.name, context.ref_name)
		logger.info(
			"ref configuration: %s - pattern: %s",
			context.ref_type.name,
			rule.pattern.pattern if rule.pattern is not None else None,
		)
		if rule.describe_tag_pattern is not None:
			logger.info("  describeTagPattern: %s", rule.describe_tag_pattern.pattern)
			situation.describe_tag_pattern = rule.describe_tag_pattern
		if rule.version_format is not None:
			logger.info("  version: %s", rule.version_format)
		for key, value in rule.property_formats.items():
			logger.info("  property %s: %s", key, value)
		update_properties = self.update_properties_option(rule)
		logger.info("  updateProperties: %s", update_properties)

		global_map = global_placeholders(situation, context, self.environ)

		version = None
		if rule.version_format is not None:
			placeholders = format_placeholders(global_map, project_version, self.project_version_pattern)
			version = slugify(substitute_text(rule.version_format, placeholders))
			logger.info("project version: %s", version)

		properties = {}
		current_values = project_properties or {}
		for name, property_format in rule.property_formats.items():
			placeholders = property_placeholders(
				global_map,
				project_version,
				current_values.get(name),
				self.project_version_pattern,
			)
			properties[name] = substitute_text(property_format, placeholders)
			logger.info("property %s: %s", name, properties[name])

		return VersioningResult(
			context=context,
			version=version,
			properties=properties,
			git_properties=git_properties(situation, context),
			update_properties=update_properties,
		)
