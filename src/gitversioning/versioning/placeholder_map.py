"""
Assemble the placeholder values available to version and property formats.

Placeholders are built in layers: the global layer (commit, ref, dirty state,
describe, environment) is computed once per run, the format layer adds the
caller's current project version and its components, and property formats
additionally see their original ``value``. Later layers win.

"""

from __future__ import annotations

import logging
import os
import re
from typing import TYPE_CHECKING

from gitversioning.utils.regex_utils import pattern_group_values, pattern_groups
from gitversioning.versioning.placeholders import slugify
from gitversioning.versioning.version_matcher import increase, match_version

if TYPE_CHECKING:
	from collections.abc import Mapping

	from gitversioning.git.situation import GitSituation
	from gitversioning.versioning.rules import ResolvedVersionContext

logger = logging.getLogger(__name__)

PlaceholderMap = dict[str, str]

DATETIME_FORMAT = "%Y%m%d.%H%M%S"
NO_DATETIME = "00000000.000000"
ISO_INSTANT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
NO_ISO_INSTANT = "0000-00-00T00:00:00Z"


def merge_layers(*layers: Mapping[str, str]) -> PlaceholderMap:
	"""Merge placeholder layers, later layers overwrite earlier ones."""
	merged: PlaceholderMap = {}
	for layer in layers:
		merged.update(layer)
	return merged


def environment_placeholders(environ: Mapping[str, str] | None = None) -> PlaceholderMap:
	"""Expose environment variables as ``env.<NAME>``."""
	environ = os.environ if environ is None else environ
	return {f"env.{key}": value for key, value in environ.items()}


def commit_placeholders(situation: GitSituation) -> PlaceholderMap:
	"""Commit id and commit time placeholders."""
	timestamp = situation.timestamp
	epoch_seconds = int(timestamp.timestamp())
	return {
		"commit": situation.rev,
		"commit.short": situation.rev[:7],
		"commit.timestamp": str(epoch_seconds),
		"commit.timestamp.year": str(timestamp.year),
		"commit.timestamp.year.2digit": str(timestamp.year % 100),
		"commit.timestamp.month": f"{timestamp.month:02d}",
		"commit.timestamp.day": f"{timestamp.day:02d}",
		"commit.timestamp.hour": f"{timestamp.hour:02d}",
		"commit.timestamp.minute": f"{timestamp.minute:02d}",
		"commit.timestamp.second": f"{timestamp.second:02d}",
		"commit.timestamp.datetime": timestamp.strftime(DATETIME_FORMAT) if epoch_seconds > 0 else NO_DATETIME,
	}


def ref_placeholders(context: ResolvedVersionContext) -> PlaceholderMap:
	"""Ref name and the groups captured by the matching rule pattern."""
	placeholders = {
		"ref": context.ref_name,
		"ref.slug": slugify(context.ref_name),
	}
	if context.rule.pattern is not None:
		for group, value in pattern_group_values(context.rule.pattern, context.ref_name).items():
			placeholders[f"ref.{group}"] = value
			placeholders[f"ref.{group}.slug"] = slugify(value)
	return placeholders


def dirty_placeholders(situation: GitSituation) -> PlaceholderMap:
	"""Working tree state markers."""
	dirty = not situation.is_clean
	return {
		"dirty": "-DIRTY" if dirty else "",
		"dirty.snapshot": "-SNAPSHOT" if dirty else "",
	}


def describe_placeholders(situation: GitSituation) -> PlaceholderMap:
	"""Nearest tag, its pattern groups, version components and distance."""
	description = situation.description
	tag = description.tag
	placeholders = {
		"describe": str(description),
		"describe.tag": tag,
	}

	tag_pattern = situation.describe_tag_pattern
	tag_group_values = pattern_group_values(tag_pattern, tag)
	for group in pattern_groups(tag_pattern):
		value = tag_group_values.get(group)
		if value is not None:
			placeholders[f"describe.tag.{group}"] = value
			placeholders[f"describe.tag.{group}.slug"] = slugify(value)

	tag_version = match_version(tag)
	patch_next = increase(tag_version.patch, 1)
	distance = description.distance
	placeholders.update(
		{
			"describe.tag.version": tag_version.version or "0.0.0",
			"describe.tag.version.core": tag_version.core or "0",
			"describe.tag.version.major": tag_version.major,
			"describe.tag.version.major.next": increase(tag_version.major, 1),
			"describe.tag.version.minor": tag_version.minor,
			"describe.tag.version.minor.next": increase(tag_version.minor, 1),
			"describe.tag.version.patch": tag_version.patch,
			"describe.tag.version.patch.next": patch_next,
			"describe.tag.version.label": tag_version.label,
			"describe.distance": str(distance),
			"describe.tag.version.patch.plus.describe.distance": increase(tag_version.patch, distance),
			"describe.tag.version.patch.next.plus.describe.distance": increase(patch_next, distance),
			"describe.tag.version.label.plus.describe.distance": increase(tag_version.label, distance),
		}
	)
	return placeholders


def global_placeholders(
	situation: GitSituation,
	context: ResolvedVersionContext,
	environ: Mapping[str, str] | None = None,
) -> PlaceholderMap:
	"""
	Build the placeholder layer shared by every format of a run.

	Args:
	    situation: Resolved git situation, its describe pattern already set
	    context: Matching ref and rule
	    environ: Environment variables, defaults to ``os.environ``

	Returns:
	    PlaceholderMap: Placeholder values by key

	"""
	return merge_layers(
		commit_placeholders(situation),
		ref_placeholders(context),
		dirty_placeholders(situation),
		describe_placeholders(situation),
		environment_placeholders(environ),
	)


def version_placeholders(
	project_version: str,
	project_version_pattern: re.Pattern[str] | None = None,
) -> PlaceholderMap:
	"""Components of the caller's current project version."""
	version = match_version(project_version)
	placeholders = {
		"version": project_version,
		"version.core": version.core or "0.0.0",
		"version.major": version.major,
		"version.major.next": increase(version.major, 1),
		"version.minor": version.minor,
		"version.minor.next": increase(version.minor, 1),
		"version.patch": version.patch,
		"version.patch.next": increase(version.patch, 1),
		"version.label": version.label,
		"version.label.prefixed": f"-{version.label}" if version.label else "",
		# deprecated, use version.core
		"version.release": re.sub(r"-.*$", "", project_version, count=1),
	}
	if project_version_pattern is not None:
		for group, value in pattern_group_values(project_version_pattern, project_version).items():
			placeholders[f"version.{group}"] = value
	return placeholders


def format_placeholders(
	global_map: Mapping[str, str],
	project_version: str,
	project_version_pattern: re.Pattern[str] | None = None,
) -> PlaceholderMap:
	"""Placeholders for rendering the project version format."""
	return merge_layers(global_map, version_placeholders(project_version, project_version_pattern))


def property_placeholders(
	global_map: Mapping[str, str],
	project_version: str,
	original_value: str | None,
	project_version_pattern: re.Pattern[str] | None = None,
) -> PlaceholderMap:
	"""Placeholders for rendering a property format; ``value`` is the property's original value."""
	return merge_layers(
		format_placeholders(global_map, project_version, project_version_pattern),
		{"value": original_value or ""},
	)


def git_properties(situation: GitSituation, context: ResolvedVersionContext) -> dict[str, str]:
	"""Informational ``git.*`` values for the caller to expose as build metadata."""
	timestamp = situation.timestamp
	epoch_seconds = int(timestamp.timestamp())
	return {
		"git.commit": context.commit,
		"git.commit.short": context.commit[:7],
		"git.commit.timestamp": str(epoch_seconds),
		"git.commit.timestamp.datetime": timestamp.strftime(ISO_INSTANT_FORMAT) if epoch_seconds > 0 else NO_ISO_INSTANT,
		"git.ref": context.ref_name,
		"git.ref.slug": slugify(context.ref_name),
	}
