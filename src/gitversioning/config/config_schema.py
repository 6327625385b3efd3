"""Schema of the versioning configuration file."""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, field_validator

from gitversioning.utils.regex_utils import compile_pattern
from gitversioning.versioning.rules import RefType


def _validate_pattern(value: str) -> str:
	try:
		compile_pattern(value)
	except re.error as e:
		msg = f"invalid regular expression '{value}': {e}"
		raise ValueError(msg) from e
	return value


PatternStr = Annotated[str, AfterValidator(_validate_pattern)]


class PatchConfigSchema(BaseModel):
	"""What to render once a ref matched."""

	describe_tag_pattern: PatternStr | None = None
	update_properties: bool | None = None
	version: str | None = None
	properties: dict[str, str] = Field(default_factory=dict)


class RefConfigSchema(PatchConfigSchema):
	"""A branch or tag rule."""

	type: RefType
	pattern: PatternStr | None = None

	@field_validator("type")
	@classmethod
	def check_type(cls, value: RefType) -> RefType:
		"""Commits are versioned by the ``rev`` section, not by ref rules."""
		if value is RefType.COMMIT:
			msg = "ref rules must be of type 'branch' or 'tag', use 'rev' for commits"
			raise ValueError(msg)
		return value


class RefsConfigSchema(BaseModel):
	"""Ordered ref rules."""

	consider_tags_on_branches: bool = False
	rules: list[RefConfigSchema] = Field(default_factory=list)


class VersioningConfigSchema(BaseModel):
	"""Top level versioning configuration."""

	disable: bool = False
	describe_tag_pattern: PatternStr | None = None
	update_properties: bool | None = None
	project_version_pattern: PatternStr | None = None
	refs: RefsConfigSchema = Field(default_factory=RefsConfigSchema)
	rev: PatchConfigSchema | None = None
