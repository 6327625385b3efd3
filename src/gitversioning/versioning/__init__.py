"""Rule matching, placeholder generation and rendering."""

from gitversioning.versioning.engine import GitVersioning, VersioningResult
from gitversioning.versioning.placeholders import slugify, substitute_text
from gitversioning.versioning.rules import RefType, ResolvedVersionContext, RuleDescription, match_rule
from gitversioning.versioning.version_matcher import VersionMatch, increase, match_version

__all__ = [
	"GitVersioning",
	"RefType",
	"ResolvedVersionContext",
	"RuleDescription",
	"VersionMatch",
	"VersioningResult",
	"increase",
	"match_rule",
	"match_version",
	"slugify",
	"substitute_text",
]
