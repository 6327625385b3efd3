"""Git repository access for versioning."""

from gitversioning.git.describe import GitDescription, describe
from gitversioning.git.ref_resolver import resolve_refs
from gitversioning.git.ref_store import NO_COMMIT, GitRefStore
from gitversioning.git.situation import GitSituation

__all__ = [
	"NO_COMMIT",
	"GitDescription",
	"GitRefStore",
	"GitSituation",
	"describe",
	"resolve_refs",
]
