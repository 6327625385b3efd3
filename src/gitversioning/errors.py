"""Exceptions raised while resolving a version from git."""


class VersioningError(Exception):
	"""Base exception for versioning failures."""


class GitError(VersioningError):
	"""Raised when the repository can not be read."""


class InvalidRefFormatError(VersioningError, ValueError):
	"""Raised when a branch, tag or provided ref does not have the expected ref prefix."""


class ShallowRepositoryDescribeError(VersioningError):
	"""
	Raised when describe exhausts a shallow clone without finding a matching tag.

	The distance to the nearest tag can not be known without the full history;
	unshallow the repository (``git fetch --unshallow``) or relax the describe
	tag pattern.

	"""
