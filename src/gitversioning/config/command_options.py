"""Command options given on the command line or through ``VERSIONING_*`` environment variables."""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from collections.abc import Mapping

OPTION_GIT_REF = "git.ref"
OPTION_GIT_TAG = "git.tag"
OPTION_GIT_BRANCH = "git.branch"
OPTION_DISABLE = "versioning.disable"
OPTION_UPDATE_PROPERTIES = "versioning.updateProperties"

_CAMEL_CASE_BOUNDARY = re.compile(r"(?=[A-Z])")


def environment_variable_name(option_name: str) -> str:
	"""
	Derive the environment variable of an option.

	Examples:
	    >>> environment_variable_name("git.branch")
	    'VERSIONING_GIT_BRANCH'
	    >>> environment_variable_name("versioning.updateProperties")
	    'VERSIONING_UPDATE_PROPERTIES'

	"""
	plain_name = option_name.removeprefix("versioning.")
	words = [word for word in _CAMEL_CASE_BOUNDARY.split(plain_name) if word]
	return ("VERSIONING_" + "_".join(words)).replace(".", "_").upper()


def get_command_option(
	name: str,
	options: Mapping[str, str | None] | None = None,
	environ: Mapping[str, str] | None = None,
) -> str | None:
	"""Return an explicitly given option, else its environment variable, else None."""
	value = options.get(name) if options else None
	if value is None:
		environ = os.environ if environ is None else environ
		value = environ.get(environment_variable_name(name))
	return value


def parse_bool(value: str) -> bool:
	"""Only ``true`` (any case) is true."""
	return value.strip().lower() == "true"
