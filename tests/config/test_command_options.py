"""Tests for command options."""

from __future__ import annotations

import pytest

from gitversioning.config.command_options import environment_variable_name, get_command_option, parse_bool


@pytest.mark.unit
@pytest.mark.parametrize(
	("option", "variable"),
	[
		("git.branch", "VERSIONING_GIT_BRANCH"),
		("git.tag", "VERSIONING_GIT_TAG"),
		("git.ref", "VERSIONING_GIT_REF"),
		("versioning.disable", "VERSIONING_DISABLE"),
		("versioning.updateProperties", "VERSIONING_UPDATE_PROPERTIES"),
	],
)
def test_environment_variable_name(option: str, variable: str) -> None:
	"""Options map to VERSIONING_ prefixed variables."""
	assert environment_variable_name(option) == variable


@pytest.mark.unit
class TestGetCommandOption:
	"""Option lookup precedence."""

	def test_explicit_option_wins(self) -> None:
		"""Given options win over the environment."""
		value = get_command_option("git.branch", {"git.branch": "main"}, {"VERSIONING_GIT_BRANCH": "develop"})

		assert value == "main"

	def test_environment_fallback(self) -> None:
		"""Missing options are read from the environment."""
		value = get_command_option("git.branch", {"git.branch": None}, {"VERSIONING_GIT_BRANCH": "develop"})

		assert value == "develop"

	def test_not_set(self) -> None:
		"""Nothing set yields None."""
		assert get_command_option("git.tag", None, {}) is None

	def test_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
		"""The process environment is used by default."""
		monkeypatch.setenv("VERSIONING_GIT_TAG", "v1")

		assert get_command_option("git.tag") == "v1"


@pytest.mark.unit
@pytest.mark.parametrize(("value", "expected"), [("true", True), (" TRUE ", True), ("false", False), ("1", False), ("", False)])
def test_parse_bool(value: str, expected: bool) -> None:
	"""Only true is true."""
	assert parse_bool(value) is expected
