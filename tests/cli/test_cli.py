"""Tests for the command-line interface."""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING

import pytest
import typer
from typer.testing import CliRunner

from gitversioning import __version__
from gitversioning.cli import app, parse_properties
from gitversioning.config.config_loader import CONFIG_FILE_NAME
from tests.base import GitTestBase

if TYPE_CHECKING:
	from pathlib import Path

RELEASE_CONFIG = """\
refs:
  rules:
    - type: branch
      pattern: 'release/1\\.(?<minor>\\d+)'
      version: '1.${ref.minor}.0'
      properties:
        app.version: '${value}+${commit.short}'
    - type: tag
      pattern: 'v(?<version>.*)'
      version: '${ref.version}'
"""


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
	"""Keep the CLI from reconfiguring the root logger and reading user config."""
	monkeypatch.setattr("gitversioning.cli.setup_logging", lambda **_kwargs: None)
	monkeypatch.setattr("gitversioning.config.config_loader.xdg_config_home", str(tmp_path / "xdg"))


@pytest.fixture
def runner() -> CliRunner:
	"""Typer test runner."""
	return CliRunner()


@pytest.mark.cli
class TestVersionCommand(GitTestBase):
	"""End-to-end invocations."""

	def release_repo(self, repo_path: Path) -> str:
		repo = self.init_repo(repo_path, branch="release/1.5")
		commit = self.commit(repo)
		(repo_path / CONFIG_FILE_NAME).write_text(RELEASE_CONFIG)
		return commit

	def test_version_flag(self, runner: CliRunner) -> None:
		"""--version prints the tool version."""
		result = runner.invoke(app, ["--version"])

		assert result.exit_code == 0
		assert __version__ in result.output

	def test_json_output(self, runner: CliRunner, repo_path: Path) -> None:
		"""The result can be printed as JSON."""
		commit = self.release_repo(repo_path)

		result = runner.invoke(app, [str(repo_path), "--json", "-p", "app.version=2.0"])

		assert result.exit_code == 0, result.output
		data = json.loads(result.stdout)
		assert data["version"] == "1.5.0"
		assert data["ref_type"] == "branch"
		assert data["ref_name"] == "release/1.5"
		assert data["commit"] == commit
		assert data["properties"] == {"app.version": f"2.0+{commit[:7]}"}
		assert data["git_properties"]["git.ref.slug"] == "release-1.5"
		assert data["update_properties"] is False

	def test_table_output(self, runner: CliRunner, repo_path: Path) -> None:
		"""The default output is a table."""
		self.release_repo(repo_path)

		result = runner.invoke(app, [str(repo_path)])

		assert result.exit_code == 0, result.output
		assert re.search(r"\bversion\s+\S\s+1\.5\.0\s+\S", result.stdout), result.stdout

	def test_branch_option(self, runner: CliRunner, repo_path: Path) -> None:
		"""--branch overrides the checked out branch."""
		self.release_repo(repo_path)

		result = runner.invoke(app, [str(repo_path), "--json", "--branch", "release/1.9"])

		assert result.exit_code == 0, result.output
		assert json.loads(result.stdout)["version"] == "1.9.0"

	def test_ref_option(self, runner: CliRunner, repo_path: Path) -> None:
		"""--ref provides a full tag ref."""
		self.release_repo(repo_path)

		result = runner.invoke(app, [str(repo_path), "--json", "--ref", "refs/tags/v4.2.0"])

		assert result.exit_code == 0, result.output
		data = json.loads(result.stdout)
		assert data["version"] == "4.2.0"
		assert data["ref_type"] == "tag"

	def test_explicit_config(self, runner: CliRunner, repo_path: Path, tmp_path: Path) -> None:
		"""--config points at a config file outside the repository."""
		repo = self.init_repo(repo_path, branch="main")
		self.commit(repo)
		config_file = tmp_path / "other.yml"
		config_file.write_text("refs:\n  rules:\n    - type: branch\n      version: '${ref}-SNAPSHOT'\n")

		result = runner.invoke(app, [str(repo_path), "--json", "--config", str(config_file)])

		assert result.exit_code == 0, result.output
		assert json.loads(result.stdout)["version"] == "main-SNAPSHOT"

	def test_disable(self, runner: CliRunner, repo_path: Path) -> None:
		"""--disable skips versioning."""
		self.release_repo(repo_path)

		result = runner.invoke(app, [str(repo_path), "--json", "--disable"])

		assert result.exit_code == 0
		assert "1.5.0" not in result.output

	def test_invalid_config(self, runner: CliRunner, repo_path: Path) -> None:
		"""Configuration errors exit with status 1."""
		repo = self.init_repo(repo_path)
		self.commit(repo)
		(repo_path / CONFIG_FILE_NAME).write_text("refs:\n  rules:\n    - type: commit\n")

		result = runner.invoke(app, [str(repo_path)])

		assert result.exit_code == 1
		assert "Invalid configuration" in result.output

	def test_not_a_repository(self, runner: CliRunner, tmp_path: Path) -> None:
		"""Directories outside a repository exit with status 1."""
		plain = tmp_path / "plain"
		plain.mkdir()

		result = runner.invoke(app, [str(plain)])

		assert result.exit_code == 1

	def test_invalid_ref(self, runner: CliRunner, repo_path: Path) -> None:
		"""Malformed refs exit with status 1."""
		self.release_repo(repo_path)

		result = runner.invoke(app, [str(repo_path), "--ref", "main"])

		assert result.exit_code == 1
		assert "Could not determine the version" in result.output

	def test_invalid_property(self, runner: CliRunner, repo_path: Path) -> None:
		"""Properties must be KEY=VALUE."""
		self.release_repo(repo_path)

		result = runner.invoke(app, [str(repo_path), "--property", "novalue"])

		assert result.exit_code == 2


@pytest.mark.unit
class TestParseProperties:
	"""KEY=VALUE parsing."""

	def test_pairs(self) -> None:
		"""Values may contain equals signs."""
		assert parse_properties(["a=1", "b=x=y", "c="]) == {"a": "1", "b": "x=y", "c": ""}

	def test_none(self) -> None:
		"""No values, no properties."""
		assert parse_properties(None) == {}

	@pytest.mark.parametrize("value", ["novalue", "=value"])
	def test_invalid(self, value: str) -> None:
		"""Pairs without key or separator are rejected."""
		with pytest.raises(typer.BadParameter):
			parse_properties([value])
