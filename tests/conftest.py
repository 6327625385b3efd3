"""Global test fixtures and configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
	from pathlib import Path

CI_ENVIRONMENT_VARIABLES = (
	"GITHUB_ACTIONS",
	"GITLAB_CI",
	"CIRCLECI",
	"JENKINS_HOME",
	"VERSIONING_GIT_BRANCH",
	"VERSIONING_GIT_TAG",
	"VERSIONING_GIT_REF",
	"VERSIONING_DISABLE",
	"VERSIONING_UPDATE_PROPERTIES",
)


@pytest.fixture(autouse=True)
def clean_ci_environment(monkeypatch: pytest.MonkeyPatch) -> None:
	"""Keep the CI environment of the machine running the tests out of the results."""
	for name in CI_ENVIRONMENT_VARIABLES:
		monkeypatch.delenv(name, raising=False)


@pytest.fixture
def repo_path(tmp_path: Path) -> Path:
	"""Directory for a temporary repository."""
	path = tmp_path / "repo"
	path.mkdir()
	return path
