"""Command-line interface for gitversioning."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from gitversioning import __version__
from gitversioning.config import ConfigError, ConfigLoader
from gitversioning.config.command_options import (
	OPTION_DISABLE,
	OPTION_GIT_BRANCH,
	OPTION_GIT_REF,
	OPTION_GIT_TAG,
	OPTION_UPDATE_PROPERTIES,
)
from gitversioning.errors import VersioningError
from gitversioning.git.ref_store import GitRefStore
from gitversioning.utils.log_setup import display_error_summary, display_warning_summary, setup_logging
from gitversioning.versioning.engine import GitVersioning, VersioningResult

logger = logging.getLogger(__name__)

stdout_console = Console()

app = typer.Typer(
	help="Derive the project version from the state of a git repository.",
	context_settings={"help_option_names": ["-h", "--help"]},
)

PathArg = Annotated[
	Path,
	typer.Argument(
		exists=True,
		file_okay=False,
		help="Directory inside the git repository",
		show_default=True,
	),
]

ProjectVersionOpt = Annotated[
	str,
	typer.Option(
		"--project-version",
		"-V",
		help="Current project version, available as ${version}",
	),
]

ConfigOpt = Annotated[
	Path | None,
	typer.Option(
		"--config",
		"-c",
		help="Path to config file",
	),
]

BranchOpt = Annotated[
	str | None,
	typer.Option("--branch", help="Override the git branch (env: VERSIONING_GIT_BRANCH)"),
]

TagOpt = Annotated[
	str | None,
	typer.Option("--tag", help="Override the git tag (env: VERSIONING_GIT_TAG)"),
]

RefOpt = Annotated[
	str | None,
	typer.Option("--ref", help="Provide the full git ref, e.g. refs/heads/main (env: VERSIONING_GIT_REF)"),
]

DisableOpt = Annotated[
	bool | None,
	typer.Option("--disable/--enable", help="Disable versioning (env: VERSIONING_DISABLE)", show_default=False),
]

UpdatePropertiesOpt = Annotated[
	bool | None,
	typer.Option(
		"--update-properties/--no-update-properties",
		help="Report that rendered values should be persisted (env: VERSIONING_UPDATE_PROPERTIES)",
		show_default=False,
	),
]

PropertyOpt = Annotated[
	list[str] | None,
	typer.Option(
		"--property",
		"-p",
		help="Current property value as KEY=VALUE, available as ${value}",
	),
]

JsonFlag = Annotated[
	bool,
	typer.Option("--json", help="Print the result as JSON"),
]

VerboseFlag = Annotated[
	bool,
	typer.Option(
		"--verbose",
		"-v",
		help="Enable verbose logging",
	),
]


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"gitversioning version: {__version__}")
		raise typer.Exit


VersionFlag = Annotated[
	bool | None,
	typer.Option(
		"--version",
		callback=_version_callback,
		is_eager=True,
		help="Show the version and exit",
	),
]


def exit_with_error(message: str, exit_code: int = 1, exception: Exception | None = None) -> None:
	"""
	Display an error message and exit.

	Args:
	        message: Error message to display
	        exit_code: Exit code to use
	        exception: Optional exception that caused the error

	"""
	error_text = message
	if exception:
		error_text += f"\n\nDetails: {exception!s}"
		logger.debug("Error occurred", exc_info=exception)
	display_error_summary(error_text)
	raise typer.Exit(exit_code) from exception


def parse_properties(values: list[str] | None) -> dict[str, str]:
	"""
	Parse ``KEY=VALUE`` pairs.

	Raises:
	    typer.BadParameter: If a value has no ``=``

	"""
	properties = {}
	for item in values or []:
		key, separator, value = item.partition("=")
		if not separator or not key:
			msg = f"expected KEY=VALUE, got '{item}'"
			raise typer.BadParameter(msg, param_hint="--property")
		properties[key] = value
	return properties


def _bool_option(value: bool | None) -> str | None:
	return None if value is None else str(value).lower()


def render_result(result: VersioningResult) -> None:
	"""Print the rendered values as a table."""
	table = Table(title=f"{result.context.ref_type.name.lower()} {result.context.ref_name}")
	table.add_column("Name", style="cyan")
	table.add_column("Value")
	if result.version is not None:
		table.add_row("version", result.version)
	for name, value in result.properties.items():
		table.add_row(name, value)
	for name, value in result.git_properties.items():
		table.add_row(name, value, style="dim")
	stdout_console.print(table)


def result_to_dict(result: VersioningResult) -> dict[str, object]:
	"""JSON friendly representation of ``result``."""
	return {
		"ref_type": result.context.ref_type.value,
		"ref_name": result.context.ref_name,
		"commit": result.context.commit,
		"version": result.version,
		"properties": result.properties,
		"git_properties": result.git_properties,
		"update_properties": result.update_properties,
	}


@app.command()
def version_command(
	path: PathArg = Path(),
	project_version: ProjectVersionOpt = "unspecified",
	config: ConfigOpt = None,
	branch: BranchOpt = None,
	tag: TagOpt = None,
	ref: RefOpt = None,
	disable: DisableOpt = None,
	update_properties: UpdatePropertiesOpt = None,
	properties: PropertyOpt = None,
	as_json: JsonFlag = False,
	is_verbose: VerboseFlag = False,
	_version: VersionFlag = None,
) -> None:
	"""Render the version and properties configured for the current git ref."""
	setup_logging(is_verbose=is_verbose)
	load_dotenv(dotenv_path=path / ".env")

	project_properties = parse_properties(properties)
	options = {
		OPTION_GIT_BRANCH: branch,
		OPTION_GIT_TAG: tag,
		OPTION_GIT_REF: ref,
		OPTION_DISABLE: _bool_option(disable),
		OPTION_UPDATE_PROPERTIES: _bool_option(update_properties),
	}

	try:
		store = GitRefStore.open(path)
		config_loader = ConfigLoader(config, repo_root=store.root_directory)
		versioning = GitVersioning(store, config_loader.get, options=options)
		result = versioning.apply(project_version, project_properties)
	except ConfigError as e:
		exit_with_error("Invalid configuration", exception=e)
		return
	except VersioningError as e:
		exit_with_error("Could not determine the version", exception=e)
		return

	if result is None:
		display_warning_summary("No version rendered, versioning is disabled or no ref configuration matched")
		return

	if as_json:
		typer.echo(json.dumps(result_to_dict(result), indent=2))
	else:
		render_result(result)


def main() -> int:
	"""Run the CLI application."""
	return app()


if __name__ == "__main__":
	sys.exit(main())
