"""
Logging setup for gitversioning.

Configures the root logger with a rich console handler and renders error and
warning summaries for the command line.

"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

console = Console(stderr=True)


def setup_logging(is_verbose: bool = False) -> None:
	"""
	Set up logging configuration.

	Args:
	    is_verbose: Enable debug logging, otherwise lifecycle messages and above

	"""
	log_level = logging.DEBUG if is_verbose else logging.INFO

	root_logger = logging.getLogger()
	root_logger.setLevel(log_level)

	# repeated calls replace the handler instead of stacking
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)

	console_handler = RichHandler(
		console=console,
		level=log_level,
		rich_tracebacks=True,
		show_time=is_verbose,
		show_path=is_verbose,
	)
	root_logger.addHandler(console_handler)

	# pygit2 stays quiet unless verbose
	if not is_verbose:
		logging.getLogger("pygit2").setLevel(logging.WARNING)


def display_error_summary(error_message: str) -> None:
	"""
	Display an error summary with a divider and a title.

	Args:
	        error_message: The error message to display

	"""
	title = Text("Error Summary", style="bold red")

	console.print()
	console.print(Rule(title, style="red"))
	console.print(f"\n{error_message}\n")
	console.print(Rule(style="red"))
	console.print()


def display_warning_summary(warning_message: str) -> None:
	"""
	Display a warning summary with a divider and a title.

	Args:
	        warning_message: The warning message to display

	"""
	title = Text("Warning Summary", style="bold yellow")

	console.print()
	console.print(Rule(title, style="yellow"))
	console.print(f"\n{warning_message}\n")
	console.print(Rule(style="yellow"))
	console.print()
