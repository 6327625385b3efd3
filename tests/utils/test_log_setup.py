"""Tests for logging setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from rich.logging import RichHandler

from gitversioning.utils import log_setup
from gitversioning.utils.log_setup import display_error_summary, display_warning_summary, setup_logging

if TYPE_CHECKING:
	from collections.abc import Iterator


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
	"""Put the root logger and the pygit2 logger back as they were."""
	root_logger = logging.getLogger()
	handlers = root_logger.handlers[:]
	level = root_logger.level
	pygit2_level = logging.getLogger("pygit2").level
	yield root_logger
	root_logger.handlers[:] = handlers
	root_logger.setLevel(level)
	logging.getLogger("pygit2").setLevel(pygit2_level)


@pytest.mark.unit
class TestSetupLogging:
	"""Root logger configuration."""

	def test_default_level(self, restore_root_logger: logging.Logger) -> None:
		"""Lifecycle messages are shown by default."""
		setup_logging()

		assert restore_root_logger.level == logging.INFO
		assert logging.getLogger("pygit2").level == logging.WARNING

	def test_verbose_level(self, restore_root_logger: logging.Logger) -> None:
		"""Verbose mode enables debug output."""
		setup_logging(is_verbose=True)

		assert restore_root_logger.level == logging.DEBUG
		handler = restore_root_logger.handlers[0]
		assert isinstance(handler, RichHandler)
		assert handler.level == logging.DEBUG

	def test_repeated_calls_replace_handler(self, restore_root_logger: logging.Logger) -> None:
		"""Calling twice leaves a single console handler."""
		setup_logging()
		setup_logging(is_verbose=True)

		assert len(restore_root_logger.handlers) == 1
		assert restore_root_logger.handlers[0].console is log_setup.console


@pytest.mark.unit
def test_summaries_print_message(monkeypatch: pytest.MonkeyPatch) -> None:
	"""Error and warning summaries print their message."""
	printed: list[object] = []
	monkeypatch.setattr(log_setup.console, "print", lambda *args, **_kwargs: printed.extend(args))

	display_error_summary("broken config")
	display_warning_summary("nothing matched")

	assert "\nbroken config\n" in printed
	assert "\nnothing matched\n" in printed
