"""Tests for core.logging_setup."""

from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from core.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _rich_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]


def test_installs_single_rich_handler() -> None:
    configure_logging("INFO")
    configure_logging("DEBUG")
    assert len(_rich_handlers()) == 1
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_falls_back_to_info() -> None:
    configure_logging("LOUD")
    assert logging.getLogger().level == logging.INFO


def test_messages_reach_console() -> None:
    buffer = io.StringIO()
    configure_logging("INFO", console=Console(file=buffer, width=200))
    logging.getLogger("core.services.issue_creator").info("Created label: bug")
    assert "Created label: bug" in buffer.getvalue()


def test_httpx_is_quieter_than_info() -> None:
    configure_logging("INFO")
    assert logging.getLogger("httpx").level == logging.WARNING
