"""Shared test fixtures."""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from tests.unit.fakes import SAMPLE_RECORDS, write_backup


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    """Return a backup folder with the sample records."""
    return write_backup(tmp_path / "backup", SAMPLE_RECORDS)


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect loguru output as ``LEVEL message`` lines."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo sinks added by configure_logging during a test."""
    yield
    logger.remove()
    logger.add(sys.stderr)
