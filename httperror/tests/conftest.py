"""Pytest configuration and fixtures for httperror tests."""

from collections.abc import Generator
from typing import Any

import pytest
from loguru import logger

from httperror.core.config import get_settings
from httperror.shared.context import request_context


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Re-read settings from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def log_records() -> Generator[list[dict[str, Any]], None, None]:
    """Capture Loguru records emitted during the test."""
    records: list[dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def trace_id() -> Generator[str, None, None]:
    """Set a trace id in the current context for the duration of the test."""
    with request_context("trace-abc123") as (current, _):
        yield current
