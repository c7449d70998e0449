"""Tests for logging setup and serialization helpers."""
import logging
from datetime import datetime, timedelta, timezone

import pytest

from devboard.utils.logger import configure_logging, resolve_level
from devboard.utils.serialization import serialize_datetime


@pytest.mark.parametrize(
    "environment,expected",
    [
        ("development", logging.DEBUG),
        ("test", logging.WARNING),
        ("production", logging.INFO),
    ],
)
def test_resolve_level_defaults_per_environment(environment, expected):
    assert resolve_level(environment) == expected


def test_resolve_level_override_wins():
    assert resolve_level("development", "error") == logging.ERROR


def test_resolve_level_ignores_unknown_override():
    assert resolve_level("production", "chatty") == logging.INFO


def test_configure_logging_attaches_single_handler():
    app_logger = logging.getLogger("devboard")
    previous_level = app_logger.level
    try:
        first = configure_logging("production")
        second = configure_logging("production", "debug")
    finally:
        app_logger.setLevel(previous_level)

    assert first is second is app_logger
    assert len(app_logger.handlers) == 1
    assert app_logger.propagate is False
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_serialize_datetime_treats_naive_values_as_utc():
    assert serialize_datetime(datetime(2024, 5, 1, 12, 30)) == "2024-05-01T12:30:00+00:00"


def test_serialize_datetime_converts_to_utc():
    value = datetime(2024, 5, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))
    assert serialize_datetime(value) == "2024-05-01T12:30:00+00:00"


def test_serialize_datetime_none():
    assert serialize_datetime(None) is None
