"""Mini README: Tests for the shared logging helpers.

Module loggers configure the root logger at import time, so these tests
check that an explicit level requested later still takes effect and that
the shared handler is only ever installed once.
"""

from __future__ import annotations

import logging

import pytest

from skycorridor.configuration import get_settings
from skycorridor.logging_utils import configure_root_logger, get_logger, log_duration


@pytest.fixture()
def root_level():
    root = logging.getLogger()
    original = root.level
    yield root
    root.setLevel(original)


def test_explicit_level_applies_after_import_time_setup(root_level) -> None:
    get_logger("skycorridor.tests")

    configure_root_logger("debug")
    assert root_level.level == logging.DEBUG

    get_logger("skycorridor.tests.later")
    assert root_level.level == logging.DEBUG


def test_settings_log_level_reaches_the_root_logger(monkeypatch, root_level) -> None:
    monkeypatch.setenv("SKYCORRIDOR_LOG_LEVEL", "warning")
    get_settings.cache_clear()
    try:
        configure_root_logger(get_settings().log_level)
    finally:
        get_settings.cache_clear()

    assert root_level.level == logging.WARNING


def test_unknown_level_names_fall_back_to_info(root_level) -> None:
    configure_root_logger("chatty")

    assert root_level.level == logging.INFO


def test_handler_is_installed_once(root_level) -> None:
    before = list(root_level.handlers)

    configure_root_logger("ERROR")
    configure_root_logger(logging.INFO)

    assert root_level.handlers == before


def test_log_duration_reports_elapsed_time(caplog) -> None:
    logger = get_logger("skycorridor.tests.timing")

    with caplog.at_level(logging.INFO, logger="skycorridor.tests.timing"):
        with log_duration(logger, "Route optimisation"):
            pass

    assert any("Route optimisation took" in message for message in caplog.messages)
