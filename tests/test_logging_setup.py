import logging

import pytest
from termcolor import colored

from klirr.logging_setup import (
    LOG_LEVEL_ENV,
    LOGGER_NAME,
    OFF,
    TRACE,
    color_from_level,
    init_logging,
    init_logging_with_level,
    parse_log_level,
)


def test_invalid_log_level():
    with pytest.raises(ValueError):
        parse_log_level("foobar")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("error", logging.ERROR),
        ("warn", logging.WARNING),
        ("INFO", logging.INFO),
        ("Debug", logging.DEBUG),
        ("trace", TRACE),
        ("off", OFF),
    ],
)
def test_parse_log_level(name, expected):
    assert parse_log_level(name) == expected


def test_color_from_level():
    assert color_from_level(logging.ERROR) == colored("ERROR", "red")
    assert color_from_level(logging.WARNING) == colored("WARN", "yellow")
    assert color_from_level(logging.INFO) == colored("INFO", "green")
    assert color_from_level(logging.DEBUG) == colored("DEBUG", "blue")
    assert color_from_level(TRACE) == colored("TRACE", "white")


def test_color_from_level_critical_is_error():
    assert color_from_level(logging.CRITICAL) == color_from_level(logging.ERROR)


def test_init_logging_with_level_writes_to_stdout(capsys):
    init_logging_with_level(logging.WARNING)
    logging.getLogger(f"{LOGGER_NAME}.test").warning("hello there")
    logging.getLogger(f"{LOGGER_NAME}.test").info("hidden message")
    out = capsys.readouterr().out
    assert "WARN" in out
    assert " > hello there" in out
    assert "hidden message" not in out


def test_init_logging_with_debug_level_announces_itself(capsys):
    init_logging_with_level(logging.DEBUG)
    out = capsys.readouterr().out
    assert "Logging initialized with level: DEBUG" in out


def test_init_logging_with_level_off_is_silent(capsys):
    init_logging_with_level(OFF)
    logging.getLogger(LOGGER_NAME).error("should not show")
    assert "should not show" not in capsys.readouterr().out


def test_repeated_init_does_not_duplicate_output(capsys):
    init_logging_with_level(logging.INFO)
    init_logging_with_level(logging.INFO)
    logging.getLogger(LOGGER_NAME).info("once only")
    assert capsys.readouterr().out.count("once only") == 1


def test_init_logging_reads_env_once(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "warn")
    init_logging()
    first_level = logging.getLogger(LOGGER_NAME).level
    assert first_level == parse_log_level("warn")
    monkeypatch.setenv(LOG_LEVEL_ENV, "error")
    init_logging()
    second_level = logging.getLogger(LOGGER_NAME).level
    assert second_level == first_level
    assert second_level != parse_log_level("error")