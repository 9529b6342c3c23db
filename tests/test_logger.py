import logging

import pytest

from katana_prices.logger import NOISY_LOGGERS, TRACE, ColoredFormatter, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)
    logging.basicConfig(level=logging.WARNING, force=True)


def test_debug_level_quiets_client_loggers():
    setup_logging("debug")

    assert logging.getLogger().level == logging.DEBUG
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_trace_level_opens_client_loggers():
    setup_logging("TRACE")

    assert logging.getLogger().level == TRACE
    assert logging.getLogger("anchorpy").level == TRACE


def test_unknown_level_falls_back_to_info():
    setup_logging("chatty")

    assert logging.getLogger().level == logging.INFO


def test_env_level_used_when_not_given(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    setup_logging()

    assert logging.getLogger().level == logging.ERROR


def test_colored_formatter_restores_levelname():
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "hello", None, None)

    text = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "\033[33m" in text
    assert text.endswith("hello")
    assert record.levelname == "WARNING"
