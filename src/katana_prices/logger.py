"""Logging for katana-prices: stderr output with colored level names."""

import logging
import os
import sys

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# RPC and HTTP client libraries that log every request at DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "solana", "anchorpy")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Wraps the level name in an ANSI color for terminal output."""

    COLORS = {
        "TRACE": "\033[90m",
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"

    def format(self, record: logging.LogRecord) -> str:
        plain = record.levelname
        color = self.COLORS.get(plain)
        if color is None:
            return super().format(record)

        record.levelname = f"{color}{self.BOLD}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def _resolve_level(name: str) -> int:
    if name == "TRACE":
        return TRACE
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(log_level: str | None = None) -> None:
    """Route log records to stderr, keeping stdout free for ``--json`` output.

    ``log_level`` falls back to the LOG_LEVEL environment variable, then INFO.
    At DEBUG the RPC client loggers stay at WARNING; TRACE lets them through.
    """
    name = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = _resolve_level(name)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logging.basicConfig(level=level, handlers=[handler], force=True)

    client_level = {"DEBUG": logging.WARNING, "TRACE": TRACE}.get(name)
    if client_level is not None:
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(client_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
