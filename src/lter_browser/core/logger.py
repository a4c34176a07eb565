"""
Logging for the LTER station browser.

The command line prints results on stdout, so the console only shows
warnings and errors. Query text, skipped rows and timings go to the log
file.
"""

import logging
import os
import time
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

LOGGER_NAME = "lter_browser"
DEFAULT_LOG_FILE = "logs/lter_browser.log"

FILE_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(filename)s:%(lineno)d %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def setup_logger(
    settings: Optional[Mapping[str, Any]] = None,
    name: str = LOGGER_NAME
) -> logging.Logger:
    """
    Configure the browser logger from the ``logging`` config section.

    Args:
        settings: Mapping with optional ``level`` and ``file`` keys. Without
            ``file`` the LOG_FILE env var is used, then logs/lter_browser.log.
            An empty ``file`` turns file logging off.
        name: Logger name

    Returns:
        Configured logger

    Raises:
        ValueError: If the level is not a logging level name
    """
    settings = settings or {}

    level_name = str(settings.get("level") or "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {level_name}")

    log_file = settings.get("file")
    if log_file is None:
        log_file = os.getenv("LOG_FILE", DEFAULT_LOG_FILE)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Reconfiguring replaces the handlers of an earlier setup
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(max(level, logging.WARNING))
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


class LoggerContext:
    """
    Time one browser operation and log it with its counters.

    Counters given up front or added with ``record()`` are written as
    ``key=value`` pairs, e.g.
    ``Completed series query measurements=3 statements=3 series=2 in 0.41s``.
    Exceptions are logged and propagate.
    """

    def __init__(self, logger: logging.Logger, operation: str, **counters: Any):
        self.logger = logger
        self.operation = operation
        self.counters: Dict[str, Any] = dict(counters)
        self.elapsed: Optional[float] = None
        self._started = 0.0

    def record(self, **counters: Any) -> None:
        """Add or update counters reported when the operation ends."""
        self.counters.update(counters)

    def describe(self) -> str:
        fields = " ".join(f"{key}={value}" for key, value in self.counters.items())
        return f"{self.operation} {fields}" if fields else self.operation

    def __enter__(self) -> "LoggerContext":
        self._started = time.monotonic()
        self.logger.debug(f"Starting {self.describe()}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.elapsed = time.monotonic() - self._started
        if exc_type is not None:
            self.logger.error(f"Failed {self.describe()} after {self.elapsed:.2f}s: {exc_val}")
        else:
            self.logger.info(f"Completed {self.describe()} in {self.elapsed:.2f}s")
        return False
