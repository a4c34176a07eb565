"""
Core utilities for the LTER station browser.

Provides configuration, logging, time zone handling and the error types.
"""

from .config import Config
from .logger import setup_logger, LoggerContext
from . import constants
from .date_utils import DateUtils, LOCAL_TZ
from .context import Context, check_context
from .exceptions import BrowserError, DataNotFoundError, BackendError, QueryCancelledError
from .rwlock import RWLock

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "constants",
    "DateUtils",
    "LOCAL_TZ",
    "Context",
    "check_context",
    "BrowserError",
    "DataNotFoundError",
    "BackendError",
    "QueryCancelledError",
    "RWLock",
]
