"""
Exceptions raised by the LTER station browser.
"""


class BrowserError(Exception):
    """Base class for all browser errors."""


class DataNotFoundError(BrowserError):
    """Raised when a request carries nothing that could be answered."""

    def __init__(self, message: str = "no data points"):
        super().__init__(message)


class BackendError(BrowserError):
    """Raised when the time-series store reports an error in its response."""

    def __init__(self, message: str, query: str = ""):
        super().__init__(message)
        self.query = query


class QueryCancelledError(BrowserError):
    """Raised when a context is cancelled or past its deadline."""
