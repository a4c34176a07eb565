"""
Cancellation and deadline token threaded through every backend call.
"""

import threading
import time
from typing import Optional

from .exceptions import QueryCancelledError


class Context:
    """
    Carries cancellation state and an optional deadline.

    A context is shared by the caller and the code doing the work: the
    caller may cancel it from another thread, the worker checks it before
    issuing a backend request.
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Initialize context.

        Args:
            timeout: Seconds until the deadline expires. None means no deadline.
        """
        self._cancelled = threading.Event()
        self.deadline: Optional[float] = None
        if timeout is not None:
            self.deadline = time.monotonic() + timeout

    def cancel(self) -> None:
        """Cancel the context."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        """True once cancelled or past the deadline."""
        if self._cancelled.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline, or None without a deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """
        Raise if the context is done.

        Raises:
            QueryCancelledError: If cancelled or past the deadline
        """
        if self._cancelled.is_set():
            raise QueryCancelledError("context cancelled")
        if self.cancelled:
            raise QueryCancelledError("context deadline exceeded")


def check_context(ctx: Optional[Context]) -> None:
    """Check an optional context."""
    if ctx is not None:
        ctx.check()
