"""Cancellation token shared by every step of one operation."""

import threading
import time
from typing import Optional

from .exceptions import OperationCancelledError


class OperationContext:
    """
    Request-scoped cancellation token with an optional deadline.

    One context governs a whole build or update. Pollers started for that
    operation observe it between reads, so cancelling it stops the polling
    thread at its next tick instead of letting it finish silently.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        """
        Initialize the context.

        Args:
            timeout: Seconds until the context counts as cancelled, or None
        """
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._reason: Optional[str] = None

    def cancel(self, reason: str = "operation cancelled") -> None:
        """Cancel the context and wake every waiter."""
        if self._reason is None:
            self._reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self.cancel("deadline exceeded")
            return True
        return False

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def wait(self, seconds: float) -> bool:
        """
        Sleep up to ``seconds``, waking early on cancellation.

        Returns:
            True if the context is cancelled when the wait ends
        """
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            self._event.wait(remaining)
        else:
            self._event.wait(seconds)
        return self.cancelled

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError if the context is cancelled."""
        if self.cancelled:
            raise OperationCancelledError(self._reason or "operation cancelled")
