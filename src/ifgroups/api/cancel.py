"""Cancellation and deadline token for API requests."""

from __future__ import annotations

import threading
import time

from ifgroups.errors import RequestCancelledError


class CancelToken:
    """Signals that an in-flight request should be abandoned.

    A token is cancelled either explicitly via cancel() or implicitly
    once its optional timeout (seconds from creation) has elapsed.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = None if timeout is None else time.monotonic() + timeout

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        """Seconds until the deadline, or None if there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def wait(self, seconds: float) -> bool:
        """Sleep up to seconds, returning early (True) if cancelled."""
        remaining = self.remaining()
        if remaining is not None:
            seconds = min(seconds, remaining)
        self._event.wait(seconds)
        return self.cancelled

    def raise_if_cancelled(self) -> None:
        """Raise RequestCancelledError if the token has fired."""
        if self._event.is_set():
            raise RequestCancelledError("request cancelled")
        if self.cancelled:
            raise RequestCancelledError("request deadline exceeded")
