"""Cooperative cancellation for long nesting runs."""

from __future__ import annotations

import threading
import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class CancellationCheck(Protocol):
    """Anything the packer can poll between unit placements."""

    @property
    def cancelled(self) -> bool: ...


class CancellationToken:
    """Thread-safe cancellation flag with an optional deadline.

    The token is shared by all worker threads of one optimization call.
    It is polled between placements, so cancelling never interrupts a
    placement half way.

    Example:
        >>> token = CancellationToken.with_timeout(5.0)
        >>> report = optimize_nesting(parts, cancellation=token)
        >>> report.cancelled
        False
    """

    def __init__(self, deadline: float | None = None) -> None:
        """Create a token.

        Args:
            deadline: Absolute ``time.monotonic()`` value after which the
                token reports cancelled. ``None`` means no deadline.
        """
        self._event = threading.Event()
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        if seconds < 0:
            raise ValueError("Timeout must be non-negative")
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False


class _NeverCancelled:
    @property
    def cancelled(self) -> bool:
        return False


NEVER_CANCELLED: CancellationCheck = _NeverCancelled()
