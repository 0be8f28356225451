"""Call context: caller-supplied deadline and cancellation for a single call."""

from dataclasses import dataclass, field
from typing import Optional
import threading
import time


@dataclass
class CallContext:
    """Deadline and cancellation flag passed into a client verb.

    Only the rate gate wait observes the context; once a request is on the
    wire it runs to completion or to the transport timeout.

    Attributes:
        deadline: Absolute ``time.monotonic()`` value after which waiting
            is pointless, or None for no deadline

    Example:
        >>> ctx = CallContext.with_timeout(2.0)
        >>> client.fetch_by_id("v1/domains", ctx=ctx)
        >>> # from another thread
        >>> ctx.cancel()
    """

    deadline: Optional[float] = None
    _cancelled: threading.Event = field(default_factory=threading.Event, repr=False)

    @classmethod
    def with_timeout(cls, seconds: float) -> 'CallContext':
        """Context that expires ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Abort any wait currently blocked on this context."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline (never negative), None if unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def sleep(self, seconds: float) -> bool:
        """
        Sleep up to ``seconds``, waking early on cancel.

        Returns:
            True if the context was cancelled during (or before) the sleep
        """
        if seconds <= 0:
            return self.cancelled
        return self._cancelled.wait(seconds)
