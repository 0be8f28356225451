# src/constellix_client/core/rate_gate.py
"""
Client-side rate gate.

The remote API enforces server-side rate limits. The gate is a cooperative
throttle that keeps one client instance under them: a token bucket with
capacity 1 that refills every ``interval`` seconds. Callers that arrive
early simply block until their slot.
"""

import asyncio
import threading
import time
from typing import Optional, Tuple

from .context import CallContext
from .exceptions import RequestCancelledError


class RateGate:
    """
    Blocking admission control shared by all calls of one client.

    ``interval <= 0`` builds a disabled gate: ``acquire`` admits
    immediately, so call sites never need to check whether pacing is on.

    Thread-safe. Slots are handed out in arrival order under a lock; the
    actual sleep happens outside the lock.

    Example:
        >>> gate = RateGate(0.5)
        >>> gate.acquire()   # immediate
        0.0
        >>> gate.acquire()   # ~0.5s later
        0.5
    """

    def __init__(self, interval: float = 0.0):
        """
        Args:
            interval: Minimum seconds between two admissions
        """
        self.interval = max(0.0, float(interval))
        self._next_slot = 0.0
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.interval > 0

    def _reserve(self, ctx: Optional[CallContext]) -> Tuple[float, float, float]:
        """
        Take the next free slot.

        Returns:
            (slot, previous_next_slot, wait_seconds)

        Raises:
            RequestCancelledError: ctx already cancelled, or the slot lies
                past the ctx deadline (nothing is reserved in that case)
        """
        with self._lock:
            now = time.monotonic()
            previous = self._next_slot
            slot = max(now, previous)
            wait = slot - now

            if ctx is not None:
                if ctx.cancelled:
                    raise RequestCancelledError("Call cancelled before rate gate admission")
                if ctx.deadline is not None and slot > ctx.deadline:
                    raise RequestCancelledError(
                        f"Rate gate wait of {wait:.3f}s would exceed the call deadline",
                        reason="deadline",
                    )

            self._next_slot = slot + self.interval
            return slot, previous, wait

    def _release(self, slot: float, previous: float) -> None:
        """Give an unused slot back if nobody queued behind it."""
        with self._lock:
            if self._next_slot == slot + self.interval:
                self._next_slot = previous

    def acquire(self, ctx: Optional[CallContext] = None) -> float:
        """
        Block until the caller may dispatch.

        Args:
            ctx: Optional call context; cancelling it aborts the wait

        Returns:
            Seconds spent waiting

        Raises:
            RequestCancelledError: the wait was aborted by ``ctx``
        """
        if not self.enabled:
            return 0.0

        slot, previous, wait = self._reserve(ctx)
        if wait <= 0:
            return 0.0

        if ctx is None:
            time.sleep(wait)
        elif ctx.sleep(wait):
            self._release(slot, previous)
            raise RequestCancelledError("Call cancelled while waiting for rate gate")

        return wait

    async def acquire_async(self, ctx: Optional[CallContext] = None) -> float:
        """
        Async twin of :meth:`acquire`.

        Task cancellation (``asyncio.CancelledError``) propagates unchanged
        after the slot is released.
        """
        if not self.enabled:
            return 0.0

        slot, previous, wait = self._reserve(ctx)
        if wait <= 0:
            return 0.0

        try:
            await asyncio.sleep(wait)
        except asyncio.CancelledError:
            self._release(slot, previous)
            raise

        if ctx is not None and ctx.cancelled:
            self._release(slot, previous)
            raise RequestCancelledError("Call cancelled while waiting for rate gate")

        return wait

    def __repr__(self) -> str:
        return f"RateGate(interval={self.interval}, enabled={self.enabled})"
