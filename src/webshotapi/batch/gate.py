"""
Concurrency gate bounding in-flight batch requests.

Wraps asyncio.Semaphore with a non-blocking ``try_acquire`` and live
counters, in the same way the inflight limiter tracks its permits.
"""

from __future__ import annotations

import asyncio

from webshotapi.errors import UsageError


class ConcurrencyGate:
    """Upper bound on simultaneously in-flight requests.

    Invariant: ``0 <= in_flight <= limit``. Waiters are woken in the
    order they started waiting.

    Example:
        >>> gate = ConcurrencyGate(limit=2)
        >>> await gate.acquire()
        >>> try:
        ...     await do_request()
        ... finally:
        ...     gate.release()
    """

    def __init__(self, limit: int) -> None:
        """Initialize the gate.

        Args:
            limit: Maximum number of slots, must be positive

        Raises:
            ValueError: If limit is not positive
        """
        if limit <= 0:
            raise ValueError(f"Gate limit must be positive, got {limit}")
        self._limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self._in_flight = 0
        self._peak_in_flight = 0
        self._waiting = 0

    @property
    def limit(self) -> int:
        """Maximum number of slots."""
        return self._limit

    @property
    def in_flight(self) -> int:
        """Slots currently held."""
        return self._in_flight

    @property
    def available(self) -> int:
        """Slots free right now."""
        return self._limit - self._in_flight

    @property
    def peak_in_flight(self) -> int:
        """Highest ``in_flight`` value observed."""
        return self._peak_in_flight

    @property
    def waiting(self) -> int:
        """Number of callers blocked in ``acquire``."""
        return self._waiting

    def _take(self) -> None:
        self._in_flight += 1
        self._peak_in_flight = max(self._peak_in_flight, self._in_flight)

    async def try_acquire(self) -> bool:
        """Take a slot if one is free, without waiting.

        Returns:
            True if a slot was taken, False otherwise (no side effect)
        """
        if self._semaphore.locked() or self._waiting:
            return False
        # A permit is free, so this returns without suspending
        await self._semaphore.acquire()
        self._take()
        return True

    async def acquire(self) -> None:
        """Take a slot, waiting until one is released if necessary."""
        self._waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self._waiting -= 1
        self._take()

    def release(self) -> None:
        """Give a slot back, waking the oldest waiter.

        Raises:
            UsageError: If no slot is held
        """
        if self._in_flight <= 0:
            raise UsageError("Gate released more times than it was acquired")
        self._in_flight -= 1
        self._semaphore.release()

    def __repr__(self) -> str:
        return f"ConcurrencyGate(limit={self._limit}, in_flight={self._in_flight})"
