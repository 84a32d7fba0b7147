"""
Batch ("multi") session: queue endpoint calls, then run them concurrently.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

from webshotapi.batch import (
    BatchExecutor,
    BatchListeners,
    BatchStats,
    ProgressMonitor,
    RequestQueue,
)
from webshotapi.batch.monitor import DEFAULT_INTERVAL
from webshotapi.client.endpoints import EndpointsMixin

if TYPE_CHECKING:
    from webshotapi.batch import ConcurrencyGate, RequestSpec
    from webshotapi.batch.events import CompletedListener, FailedListener
    from webshotapi.batch.executor import PerformRequest


class BatchSession(EndpointsMixin["BatchSession"]):
    """An armed batch: endpoint calls are queued instead of executed.

    Obtained from ``WebshotClient.multi()``. Each endpoint call returns
    the session, so calls chain.

    Example:
        >>> batch = client.multi()
        >>> batch.pdf("https://www.example.com").screenshot_jpg("https://www.python.org")
        >>> client.on_completed(lambda result, params, index: result.save(f"/tmp/file_{index}"))
        >>> await batch.exec()
        >>> await batch.join()
    """

    def __init__(
        self,
        perform_request: PerformRequest,
        gate: ConcurrencyGate,
        listeners: BatchListeners | None = None,
        *,
        request_timeout: float | None = None,
    ) -> None:
        """Initialize session (internal use, see ``WebshotClient.multi``).

        Args:
            perform_request: Async callable executing one spec
            gate: Concurrency gate, shared with other sessions of the client
            listeners: Notification listeners
            request_timeout: Per-request deadline in seconds
        """
        self._queue = RequestQueue()
        self._executor = BatchExecutor(
            perform_request,
            gate,
            listeners,
            request_timeout=request_timeout,
        )

    def _submit(self, spec: RequestSpec) -> BatchSession:
        self._queue.enqueue(spec)
        return self

    def add(self, spec: RequestSpec) -> int:
        """Queue an arbitrary request spec.

        Returns:
            The submission index assigned to it
        """
        return self._queue.enqueue(spec)

    @property
    def queue(self) -> RequestQueue:
        """Specs queued in this session."""
        return self._queue

    @property
    def listeners(self) -> BatchListeners:
        """Notification listeners used by this session."""
        return self._executor.listeners

    def on_completed(self, listener: CompletedListener) -> CompletedListener:
        """Register a listener for successful requests."""
        return self.listeners.on_completed(listener)

    def on_failed(self, listener: FailedListener) -> FailedListener:
        """Register a listener for failed requests."""
        return self.listeners.on_failed(listener)

    async def exec(self) -> None:
        """Dispatch every queued request.

        Returns once the last request has been dispatched, not when it
        completes. Outcomes arrive through the listeners.
        """
        await self._executor.run(self._queue)

    async def join(self) -> None:
        """Wait for all dispatched requests and their notifications."""
        await self._executor.join()

    async def run(self) -> BatchStats:
        """Dispatch every queued request and wait for all of them.

        Returns:
            Counters after the last notification was delivered
        """
        await self.exec()
        await self.join()
        return self.stats()

    async def cancel(self) -> None:
        """Cancel in-flight requests. Cancelled requests get no notification."""
        await self._executor.cancel()

    def stats(self) -> BatchStats:
        """Snapshot of the session counters."""
        return self._executor.stats

    def monitor(
        self,
        console_clear: bool = True,
        *,
        interval: float = DEFAULT_INTERVAL,
        stream: IO[str] | None = None,
    ) -> ProgressMonitor:
        """Start printing progress until every request resolved.

        Must be called from within a running event loop.
        """
        return ProgressMonitor(
            self.stats,
            interval=interval,
            stream=stream,
            clear=console_clear,
        ).start()

    def __len__(self) -> int:
        return len(self._queue)
