"""
Batch executor for bounded-concurrency request dispatch.

Drains a RequestQueue through a ConcurrencyGate, running each request as
its own task and reporting outcomes through BatchListeners as they
resolve.
"""

from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass, replace
from typing import TYPE_CHECKING, Any

from webshotapi.batch.events import BatchListeners
from webshotapi.errors import TransportError
from webshotapi.telemetry import LogContext, get_logger, set_log_context

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from webshotapi.batch.gate import ConcurrencyGate
    from webshotapi.batch.queue import RequestQueue
    from webshotapi.batch.spec import RequestSpec
    from webshotapi.client.response import Result

    PerformRequest = Callable[[RequestSpec], Awaitable[Result]]

logger = get_logger(__name__)


@dataclass
class BatchStats:
    """Aggregate progress counters for a batch session.

    Attributes:
        total: Specs submitted to ``run``, summed over every run
        completed: Requests resolved, successfully or not
        running: Requests dispatched and not yet resolved
        max_concurrency: Gate limit
        succeeded: Requests that produced a Result
        failed: Requests that raised
    """

    total: int = 0
    completed: int = 0
    running: int = 0
    max_concurrency: int = 0
    succeeded: int = 0
    failed: int = 0

    @property
    def is_done(self) -> bool:
        """Whether every submitted request has resolved."""
        return self.completed >= self.total

    def to_dict(self) -> dict[str, int]:
        """Counters under the keys reported by ``multi_stats``."""
        return {
            "total": self.total,
            "completed": self.completed,
            "running": self.running,
            "max_concurrency": self.max_concurrency,
        }

    def as_dict(self) -> dict[str, Any]:
        """Every counter, including the success/failure split."""
        return asdict(self)


class BatchExecutor:
    """Dispatches queued specs with at most ``gate.limit`` in flight.

    ``run`` returns as soon as the last spec has been dispatched; the
    requests themselves keep running as tasks. Use ``join`` to wait for
    them and their notifications.

    Example:
        >>> executor = BatchExecutor(client.perform_request, ConcurrencyGate(2), listeners)
        >>> await executor.run(queue)
        >>> await executor.join()
        >>> executor.stats.completed
        4
    """

    def __init__(
        self,
        perform_request: PerformRequest,
        gate: ConcurrencyGate,
        listeners: BatchListeners | None = None,
        *,
        request_timeout: float | None = None,
    ) -> None:
        """Initialize batch executor.

        Args:
            perform_request: Async callable executing one spec
            gate: Concurrency gate shared by dispatched requests
            listeners: Notification listeners
            request_timeout: Per-request deadline in seconds (None = no deadline)
        """
        self._perform_request = perform_request
        self._gate = gate
        self._listeners = listeners or BatchListeners()
        self._request_timeout = request_timeout
        self._stats = BatchStats(max_concurrency=gate.limit)
        self._tasks: set[asyncio.Task[None]] = set()
        self._unsettled: set[asyncio.Task[None]] = set()

    @property
    def stats(self) -> BatchStats:
        """Snapshot of the counters at the moment of the call."""
        return replace(self._stats)

    @property
    def gate(self) -> ConcurrencyGate:
        """The concurrency gate."""
        return self._gate

    @property
    def listeners(self) -> BatchListeners:
        """The notification listeners."""
        return self._listeners

    @property
    def pending(self) -> int:
        """Dispatched requests whose task has not finished yet."""
        return len(self._tasks)

    async def run(self, queue: RequestQueue) -> None:
        """Dispatch every spec in the queue, in submission order.

        Waits only when the gate is saturated. Per-request failures are
        reported through listeners; an unexpected error in the dispatch
        loop is logged and stops further dispatching.

        Args:
            queue: Specs to dispatch
        """
        specs = queue.drain_all()
        self._stats.total += len(specs)
        logger.info(
            "Batch dispatch started",
            total=len(specs),
            max_concurrency=self._gate.limit,
        )

        try:
            for spec in specs:
                await self._gate.acquire()
                self._stats.running += 1
                task = asyncio.create_task(
                    self._dispatch(spec), name=f"webshotapi-request-{spec.index}"
                )
                self._tasks.add(task)
                self._unsettled.add(task)
                task.add_done_callback(self._on_task_done)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Batch dispatch loop failed", running=self._stats.running)

    async def _dispatch(self, spec: RequestSpec) -> None:
        """Run one request and report its outcome exactly once."""
        set_log_context(
            LogContext(request_index=spec.index, path=spec.path, method=spec.method.value)
        )
        task = asyncio.current_task()
        try:
            result = await self._perform(spec)
        except Exception as e:
            self._settle(task, succeeded=False)
            logger.warning("Request failed", request_index=spec.index, error=str(e))
            await self._listeners.emit_failed(e, spec.payload(), spec.index)
        else:
            self._settle(task, succeeded=True)
            logger.debug("Request completed", request_index=spec.index)
            await self._listeners.emit_completed(result, spec.payload(), spec.index)

    def _settle(self, task: asyncio.Task[Any] | None, *, succeeded: bool) -> None:
        """Free the task's slot and count its outcome, once per task."""
        if task not in self._unsettled:
            return
        self._unsettled.discard(task)
        self._gate.release()
        self._stats.running -= 1
        self._stats.completed += 1
        if succeeded:
            self._stats.succeeded += 1
        else:
            self._stats.failed += 1

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        # Cancelled tasks settle here, including ones cancelled before their first step
        self._settle(task, succeeded=False)

    async def _perform(self, spec: RequestSpec) -> Result:
        if self._request_timeout is None:
            return await self._perform_request(spec)
        try:
            return await asyncio.wait_for(
                self._perform_request(spec), timeout=self._request_timeout
            )
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request timed out after {self._request_timeout}s",
                url=spec.path,
                cause=e,
            ) from e

    async def join(self) -> None:
        """Wait until every dispatched request has resolved and been reported."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def cancel(self) -> None:
        """Cancel every in-flight request task and wait for them to unwind."""
        for task in list(self._tasks):
            task.cancel()
        await self.join()
