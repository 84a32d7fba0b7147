"""
Completion notifications for batch requests.

Listeners subscribe to one of two events. Exactly one of them fires for
every dispatched request, in completion order.
"""

from __future__ import annotations

import inspect
from enum import Enum
from typing import TYPE_CHECKING, Any

from webshotapi.telemetry import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from webshotapi.client.response import Result
    from webshotapi.errors import WebshotError

    CompletedListener = Callable[[Result, dict[str, Any], int], Awaitable[Any] | Any]
    FailedListener = Callable[[Exception, dict[str, Any], int], Awaitable[Any] | Any]

logger = get_logger(__name__)


class BatchEvent(str, Enum):
    """Notification types emitted by the batch executor."""

    COMPLETED = "completed"
    FAILED = "failed"


class BatchListeners:
    """Registry of completion and failure listeners.

    Listeners are called as ``listener(outcome, params, index)`` where
    ``outcome`` is the Result or the exception, ``params`` the request
    parameters as submitted, and ``index`` the submission position.
    Both plain functions and coroutine functions are accepted.

    Example:
        >>> listeners = BatchListeners()
        >>>
        >>> @listeners.on_completed
        ... async def saved(result, params, index):
        ...     result.save(f"/tmp/file_{index}")
        >>>
        >>> @listeners.on_failed
        ... def report(error, params, index):
        ...     print(index, error)
    """

    def __init__(self) -> None:
        self._listeners: dict[BatchEvent, list[Callable[..., Any]]] = {
            BatchEvent.COMPLETED: [],
            BatchEvent.FAILED: [],
        }

    def add_listener(
        self, event: BatchEvent | str, listener: Callable[..., Any]
    ) -> Callable[..., Any]:
        """Register a listener for an event.

        Args:
            event: Event to listen to
            listener: Callable invoked with (outcome, params, index)

        Returns:
            The listener, so this can be used as a decorator
        """
        self._listeners[BatchEvent(event)].append(listener)
        return listener

    def remove_listener(self, event: BatchEvent | str, listener: Callable[..., Any]) -> bool:
        """Unregister a listener.

        Returns:
            True if removed, False if it was not registered
        """
        listeners = self._listeners[BatchEvent(event)]
        if listener in listeners:
            listeners.remove(listener)
            return True
        return False

    def on_completed(self, listener: CompletedListener) -> CompletedListener:
        """Register a listener for successful requests."""
        return self.add_listener(BatchEvent.COMPLETED, listener)

    def on_failed(self, listener: FailedListener) -> FailedListener:
        """Register a listener for failed requests."""
        return self.add_listener(BatchEvent.FAILED, listener)

    def listeners(self, event: BatchEvent | str) -> list[Callable[..., Any]]:
        """Listeners currently registered for an event."""
        return list(self._listeners[BatchEvent(event)])

    def clear(self) -> None:
        """Remove every listener."""
        for listeners in self._listeners.values():
            listeners.clear()

    async def emit(
        self,
        event: BatchEvent,
        outcome: Result | WebshotError | Exception,
        params: dict[str, Any],
        index: int,
    ) -> None:
        """Deliver an outcome to every listener of an event.

        Listener exceptions are logged and never propagate.
        """
        for listener in self.listeners(event):
            try:
                value = listener(outcome, params, index)
                if inspect.isawaitable(value):
                    await value
            except Exception:
                logger.exception(
                    "Batch listener raised",
                    event=event.value,
                    listener=getattr(listener, "__name__", repr(listener)),
                    request_index=index,
                )

    async def emit_completed(self, result: Result, params: dict[str, Any], index: int) -> None:
        """Deliver a successful result."""
        await self.emit(BatchEvent.COMPLETED, result, params, index)

    async def emit_failed(self, error: Exception, params: dict[str, Any], index: int) -> None:
        """Deliver a failure."""
        await self.emit(BatchEvent.FAILED, error, params, index)
