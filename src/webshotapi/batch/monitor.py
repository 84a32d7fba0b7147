"""
Console progress monitor for batch sessions.
"""

from __future__ import annotations

import asyncio
import sys
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from webshotapi.batch.executor import BatchStats

DEFAULT_INTERVAL = 0.15

_CLEAR_SCREEN = "\x1b[2J\x1b[H"


class ProgressMonitor:
    """Periodically renders batch counters until every request resolved.

    Example:
        >>> monitor = ProgressMonitor(session.stats)
        >>> monitor.start()
        >>> await session.exec()
        >>> await monitor.wait()
    """

    def __init__(
        self,
        stats_provider: Callable[[], BatchStats],
        *,
        interval: float = DEFAULT_INTERVAL,
        stream: IO[str] | None = None,
        clear: bool = True,
    ) -> None:
        """Initialize monitor.

        Args:
            stats_provider: Returns a fresh stats snapshot on each call
            interval: Seconds between samples
            stream: Output stream (default: stdout)
            clear: Clear the terminal before each line (TTY streams only)
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._stats_provider = stats_provider
        self._interval = interval
        self._stream = stream or sys.stdout
        self._clear = clear
        self._task: asyncio.Task[None] | None = None

    @staticmethod
    def render(stats: BatchStats) -> str:
        """Format one progress line."""
        return (
            f"Total: {stats.completed}/{stats.total} "
            f"Running: {stats.running} "
            f"Max concurrency: {stats.max_concurrency}"
        )

    @property
    def is_running(self) -> bool:
        """Whether the sampling task is active."""
        return self._task is not None and not self._task.done()

    def start(self) -> ProgressMonitor:
        """Start sampling on the running event loop.

        Returns:
            Self for chaining
        """
        if not self.is_running:
            self._task = asyncio.get_running_loop().create_task(self._loop())
        return self

    def stop(self) -> None:
        """Stop sampling."""
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        """Wait until the monitor stops by itself or is stopped."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            stats = self._stats_provider()
            self._write(self.render(stats))
            if stats.completed >= stats.total:
                return

    def _write(self, line: str) -> None:
        if self._clear and self._stream.isatty():
            self._stream.write(_CLEAR_SCREEN)
        self._stream.write(line + "\n")
        self._stream.flush()
