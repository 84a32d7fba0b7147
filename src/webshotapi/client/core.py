"""Core WebshotClient implementation."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

from webshotapi.batch import BatchListeners, BatchStats, ConcurrencyGate, ProgressMonitor
from webshotapi.batch.monitor import DEFAULT_INTERVAL
from webshotapi.batch.spec import HttpMethod, RequestSpec
from webshotapi.client.builder import WebshotClientBuilder
from webshotapi.client.endpoints import EndpointsMixin
from webshotapi.client.response import Result
from webshotapi.client.session import BatchSession
from webshotapi.config import ClientConfig
from webshotapi.errors import UsageError
from webshotapi.telemetry import get_logger
from webshotapi.transport import HttpTransport

if TYPE_CHECKING:
    from webshotapi.batch.events import CompletedListener, FailedListener

logger = get_logger(__name__)


class WebshotClient(EndpointsMixin[Any]):
    """Client for the WebshotAPI screenshot and extraction service.

    Endpoint methods return an awaitable Result. After ``multi()`` arms
    batch mode, the same methods queue their request on the batch
    session and return the session instead.

    Example:
        >>> async with WebshotClient("YOUR_API_KEY") as client:
        ...     result = await client.pdf("https://www.example.com", {"width": 1920})
        ...     result.save("/tmp/screenshot.pdf")

        >>> # Batch mode
        >>> client = WebshotClient("YOUR_API_KEY", max_concurrency=4)
        >>> batch = client.multi()
        >>> batch.pdf("https://www.example.com").extract("https://www.python.org")
        >>> client.on_completed(lambda result, params, index: result.save(f"/tmp/file_{index}"))
        >>> client.on_failed(lambda error, params, index: print(params["link"], error))
        >>> await client.exec()
        >>> await client.join()
    """

    def __init__(
        self,
        api_key: str | None = None,
        max_concurrency: int | None = None,
        version: str | None = None,
        *,
        config: ClientConfig | None = None,
        transport: HttpTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key (falls back to WEBSHOTAPI_API_KEY, then keyring)
            max_concurrency: Maximum in-flight requests in batch mode
            version: API version
            config: Base configuration the other arguments override
            transport: Pre-built transport (mainly for tests)

        Raises:
            ValueError: If the configuration is out of range
        """
        base = config or ClientConfig()
        self._config = base.merge(
            api_key=api_key,
            max_concurrency=max_concurrency,
            version=version,
        ).validate()
        self._transport = transport or HttpTransport(self._config)
        self._gate = ConcurrencyGate(self._config.max_concurrency)
        self._listeners = BatchListeners()
        self._batch: BatchSession | None = None

    @classmethod
    def builder(cls) -> WebshotClientBuilder:
        """Get a builder for advanced configuration.

        Example:
            >>> client = (
            ...     WebshotClient.builder()
            ...     .api_key("YOUR_API_KEY")
            ...     .max_concurrency(4)
            ...     .timeout(60)
            ...     .build()
            ... )
        """
        return WebshotClientBuilder()

    @classmethod
    def from_env(cls) -> WebshotClient:
        """Create a client configured from WEBSHOTAPI_* environment variables."""
        return cls(config=ClientConfig.from_env())

    # Request execution

    async def perform_request(self, spec: RequestSpec) -> Result:
        """Execute one request spec.

        Args:
            spec: Request to execute

        Returns:
            Interpreted response

        Raises:
            WebshotError: On validation, transport, remote or content errors
        """
        response = await self._transport.request(
            spec.method.value,
            spec.path,
            params=spec.payload(),
        )
        return Result.from_response(response, url=spec.target)

    async def request(
        self,
        url: str | None,
        path: str,
        method: HttpMethod | str = HttpMethod.POST,
        params: dict[str, Any] | None = None,
    ) -> Result:
        """Call any API path directly, bypassing batch mode.

        Args:
            url: Website URL sent as ``link`` (None for project calls)
            path: API path, e.g. "screenshot/pdf"
            method: HTTP method
            params: Request parameters
        """
        spec = RequestSpec(target=url, path=path, method=HttpMethod(method), params=params or {})
        return await self.perform_request(spec)

    def _submit(self, spec: RequestSpec) -> Any:
        if self._batch is not None:
            return self._batch._submit(spec)
        return self.perform_request(spec)

    async def info(self) -> Result:
        """Get account and subscription info. Never queued in batch mode."""
        return await self.perform_request(RequestSpec(path="info", method=HttpMethod.GET))

    @property
    def request_remaining(self) -> int | None:
        """Requests left in the subscription, as of the last response."""
        return self._transport.request_remaining

    def get_request_remaining(self) -> int | None:
        """Requests left in the subscription, as of the last response."""
        return self.request_remaining

    # Batch mode

    def multi(self, enabled: bool = True) -> BatchSession | None:
        """Arm or disarm batch mode.

        Arming always starts a fresh session: empty queue, zeroed stats.
        Listeners registered on the client carry over.

        Args:
            enabled: False disarms batch mode

        Returns:
            The new session, or None when disarming
        """
        if not enabled:
            self._batch = None
            return None

        self._batch = BatchSession(
            self.perform_request,
            self._gate,
            self._listeners,
            request_timeout=self._config.request_timeout,
        )
        logger.debug("Batch mode armed", max_concurrency=self._gate.limit)
        return self._batch

    @property
    def batch(self) -> BatchSession | None:
        """The armed batch session, if any."""
        return self._batch

    @property
    def is_multi(self) -> bool:
        """Whether batch mode is armed."""
        return self._batch is not None

    def _require_batch(self) -> BatchSession:
        if self._batch is None:
            raise UsageError("Batch mode is not armed").with_hint(
                "call client.multi() before queueing requests"
            )
        return self._batch

    async def exec(self) -> None:
        """Dispatch the queued batch requests.

        Returns once every request has been dispatched. Outcomes are
        delivered to ``on_completed`` / ``on_failed`` listeners.

        Raises:
            UsageError: If batch mode is not armed
        """
        await self._require_batch().exec()

    async def join(self) -> None:
        """Wait for every dispatched batch request to resolve.

        Raises:
            UsageError: If batch mode is not armed
        """
        await self._require_batch().join()

    def multi_stats(self) -> BatchStats:
        """Counters of the armed session (all zero when not armed)."""
        if self._batch is None:
            return BatchStats(max_concurrency=self._gate.limit)
        return self._batch.stats()

    def multi_monitor(
        self,
        console_clear: bool = True,
        *,
        interval: float = DEFAULT_INTERVAL,
        stream: IO[str] | None = None,
    ) -> ProgressMonitor:
        """Print batch progress until every request resolved.

        Must be called from within a running event loop.
        """
        return ProgressMonitor(
            self.multi_stats,
            interval=interval,
            stream=stream,
            clear=console_clear,
        ).start()

    def on_completed(self, listener: CompletedListener) -> CompletedListener:
        """Register a listener called as ``listener(result, params, index)``."""
        return self._listeners.on_completed(listener)

    def on_failed(self, listener: FailedListener) -> FailedListener:
        """Register a listener called as ``listener(error, params, index)``."""
        return self._listeners.on_failed(listener)

    @property
    def listeners(self) -> BatchListeners:
        """Batch notification listeners."""
        return self._listeners

    # Accessors

    @property
    def config(self) -> ClientConfig:
        """Effective configuration."""
        return self._config

    @property
    def max_concurrency(self) -> int:
        """Maximum in-flight requests in batch mode."""
        return self._gate.limit

    @property
    def gate(self) -> ConcurrencyGate:
        """Concurrency gate shared by every batch session of this client."""
        return self._gate

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> WebshotClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
