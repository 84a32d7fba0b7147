"""
Batch processing module for webshotapi.

Provides the request queue, concurrency gate, executor, completion
notifications and progress monitor used by batch ("multi") mode.
"""

from webshotapi.batch.events import BatchEvent, BatchListeners
from webshotapi.batch.executor import BatchExecutor, BatchStats
from webshotapi.batch.gate import ConcurrencyGate
from webshotapi.batch.monitor import ProgressMonitor
from webshotapi.batch.queue import RequestQueue
from webshotapi.batch.spec import HttpMethod, RequestSpec

__all__ = [
    "BatchEvent",
    "BatchExecutor",
    "BatchListeners",
    "BatchStats",
    "ConcurrencyGate",
    "HttpMethod",
    "ProgressMonitor",
    "RequestQueue",
    "RequestSpec",
]
