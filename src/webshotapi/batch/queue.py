"""
Ordered queue of pending request specifications.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from webshotapi.batch.spec import RequestSpec


class RequestQueue:
    """Specs accumulated while batch mode is armed.

    Append-only during accumulation. Each spec's ``index`` equals its
    position. Not safe for concurrent mutation; arming, enqueuing and
    starting execution happen sequentially on the caller's side.

    Example:
        >>> queue = RequestQueue()
        >>> queue.enqueue(RequestSpec(path="screenshot/pdf", target="https://example.com"))
        0
    """

    def __init__(self) -> None:
        self._items: list[RequestSpec] = []

    def enqueue(self, spec: RequestSpec) -> int:
        """Append a spec and assign its index.

        Args:
            spec: Spec to append (any existing index is overwritten)

        Returns:
            The index assigned, i.e. the queue length before the append
        """
        index = len(self._items)
        self._items.append(spec.with_index(index))
        return index

    def drain_all(self) -> list[RequestSpec]:
        """Return every spec in submission order.

        The returned list is a snapshot for the executor to walk once.
        Entries stay in the queue, so running the same session again
        dispatches them again.
        """
        return list(self._items)

    def clear(self) -> None:
        """Drop all pending specs."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[RequestSpec]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> RequestSpec:
        return self._items[index]
