"""Tests for request specs and the request queue."""

import pydantic
import pytest

from webshotapi.batch import HttpMethod, RequestQueue, RequestSpec


class TestRequestSpec:
    """Tests for RequestSpec."""

    def test_defaults(self) -> None:
        """Test default method and index."""
        spec = RequestSpec(path="screenshot/pdf", target="https://example.com")
        assert spec.method == HttpMethod.POST
        assert spec.index == -1
        assert not spec.is_enqueued

    def test_path_normalized(self) -> None:
        """Test leading slash and whitespace are stripped."""
        assert RequestSpec(path=" /extract ").path == "extract"

    def test_empty_path_rejected(self) -> None:
        """Test empty path is invalid."""
        with pytest.raises(pydantic.ValidationError):
            RequestSpec(path="/")

    def test_frozen(self) -> None:
        """Test specs are immutable."""
        spec = RequestSpec(path="extract")
        with pytest.raises(pydantic.ValidationError):
            spec.index = 3

    def test_payload_includes_link(self) -> None:
        """Test payload merges target as link without touching params."""
        params = {"width": 1920}
        spec = RequestSpec(path="screenshot/pdf", target="https://example.com", params=params)
        assert spec.payload() == {"width": 1920, "link": "https://example.com"}
        assert spec.params == {"width": 1920}

    def test_payload_without_target(self) -> None:
        """Test project calls carry no link."""
        spec = RequestSpec(path="project", params={"name": "p"})
        assert spec.payload() == {"name": "p"}


class TestRequestQueue:
    """Tests for RequestQueue."""

    def test_enqueue_assigns_positions(self) -> None:
        """Test each spec's index equals its position."""
        queue = RequestQueue()
        spec = RequestSpec(path="extract", target="https://a.example")

        assert queue.enqueue(spec) == 0
        assert queue.enqueue(spec) == 1
        assert queue.enqueue(spec.with_index(7)) == 2

        assert [s.index for s in queue] == [0, 1, 2]
        assert spec.index == -1
        assert len(queue) == 3

    def test_drain_all_order(self) -> None:
        """Test drain returns submission order and keeps entries."""
        queue = RequestQueue()
        for target in ("https://a.example", "https://b.example", "https://c.example"):
            queue.enqueue(RequestSpec(path="screenshot/png", target=target))

        drained = queue.drain_all()

        assert [s.target for s in drained] == [
            "https://a.example",
            "https://b.example",
            "https://c.example",
        ]
        assert len(queue) == 3
        assert queue[1].target == "https://b.example"

    def test_clear(self) -> None:
        """Test clearing empties the queue and restarts indices."""
        queue = RequestQueue()
        queue.enqueue(RequestSpec(path="extract"))
        queue.clear()
        assert len(queue) == 0
        assert queue.enqueue(RequestSpec(path="extract")) == 0
