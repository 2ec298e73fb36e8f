"""
Tests for bounded body collection.

Requests are built from an in-memory ASGI receive channel.
"""

import pytest

from fastapi_xml.body import BodyCollectionError, LengthLimitError, collect_body
from tests._requests import make_request


class TestCollectBody:
    """Tests for collect_body success paths."""

    @pytest.mark.asyncio
    async def test_single_chunk(self) -> None:
        """A body sent in one message is returned as-is."""
        request = make_request(body=b"<a/>")
        assert await collect_body(request, limit=1024) == b"<a/>"

    @pytest.mark.asyncio
    async def test_multiple_chunks_joined(self) -> None:
        """Chunks are concatenated in order."""
        request = make_request(chunks=[b"<a>", b"x", b"</a>"])
        assert await collect_body(request, limit=1024) == b"<a>x</a>"

    @pytest.mark.asyncio
    async def test_unbounded(self) -> None:
        """limit=None accepts any size."""
        request = make_request(body=b"x" * 10_000)
        assert len(await collect_body(request, limit=None)) == 10_000

    @pytest.mark.asyncio
    async def test_body_exactly_at_limit(self) -> None:
        """A body of exactly ``limit`` bytes is accepted."""
        request = make_request(body=b"x" * 8, content_length="8")
        assert await collect_body(request, limit=8) == b"x" * 8


class TestCollectBodyFailures:
    """Tests for collect_body error mapping."""

    @pytest.mark.asyncio
    async def test_declared_length_over_limit(self) -> None:
        """An oversized Content-Length fails before reading the stream."""
        calls: list[str] = []
        request = make_request(body=b"x" * 100, content_length="100", calls=calls)
        with pytest.raises(LengthLimitError) as exc_info:
            await collect_body(request, limit=10)
        assert exc_info.value.status_code == 413
        assert calls == []

    @pytest.mark.asyncio
    async def test_streamed_body_over_limit(self) -> None:
        """A body growing past the limit without Content-Length fails with 413."""
        request = make_request(chunks=[b"x" * 6, b"x" * 6])
        with pytest.raises(LengthLimitError) as exc_info:
            await collect_body(request, limit=10)
        assert exc_info.value.status_code == 413
        assert "length limit exceeded" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_content_length(self) -> None:
        """A non-numeric Content-Length fails with 400."""
        request = make_request(body=b"<a/>", content_length="abc")
        with pytest.raises(BodyCollectionError) as exc_info:
            await collect_body(request, limit=1024)
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_client_disconnect(self) -> None:
        """A disconnect mid-body fails with 400."""
        request = make_request(chunks=[b"<a>", b"</a>"], disconnect=True)
        with pytest.raises(BodyCollectionError) as exc_info:
            await collect_body(request, limit=1024)
        assert exc_info.value.status_code == 400
        assert "disconnected" in exc_info.value.message
