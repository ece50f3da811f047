"""
Tests for upload body helpers.
"""

import io
import threading
from typing import List

import pytest

from swarm_blockstore.utils.streams import aiter_file, to_request_content


class ThreadRecordingBytesIO(io.BytesIO):
    """BytesIO that records which thread each read ran on."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.read_threads: List[int] = []

    def read(self, size: int = -1) -> bytes:
        self.read_threads.append(threading.get_ident())
        return super().read(size)


async def collect(iterable) -> List[bytes]:
    return [block async for block in iterable]


class TestAiterFile:
    """Tests for aiter_file."""

    @pytest.mark.asyncio
    async def test_reads_in_blocks(self) -> None:
        """Test the file is read in bounded blocks until EOF."""
        blocks = await collect(aiter_file(io.BytesIO(b"abcdefg"), chunk_size=3))
        assert blocks == [b"abc", b"def", b"g"]

    @pytest.mark.asyncio
    async def test_reads_off_the_event_loop_thread(self) -> None:
        """Test blocking reads run outside the event loop thread."""
        fh = ThreadRecordingBytesIO(b"x" * 10)

        await collect(aiter_file(fh, chunk_size=4))

        assert fh.read_threads
        assert threading.get_ident() not in fh.read_threads

    @pytest.mark.asyncio
    async def test_empty_file(self) -> None:
        """Test an empty file yields nothing."""
        assert await collect(aiter_file(io.BytesIO(b""))) == []


class TestToRequestContent:
    """Tests for to_request_content."""

    def test_bytes_like(self) -> None:
        """Test bytes-like values become bytes."""
        assert to_request_content(b"abc") == b"abc"
        assert to_request_content(bytearray(b"abc")) == b"abc"
        assert to_request_content(memoryview(b"abc")) == b"abc"

    @pytest.mark.asyncio
    async def test_file_object_is_streamed(self) -> None:
        """Test file objects become an async iterator."""
        content = to_request_content(io.BytesIO(b"payload"))
        assert b"".join(await collect(content)) == b"payload"

    def test_unsupported_type(self) -> None:
        """Test other values are rejected."""
        with pytest.raises(TypeError):
            to_request_content(42)  # type: ignore[arg-type]
