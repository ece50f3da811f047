"""Helpers for turning caller data into httpx request bodies."""

from __future__ import annotations

import asyncio
from typing import AsyncIterable, AsyncIterator, BinaryIO, Union

from swarm_blockstore.constants import COPY_BUFFER_SIZE

UploadData = Union[bytes, bytearray, memoryview, BinaryIO, AsyncIterable[bytes]]


async def aiter_file(fileobj: BinaryIO, chunk_size: int = COPY_BUFFER_SIZE) -> AsyncIterator[bytes]:
    """
    Read a binary file object in bounded blocks.

    Each read runs in the default executor so slow disks do not stall
    the event loop.

    Args:
        fileobj: Readable binary file object
        chunk_size: Block size in bytes

    Yields:
        Successive blocks until EOF
    """
    loop = asyncio.get_running_loop()
    while True:
        block = await loop.run_in_executor(None, fileobj.read, chunk_size)
        if not block:
            break
        yield block


def to_request_content(data: UploadData) -> Union[bytes, AsyncIterable[bytes]]:
    """
    Normalize upload data to something AsyncClient can send.

    Bytes-like values are sent as-is, async iterables are streamed and
    file objects are streamed in COPY_BUFFER_SIZE blocks.
    """
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, bytes):
        return data
    if hasattr(data, "__aiter__"):
        return data  # type: ignore[return-value]
    if hasattr(data, "read"):
        return aiter_file(data)  # type: ignore[arg-type]
    raise TypeError(f"Unsupported upload data type: {type(data).__name__}")
