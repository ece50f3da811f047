"""
Base interface for chunk store adapters.

`ChunkStore` is the generic put/get contract consumed by code that moves
content-addressed chunks (e.g. a file system or a DAG walker) without
knowing how they reach the network.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from swarm_blockstore.storage.types import Address, Chunk


@runtime_checkable
class ChunkStore(Protocol):
    """Content-addressed put/get store."""

    async def get(self, address: Address) -> Chunk: ...

    async def put(self, chunk: Chunk) -> None: ...
