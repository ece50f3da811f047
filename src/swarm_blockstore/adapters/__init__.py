"""
Swarm blockstore adapters.

- ChunkStore: generic content-addressed put/get interface
- ChunkStoreAdapter: ChunkStore backed by a BeeClient and one upload tag

Usage:
    >>> from swarm_blockstore import BeeClient, BeeConfig, ChunkStoreAdapter
    >>> client = await BeeClient.create(BeeConfig(api_url="http://localhost:1633"))
    >>> store = await ChunkStoreAdapter.create(client, batch="b0a1...")
    >>> await store.put(chunk)
"""

from swarm_blockstore.adapters.base import ChunkStore
from swarm_blockstore.adapters.chunk_store import ChunkStoreAdapter

__all__ = [
    "ChunkStore",
    "ChunkStoreAdapter",
]
