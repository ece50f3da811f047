"""
Chunk store adapter.

Binds a storage client to one upload tag, postage batch, redundancy
level and pin flag, and exposes plain put/get:

- ``put`` uploads through ``upload_chunk`` with the bound settings
- ``get`` downloads through ``download_chunk``

The tag is created once, when the adapter is created.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from swarm_blockstore.errors import ValidationError
from swarm_blockstore.storage.types import (
    ZERO_ADDRESS,
    Address,
    Chunk,
    RedundancyInput,
    RedundancyLevel,
)
from swarm_blockstore.utils.logging import get_logger

if TYPE_CHECKING:
    from swarm_blockstore.storage.base import IBlockstoreClient

_logger = get_logger(__name__)


def _as_redundancy_level(value: RedundancyInput) -> Optional[RedundancyLevel]:
    if value is None or value == "":
        return None
    try:
        return RedundancyLevel(value)
    except ValueError:
        raise ValidationError(
            f"Invalid redundancy level: {value!r}",
            field="redundancy_level",
            details={"value": str(value)},
        ) from None


class ChunkStoreAdapter:
    """
    `ChunkStore` backed by a Swarm storage client.

    Holds no mutable state after creation, so concurrent ``put`` and
    ``get`` calls are safe.

    Example:
        >>> client = await BeeClient.create(BeeConfig(api_url="http://localhost:1633"))
        >>> store = await ChunkStoreAdapter.create(client, batch="b0a1...")
        >>> await store.put(chunk)
        >>> same = await store.get(chunk.address)
    """

    def __init__(
        self,
        client: IBlockstoreClient,
        tag: int,
        batch: str,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
    ) -> None:
        """
        Initialize adapter with an existing tag.

        Note: Use `ChunkStoreAdapter.create()` to have the tag created.

        Raises:
            ValidationError: If redundancy_level is not a known level
        """
        self._client = client
        self._tag = tag
        self._batch = batch
        self._redundancy_level = _as_redundancy_level(redundancy_level)
        self._pin = pin

    @classmethod
    async def create(
        cls,
        client: IBlockstoreClient,
        batch: str,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
    ) -> ChunkStoreAdapter:
        """
        Create an adapter bound to a fresh upload tag.

        Args:
            client: Storage client
            batch: Postage batch ID used for every put
            redundancy_level: Erasure coding level used for every put
            pin: Pin every put chunk

        Returns:
            ChunkStoreAdapter

        Raises:
            ValidationError: If redundancy_level is not a known level
            StorageError: If tag creation fails (not retried)
        """
        _as_redundancy_level(redundancy_level)
        tag = await client.create_tag(ZERO_ADDRESS)
        _logger.debug("Chunk store created", extra={"tag": tag, "pin": pin})
        return cls(client, tag, batch, redundancy_level=redundancy_level, pin=pin)

    @property
    def tag(self) -> int:
        """Upload tag every put is counted under."""
        return self._tag

    @property
    def batch(self) -> str:
        return self._batch

    @property
    def pin(self) -> bool:
        return self._pin

    @property
    def redundancy_level(self) -> Optional[RedundancyLevel]:
        return self._redundancy_level

    async def get(self, address: Address) -> Chunk:
        """Download a chunk by address."""
        return await self._client.download_chunk(address)

    async def put(self, chunk: Chunk) -> None:
        """Upload a chunk under the bound tag; the returned address is discarded."""
        await self._client.upload_chunk(
            self._tag,
            chunk,
            stamp=self._batch,
            redundancy_level=self._redundancy_level,
            pin=self._pin,
        )
