"""
Blockstore client interface.

Structural protocol satisfied by `BeeClient`. Adapters depend on this
interface rather than on the concrete HTTP client so tests can pass
their own implementations.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from swarm_blockstore.storage.tar_stream import TarStream
from swarm_blockstore.storage.types import (
    Address,
    Chunk,
    DownloadResult,
    FeedLookupResult,
    RedundancyInput,
    StreamedDownload,
    TagProgress,
)
from swarm_blockstore.utils.streams import UploadData


@runtime_checkable
class IBlockstoreClient(Protocol):
    """Operations offered by a Swarm storage access point."""

    async def check_connection(self) -> bool: ...

    async def upload_soc(
        self,
        owner: str,
        soc_id: str,
        signature: str,
        data: bytes,
        stamp: Optional[str] = None,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
    ) -> Address: ...

    async def upload_chunk(
        self,
        tag: int,
        chunk: Chunk,
        stamp: Optional[str] = None,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
    ) -> Address: ...

    async def download_chunk(self, address: Address) -> Chunk: ...

    async def upload_blob(
        self,
        data: UploadData,
        tag: int = 0,
        stamp: Optional[str] = None,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
        encrypt: bool = False,
    ) -> Address: ...

    async def download_blob(self, address: Address) -> StreamedDownload: ...

    async def upload_file_bzz(
        self,
        data: bytes,
        filename: str,
        stamp: Optional[str] = None,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
        content_type: str = ...,
    ) -> Address: ...

    async def upload_archive(
        self,
        stream: TarStream,
        stamp: Optional[str] = None,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
    ) -> Address: ...

    async def download_archive(self, address: Address) -> DownloadResult: ...

    async def download_archive_file(self, address: Address, filename: str) -> StreamedDownload: ...

    async def unpin_reference(self, address: Address) -> None: ...

    async def create_tag(self, address: Address = ...) -> int: ...

    async def get_tag(self, uid: int) -> TagProgress: ...

    async def create_feed_manifest(
        self,
        owner: str,
        topic: str,
        stamp: Optional[str] = None,
        pin: bool = False,
    ) -> Address: ...

    async def get_latest_feed_manifest(self, owner: str, topic: str) -> FeedLookupResult: ...
