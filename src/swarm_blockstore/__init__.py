"""
Swarm Blockstore - Python client for Swarm storage through a Bee node.

Store and retrieve content-addressed chunks, blobs, file collections and
feeds over the Bee HTTP API.

Quick Start:
    >>> from swarm_blockstore import BeeClient, BeeConfig
    >>> import asyncio
    >>>
    >>> async def main():
    ...     config = BeeConfig(
    ...         api_url="http://localhost:1633",
    ...         postage_batch_id="b0a1...",
    ...     )
    ...     async with await BeeClient.create(config) as client:
    ...         address = await client.upload_blob(b"hello swarm")
    ...         print(f"Reference: {address}")
    ...
    >>> asyncio.run(main())

Modules:
- `storage`: BeeClient, TarStream, feed helpers and types
- `adapters`: ChunkStoreAdapter (put/get over one upload tag)
- `errors`: Exception hierarchy
- `config`: Environment configuration loading
- `utils`: Logging, validation and stream helpers
"""

from swarm_blockstore.version import __version__, __version_info__

# Storage
from swarm_blockstore.storage import (
    EMPTY_ADDRESS,
    ZERO_ADDRESS,
    Address,
    BeeClient,
    BeeConfig,
    Chunk,
    Collection,
    CollectionItem,
    DownloadResult,
    FeedLookupResult,
    IBlockstoreClient,
    NodeMode,
    RedundancyLevel,
    StreamedDownload,
    TagProgress,
    TarStream,
    UploadOptions,
    feed_update_id,
    is_index_advanced,
    make_topic,
    parse_feed_index,
)

# Adapters
from swarm_blockstore.adapters import ChunkStore, ChunkStoreAdapter

# Configuration
from swarm_blockstore.config import load_config_from_env

# Errors
from swarm_blockstore.errors import (
    ArchiveStreamClosedError,
    ArchiveStreamConsumedError,
    ArchiveStreamError,
    BeeAPIError,
    BeeTimeoutError,
    BeeTransportError,
    BlockstoreError,
    ContentNotFoundError,
    InvalidAddressError,
    InvalidCollectionItemError,
    InvalidFeedParameterError,
    MissingPostageStampError,
    MissingSignatureError,
    ResponseDecodeError,
    StorageError,
    TagSyncTimeoutError,
    ValidationError,
)

# Logging
from swarm_blockstore.utils import configure_logging, get_logger

__all__ = [
    "__version__",
    "__version_info__",
    # Client
    "BeeClient",
    "BeeConfig",
    "IBlockstoreClient",
    "load_config_from_env",
    # Types
    "Address",
    "ZERO_ADDRESS",
    "EMPTY_ADDRESS",
    "Chunk",
    "UploadOptions",
    "RedundancyLevel",
    "NodeMode",
    "TagProgress",
    "FeedLookupResult",
    "DownloadResult",
    "StreamedDownload",
    # Archive
    "TarStream",
    "Collection",
    "CollectionItem",
    # Feeds
    "make_topic",
    "feed_update_id",
    "parse_feed_index",
    "is_index_advanced",
    # Adapters
    "ChunkStore",
    "ChunkStoreAdapter",
    # Errors
    "BlockstoreError",
    "ValidationError",
    "InvalidAddressError",
    "MissingPostageStampError",
    "MissingSignatureError",
    "InvalidFeedParameterError",
    "InvalidCollectionItemError",
    "ArchiveStreamError",
    "ArchiveStreamClosedError",
    "ArchiveStreamConsumedError",
    "StorageError",
    "BeeTransportError",
    "BeeTimeoutError",
    "ResponseDecodeError",
    "BeeAPIError",
    "ContentNotFoundError",
    "TagSyncTimeoutError",
    # Logging
    "configure_logging",
    "get_logger",
]
