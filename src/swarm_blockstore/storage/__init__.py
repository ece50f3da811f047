"""
Storage module for the Swarm blockstore client.

Provides:
- BeeClient: HTTP client for a Bee node or gateway proxy
- TarStream: Collection archive assembler
- Feed helpers: topic and update ID derivation
- Types: Address, Chunk, configuration, results
"""

from swarm_blockstore.storage.base import IBlockstoreClient
from swarm_blockstore.storage.bee_client import BeeClient
from swarm_blockstore.storage.feeds import (
    feed_update_id,
    is_index_advanced,
    make_topic,
    parse_feed_index,
)
from swarm_blockstore.storage.tar_stream import Collection, CollectionItem, TarStream
from swarm_blockstore.storage.types import (
    EMPTY_ADDRESS,
    ZERO_ADDRESS,
    Address,
    BeeConfig,
    Chunk,
    DownloadResult,
    ErrorBody,
    FeedLookupResult,
    NodeMode,
    OpaqueErrorBody,
    RedundancyLevel,
    StreamedDownload,
    StructuredErrorBody,
    TagProgress,
    UploadOptions,
    decode_error_body,
)

__all__ = [
    # Clients
    "BeeClient",
    "IBlockstoreClient",
    # Archive
    "TarStream",
    "Collection",
    "CollectionItem",
    # Feeds
    "make_topic",
    "feed_update_id",
    "parse_feed_index",
    "is_index_advanced",
    # Types
    "Address",
    "ZERO_ADDRESS",
    "EMPTY_ADDRESS",
    "Chunk",
    "BeeConfig",
    "UploadOptions",
    "RedundancyLevel",
    "NodeMode",
    "TagProgress",
    "FeedLookupResult",
    "DownloadResult",
    "StreamedDownload",
    "ErrorBody",
    "StructuredErrorBody",
    "OpaqueErrorBody",
    "decode_error_body",
]
