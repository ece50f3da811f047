"""
Exception hierarchy for the Swarm blockstore client.

- `BlockstoreError`: base for everything raised by this package
- `ValidationError`: preconditions checked before any request
- `StorageError`: failures talking to the Bee node
"""

from swarm_blockstore.errors.base import BlockstoreError, ValidationError
from swarm_blockstore.errors.storage import (
    ArchiveStreamClosedError,
    ArchiveStreamConsumedError,
    ArchiveStreamError,
    BeeAPIError,
    BeeTimeoutError,
    BeeTransportError,
    ContentNotFoundError,
    InvalidAddressError,
    InvalidCollectionItemError,
    InvalidFeedParameterError,
    MissingPostageStampError,
    MissingSignatureError,
    ResponseDecodeError,
    StorageError,
    TagSyncTimeoutError,
)

__all__ = [
    "BlockstoreError",
    "ValidationError",
    # Preconditions
    "InvalidAddressError",
    "MissingPostageStampError",
    "MissingSignatureError",
    "InvalidFeedParameterError",
    "InvalidCollectionItemError",
    "ArchiveStreamError",
    "ArchiveStreamClosedError",
    "ArchiveStreamConsumedError",
    # Network
    "StorageError",
    "BeeTransportError",
    "BeeTimeoutError",
    "ResponseDecodeError",
    "BeeAPIError",
    "ContentNotFoundError",
    "TagSyncTimeoutError",
]
