"""Constants for the Swarm blockstore client.

This module defines the wire contract with the Bee node API: header
names, endpoint paths, connection pool bounds and well-known response
bodies. Header and path names must match the Bee API version this
client targets.
"""

# Bee API Paths
HEALTH_PATH = "/health"
SOC_PATH = "/soc"
CHUNKS_PATH = "/chunks"
BYTES_PATH = "/bytes"
BZZ_PATH = "/bzz"
TAGS_PATH = "/tags"
PINS_PATH = "/pins"
FEEDS_PATH = "/feeds"

# Swarm Request Headers
SWARM_POSTAGE_BATCH_ID_HEADER = "Swarm-Postage-Batch-Id"
SWARM_PIN_HEADER = "Swarm-Pin"
SWARM_ENCRYPT_HEADER = "Swarm-Encrypt"
SWARM_DEFERRED_UPLOAD_HEADER = "Swarm-Deferred-Upload"
SWARM_REDUNDANCY_LEVEL_HEADER = "Swarm-Redundancy-Level"
SWARM_TAG_HEADER = "Swarm-Tag"
SWARM_COLLECTION_HEADER = "Swarm-Collection"
CONTENT_TYPE_HEADER = "Content-Type"
CONTENT_LENGTH_HEADER = "Content-Length"

# Swarm Response Headers
SWARM_FEED_INDEX_HEADER = "swarm-feed-index"
SWARM_FEED_INDEX_NEXT_HEADER = "swarm-feed-index-next"

# Content Types
OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"
JSON_CONTENT_TYPE = "application/json"
TAR_CONTENT_TYPE = "application/x-tar"

# Node Detection
FULL_NODE_ROOT_BODY = "Ethereum Swarm Bee\n"
GATEWAY_PROXY_HEALTH_BODY = "OK"

# Connection Pool
MAX_IDLE_CONNECTIONS = 20
MAX_CONNECTIONS_PER_HOST = 256
DEFAULT_REQUEST_TIMEOUT_MS = 6_000_000  # 100 minutes, large blob uploads

# Content Addressing
ADDRESS_SIZE = 32
ENCRYPTED_ADDRESS_SIZE = 64

# Archive Assembly
COPY_BUFFER_SIZE = 32 * 1024
ARCHIVE_ENTRY_MODE = 0o777

__all__ = [
    "HEALTH_PATH",
    "SOC_PATH",
    "CHUNKS_PATH",
    "BYTES_PATH",
    "BZZ_PATH",
    "TAGS_PATH",
    "PINS_PATH",
    "FEEDS_PATH",
    "SWARM_POSTAGE_BATCH_ID_HEADER",
    "SWARM_PIN_HEADER",
    "SWARM_ENCRYPT_HEADER",
    "SWARM_DEFERRED_UPLOAD_HEADER",
    "SWARM_REDUNDANCY_LEVEL_HEADER",
    "SWARM_TAG_HEADER",
    "SWARM_COLLECTION_HEADER",
    "CONTENT_TYPE_HEADER",
    "CONTENT_LENGTH_HEADER",
    "SWARM_FEED_INDEX_HEADER",
    "SWARM_FEED_INDEX_NEXT_HEADER",
    "OCTET_STREAM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "TAR_CONTENT_TYPE",
    "FULL_NODE_ROOT_BODY",
    "GATEWAY_PROXY_HEALTH_BODY",
    "MAX_IDLE_CONNECTIONS",
    "MAX_CONNECTIONS_PER_HOST",
    "DEFAULT_REQUEST_TIMEOUT_MS",
    "ADDRESS_SIZE",
    "ENCRYPTED_ADDRESS_SIZE",
    "COPY_BUFFER_SIZE",
    "ARCHIVE_ENTRY_MODE",
]
