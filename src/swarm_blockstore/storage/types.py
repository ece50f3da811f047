"""
Storage Types

Type definitions for the Swarm blockstore client:
- Content addressing: Address, Chunk
- Upload options and client configuration
- Tag, feed and download results
- Bee wire models (request/response bodies, error envelopes)
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any, AsyncIterator, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError
from pydantic import field_validator

from swarm_blockstore.constants import (
    ADDRESS_SIZE,
    CONTENT_LENGTH_HEADER,
    COPY_BUFFER_SIZE,
    DEFAULT_REQUEST_TIMEOUT_MS,
    ENCRYPTED_ADDRESS_SIZE,
    MAX_CONNECTIONS_PER_HOST,
    MAX_IDLE_CONNECTIONS,
)
from swarm_blockstore.errors import InvalidAddressError, ValidationError
from swarm_blockstore.utils.validation import validate_api_url


# ============================================================================
# Content Addressing
# ============================================================================


class Address:
    """
    Swarm reference: the content hash of a chunk or the root of a blob.

    Regular references are 32 bytes, encrypted references 64 bytes.
    Compares and hashes by its bytes; prints as lowercase hex.

    Example:
        ```python
        addr = Address.from_hex("aa" * 32)
        assert str(addr) == "aa" * 32
        assert not addr.is_zero()
        ```
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytes(data)

    @classmethod
    def from_hex(cls, value: str) -> Address:
        """
        Parse a hex reference.

        Args:
            value: Hex string, optionally 0x-prefixed

        Returns:
            Parsed Address

        Raises:
            InvalidAddressError: If value is not hex or has an unexpected length
        """
        raw = value[2:] if value[:2] in ("0x", "0X") else value
        try:
            data = bytes.fromhex(raw)
        except ValueError:
            raise InvalidAddressError(value, reason="not valid hex")
        if len(data) not in (0, ADDRESS_SIZE, ENCRYPTED_ADDRESS_SIZE):
            raise InvalidAddressError(
                value,
                reason=f"expected {ADDRESS_SIZE} or {ENCRYPTED_ADDRESS_SIZE} bytes, got {len(data)}",
            )
        return cls(data)

    @property
    def data(self) -> bytes:
        """Raw reference bytes."""
        return self._data

    def hex(self) -> str:
        return self._data.hex()

    def is_zero(self) -> bool:
        """True for the all-zero sentinel meaning "no address"."""
        return len(self._data) > 0 and not any(self._data)

    def is_empty(self) -> bool:
        """True when there is no backing data at all."""
        return len(self._data) == 0

    def is_encrypted(self) -> bool:
        return len(self._data) == ENCRYPTED_ADDRESS_SIZE

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Address({self.hex()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)


ZERO_ADDRESS = Address(bytes(ADDRESS_SIZE))
"""Sentinel address meaning "no address"."""

EMPTY_ADDRESS = Address(b"")
"""Address with no backing data."""


class Chunk(BaseModel):
    """
    Immutable payload keyed by its address.

    The address is expected to be the Swarm hash of ``data``; the client
    does not verify it.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    address: Address = Field(
        ...,
        description="Chunk address (content hash)",
    )
    data: bytes = Field(
        ...,
        description="Chunk payload (span + content as stored by Bee)",
    )


# ============================================================================
# Enumerations
# ============================================================================


class RedundancyLevel(str, Enum):
    """Erasure coding level requested for an upload."""

    NONE = "0"
    MEDIUM = "1"
    STRONG = "2"
    INSANE = "3"
    PARANOID = "4"


class NodeMode(str, Enum):
    """Kind of Bee endpoint the client talks to.

    A gateway proxy does not expose the tags API.
    """

    FULL_NODE = "full-node"
    GATEWAY_PROXY = "gateway-proxy"


RedundancyInput = Optional[Union[RedundancyLevel, str]]


def _empty_to_none(value: Any) -> Any:
    if value == "":
        return None
    return value


# ============================================================================
# Upload Options and Configuration
# ============================================================================


class UploadOptions(BaseModel):
    """
    Stamp, redundancy and pin settings for one upload.

    Merge rule (see `merged_with`): a non-empty per-call value beats the
    default, an empty one falls back to it. Pin is "sticky true": a
    default of True forces pinning, a default of False never suppresses
    a per-call True.
    """

    model_config = ConfigDict(frozen=True)

    stamp: str = Field(
        default="",
        description="Postage batch ID",
    )
    redundancy_level: Optional[RedundancyLevel] = Field(
        default=None,
        description="Erasure coding level (None means not requested)",
    )
    pin: bool = Field(
        default=False,
        description="Pin the upload on the node",
    )

    @field_validator("redundancy_level", mode="before")
    @classmethod
    def normalize_redundancy(cls, value: Any) -> Any:
        return _empty_to_none(value)

    def merged_with(self, defaults: UploadOptions) -> UploadOptions:
        """
        Resolve these per-call options against client defaults.

        Args:
            defaults: Construction-time defaults

        Returns:
            Effective options for the request
        """
        return UploadOptions(
            stamp=self.stamp or defaults.stamp,
            redundancy_level=self.redundancy_level or defaults.redundancy_level,
            pin=self.pin or defaults.pin,
        )


class BeeConfig(BaseModel):
    """
    Configuration for the Bee HTTP client.

    Example:
        ```python
        config = BeeConfig(
            api_url="http://localhost:1633",
            postage_batch_id=os.environ["BEE_POSTAGE_BATCH_ID"],
            redundancy_level=RedundancyLevel.MEDIUM,
        )
        ```
    """

    model_config = ConfigDict(frozen=True)

    api_url: str = Field(
        ...,
        description="Bee node API base URL (e.g. http://localhost:1633)",
    )
    postage_batch_id: str = Field(
        default="",
        description="Default postage batch ID for writes",
    )
    redundancy_level: Optional[RedundancyLevel] = Field(
        default=None,
        description="Default erasure coding level for uploads",
    )
    pin: bool = Field(
        default=False,
        description="Pin every upload (overrides per-call pin=False)",
    )
    timeout: int = Field(
        default=DEFAULT_REQUEST_TIMEOUT_MS,
        ge=1000,
        description="Total request timeout in milliseconds",
    )
    max_idle_connections: int = Field(
        default=MAX_IDLE_CONNECTIONS,
        ge=0,
        description="Maximum idle keep-alive connections in the pool",
    )
    max_connections: int = Field(
        default=MAX_CONNECTIONS_PER_HOST,
        ge=1,
        description="Maximum concurrent connections to the node",
    )
    node_mode: Optional[NodeMode] = Field(
        default=None,
        description="Fixed node mode; None means detect with check_connection()",
    )

    @field_validator("api_url")
    @classmethod
    def check_api_url(cls, value: str) -> str:
        try:
            return validate_api_url(value)
        except ValidationError as exc:
            raise ValueError(exc.message) from exc

    @field_validator("redundancy_level", mode="before")
    @classmethod
    def normalize_redundancy(cls, value: Any) -> Any:
        return _empty_to_none(value)

    def upload_defaults(self) -> UploadOptions:
        """Client-wide defaults applied to every upload."""
        return UploadOptions(
            stamp=self.postage_batch_id,
            redundancy_level=self.redundancy_level,
            pin=self.pin,
        )


# ============================================================================
# Results
# ============================================================================


class TagProgress(BaseModel):
    """Sync counters of one upload tag."""

    model_config = ConfigDict(frozen=True)

    uid: int = Field(
        default=0,
        ge=0,
        description="Tag UID assigned by the node",
    )
    total: int = Field(
        default=0,
        ge=0,
        description="Chunks registered under the tag",
    )
    processed: int = Field(
        default=0,
        ge=0,
        description="Chunks processed locally by the node",
    )
    synced: int = Field(
        default=0,
        ge=0,
        description="Chunks synced to the network",
    )

    @property
    def is_synced(self) -> bool:
        """True once every registered chunk has been synced."""
        return self.total > 0 and self.synced >= self.total


class FeedLookupResult(BaseModel):
    """Latest feed manifest lookup."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    address: Address = Field(
        ...,
        description="Reference the feed currently resolves to",
    )
    index: str = Field(
        default="",
        description="Current feed index (opaque, from swarm-feed-index)",
    )
    next_index: str = Field(
        default="",
        description="Next index to publish to (from swarm-feed-index-next)",
    )


class DownloadResult(BaseModel):
    """Result of a buffered download."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(
        ...,
        description="Downloaded content as bytes",
    )
    size: int = Field(
        ...,
        ge=0,
        description="Size of downloaded content in bytes",
    )
    status_code: int = Field(
        ...,
        description="HTTP status returned by the node",
    )
    downloaded_at: datetime = Field(
        ...,
        description="Download timestamp",
    )


class StreamedDownload:
    """
    Open streaming response for blob and collection file downloads.

    The caller owns it and must close it, preferably with ``async with``.

    Example:
        ```python
        async with await client.download_blob(address) as download:
            async for block in download.aiter_bytes():
                sink.write(block)
        ```
    """

    def __init__(self, response: httpx.Response, content_length: Optional[int] = None) -> None:
        self._response = response
        self._content_length = content_length

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def content_length(self) -> Optional[int]:
        """Content length reported by the node, if known."""
        if self._content_length is not None:
            return self._content_length
        header = self._response.headers.get(CONTENT_LENGTH_HEADER)
        return int(header) if header and header.isdigit() else None

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    async def aiter_bytes(self, chunk_size: int = COPY_BUFFER_SIZE) -> AsyncIterator[bytes]:
        async for block in self._response.aiter_bytes(chunk_size=chunk_size):
            yield block

    async def aread(self) -> bytes:
        """Read the remaining body into memory."""
        return await self._response.aread()

    async def aclose(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> StreamedDownload:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


# ============================================================================
# Bee Wire Models
# ============================================================================


class ReferenceResponse(BaseModel):
    """Body of upload and feed responses: ``{"reference": "<hex>"}``."""

    reference: str


class TagCreateRequest(BaseModel):
    """Body of POST /tags when a target address is given."""

    address: str


class StructuredErrorBody(BaseModel):
    """Bee error envelope ``{"code": int, "message": str}``."""

    model_config = ConfigDict(frozen=True)

    code: int = 0
    message: str


class OpaqueErrorBody(BaseModel):
    """Error body that is not a Bee envelope; kept as raw text."""

    model_config = ConfigDict(frozen=True)

    text: str

    @property
    def message(self) -> str:
        return self.text


ErrorBody = Union[StructuredErrorBody, OpaqueErrorBody]


def decode_error_body(body: bytes) -> ErrorBody:
    """
    Decode a non-success response body.

    Args:
        body: Raw response body

    Returns:
        StructuredErrorBody when the body is a JSON object with a
        ``message`` string, otherwise OpaqueErrorBody with the raw text
    """
    text = body.decode("utf-8", errors="replace")
    try:
        payload = json.loads(text)
    except ValueError:
        return OpaqueErrorBody(text=text)

    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        try:
            return StructuredErrorBody.model_validate(payload)
        except PydanticValidationError:
            return OpaqueErrorBody(text=text)
    return OpaqueErrorBody(text=text)
