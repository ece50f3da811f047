"""
Storage-related exceptions for the Swarm blockstore client.

These exceptions are raised during interactions with a Bee node:

- Precondition failures (raised before any request is attempted)
- Transport failures (connection refused, timeouts)
- Response decode failures
- Application-level rejections reported by the node
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from swarm_blockstore.errors.base import BlockstoreError, ValidationError


# ============================================================================
# Precondition Errors
# ============================================================================


class InvalidAddressError(ValidationError):
    """
    Raised when a Swarm reference is malformed, zero or empty.

    Example:
        >>> raise InvalidAddressError("zz", reason="not hex")
    """

    def __init__(
        self,
        address: str,
        *,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["address"] = address
        if reason:
            details["reason"] = reason

        message = f"Invalid address: {address!r}"
        if reason:
            message += f" ({reason})"

        super().__init__(message, field="address", details=details)
        self.code = "INVALID_ADDRESS"
        self.address = address
        self.reason = reason


class MissingPostageStampError(ValidationError):
    """
    Raised when a write operation has no postage batch ID.

    Neither the per-call stamp nor the client default was set.

    Example:
        >>> raise MissingPostageStampError("upload_chunk")
    """

    def __init__(
        self,
        operation: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["operation"] = operation

        super().__init__(
            f"Postage batch ID is required for {operation}",
            field="stamp",
            details=details,
        )
        self.code = "MISSING_POSTAGE_STAMP"
        self.operation = operation


class MissingSignatureError(ValidationError):
    """
    Raised when a single owner chunk upload has no signature.

    Example:
        >>> raise MissingSignatureError()
    """

    def __init__(self, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            "Signature is required for single owner chunk upload",
            field="signature",
            details=details,
        )
        self.code = "MISSING_SIGNATURE"


class InvalidFeedParameterError(ValidationError):
    """
    Raised when a feed owner or topic is not valid hex of the right length.

    Example:
        >>> raise InvalidFeedParameterError("owner", "0x12", reason="must be 40 hex characters")
    """

    def __init__(
        self,
        field: str,
        value: str,
        *,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["value"] = value
        if reason:
            details["reason"] = reason

        message = f"Invalid feed {field}: {value!r}"
        if reason:
            message += f" ({reason})"

        super().__init__(message, field=field, details=details)
        self.code = "INVALID_FEED_PARAMETER"
        self.value = value
        self.reason = reason


# ============================================================================
# Archive Errors
# ============================================================================


class InvalidCollectionItemError(ValidationError):
    """
    Raised when a collection item cannot be written to an archive.

    Example:
        >>> raise InvalidCollectionItemError("index.html", reason="item has no file")
    """

    def __init__(
        self,
        path: str,
        *,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["path"] = path
        if reason:
            details["reason"] = reason

        message = f"Invalid collection item: {path!r}"
        if reason:
            message += f" ({reason})"

        super().__init__(message, field="path", details=details)
        self.code = "INVALID_COLLECTION_ITEM"
        self.path = path
        self.reason = reason


class ArchiveStreamError(ValidationError):
    """
    Raised when an archive stream is driven out of order.

    Example:
        >>> raise ArchiveStreamError("No entry has been started")
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.code = "ARCHIVE_STREAM_ERROR"


class ArchiveStreamClosedError(ArchiveStreamError):
    """
    Raised when writing to an archive stream that was already closed.

    Example:
        >>> raise ArchiveStreamClosedError()
    """

    def __init__(self, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("Archive stream is closed", details=details)
        self.code = "ARCHIVE_STREAM_CLOSED"


class ArchiveStreamConsumedError(ArchiveStreamError):
    """
    Raised when an archive stream is used as a request body more than once,
    or before it was closed.

    Example:
        >>> raise ArchiveStreamConsumedError("Archive stream was already uploaded")
    """

    def __init__(
        self,
        message: str = "Archive stream was already consumed",
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.code = "ARCHIVE_STREAM_CONSUMED"


# ============================================================================
# Network Errors
# ============================================================================


class StorageError(BlockstoreError):
    """
    Base exception for Bee node operations.

    Example:
        >>> raise StorageError("Failed to reach Bee node", url="http://localhost:1633")
    """

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url

        super().__init__(
            message,
            code="STORAGE_ERROR",
            status_code=status_code,
            details=details,
        )
        self.url = url


class BeeTransportError(StorageError):
    """
    Raised when the request never produced a response.

    Wraps httpx transport failures (connection refused, protocol errors).
    Never retried by the client.

    Example:
        >>> raise BeeTransportError("Connection refused", url="http://localhost:1633/chunks")
    """

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, url=url, details=details)
        self.code = "BEE_TRANSPORT_ERROR"


class BeeTimeoutError(BeeTransportError):
    """
    Raised when a request exceeds the configured total timeout.

    Example:
        >>> raise BeeTimeoutError(30000, url="http://localhost:1633/bytes")
    """

    def __init__(
        self,
        timeout_ms: int,
        *,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["timeout_ms"] = timeout_ms

        super().__init__(
            f"Request timed out after {timeout_ms}ms",
            url=url,
            details=details,
        )
        self.code = "BEE_TIMEOUT"
        self.timeout_ms = timeout_ms


class ResponseDecodeError(StorageError):
    """
    Raised when a successful response body cannot be decoded.

    The original body is not kept.

    Example:
        >>> raise ResponseDecodeError(url="http://localhost:1633/tags")
    """

    def __init__(
        self,
        message: str = "error unmarshalling response",
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, url=url, status_code=status_code, details=details)
        self.code = "RESPONSE_DECODE_ERROR"


class BeeAPIError(StorageError):
    """
    Raised when the Bee node answers with a non-success status.

    The message is the node's structured error message when the body
    decodes as ``{"code", "message"}``, otherwise the raw body text.

    Example:
        >>> raise BeeAPIError("batch not usable", status_code=402, error_code=402)
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_code: Optional[int] = None,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if error_code is not None:
            details["error_code"] = error_code

        super().__init__(message, url=url, status_code=status_code, details=details)
        self.code = "BEE_API_ERROR"
        self.error_code = error_code


class ContentNotFoundError(BeeAPIError):
    """
    Raised when the Bee node reports 404 for a reference.

    Example:
        >>> raise ContentNotFoundError("Not Found", error_code=404)
    """

    def __init__(
        self,
        message: str = "Not Found",
        *,
        error_code: Optional[int] = None,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            status_code=404,
            error_code=error_code,
            url=url,
            details=details,
        )
        self.code = "CONTENT_NOT_FOUND"


class TagSyncTimeoutError(StorageError):
    """
    Raised when a tag does not reach the synced state in time.

    Example:
        >>> raise TagSyncTimeoutError(7, 30.0, synced=3, total=10)
    """

    def __init__(
        self,
        uid: int,
        timeout: float,
        *,
        synced: int = 0,
        total: int = 0,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["uid"] = uid
        details["timeout_s"] = timeout
        details["synced"] = synced
        details["total"] = total

        super().__init__(
            f"Tag {uid} not synced after {timeout}s ({synced}/{total} chunks)",
            details=details,
        )
        self.code = "TAG_SYNC_TIMEOUT"
        self.uid = uid
        self.timeout = timeout
