"""
Validation utilities for the Swarm blockstore client.

Provides input validation functions for:
- Bee API URLs
- Swarm references (zero / empty checks)
- Feed owners and topics
- Postage batch IDs and signatures
- Collection file names

All validation functions raise ValidationError (or subclasses) on failure,
before any request is sent.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional
from urllib.parse import urlparse

from swarm_blockstore.errors import (
    InvalidAddressError,
    InvalidFeedParameterError,
    MissingPostageStampError,
    MissingSignatureError,
    ValidationError,
)

if TYPE_CHECKING:
    from swarm_blockstore.storage.types import Address


OWNER_PATTERN = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")
TOPIC_PATTERN = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def _strip_hex_prefix(value: str) -> str:
    return value[2:] if value[:2] in ("0x", "0X") else value


def validate_api_url(url: str, field_name: str = "api_url") -> str:
    """
    Validate the Bee node base URL.

    Local nodes are the common case, so private and loopback hosts are
    allowed.

    Args:
        url: URL to validate
        field_name: Field name for error messages

    Returns:
        URL without trailing slash

    Raises:
        ValidationError: If URL is missing, not http(s) or has no host
    """
    if not url:
        raise ValidationError(f"{field_name} is required", field=field_name)

    parsed = urlparse(url)

    if parsed.scheme not in ("http", "https"):
        raise ValidationError(
            f"Invalid {field_name}: scheme must be http or https",
            field=field_name,
            details={"value": url, "scheme": parsed.scheme},
        )

    if not parsed.hostname:
        raise ValidationError(
            f"Invalid {field_name}: missing hostname",
            field=field_name,
            details={"value": url},
        )

    return url.rstrip("/")


def validate_reference(address: Address, field_name: str = "address") -> Address:
    """
    Ensure an address can be sent to the network as a reference.

    Args:
        address: Address to check
        field_name: Field name for error messages

    Returns:
        The same address

    Raises:
        InvalidAddressError: If the address is empty or the zero address
    """
    if address.is_empty():
        raise InvalidAddressError("", reason=f"{field_name} is empty")
    if address.is_zero():
        raise InvalidAddressError(address.hex(), reason=f"{field_name} is the zero address")
    return address


def validate_owner(owner: str) -> str:
    """
    Validate a feed owner (Ethereum address).

    Args:
        owner: 40 hex characters, optionally 0x-prefixed

    Returns:
        Lowercase owner without 0x prefix

    Raises:
        InvalidFeedParameterError: If owner is malformed
    """
    if not owner or not OWNER_PATTERN.match(owner):
        raise InvalidFeedParameterError(
            "owner",
            owner or "",
            reason="must be 40 hex characters",
        )
    return _strip_hex_prefix(owner).lower()


def validate_topic(topic: str, field_name: str = "topic") -> str:
    """
    Validate a feed topic or single owner chunk ID (32-byte hash).

    Args:
        topic: 64 hex characters, optionally 0x-prefixed
        field_name: Field name for error messages

    Returns:
        Lowercase value without 0x prefix

    Raises:
        InvalidFeedParameterError: If the value is malformed
    """
    if not topic or not TOPIC_PATTERN.match(topic):
        raise InvalidFeedParameterError(
            field_name,
            topic or "",
            reason="must be 64 hex characters",
        )
    return _strip_hex_prefix(topic).lower()


def require_stamp(stamp: Optional[str], operation: str) -> str:
    """
    Ensure a write operation has a postage batch ID.

    Args:
        stamp: Resolved stamp (per-call value or client default)
        operation: Operation name for error messages

    Returns:
        The stamp

    Raises:
        MissingPostageStampError: If stamp is empty
    """
    if not stamp:
        raise MissingPostageStampError(operation)
    return stamp


def require_signature(signature: str) -> str:
    """Ensure a single owner chunk signature is present."""
    if not signature:
        raise MissingSignatureError()
    return signature


def validate_filename(filename: str, field_name: str = "filename") -> str:
    """
    Validate a collection file name.

    Args:
        filename: File name or relative path inside a collection
        field_name: Field name for error messages

    Returns:
        File name without leading slashes

    Raises:
        ValidationError: If filename is empty
    """
    name = (filename or "").lstrip("/")
    if not name:
        raise ValidationError(f"{field_name} is required", field=field_name)
    return name
