"""
Feed helpers.

Topic and identifier derivation for Swarm sequence feeds, plus index
comparison for values returned by `BeeClient.get_latest_feed_manifest`.

Feed indexes come back from the node as hex strings in the
``swarm-feed-index`` / ``swarm-feed-index-next`` headers.
"""

from __future__ import annotations

from typing import Optional

from eth_utils import keccak

from swarm_blockstore.errors import InvalidFeedParameterError
from swarm_blockstore.utils.validation import validate_topic

# Sequence feed indexes are 8-byte big-endian integers
FEED_INDEX_SIZE = 8


def make_topic(name: str) -> str:
    """
    Derive a feed topic from a human-readable name.

    Args:
        name: Topic name (UTF-8)

    Returns:
        keccak256 of the name as 64 lowercase hex characters
    """
    if not name:
        raise InvalidFeedParameterError("topic", name or "", reason="name is required")
    return keccak(text=name).hex()


def feed_update_id(topic: str, index: int) -> str:
    """
    Compute the single owner chunk ID of a sequence feed update.

    The ID is keccak256(topic || index) with the index as 8 big-endian bytes.

    Args:
        topic: 64 hex characters, optionally 0x-prefixed
        index: Update index (>= 0)

    Returns:
        SOC ID as 64 lowercase hex characters
    """
    topic = validate_topic(topic)
    if index < 0 or index >= 1 << (8 * FEED_INDEX_SIZE):
        raise InvalidFeedParameterError("index", str(index), reason="out of range")
    return keccak(bytes.fromhex(topic) + index.to_bytes(FEED_INDEX_SIZE, "big")).hex()


def parse_feed_index(index: str) -> Optional[int]:
    """
    Parse a feed index header value.

    Returns:
        Integer index, or None for an empty value (nothing published)

    Raises:
        InvalidFeedParameterError: If the value is not hex
    """
    if not index:
        return None
    try:
        return int(index, 16)
    except ValueError:
        raise InvalidFeedParameterError("index", index, reason="not valid hex") from None


def is_index_advanced(previous: str, current: str) -> bool:
    """Check that ``current`` is a later feed index than ``previous``."""
    current_value = parse_feed_index(current)
    if current_value is None:
        return False
    previous_value = parse_feed_index(previous)
    return previous_value is None or current_value > previous_value
