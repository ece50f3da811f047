"""
Tests for feed helpers.

Tests cover:
- Topic derivation
- Sequence feed update IDs
- Index parsing and monotonicity against a fake node
"""

import pytest
from eth_utils import keccak

from swarm_blockstore.errors import InvalidFeedParameterError
from swarm_blockstore.storage.bee_client import BeeClient
from swarm_blockstore.storage.feeds import (
    feed_update_id,
    is_index_advanced,
    make_topic,
    parse_feed_index,
)

from tests.conftest import VALID_OWNER, VALID_TOPIC, FakeBeeNode


class TestMakeTopic:
    """Tests for make_topic."""

    def test_keccak_of_name(self) -> None:
        """Test topic is keccak256 of the UTF-8 name."""
        topic = make_topic("my-feed")

        assert topic == keccak(b"my-feed").hex()
        assert len(topic) == 64

    def test_deterministic(self) -> None:
        """Test same name, same topic; different name, different topic."""
        assert make_topic("a") == make_topic("a")
        assert make_topic("a") != make_topic("b")

    def test_empty_name(self) -> None:
        """Test empty names are rejected."""
        with pytest.raises(InvalidFeedParameterError):
            make_topic("")


class TestFeedUpdateId:
    """Tests for feed_update_id."""

    def test_topic_and_index(self) -> None:
        """Test ID is keccak256(topic || 8-byte big-endian index)."""
        expected = keccak(bytes.fromhex(VALID_TOPIC) + (3).to_bytes(8, "big")).hex()

        assert feed_update_id(VALID_TOPIC, 3) == expected
        assert feed_update_id("0x" + VALID_TOPIC, 3) == expected

    def test_indexes_differ(self) -> None:
        """Test consecutive indexes give different IDs."""
        assert feed_update_id(VALID_TOPIC, 0) != feed_update_id(VALID_TOPIC, 1)

    @pytest.mark.parametrize("index", [-1, 1 << 64])
    def test_index_out_of_range(self, index: int) -> None:
        """Test indexes must fit in 8 bytes."""
        with pytest.raises(InvalidFeedParameterError):
            feed_update_id(VALID_TOPIC, index)

    def test_invalid_topic(self) -> None:
        """Test malformed topics are rejected."""
        with pytest.raises(InvalidFeedParameterError):
            feed_update_id("abcd", 0)


class TestFeedIndex:
    """Tests for parse_feed_index and is_index_advanced."""

    def test_parse(self) -> None:
        """Test hex index parsing."""
        assert parse_feed_index("") is None
        assert parse_feed_index("0000000000000000") == 0
        assert parse_feed_index("000000000000000a") == 10

    def test_parse_invalid(self) -> None:
        """Test non-hex indexes are rejected."""
        with pytest.raises(InvalidFeedParameterError):
            parse_feed_index("xyz")

    def test_is_index_advanced(self) -> None:
        """Test monotonic comparison."""
        assert is_index_advanced("", "0000000000000000")
        assert is_index_advanced("0000000000000001", "0000000000000002")
        assert not is_index_advanced("0000000000000002", "0000000000000002")
        assert not is_index_advanced("0000000000000003", "0000000000000002")
        assert not is_index_advanced("0000000000000001", "")

    @pytest.mark.asyncio
    async def test_index_monotonic_across_updates(
        self, bee_client: BeeClient, bee_node: FakeBeeNode
    ) -> None:
        """Test each published update advances the reported index."""
        previous = ""
        for i in range(3):
            bee_node.publish_feed(VALID_OWNER, VALID_TOPIC, f"{i:02x}" * 32)

            result = await bee_client.get_latest_feed_manifest(VALID_OWNER, VALID_TOPIC)

            assert is_index_advanced(previous, result.index)
            assert parse_feed_index(result.next_index) == parse_feed_index(result.index) + 1
            previous = result.index
