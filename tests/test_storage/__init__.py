"""
Storage module tests for the Swarm blockstore client.

Tests cover:
- Type definitions and Pydantic validation (test_types.py)
- BeeClient HTTP operations (test_bee_client.py)
- TarStream archive assembly (test_tar_stream.py)
- Feed helpers (test_feeds.py)
"""
