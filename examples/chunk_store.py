#!/usr/bin/env python3
"""
Example: Chunk store over one upload tag

Puts a few chunks through a ChunkStoreAdapter, waits for the tag to
report them synced and fetches them back.

Run this example:
    BEE_POSTAGE_BATCH_ID=... python examples/chunk_store.py
"""

import asyncio

from swarm_blockstore import BeeClient, ChunkStoreAdapter, load_config_from_env


async def main() -> None:
    config = load_config_from_env()

    async with await BeeClient.create(config) as client:
        store = await ChunkStoreAdapter.create(client, config.postage_batch_id)
        print(f"Using tag {store.tag}")

        addresses = []
        for i in range(3):
            payload = f"chunk number {i}".encode()
            address = await client.upload_blob(payload, tag=store.tag)
            addresses.append(address)

        progress = await client.wait_for_tag_sync(store.tag, poll_interval=2.0, timeout=300)
        print(f"Synced {progress.synced}/{progress.total} chunks")

        for address in addresses:
            chunk = await store.get(address)
            print(f"{address}: {len(chunk.data)} bytes")


if __name__ == "__main__":
    asyncio.run(main())
