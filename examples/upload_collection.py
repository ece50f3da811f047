#!/usr/bin/env python3
"""
Example: Upload a directory as a Swarm collection

Packs every file under a directory into a tar stream, uploads it as a
collection and reads one file back.

Environment Variables:
    BEE_API_URL: Bee node API URL (default: http://localhost:1633)
    BEE_POSTAGE_BATCH_ID: Usable postage batch ID

Run this example:
    python examples/upload_collection.py ./site index.html
"""

import asyncio
import sys
from pathlib import Path

from swarm_blockstore import (
    BeeClient,
    Collection,
    CollectionItem,
    TarStream,
    configure_logging,
    load_config_from_env,
)


def collect(root: Path) -> Collection:
    items = []
    for path in sorted(p for p in root.rglob("*") if p.is_file()):
        items.append(
            CollectionItem(
                path=path.relative_to(root).as_posix(),
                size=path.stat().st_size,
                file=path.open("rb"),
            )
        )
    return Collection(items=items)


async def main(root: Path, probe: str) -> None:
    configure_logging("INFO")
    config = load_config_from_env(dotenv_path=".env")

    async with await BeeClient.create(config) as client:
        print(f"Connected to {client.api_url} ({client.node_mode.value})")

        stream = TarStream.from_collection(collect(root))
        print(f"Packed {stream.items_written} files ({stream.size} bytes)")

        address = await client.upload_archive(stream)
        print(f"Collection reference: {address}")

        async with await client.download_archive_file(address, probe) as download:
            data = await download.aread()
        print(f"Read back {probe}: {len(data)} bytes")


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    asyncio.run(main(Path(sys.argv[1]), sys.argv[2]))
