"""
Tar Stream - Collection Archive Assembler

Single-pass writer that builds an uncompressed tar archive out of named
file entries, for upload as a Swarm collection (POST /bzz with
Swarm-Collection: true).

Entries are written incrementally: a header, then payload bytes, then
block padding. Item files are drained through a bounded copy buffer so
large files are never loaded whole.
"""

from __future__ import annotations

import io
import tarfile
import time
from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional

from swarm_blockstore.constants import ARCHIVE_ENTRY_MODE, COPY_BUFFER_SIZE
from swarm_blockstore.errors import (
    ArchiveStreamClosedError,
    ArchiveStreamConsumedError,
    ArchiveStreamError,
    InvalidCollectionItemError,
)
from swarm_blockstore.utils.logging import get_logger

_logger = get_logger(__name__)

# Two zero blocks terminate a tar archive
END_OF_ARCHIVE = tarfile.NUL * (2 * tarfile.BLOCKSIZE)


@dataclass
class CollectionItem:
    """
    One file to place into a collection archive.

    Args:
        path: Path of the entry inside the collection
        size: Declared size in bytes
        file: Readable binary file object; closed by the writer
    """

    path: str
    size: int
    file: Optional[BinaryIO] = None


@dataclass
class Collection:
    """Ordered set of collection items."""

    items: List[CollectionItem] = field(default_factory=list)


class TarStream:
    """
    Append-only tar archive writer backed by an in-memory buffer.

    Not safe for concurrent writers: drive one instance from one
    sequence of writes, then hand it to `BeeClient.upload_archive`
    exactly once.

    Example:
        ```python
        from swarm_blockstore.storage import CollectionItem, TarStream

        stream = TarStream()
        with open("index.html", "rb") as fh:
            stream.write_item(CollectionItem("index.html", size, fh))
        stream.close()

        address = await client.upload_archive(stream)
        ```
    """

    def __init__(self) -> None:
        """Initialize an empty, open stream."""
        self._buf = io.BytesIO()
        self._closed = False
        self._consumed = False
        self._entry: Optional[tarfile.TarInfo] = None
        self._entry_written = 0
        self._items_written = 0

    @classmethod
    def from_collection(cls, collection: Collection) -> TarStream:
        """
        Build a closed stream from every item of a collection.

        If an item fails, the files of the items after it are closed too.

        Args:
            collection: Items to write, in order

        Returns:
            Finalized TarStream ready for upload
        """
        stream = cls()
        items = collection.items
        for index, item in enumerate(items):
            try:
                stream.write_item(item)
            except Exception:
                for rest in items[index + 1 :]:
                    if rest.file is not None:
                        rest.file.close()
                raise
        stream.close()
        return stream

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def items_written(self) -> int:
        """Number of entries completed so far."""
        return self._items_written

    @property
    def size(self) -> int:
        """Bytes written to the archive buffer so far."""
        return self._buf.tell()

    def _ensure_open(self) -> None:
        if self._closed:
            raise ArchiveStreamClosedError()

    def begin_file(self, item: CollectionItem) -> None:
        """
        Write the header for the next entry.

        A still-open previous entry is finished first.

        Args:
            item: Entry path and declared size (its file is not read)

        Raises:
            ArchiveStreamClosedError: If the stream is closed
            InvalidCollectionItemError: If path is empty or size negative
        """
        self._ensure_open()
        if not item.path:
            raise InvalidCollectionItemError("", reason="path is required")
        if item.size < 0:
            raise InvalidCollectionItemError(item.path, reason="size must be non-negative")

        if self._entry is not None:
            self.end_file()

        info = tarfile.TarInfo(name=item.path)
        info.size = item.size
        info.mode = ARCHIVE_ENTRY_MODE
        info.mtime = int(time.time())
        info.type = tarfile.REGTYPE

        self._buf.write(info.tobuf(tarfile.PAX_FORMAT, "utf-8", "surrogateescape"))
        self._entry = info
        self._entry_written = 0

    def append_file(self, data: bytes) -> None:
        """
        Write payload bytes into the current entry.

        Raises:
            ArchiveStreamClosedError: If the stream is closed
            ArchiveStreamError: If no entry is open or the declared size
                would be exceeded
        """
        self._ensure_open()
        if self._entry is None:
            raise ArchiveStreamError("No entry has been started")
        if self._entry_written + len(data) > self._entry.size:
            raise ArchiveStreamError(
                f"Write exceeds declared size of {self._entry.name!r}",
                details={"declared": self._entry.size, "attempted": self._entry_written + len(data)},
            )
        self._buf.write(data)
        self._entry_written += len(data)

    def end_file(self) -> None:
        """
        Finish the current entry by padding it to a whole block.

        Raises:
            ArchiveStreamError: If fewer bytes than declared were written
        """
        self._ensure_open()
        if self._entry is None:
            return
        if self._entry_written != self._entry.size:
            raise ArchiveStreamError(
                f"Entry {self._entry.name!r} is short by {self._entry.size - self._entry_written} bytes",
                details={"declared": self._entry.size, "written": self._entry_written},
            )
        remainder = self._entry.size % tarfile.BLOCKSIZE
        if remainder:
            self._buf.write(tarfile.NUL * (tarfile.BLOCKSIZE - remainder))
        self._entry = None
        self._entry_written = 0
        self._items_written += 1

    def write_item(self, item: CollectionItem) -> None:
        """
        Write a whole item: header, file contents, padding.

        The item's file is always closed, whether or not the write succeeds.

        Args:
            item: Item with an open file

        Raises:
            InvalidCollectionItemError: If the item has no file
            ArchiveStreamError: If the file length differs from item.size
        """
        if item.file is None:
            raise InvalidCollectionItemError(item.path, reason="item has no file")

        try:
            self.begin_file(item)
            while True:
                block = item.file.read(COPY_BUFFER_SIZE)
                if not block:
                    break
                self.append_file(block)
            self.end_file()
        finally:
            item.file.close()

        _logger.debug("Archive entry written", extra={"path": item.path, "size": item.size})

    def close(self) -> None:
        """
        Finalize the archive. Closing twice is a no-op.

        Raises:
            ArchiveStreamError: If the last entry is short
        """
        if self._closed:
            return
        if self._entry is not None:
            self.end_file()
        self._buf.write(END_OF_ARCHIVE)
        self._closed = True

    def output(self) -> bytes:
        """
        Take the finalized archive bytes for upload.

        Returns:
            The complete tar archive

        Raises:
            ArchiveStreamConsumedError: If the stream is not closed yet or
                was already taken
        """
        if not self._closed:
            raise ArchiveStreamConsumedError("Archive stream must be closed before upload")
        if self._consumed:
            raise ArchiveStreamConsumedError("Archive stream was already uploaded")
        self._consumed = True
        return self._buf.getvalue()
