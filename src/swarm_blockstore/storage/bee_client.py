"""
Bee Client - Swarm Storage Protocol Client

HTTP client for a Swarm Bee node (or a gateway proxy in front of one).
Implements chunk, single owner chunk, blob, collection, pin, tag and
feed operations as single request/response round trips.

Every failure is raised once to the caller; nothing is retried here.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from swarm_blockstore.constants import (
    BYTES_PATH,
    BZZ_PATH,
    CHUNKS_PATH,
    CONTENT_LENGTH_HEADER,
    CONTENT_TYPE_HEADER,
    FEEDS_PATH,
    FULL_NODE_ROOT_BODY,
    GATEWAY_PROXY_HEALTH_BODY,
    HEALTH_PATH,
    JSON_CONTENT_TYPE,
    OCTET_STREAM_CONTENT_TYPE,
    PINS_PATH,
    SOC_PATH,
    SWARM_COLLECTION_HEADER,
    SWARM_DEFERRED_UPLOAD_HEADER,
    SWARM_ENCRYPT_HEADER,
    SWARM_FEED_INDEX_HEADER,
    SWARM_FEED_INDEX_NEXT_HEADER,
    SWARM_PIN_HEADER,
    SWARM_POSTAGE_BATCH_ID_HEADER,
    SWARM_REDUNDANCY_LEVEL_HEADER,
    SWARM_TAG_HEADER,
    TAGS_PATH,
    TAR_CONTENT_TYPE,
)
from swarm_blockstore.errors import (
    BeeAPIError,
    BeeTimeoutError,
    BeeTransportError,
    ContentNotFoundError,
    InvalidAddressError,
    ResponseDecodeError,
    StorageError,
    TagSyncTimeoutError,
    ValidationError,
)
from swarm_blockstore.storage.tar_stream import TarStream
from swarm_blockstore.storage.types import (
    ZERO_ADDRESS,
    Address,
    BeeConfig,
    Chunk,
    DownloadResult,
    FeedLookupResult,
    NodeMode,
    RedundancyInput,
    RedundancyLevel,
    ReferenceResponse,
    StreamedDownload,
    StructuredErrorBody,
    TagCreateRequest,
    TagProgress,
    UploadOptions,
    decode_error_body,
)
from swarm_blockstore.utils.logging import get_logger
from swarm_blockstore.utils.streams import UploadData, to_request_content
from swarm_blockstore.utils.validation import (
    require_signature,
    require_stamp,
    validate_filename,
    validate_owner,
    validate_reference,
    validate_topic,
)

_logger = get_logger(__name__)

# Request extension carrying the erasure coding level for local processing.
# Separate from the Swarm-Redundancy-Level header sent to the node.
LOCAL_REDUNDANCY_EXTENSION = "swarm_local_redundancy_level"

_CREATED = (201,)
_OK = (200,)
_OK_OR_CREATED = (200, 201)


def _bool_header(value: bool) -> str:
    return "true" if value else "false"


class BeeClient:
    """
    Swarm storage client speaking the Bee HTTP API.

    Holds one pooled ``httpx.AsyncClient`` and no per-call state, so a
    single instance can be shared by concurrent tasks.

    Features:
    - Chunk, single owner chunk, blob and collection upload/download
    - Upload tags for sync progress tracking
    - Pin removal and feed manifests
    - Gateway proxy detection (tag calls become no-ops)

    Example:
        ```python
        from swarm_blockstore import BeeClient, BeeConfig

        async with await BeeClient.create(BeeConfig(
            api_url="http://localhost:1633",
            postage_batch_id=os.environ["BEE_POSTAGE_BATCH_ID"],
        )) as client:
            address = await client.upload_blob(b"hello swarm")
            async with await client.download_blob(address) as download:
                data = await download.aread()
        ```
    """

    def __init__(
        self,
        config: BeeConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize Bee client.

        Note: Use `BeeClient.create()` to also probe the node.

        Args:
            config: Bee configuration
            transport: Optional httpx transport (tests, custom networking)
        """
        self._config = config
        self._defaults = config.upload_defaults()
        self._node_mode = config.node_mode or NodeMode.FULL_NODE
        self._http = httpx.AsyncClient(
            base_url=config.api_url,
            timeout=httpx.Timeout(config.timeout / 1000),
            limits=httpx.Limits(
                max_keepalive_connections=config.max_idle_connections,
                max_connections=config.max_connections,
            ),
            transport=transport,
        )

    @classmethod
    async def create(
        cls,
        config: BeeConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> BeeClient:
        """
        Factory method that creates the client and detects the node mode.

        The probe is skipped when ``config.node_mode`` is set.

        Args:
            config: Bee configuration
            transport: Optional httpx transport

        Returns:
            Initialized BeeClient

        Raises:
            BeeTransportError: If the node does not answer as a Bee node
                or gateway proxy
        """
        client = cls(config, transport=transport)
        if config.node_mode is None and not await client.check_connection():
            await client.aclose()
            raise BeeTransportError("Bee node is not reachable", url=config.api_url)
        return client

    async def aclose(self) -> None:
        """Close the connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> BeeClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    @property
    def api_url(self) -> str:
        """Get the Bee API base URL."""
        return self._config.api_url

    @property
    def node_mode(self) -> NodeMode:
        """Get the detected (or configured) node mode."""
        return self._node_mode

    @property
    def is_gateway_proxy(self) -> bool:
        return self._node_mode is NodeMode.GATEWAY_PROXY

    @property
    def defaults(self) -> UploadOptions:
        """Client-wide upload defaults."""
        return self._defaults

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def _resolve(
        self,
        stamp: Optional[str],
        redundancy_level: RedundancyInput,
        pin: bool,
    ) -> UploadOptions:
        try:
            options = UploadOptions(
                stamp=stamp or "",
                redundancy_level=redundancy_level,
                pin=pin,
            )
        except PydanticValidationError:
            raise ValidationError(
                f"Invalid redundancy level: {redundancy_level!r}",
                field="redundancy_level",
                details={"value": str(redundancy_level)},
            ) from None
        return options.merged_with(self._defaults)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        content: Any = None,
        json: Any = None,
        extensions: Optional[Dict[str, Any]] = None,
        stream: bool = False,
    ) -> httpx.Response:
        """
        Issue one request with connection-closing semantics.

        Without ``stream`` the full body is read before returning, and the
        total timeout covers the body as well. With ``stream`` it covers the
        response headers; the caller reads the body.

        Raises:
            BeeTimeoutError: If the total timeout elapsed
            BeeTransportError: If no response was received
        """
        request_headers = {"Connection": "close"}
        if headers:
            request_headers.update(headers)

        request = self._http.build_request(
            method,
            path,
            params=params,
            headers=request_headers,
            content=content,
            json=json,
            extensions=extensions,
        )
        url = str(request.url)

        try:
            response = await asyncio.wait_for(
                self._http.send(request, stream=stream),
                self._config.timeout / 1000,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            _logger.warning(
                "Bee request timed out",
                extra={"operation": operation, "method": method, "url": url},
            )
            raise BeeTimeoutError(self._config.timeout, url=url) from exc
        except httpx.TransportError as exc:
            _logger.warning(
                "Bee request failed",
                extra={"operation": operation, "method": method, "url": url, "error": str(exc)},
            )
            raise BeeTransportError(f"{operation} failed: {exc}", url=url) from exc

        _logger.debug(
            "Bee request",
            extra={
                "operation": operation,
                "method": method,
                "url": url,
                "status": response.status_code,
            },
        )
        return response

    def _api_error(
        self,
        response: httpx.Response,
        body: bytes,
        *,
        prefix: str = "",
    ) -> BeeAPIError:
        error = decode_error_body(body)
        error_code = error.code if isinstance(error, StructuredErrorBody) else None
        message = f"{prefix}{error.message or response.reason_phrase}"
        url = str(response.request.url)

        _logger.warning(
            "Bee request rejected",
            extra={"url": url, "status": response.status_code, "reason": message},
        )

        if response.status_code == 404:
            return ContentNotFoundError(message, error_code=error_code, url=url)
        return BeeAPIError(
            message,
            status_code=response.status_code,
            error_code=error_code,
            url=url,
        )

    def _check_status(self, response: httpx.Response, success: Tuple[int, ...]) -> None:
        if response.status_code not in success:
            raise self._api_error(response, response.content)

    async def _check_stream_status(self, response: httpx.Response, success: Tuple[int, ...]) -> None:
        """Status check for streamed responses; closes the response on failure."""
        if response.status_code in success:
            return
        try:
            body = await response.aread()
        except httpx.TransportError as exc:
            raise BeeTransportError(
                f"error reading error response: {exc}",
                url=str(response.request.url),
            ) from exc
        finally:
            await response.aclose()
        raise self._api_error(response, body)

    @staticmethod
    def _decode_reference(response: httpx.Response) -> Address:
        try:
            payload = ReferenceResponse.model_validate_json(response.content)
            return Address.from_hex(payload.reference)
        except (PydanticValidationError, InvalidAddressError):
            raise ResponseDecodeError(
                url=str(response.request.url),
                status_code=response.status_code,
            ) from None

    @staticmethod
    def _decode_tag(response: httpx.Response) -> TagProgress:
        try:
            return TagProgress.model_validate_json(response.content)
        except PydanticValidationError:
            raise ResponseDecodeError(
                url=str(response.request.url),
                status_code=response.status_code,
            ) from None

    @staticmethod
    def _redundancy_headers(options: UploadOptions) -> Dict[str, str]:
        if options.redundancy_level is None:
            return {}
        return {SWARM_REDUNDANCY_LEVEL_HEADER: options.redundancy_level.value}

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    async def _probe(self, path: str) -> Optional[str]:
        try:
            response = await self._send("GET", path, operation="check_connection")
        except StorageError:
            return None
        return response.text

    async def check_connection(self) -> bool:
        """
        Check that the endpoint is a Bee node or a gateway proxy.

        Probes the API root first (a full node answers with its banner),
        then the health endpoint (a gateway proxy answers "OK"). The
        detected mode is stored unless the config fixes it.

        Returns:
            True if the endpoint is usable
        """
        body = await self._probe("/")
        if body == FULL_NODE_ROOT_BODY:
            self._set_node_mode(NodeMode.FULL_NODE)
            return True

        body = await self._probe(HEALTH_PATH)
        if body is None:
            return False

        is_proxy = body == GATEWAY_PROXY_HEALTH_BODY
        self._set_node_mode(NodeMode.GATEWAY_PROXY if is_proxy else NodeMode.FULL_NODE)
        return is_proxy

    def _set_node_mode(self, mode: NodeMode) -> None:
        if self._config.node_mode is not None:
            return
        if mode is not self._node_mode:
            _logger.info("Bee node mode detected", extra={"node_mode": mode.value, "url": self.api_url})
        self._node_mode = mode

    # ------------------------------------------------------------------
    # Chunks
    # ------------------------------------------------------------------

    async def upload_soc(
        self,
        owner: str,
        soc_id: str,
        signature: str,
        data: bytes,
        stamp: Optional[str] = None,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
    ) -> Address:
        """
        Upload a single owner chunk (the payload carrier of feed updates).

        Its address derives from (owner, id) rather than the content hash.

        Args:
            owner: Owner Ethereum address (hex)
            soc_id: 32-byte identifier (hex)
            signature: Owner signature over id and payload address (hex)
            data: Chunk data (span + payload)
            stamp: Postage batch ID (defaults to client stamp)
            redundancy_level: Erasure coding level (defaults to client level)
            pin: Pin the chunk

        Returns:
            Address of the single owner chunk

        Raises:
            MissingPostageStampError: If no stamp is available
            MissingSignatureError: If signature is empty
            BeeAPIError: If the node does not answer 201 Created
        """
        owner = validate_owner(owner)
        soc_id = validate_topic(soc_id, field_name="id")
        options = self._resolve(stamp, redundancy_level, pin)
        require_stamp(options.stamp, "upload_soc")
        require_signature(signature)

        headers = {
            SWARM_POSTAGE_BATCH_ID_HEADER: options.stamp,
            CONTENT_TYPE_HEADER: OCTET_STREAM_CONTENT_TYPE,
            SWARM_DEFERRED_UPLOAD_HEADER: "true",
            **self._redundancy_headers(options),
        }
        if options.pin:
            headers[SWARM_PIN_HEADER] = "true"

        response = await self._send(
            "POST",
            f"{SOC_PATH}/{owner}/{soc_id}",
            operation="upload_soc",
            params={"sig": signature},
            headers=headers,
            content=data,
        )
        self._check_status(response, _CREATED)
        return self._decode_reference(response)

    async def upload_chunk(
        self,
        tag: int,
        chunk: Chunk,
        stamp: Optional[str] = None,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
    ) -> Address:
        """
        Upload a content addressed chunk under a tag.

        The request's local processing context always carries redundancy
        level NONE; the requested level is still forwarded to the node in
        the Swarm-Redundancy-Level header.

        Args:
            tag: Tag UID the node counts this chunk under
            chunk: Chunk to upload
            stamp: Postage batch ID (defaults to client stamp)
            redundancy_level: Erasure coding level for the node
            pin: Pin the chunk

        Returns:
            Address reported by the node

        Raises:
            MissingPostageStampError: If no stamp is available
            BeeAPIError: If the node does not answer 201 Created
        """
        options = self._resolve(stamp, redundancy_level, pin)
        require_stamp(options.stamp, "upload_chunk")

        headers = {
            CONTENT_TYPE_HEADER: OCTET_STREAM_CONTENT_TYPE,
            SWARM_POSTAGE_BATCH_ID_HEADER: options.stamp,
            SWARM_DEFERRED_UPLOAD_HEADER: "true",
            SWARM_TAG_HEADER: str(tag),
            **self._redundancy_headers(options),
        }
        if options.pin:
            headers[SWARM_PIN_HEADER] = "true"

        response = await self._send(
            "POST",
            CHUNKS_PATH,
            operation="upload_chunk",
            headers=headers,
            content=chunk.data,
            extensions={LOCAL_REDUNDANCY_EXTENSION: RedundancyLevel.NONE},
        )
        self._check_status(response, _CREATED)
        return self._decode_reference(response)

    async def download_chunk(self, address: Address) -> Chunk:
        """
        Download a chunk by address.

        Cancelling the awaiting task aborts the in-flight request;
        ``asyncio.CancelledError`` propagates unchanged.

        Args:
            address: Chunk address

        Returns:
            Chunk with the downloaded data

        Raises:
            InvalidAddressError: If address is zero or empty
            ContentNotFoundError: If the node does not have the chunk
        """
        validate_reference(address)
        response = await self._send(
            "GET",
            f"{CHUNKS_PATH}/{address}",
            operation="download_chunk",
        )
        self._check_status(response, _OK)
        return Chunk(address=address, data=response.content)

    # ------------------------------------------------------------------
    # Blobs
    # ------------------------------------------------------------------

    async def upload_blob(
        self,
        data: UploadData,
        tag: int = 0,
        stamp: Optional[str] = None,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
        encrypt: bool = False,
    ) -> Address:
        """
        Upload an arbitrary-size binary object.

        Args:
            data: Bytes, binary file object or async iterable of bytes
            tag: Tag UID (0 means no tag header)
            stamp: Postage batch ID (defaults to client stamp)
            redundancy_level: Erasure coding level
            pin: Pin the blob
            encrypt: Ask the node to store an encrypted variant (the
                returned reference is then 64 bytes)

        Returns:
            Root address of the blob

        Raises:
            MissingPostageStampError: If no stamp is available
            BeeAPIError: If the node answers neither 200 nor 201
        """
        options = self._resolve(stamp, redundancy_level, pin)
        require_stamp(options.stamp, "upload_blob")

        headers = {
            SWARM_PIN_HEADER: _bool_header(options.pin),
            SWARM_ENCRYPT_HEADER: _bool_header(encrypt),
            CONTENT_TYPE_HEADER: OCTET_STREAM_CONTENT_TYPE,
            **self._redundancy_headers(options),
        }
        if tag > 0:
            headers[SWARM_TAG_HEADER] = str(tag)
        headers[SWARM_POSTAGE_BATCH_ID_HEADER] = options.stamp
        headers[SWARM_DEFERRED_UPLOAD_HEADER] = "true"

        response = await self._send(
            "POST",
            BYTES_PATH,
            operation="upload_blob",
            headers=headers,
            content=to_request_content(data),
        )
        self._check_status(response, _OK_OR_CREATED)
        return self._decode_reference(response)

    async def download_blob(self, address: Address) -> StreamedDownload:
        """
        Download a blob as a stream.

        Args:
            address: Blob root address

        Returns:
            Open StreamedDownload; the caller must close it

        Raises:
            ContentNotFoundError: If the node answers 404
            BeeAPIError: For any other non-200 status (carries status_code)
        """
        validate_reference(address)
        response = await self._send(
            "GET",
            f"{BYTES_PATH}/{address}",
            operation="download_blob",
            stream=True,
        )
        await self._check_stream_status(response, _OK)
        return StreamedDownload(response)

    # ------------------------------------------------------------------
    # Collections (bzz)
    # ------------------------------------------------------------------

    async def upload_file_bzz(
        self,
        data: bytes,
        filename: str,
        stamp: Optional[str] = None,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> Address:
        """
        Upload a single file as a one-entry collection.

        Args:
            data: File contents
            filename: Name of the file in the collection
            stamp: Postage batch ID (defaults to client stamp)
            redundancy_level: Erasure coding level
            pin: Pin the collection
            content_type: MIME type recorded for the file

        Returns:
            Collection manifest address
        """
        filename = validate_filename(filename)
        options = self._resolve(stamp, redundancy_level, pin)
        require_stamp(options.stamp, "upload_file_bzz")

        headers = {
            SWARM_PIN_HEADER: _bool_header(options.pin),
            SWARM_POSTAGE_BATCH_ID_HEADER: options.stamp,
            CONTENT_TYPE_HEADER: content_type,
            **self._redundancy_headers(options),
        }

        response = await self._send(
            "POST",
            BZZ_PATH,
            operation="upload_file_bzz",
            params={"name": filename},
            headers=headers,
            content=data,
        )
        self._check_status(response, _OK_OR_CREATED)
        return self._decode_reference(response)

    async def upload_archive(
        self,
        stream: TarStream,
        stamp: Optional[str] = None,
        redundancy_level: RedundancyInput = None,
        pin: bool = False,
    ) -> Address:
        """
        Upload a finalized tar stream as a multi-file collection.

        Args:
            stream: Closed, not yet uploaded TarStream
            stamp: Postage batch ID (defaults to client stamp)
            redundancy_level: Erasure coding level
            pin: Pin the collection

        Returns:
            Collection manifest address

        Raises:
            ArchiveStreamConsumedError: If the stream is open or was
                already uploaded
        """
        options = self._resolve(stamp, redundancy_level, pin)
        require_stamp(options.stamp, "upload_archive")
        body = stream.output()

        headers = {
            SWARM_PIN_HEADER: _bool_header(options.pin),
            SWARM_POSTAGE_BATCH_ID_HEADER: options.stamp,
            CONTENT_TYPE_HEADER: TAR_CONTENT_TYPE,
            SWARM_COLLECTION_HEADER: "true",
            **self._redundancy_headers(options),
        }

        response = await self._send(
            "POST",
            BZZ_PATH,
            operation="upload_archive",
            headers=headers,
            content=body,
        )
        self._check_status(response, _OK_OR_CREATED)
        address = self._decode_reference(response)
        _logger.info(
            "Collection uploaded",
            extra={"address": str(address), "items": stream.items_written, "size": len(body)},
        )
        return address

    async def download_archive(self, address: Address) -> DownloadResult:
        """
        Download a whole collection (or the default document of it).

        Args:
            address: Collection manifest address

        Returns:
            DownloadResult with the body and status code
        """
        validate_reference(address)
        response = await self._send(
            "GET",
            f"{BZZ_PATH}/{address}",
            operation="download_archive",
        )
        self._check_status(response, _OK)
        data = response.content
        return DownloadResult(
            data=data,
            size=len(data),
            status_code=response.status_code,
            downloaded_at=datetime.now(timezone.utc),
        )

    async def download_archive_file(self, address: Address, filename: str) -> StreamedDownload:
        """
        Download one named file of a collection as a stream.

        Args:
            address: Collection manifest address
            filename: Path of the file inside the collection

        Returns:
            Open StreamedDownload with ``content_length`` set from the
            node's Content-Length header

        Raises:
            ResponseDecodeError: If Content-Length is missing or invalid
        """
        validate_reference(address)
        filename = validate_filename(filename)
        response = await self._send(
            "GET",
            f"{BZZ_PATH}/{address}/{quote(filename, safe='/')}",
            operation="download_archive_file",
            stream=True,
        )
        await self._check_stream_status(response, _OK)

        header = response.headers.get(CONTENT_LENGTH_HEADER, "")
        if not header.isdigit():
            await response.aclose()
            raise ResponseDecodeError(
                "missing or invalid Content-Length",
                url=str(response.request.url),
                status_code=response.status_code,
            )
        return StreamedDownload(response, content_length=int(header))

    # ------------------------------------------------------------------
    # Pins
    # ------------------------------------------------------------------

    async def unpin_reference(self, address: Address) -> None:
        """
        Unpin a reference so the node may garbage collect it.

        A 404 (nothing pinned) counts as success.

        Args:
            address: Pinned root address
        """
        validate_reference(address)
        response = await self._send(
            "DELETE",
            f"{PINS_PATH}/{address}",
            operation="unpin_reference",
        )
        if response.status_code not in (200, 404):
            raise self._api_error(response, response.content, prefix="failed to unpin reference: ")

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    async def create_tag(self, address: Address = ZERO_ADDRESS) -> int:
        """
        Create an upload tag, optionally bound to a target address.

        Gateway proxies have no tags API: 0 is returned without a request.

        Args:
            address: Target address; zero or empty means none

        Returns:
            Tag UID
        """
        if self.is_gateway_proxy:
            return 0

        body: Dict[str, Any] = {}
        if not address.is_zero() and not address.is_empty():
            body["json"] = TagCreateRequest(address=address.hex()).model_dump()
        else:
            body["content"] = b""

        response = await self._send("POST", TAGS_PATH, operation="create_tag", **body)
        self._check_status(response, _OK_OR_CREATED)
        uid = self._decode_tag(response).uid
        _logger.debug("Tag created", extra={"uid": uid})
        return uid

    async def get_tag(self, uid: int) -> TagProgress:
        """
        Get sync counters of a tag.

        Gateway proxies return zero counters without a request.

        Args:
            uid: Tag UID

        Returns:
            TagProgress with total, processed and synced counts
        """
        if self.is_gateway_proxy:
            return TagProgress(uid=uid)

        response = await self._send("GET", f"{TAGS_PATH}/{uid}", operation="get_tag")
        self._check_status(response, _OK_OR_CREATED)
        progress = self._decode_tag(response)
        return TagProgress(
            uid=uid,
            total=progress.total,
            processed=progress.processed,
            synced=progress.synced,
        )

    async def wait_for_tag_sync(
        self,
        uid: int,
        poll_interval: float = 1.0,
        timeout: Optional[float] = None,
    ) -> TagProgress:
        """
        Poll a tag until all of its chunks are synced.

        Against a gateway proxy the neutral zero result is returned at once.

        Args:
            uid: Tag UID
            poll_interval: Seconds between polls
            timeout: Give up after this many seconds (None waits forever)

        Returns:
            Final TagProgress

        Raises:
            TagSyncTimeoutError: If the tag is not synced in time
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout

        while True:
            progress = await self.get_tag(uid)
            if self.is_gateway_proxy or progress.is_synced:
                return progress
            if deadline is not None and loop.time() + poll_interval > deadline:
                raise TagSyncTimeoutError(
                    uid,
                    timeout or 0.0,
                    synced=progress.synced,
                    total=progress.total,
                )
            _logger.debug(
                "Waiting for tag sync",
                extra={"uid": uid, "synced": progress.synced, "total": progress.total},
            )
            await asyncio.sleep(poll_interval)

    # ------------------------------------------------------------------
    # Feeds
    # ------------------------------------------------------------------

    async def create_feed_manifest(
        self,
        owner: str,
        topic: str,
        stamp: Optional[str] = None,
        pin: bool = False,
    ) -> Address:
        """
        Create a feed manifest for (owner, topic).

        Args:
            owner: Feed owner Ethereum address (hex)
            topic: 32-byte feed topic (hex)
            stamp: Postage batch ID (defaults to client stamp)
            pin: Pin the manifest

        Returns:
            Feed manifest address
        """
        owner = validate_owner(owner)
        topic = validate_topic(topic)
        options = self._resolve(stamp, None, pin)
        require_stamp(options.stamp, "create_feed_manifest")

        headers = {SWARM_POSTAGE_BATCH_ID_HEADER: options.stamp}
        if options.pin:
            headers[SWARM_PIN_HEADER] = "true"

        response = await self._send(
            "POST",
            f"{FEEDS_PATH}/{owner}/{topic}",
            operation="create_feed_manifest",
            headers=headers,
        )
        self._check_status(response, _OK_OR_CREATED)
        return self._decode_reference(response)

    async def get_latest_feed_manifest(self, owner: str, topic: str) -> FeedLookupResult:
        """
        Look up the latest update of a feed.

        Args:
            owner: Feed owner Ethereum address (hex)
            topic: 32-byte feed topic (hex)

        Returns:
            FeedLookupResult with the reference, current index and next index
        """
        owner = validate_owner(owner)
        topic = validate_topic(topic)

        response = await self._send(
            "GET",
            f"{FEEDS_PATH}/{owner}/{topic}",
            operation="get_latest_feed_manifest",
        )
        self._check_status(response, _OK_OR_CREATED)
        return FeedLookupResult(
            address=self._decode_reference(response),
            index=response.headers.get(SWARM_FEED_INDEX_HEADER, ""),
            next_index=response.headers.get(SWARM_FEED_INDEX_NEXT_HEADER, ""),
        )

    def get_stats(self) -> dict:
        """
        Get client statistics.

        Returns:
            Dictionary with endpoint, node mode and defaults
        """
        return {
            "api_url": self.api_url,
            "node_mode": self._node_mode.value,
            "timeout_ms": self._config.timeout,
            "max_connections": self._config.max_connections,
            "max_idle_connections": self._config.max_idle_connections,
            "default_redundancy_level": (
                self._defaults.redundancy_level.value if self._defaults.redundancy_level else None
            ),
            "default_pin": self._defaults.pin,
            "has_default_stamp": bool(self._defaults.stamp),
        }
