"""
Shared fixtures for the Swarm blockstore tests.

Provides an in-process fake Bee node served through ``httpx.MockTransport``,
so clients exercise real request building and response handling without
a network.
"""

import hashlib
import io
import json
import re
import tarfile
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple

import httpx
import pytest

from swarm_blockstore.storage.bee_client import BeeClient
from swarm_blockstore.storage.types import BeeConfig, NodeMode


# =============================================================================
# Test Constants
# =============================================================================

BEE_URL = "http://bee.test:1633"
VALID_STAMP = "stamp1"
LONG_STAMP = "b0a1" * 16

VALID_OWNER = "0x" + "1a" * 20
VALID_TOPIC = "ab" * 32
VALID_SOC_ID = "cd" * 32
VALID_SIGNATURE = "ef" * 65

REFERENCE_HEX = "aa" * 32
ENCRYPTED_REFERENCE_HEX = "bb" * 64

NOT_FOUND_BODY = {"code": 404, "message": "Not Found"}


def fake_address(*parts: bytes) -> bytes:
    """Deterministic stand-in for a Swarm hash."""
    digest = hashlib.sha256()
    for part in parts:
        digest.update(part)
    return digest.digest()


# =============================================================================
# Fake Bee Node
# =============================================================================


@dataclass
class FakeTag:
    uid: int
    address: str = ""
    total: int = 0
    processed: int = 0
    synced: int = 0

    def to_json(self) -> dict:
        return {
            "uid": self.uid,
            "address": self.address,
            "total": self.total,
            "processed": self.processed,
            "synced": self.synced,
            "startedAt": "2024-01-01T00:00:00Z",
        }


@dataclass
class FakeFeed:
    reference: str = ""
    index: int = -1


@dataclass
class FakeBeeNode:
    """
    Minimal Bee HTTP API backed by dictionaries.

    Set ``gateway_proxy`` to answer like a gateway proxy (no tags API).
    ``overrides`` maps ``(method, path)`` to a canned response.
    """

    gateway_proxy: bool = False
    auto_sync: bool = True
    chunks: Dict[str, bytes] = field(default_factory=dict)
    blobs: Dict[str, bytes] = field(default_factory=dict)
    collections: Dict[str, Dict[str, bytes]] = field(default_factory=dict)
    collection_bodies: Dict[str, bytes] = field(default_factory=dict)
    pins: Set[str] = field(default_factory=set)
    tags: Dict[int, FakeTag] = field(default_factory=dict)
    feeds: Dict[Tuple[str, str], FakeFeed] = field(default_factory=dict)
    requests: List[httpx.Request] = field(default_factory=list)
    overrides: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = field(
        default_factory=dict
    )

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def respond_with(
        self,
        method: str,
        path: str,
        status_code: int,
        *,
        body: Optional[bytes] = None,
        json_body: Optional[dict] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """Serve a canned response for one method/path."""

        def handler(request: httpx.Request) -> httpx.Response:
            if json_body is not None:
                return httpx.Response(status_code, json=json_body, headers=headers)
            return httpx.Response(status_code, content=body or b"", headers=headers)

        self.overrides[(method, path)] = handler

    def raise_on(self, method: str, path: str, exc_type: type) -> None:
        """Make one method/path fail at the transport level."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise exc_type("simulated failure", request=request)

        self.overrides[(method, path)] = handler

    def publish_feed(self, owner: str, topic: str, reference: str) -> None:
        """Advance a feed to a new reference."""
        key = (owner.lower().removeprefix("0x"), topic.lower())
        feed = self.feeds.setdefault(key, FakeFeed())
        feed.reference = reference
        feed.index += 1

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.method
        path = request.url.path

        override = self.overrides.get((method, path))
        if override is not None:
            return override(request)

        if method == "GET" and path == "/":
            if self.gateway_proxy:
                return httpx.Response(404, text="404 page not found\n")
            return httpx.Response(200, text="Ethereum Swarm Bee\n")
        if method == "GET" and path == "/health":
            if self.gateway_proxy:
                return httpx.Response(200, text="OK")
            return httpx.Response(200, json={"status": "ok", "version": "2.0.0"})

        routes = [
            ("POST", r"/chunks", self._upload_chunk),
            ("GET", r"/chunks/(?P<ref>[0-9a-f]+)", self._download_chunk),
            ("POST", r"/soc/(?P<owner>[0-9a-f]+)/(?P<soc_id>[0-9a-f]+)", self._upload_soc),
            ("POST", r"/bytes", self._upload_bytes),
            ("GET", r"/bytes/(?P<ref>[0-9a-f]+)", self._download_bytes),
            ("POST", r"/bzz", self._upload_bzz),
            ("GET", r"/bzz/(?P<ref>[0-9a-f]+)", self._download_collection),
            ("GET", r"/bzz/(?P<ref>[0-9a-f]+)/(?P<name>.+)", self._download_collection_file),
            ("DELETE", r"/pins/(?P<ref>[0-9a-f]+)", self._unpin),
            ("POST", r"/tags", self._create_tag),
            ("GET", r"/tags/(?P<uid>\d+)", self._get_tag),
            ("POST", r"/feeds/(?P<owner>[0-9a-f]+)/(?P<topic>[0-9a-f]+)", self._create_feed),
            ("GET", r"/feeds/(?P<owner>[0-9a-f]+)/(?P<topic>[0-9a-f]+)", self._get_feed),
        ]
        for route_method, pattern, handler in routes:
            if route_method != method:
                continue
            match = re.fullmatch(pattern, path)
            if match:
                return handler(request, **match.groupdict())

        return httpx.Response(404, json=NOT_FOUND_BODY)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    @staticmethod
    def _reference(ref: bytes) -> httpx.Response:
        return httpx.Response(201, json={"reference": ref.hex()})

    @staticmethod
    def _missing_stamp() -> httpx.Response:
        return httpx.Response(400, json={"code": 400, "message": "invalid header params"})

    def _maybe_pin(self, request: httpx.Request, ref: str) -> None:
        if request.headers.get("Swarm-Pin") == "true":
            self.pins.add(ref)

    def _upload_chunk(self, request: httpx.Request) -> httpx.Response:
        if not request.headers.get("Swarm-Postage-Batch-Id"):
            return self._missing_stamp()
        ref = fake_address(request.content)
        self.chunks[ref.hex()] = request.content
        self._maybe_pin(request, ref.hex())

        tag = self.tags.get(int(request.headers.get("Swarm-Tag", "0")))
        if tag is not None:
            tag.total += 1
            tag.processed += 1
            if self.auto_sync:
                tag.synced += 1
        return self._reference(ref)

    def _download_chunk(self, request: httpx.Request, ref: str) -> httpx.Response:
        if ref not in self.chunks:
            return httpx.Response(404, json=NOT_FOUND_BODY)
        return httpx.Response(200, content=self.chunks[ref])

    def _upload_soc(self, request: httpx.Request, owner: str, soc_id: str) -> httpx.Response:
        if not request.headers.get("Swarm-Postage-Batch-Id"):
            return self._missing_stamp()
        if not request.url.params.get("sig"):
            return httpx.Response(400, json={"code": 400, "message": "invalid query params"})
        ref = fake_address(bytes.fromhex(soc_id), bytes.fromhex(owner))
        self.chunks[ref.hex()] = request.content
        self._maybe_pin(request, ref.hex())
        return self._reference(ref)

    def _upload_bytes(self, request: httpx.Request) -> httpx.Response:
        if not request.headers.get("Swarm-Postage-Batch-Id"):
            return self._missing_stamp()
        ref = fake_address(request.content)
        if request.headers.get("Swarm-Encrypt") == "true":
            ref = ref + fake_address(b"key", request.content)
        self.blobs[ref.hex()] = request.content
        self._maybe_pin(request, ref.hex())
        return self._reference(ref)

    def _download_bytes(self, request: httpx.Request, ref: str) -> httpx.Response:
        if ref not in self.blobs:
            return httpx.Response(404, json=NOT_FOUND_BODY)
        return httpx.Response(200, content=self.blobs[ref])

    def _upload_bzz(self, request: httpx.Request) -> httpx.Response:
        if not request.headers.get("Swarm-Postage-Batch-Id"):
            return self._missing_stamp()
        body = request.content
        if request.headers.get("Swarm-Collection") == "true":
            files = {}
            with tarfile.open(fileobj=io.BytesIO(body), mode="r:") as archive:
                for member in archive.getmembers():
                    files[member.name] = archive.extractfile(member).read()
        else:
            files = {request.url.params["name"]: body}
        ref = fake_address(b"bzz", body).hex()
        self.collections[ref] = files
        self.collection_bodies[ref] = body
        self._maybe_pin(request, ref)
        return httpx.Response(201, json={"reference": ref})

    def _download_collection(self, request: httpx.Request, ref: str) -> httpx.Response:
        if ref not in self.collection_bodies:
            return httpx.Response(404, json=NOT_FOUND_BODY)
        return httpx.Response(200, content=self.collection_bodies[ref])

    def _download_collection_file(self, request: httpx.Request, ref: str, name: str) -> httpx.Response:
        files = self.collections.get(ref, {})
        if name not in files:
            return httpx.Response(404, json=NOT_FOUND_BODY)
        return httpx.Response(200, content=files[name])

    def _unpin(self, request: httpx.Request, ref: str) -> httpx.Response:
        if ref not in self.pins:
            return httpx.Response(404, json=NOT_FOUND_BODY)
        self.pins.discard(ref)
        return httpx.Response(200, json={"code": 200, "message": "OK"})

    def _create_tag(self, request: httpx.Request) -> httpx.Response:
        if self.gateway_proxy:
            return httpx.Response(404, json=NOT_FOUND_BODY)
        address = ""
        if request.content:
            address = json.loads(request.content)["address"]
        uid = len(self.tags) + 1
        self.tags[uid] = FakeTag(uid=uid, address=address)
        return httpx.Response(201, json=self.tags[uid].to_json())

    def _get_tag(self, request: httpx.Request, uid: str) -> httpx.Response:
        tag = self.tags.get(int(uid))
        if tag is None:
            return httpx.Response(404, json=NOT_FOUND_BODY)
        return httpx.Response(200, json=tag.to_json())

    def _create_feed(self, request: httpx.Request, owner: str, topic: str) -> httpx.Response:
        if not request.headers.get("Swarm-Postage-Batch-Id"):
            return self._missing_stamp()
        ref = fake_address(b"feed", bytes.fromhex(owner), bytes.fromhex(topic)).hex()
        self._maybe_pin(request, ref)
        return httpx.Response(201, json={"reference": ref})

    def _get_feed(self, request: httpx.Request, owner: str, topic: str) -> httpx.Response:
        feed = self.feeds.get((owner, topic))
        if feed is None or feed.index < 0:
            return httpx.Response(404, json={"code": 404, "message": "lookup failed"})
        return httpx.Response(
            200,
            json={"reference": feed.reference},
            headers={
                "swarm-feed-index": format(feed.index, "016x"),
                "swarm-feed-index-next": format(feed.index + 1, "016x"),
            },
        )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def bee_node() -> FakeBeeNode:
    """Fake full Bee node."""
    return FakeBeeNode()


@pytest.fixture
def proxy_node() -> FakeBeeNode:
    """Fake gateway proxy."""
    return FakeBeeNode(gateway_proxy=True)


@pytest.fixture
def bee_config() -> BeeConfig:
    """Config without a default stamp, node mode fixed to full node."""
    return BeeConfig(api_url=BEE_URL, node_mode=NodeMode.FULL_NODE)


@pytest.fixture
def bee_client(bee_node: FakeBeeNode, bee_config: BeeConfig) -> BeeClient:
    """Client wired to the fake full node."""
    return BeeClient(bee_config, transport=bee_node.transport())


@pytest.fixture
def stamped_client(bee_node: FakeBeeNode) -> BeeClient:
    """Client with a default postage batch ID."""
    config = BeeConfig(
        api_url=BEE_URL,
        postage_batch_id=VALID_STAMP,
        node_mode=NodeMode.FULL_NODE,
    )
    return BeeClient(config, transport=bee_node.transport())


@pytest.fixture
def proxy_client(proxy_node: FakeBeeNode) -> BeeClient:
    """Client wired to the fake gateway proxy."""
    config = BeeConfig(
        api_url=BEE_URL,
        postage_batch_id=VALID_STAMP,
        node_mode=NodeMode.GATEWAY_PROXY,
    )
    return BeeClient(config, transport=proxy_node.transport())
