"""Tests for NodeService."""

import asyncio
import logging

import pytest

from core.scoped_blob_store import ScopedBlobStore
from repository.node_repository import InMemoryNodeRepository
from service.node_service import NodeService
from util.errors import ImmutableScope, NodeNotFound


def _service() -> NodeService:
    return NodeService(ScopedBlobStore(InMemoryNodeRepository()))


def test_lock_scope_writes_sentinel() -> None:
    async def scenario() -> None:
        service = _service()
        await service.lock_scope("alice", "alice")
        assert await service.is_immutable("alice") is True
        assert await service.read_node("alice", 0) == b"\xde\xad"

    asyncio.run(scenario())


def test_write_chunked_then_read_chunked() -> None:
    async def scenario() -> None:
        service = _service()
        data = bytes(range(200)) * 3
        ids = await service.write_chunked("alice", data, "alice", chunk_size=64)
        assert ids == list(range(1, 11))
        assert await service.list_nodes("alice") == ids
        assert await service.read_chunked("alice", 1, len(ids)) == data

    asyncio.run(scenario())


def test_read_chunked_missing_chunk() -> None:
    async def scenario() -> None:
        service = _service()
        await service.write_chunked("alice", b"abcdef", "alice", chunk_size=2)
        await service.delete_node("alice", 2, "alice")
        with pytest.raises(NodeNotFound):
            await service.read_chunked("alice", 1, 3)

    asyncio.run(scenario())


def test_read_chunked_rejects_non_positive_count() -> None:
    with pytest.raises(ValueError):
        asyncio.run(_service().read_chunked("alice", 1, 0))


def test_write_chunked_stops_on_locked_scope() -> None:
    async def scenario() -> None:
        service = _service()
        await service.lock_scope("alice", "alice")
        with pytest.raises(ImmutableScope):
            await service.write_chunked("alice", b"abcd", "alice", chunk_size=2)
        assert await service.list_nodes("alice") == [0]

    asyncio.run(scenario())


def test_write_logs_size_not_payload(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="service.node_service")
    asyncio.run(_service().write_node("alice", 1, b"secret-bytes", "alice"))
    messages = [r.getMessage() for r in caplog.records]
    assert any("node.write.ok owner=alice id=1 bytes=12" in m for m in messages)
    assert not any("secret-bytes" in m for m in messages)


def test_rejected_write_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="service.node_service")

    async def scenario() -> None:
        service = _service()
        await service.lock_scope("alice", "alice")
        with pytest.raises(ImmutableScope):
            await service.write_node("alice", 1, b"x", "alice")

    asyncio.run(scenario())
    assert any("node.write.rejected" in r.getMessage() for r in caplog.records)
