"""Tests for the node repositories."""

import asyncio

from fakeredis.aioredis import FakeRedis

from repository.namespaces import NODES
from repository.node_repository import InMemoryNodeRepository, RedisNodeRepository


def test_memory_put_reports_creation() -> None:
    async def scenario() -> None:
        repo = InMemoryNodeRepository()
        assert await repo.put("alice", 1, b"a") is True
        assert await repo.put("alice", 1, b"b") is False
        assert await repo.get("alice", 1) == b"b"

    asyncio.run(scenario())


def test_memory_empty_scope_is_dropped() -> None:
    async def scenario() -> None:
        repo = InMemoryNodeRepository()
        await repo.put("alice", 1, b"a")
        assert repo.scope_count() == 1
        assert await repo.delete("alice", 1) is True
        assert repo.scope_count() == 0
        assert await repo.delete("alice", 1) is False
        assert await repo.get("alice", 1) is None

    asyncio.run(scenario())


def test_memory_copies_mutable_payloads() -> None:
    async def scenario() -> None:
        repo = InMemoryNodeRepository()
        buf = bytearray(b"abc")
        await repo.put("alice", 1, buf)
        buf[0] = 0
        assert await repo.get("alice", 1) == b"abc"

    asyncio.run(scenario())


def test_redis_layout_is_one_hash_per_scope() -> None:
    async def scenario() -> None:
        client = FakeRedis()
        repo = RedisNodeRepository(client)
        await repo.put("alice", 3, b"\x00\xff")
        await repo.put("alice", 12, b"x")
        assert await client.hget(f"{NODES}:alice", "3") == b"\x00\xff"
        assert sorted(await client.hkeys(f"{NODES}:alice")) == [b"12", b"3"]
        assert await repo.ids("alice") == [3, 12]

    asyncio.run(scenario())


def test_redis_put_get_delete() -> None:
    async def scenario() -> None:
        repo = RedisNodeRepository(FakeRedis())
        assert await repo.put("alice", 1, b"a") is True
        assert await repo.put("alice", 1, b"") is False
        assert await repo.get("alice", 1) == b""
        assert await repo.exists("alice", 1) is True
        assert await repo.delete("alice", 1) is True
        assert await repo.exists("alice", 1) is False
        assert await repo.get("alice", 1) is None
        assert await repo.delete("alice", 1) is False

    asyncio.run(scenario())


def test_redis_empty_scope_disappears() -> None:
    async def scenario() -> None:
        client = FakeRedis()
        repo = RedisNodeRepository(client)
        await repo.put("alice", 0, b"a")
        await repo.delete("alice", 0)
        assert await client.exists(f"{NODES}:alice") == 0
        assert await repo.ids("alice") == []

    asyncio.run(scenario())
