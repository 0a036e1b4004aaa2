# repository/node_repository.py
from typing import Dict, Hashable, List, Optional, Protocol
from redis.asyncio import Redis
from config.cache import get_redis
from repository.namespaces import NODES


class NodeRepository(Protocol):
    """Persistence for (owner, node id) -> payload rows."""

    async def get(self, owner: Hashable, node_id: int) -> Optional[bytes]: ...

    async def exists(self, owner: Hashable, node_id: int) -> bool: ...

    async def put(self, owner: Hashable, node_id: int, data: bytes) -> bool:
        """Store the payload; True when the row was created."""
        ...

    async def delete(self, owner: Hashable, node_id: int) -> bool:
        """Remove the row; True when something was removed."""
        ...

    async def ids(self, owner: Hashable) -> List[int]: ...


class InMemoryNodeRepository:
    """
    Dict-of-dicts node storage for development and tests.

    A scope is dropped from the outer mapping as soon as its last node goes,
    so an absent scope and an empty one look the same to readers.
    """

    def __init__(self) -> None:
        self._scopes: Dict[Hashable, Dict[int, bytes]] = {}

    async def get(self, owner: Hashable, node_id: int) -> Optional[bytes]:
        nodes = self._scopes.get(owner)
        if nodes is None:
            return None
        return nodes.get(node_id)

    async def exists(self, owner: Hashable, node_id: int) -> bool:
        return node_id in self._scopes.get(owner, {})

    async def put(self, owner: Hashable, node_id: int, data: bytes) -> bool:
        nodes = self._scopes.setdefault(owner, {})
        created = node_id not in nodes
        nodes[node_id] = bytes(data)
        return created

    async def delete(self, owner: Hashable, node_id: int) -> bool:
        nodes = self._scopes.get(owner)
        if nodes is None or node_id not in nodes:
            return False
        del nodes[node_id]
        if not nodes:
            del self._scopes[owner]
        return True

    async def ids(self, owner: Hashable) -> List[int]:
        return sorted(self._scopes.get(owner, {}))

    def scope_count(self) -> int:
        return len(self._scopes)


class RedisNodeRepository:
    """
    Redis-backed node storage: one hash per scope keyed `gpps:nodes:<owner>`,
    field = decimal node id, value = raw payload bytes.

    Redis deletes a hash once its last field is removed, which is exactly the
    "scope exists iff it has nodes" rule.
    """

    def __init__(self, client: Optional[Redis] = None) -> None:
        self._redis = client

    async def _client(self) -> Redis:
        if self._redis is not None:
            return self._redis
        return await get_redis()

    @staticmethod
    def _key(owner: Hashable) -> str:
        return f"{NODES}:{owner}"

    @staticmethod
    def _field(node_id: int) -> str:
        return str(node_id)

    async def get(self, owner: Hashable, node_id: int) -> Optional[bytes]:
        r = await self._client()
        raw = await r.hget(self._key(owner), self._field(node_id))
        return bytes(raw) if raw is not None else None

    async def exists(self, owner: Hashable, node_id: int) -> bool:
        r = await self._client()
        return bool(await r.hexists(self._key(owner), self._field(node_id)))

    async def put(self, owner: Hashable, node_id: int, data: bytes) -> bool:
        r = await self._client()
        added = await r.hset(self._key(owner), self._field(node_id), bytes(data))
        return int(added) == 1

    async def delete(self, owner: Hashable, node_id: int) -> bool:
        r = await self._client()
        return int(await r.hdel(self._key(owner), self._field(node_id))) > 0

    async def ids(self, owner: Hashable) -> List[int]:
        r = await self._client()
        fields = await r.hkeys(self._key(owner))
        out: List[int] = []
        for f in fields or []:
            out.append(int(f.decode("ascii") if isinstance(f, (bytes, bytearray)) else f))
        return sorted(out)
