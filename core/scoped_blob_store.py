# core/scoped_blob_store.py
import asyncio
import logging
import weakref
from typing import Hashable, List, Optional
from repository.node_repository import NodeRepository
from util.constants import SENTINEL_NODE_ID
from util.errors import ImmutableScope, NodeNotFound, Unauthorized
from util.functions import check_node_id, is_sentinel

logger = logging.getLogger(__name__)


class ScopedBlobStore:
    """
    Binary payloads under owner scopes, addressed by u64 node id.

    Rules:
    - Only the owner may write or delete inside its scope (the requester
      identity is trusted, it was authenticated upstream).
    - Node 0 holding exactly 0xDE 0xAD freezes the whole scope for good.
      The latch is derived from node 0 on every call, never cached.
    - strict=True rejects every mutation in a frozen scope. strict=False
      keeps the legacy behavior where only existing nodes are frozen and
      new ids may still be created.
    - Mutations on one scope are serialized by a per-scope lock.
    """

    def __init__(self, repository: NodeRepository, *, strict: bool = True) -> None:
        self._repo = repository
        self._strict = strict
        # Entries vanish once no in-flight write/delete holds the lock.
        self._locks: "weakref.WeakValueDictionary[Hashable, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    @property
    def strict(self) -> bool:
        return self._strict

    def _lock(self, owner: Hashable) -> asyncio.Lock:
        lock = self._locks.get(owner)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[owner] = lock
        return lock

    @staticmethod
    def _authorize(owner: Hashable, requester: Hashable) -> None:
        if requester != owner:
            logger.warning("store.unauthorized owner=%s requester=%s", owner, requester)
            raise Unauthorized(owner, requester)

    async def is_immutable(self, owner: Hashable) -> bool:
        return is_sentinel(await self._repo.get(owner, SENTINEL_NODE_ID))

    async def write(
        self, owner: Hashable, node_id: int, data: bytes, requester: Hashable
    ) -> bool:
        """Create or fully replace a node. Returns True when it was created."""
        check_node_id(node_id)
        self._authorize(owner, requester)
        async with self._lock(owner):
            if self._strict:
                if await self.is_immutable(owner):
                    raise ImmutableScope(owner, node_id)
            elif await self._repo.exists(owner, node_id) and await self.is_immutable(owner):
                raise ImmutableScope(owner, node_id)

            created = await self._repo.put(owner, node_id, data)

        if node_id == SENTINEL_NODE_ID and is_sentinel(data):
            logger.info("store.scope.locked owner=%s", owner)
        return created

    async def delete(self, owner: Hashable, node_id: int, requester: Hashable) -> None:
        check_node_id(node_id)
        self._authorize(owner, requester)
        async with self._lock(owner):
            if not await self._repo.exists(owner, node_id):
                raise NodeNotFound(owner, node_id)
            if await self.is_immutable(owner):
                raise ImmutableScope(owner, node_id)
            await self._repo.delete(owner, node_id)

    async def read(self, owner: Hashable, node_id: int) -> bytes:
        check_node_id(node_id)
        data = await self._repo.get(owner, node_id)
        if data is None:
            raise NodeNotFound(owner, node_id)
        return data

    async def list_ids(
        self,
        owner: Hashable,
        lower: Optional[int] = None,
        upper: Optional[int] = None,
    ) -> List[int]:
        """Sorted node ids in the scope, optionally within [lower, upper]."""
        ids = await self._repo.ids(owner)
        if lower is not None:
            ids = [i for i in ids if i >= lower]
        if upper is not None:
            ids = [i for i in ids if i <= upper]
        return ids
