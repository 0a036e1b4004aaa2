import logging
from typing import Hashable, List, Optional
from core.chunking import DEFAULT_CHUNK_SIZE, join_chunks, split_chunks
from core.scoped_blob_store import ScopedBlobStore
from util.constants import IMMUTABLE_SENTINEL, SENTINEL_NODE_ID
from util.errors import StoreError

logger = logging.getLogger(__name__)


class NodeService:
    def __init__(self, store: ScopedBlobStore) -> None:
        self._store = store

    async def write_node(
        self, owner: Hashable, node_id: int, data: bytes, requester: Hashable
    ) -> bool:
        """
        Create or replace one node.
        Logs: owner, id and byte size (no payloads).
        """
        try:
            created = await self._store.write(owner, node_id, data, requester)
        except StoreError as e:
            logger.warning("node.write.rejected owner=%s id=%d err=%s", owner, node_id, type(e).__name__)
            raise
        logger.info(
            "node.write.ok owner=%s id=%d bytes=%d created=%s",
            owner,
            node_id,
            len(data),
            created,
        )
        return created

    async def delete_node(self, owner: Hashable, node_id: int, requester: Hashable) -> None:
        try:
            await self._store.delete(owner, node_id, requester)
        except StoreError as e:
            logger.warning("node.delete.rejected owner=%s id=%d err=%s", owner, node_id, type(e).__name__)
            raise
        logger.info("node.delete.ok owner=%s id=%d", owner, node_id)

    async def read_node(self, owner: Hashable, node_id: int) -> bytes:
        return await self._store.read(owner, node_id)

    async def is_immutable(self, owner: Hashable) -> bool:
        return await self._store.is_immutable(owner)

    async def list_nodes(
        self, owner: Hashable, lower: Optional[int] = None, upper: Optional[int] = None
    ) -> List[int]:
        return await self._store.list_ids(owner, lower, upper)

    async def lock_scope(self, owner: Hashable, requester: Hashable) -> None:
        """Write the sentinel to node 0. Irreversible."""
        await self.write_node(owner, SENTINEL_NODE_ID, IMMUTABLE_SENTINEL, requester)

    async def write_chunked(
        self,
        owner: Hashable,
        data: bytes,
        requester: Hashable,
        *,
        first_id: int = 1,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> List[int]:
        """
        Store a large object as contiguous nodes starting at first_id.
        - Stops at the first rejected chunk; chunks already written stay.
        - Defaults to first_id=1 so node 0 stays free for the lock sentinel.
        """
        written: List[int] = []
        for node_id, chunk in split_chunks(data, chunk_size, first_id):
            await self._store.write(owner, node_id, chunk, requester)
            written.append(node_id)
        logger.info(
            "node.chunked.write.ok owner=%s first=%d chunks=%d bytes=%d",
            owner,
            first_id,
            len(written),
            len(data),
        )
        return written

    async def read_chunked(self, owner: Hashable, first_id: int, count: int) -> bytes:
        if count <= 0:
            raise ValueError(f"count must be > 0, got {count}")
        chunks = []
        for node_id in range(first_id, first_id + count):
            chunks.append((node_id, await self._store.read(owner, node_id)))
        return join_chunks(chunks)
