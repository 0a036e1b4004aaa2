# controller/controller_dependencies.py
from typing import Optional
from fastapi import Header, Request
from core.scoped_blob_store import ScopedBlobStore
from service.node_service import NodeService
from config.settings import settings
from util.constants import REQUESTER_HEADER
from util.enums import ErrorMessage
from util.errors import AppError


def get_store(request: Request) -> ScopedBlobStore:
    return request.app.state.store


def get_node_service(request: Request) -> NodeService:
    return NodeService(get_store(request))


async def require_requester(
    x_requester: Optional[str] = Header(default=None, alias=REQUESTER_HEADER),
) -> str:
    # Identity is authenticated upstream; we only need it present.
    if not x_requester:
        raise AppError.of(ErrorMessage.MISSING_REQUESTER)
    return x_requester


async def read_payload(request: Request) -> bytes:
    max_bytes = settings.MAX_NODE_BYTES
    if max_bytes > 0:
        # Fast pre-check via Content-Length if present
        cl = request.headers.get("content-length")
        if cl and cl.isdigit() and int(cl) > max_bytes:
            raise AppError.of(ErrorMessage.PAYLOAD_TOO_LARGE)

    data = await request.body()
    if max_bytes > 0 and len(data) > max_bytes:
        raise AppError.of(ErrorMessage.PAYLOAD_TOO_LARGE)
    return data


async def read_payload_unbounded(request: Request) -> bytes:
    # Whole objects are split into nodes afterwards; the per-node cap
    # applies to chunk_size instead.
    return await request.body()
