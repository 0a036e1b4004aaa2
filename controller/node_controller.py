# controller/node_controller.py
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from controller.controller_dependencies import (
    get_node_service,
    read_payload,
    read_payload_unbounded,
    require_requester,
)
from core.chunking import DEFAULT_CHUNK_SIZE
from model.api import (
    ChunkedWriteResponse,
    ImmutableResponse,
    NodeListResponse,
    WriteNodeResponse,
)
from service.node_service import NodeService
from util.constants import MAX_NODE_ID, InternalURIs
from util.enums import ErrorMessage, StoreBackend
from util.errors import AppError

OCTET_STREAM = "application/octet-stream"

# The limiter keeps its counters in Redis, so it only applies on that backend.
_limits = (
    [
        Depends(
            RateLimiter(
                times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
            )
        )
    ]
    if settings.STORE_BACKEND == StoreBackend.REDIS
    else []
)

node_router = APIRouter(dependencies=_limits)

NodeId = Annotated[int, Path(ge=0, le=MAX_NODE_ID)]


@node_router.put(InternalURIs.NODE, response_model=WriteNodeResponse)
async def write_node(
    response: Response,
    owner: str,
    node_id: NodeId,
    data: bytes = Depends(read_payload),
    requester: str = Depends(require_requester),
    service: NodeService = Depends(get_node_service),
) -> WriteNodeResponse:
    created = await service.write_node(owner, node_id, data, requester)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return WriteNodeResponse(owner=owner, id=node_id, size=len(data), created=created)


@node_router.delete(InternalURIs.NODE, status_code=status.HTTP_204_NO_CONTENT)
async def delete_node(
    owner: str,
    node_id: NodeId,
    requester: str = Depends(require_requester),
    service: NodeService = Depends(get_node_service),
) -> Response:
    await service.delete_node(owner, node_id, requester)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@node_router.get(InternalURIs.NODE, response_class=Response)
async def read_node(
    owner: str,
    node_id: NodeId,
    service: NodeService = Depends(get_node_service),
) -> Response:
    data = await service.read_node(owner, node_id)
    return Response(content=data, media_type=OCTET_STREAM)


@node_router.get(InternalURIs.NODES, response_model=NodeListResponse)
async def list_nodes(
    owner: str,
    lower: Optional[int] = Query(default=None, ge=0, le=MAX_NODE_ID),
    upper: Optional[int] = Query(default=None, ge=0, le=MAX_NODE_ID),
    service: NodeService = Depends(get_node_service),
) -> NodeListResponse:
    ids = await service.list_nodes(owner, lower, upper)
    return NodeListResponse(owner=owner, ids=ids)


@node_router.get(InternalURIs.IMMUTABLE, response_model=ImmutableResponse)
async def is_immutable(
    owner: str,
    service: NodeService = Depends(get_node_service),
) -> ImmutableResponse:
    return ImmutableResponse(owner=owner, immutable=await service.is_immutable(owner))


@node_router.post(InternalURIs.LOCK, response_model=ImmutableResponse)
async def lock_scope(
    owner: str,
    requester: str = Depends(require_requester),
    service: NodeService = Depends(get_node_service),
) -> ImmutableResponse:
    await service.lock_scope(owner, requester)
    return ImmutableResponse(owner=owner, immutable=True)


@node_router.put(
    InternalURIs.OBJECT,
    response_model=ChunkedWriteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def write_object(
    owner: str,
    first_id: int = Query(default=1, ge=0, le=MAX_NODE_ID),
    chunk_size: int = Query(default=DEFAULT_CHUNK_SIZE, gt=0),
    data: bytes = Depends(read_payload_unbounded),
    requester: str = Depends(require_requester),
    service: NodeService = Depends(get_node_service),
) -> ChunkedWriteResponse:
    if 0 < settings.MAX_NODE_BYTES < chunk_size:
        raise AppError.of(ErrorMessage.PAYLOAD_TOO_LARGE)
    chunks = max(1, -(-len(data) // chunk_size))
    if first_id + chunks - 1 > MAX_NODE_ID:
        raise AppError.of(ErrorMessage.ID_RANGE)
    ids = await service.write_chunked(
        owner, data, requester, first_id=first_id, chunk_size=chunk_size
    )
    return ChunkedWriteResponse(owner=owner, ids=ids, size=len(data))


@node_router.get(InternalURIs.OBJECT, response_class=Response)
async def read_object(
    owner: str,
    first_id: int = Query(default=1, ge=0, le=MAX_NODE_ID),
    count: int = Query(..., gt=0),
    service: NodeService = Depends(get_node_service),
) -> Response:
    if first_id + count - 1 > MAX_NODE_ID:
        raise AppError.of(ErrorMessage.ID_RANGE)
    data = await service.read_chunked(owner, first_id, count)
    return Response(content=data, media_type=OCTET_STREAM)
