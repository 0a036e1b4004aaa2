from pydantic import BaseModel


class WriteNodeResponse(BaseModel):
    owner: str
    id: int
    size: int
    created: bool


class NodeListResponse(BaseModel):
    owner: str
    ids: list[int]


class ImmutableResponse(BaseModel):
    owner: str
    immutable: bool


class ChunkedWriteResponse(BaseModel):
    owner: str
    ids: list[int]
    size: int
