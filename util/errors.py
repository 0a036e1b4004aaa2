# util/errors.py
from typing import Hashable, Optional
from fastapi import HTTPException, status
from util.enums import ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)

    @classmethod
    def of(cls, error: ErrorMessage) -> "AppError":
        return cls(error.value.message, error.value.http_status)


class StoreError(Exception):
    """Base for every failure the scoped blob store reports to its caller."""

    error: ErrorMessage

    def __init__(self, owner: Hashable, node_id: Optional[int] = None) -> None:
        self.owner = owner
        self.node_id = node_id
        where = f"{owner}" if node_id is None else f"{owner}/{node_id}"
        super().__init__(f"{self.error.value.message}: {where}")

    @property
    def http_status(self) -> int:
        return self.error.value.http_status


class Unauthorized(StoreError):
    """Requester is not allowed to act as the scope owner."""

    error = ErrorMessage.UNAUTHORIZED

    def __init__(self, owner: Hashable, requester: Hashable) -> None:
        self.requester = requester
        super().__init__(owner)


class ImmutableScope(StoreError):
    """Write or delete against a scope whose node 0 holds the sentinel."""

    error = ErrorMessage.IMMUTABLE_SCOPE


class NodeNotFound(StoreError):
    error = ErrorMessage.NODE_NOT_FOUND
