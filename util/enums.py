from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class StoreBackend(str, Enum):
    MEMORY = "memory"
    REDIS = "redis"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    MISSING_REQUESTER = ErrorInfo(
        "Missing requester identity", status.HTTP_401_UNAUTHORIZED
    )
    UNAUTHORIZED = ErrorInfo(
        "Requester is not the scope owner", status.HTTP_403_FORBIDDEN
    )
    NODE_NOT_FOUND = ErrorInfo("Node does not exist", status.HTTP_404_NOT_FOUND)
    IMMUTABLE_SCOPE = ErrorInfo("Immutable scope", status.HTTP_409_CONFLICT)
    PAYLOAD_TOO_LARGE = ErrorInfo(
        "Node payload too large", status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    )
    ID_RANGE = ErrorInfo(
        "Node id range exceeds u64", status.HTTP_422_UNPROCESSABLE_ENTITY
    )
