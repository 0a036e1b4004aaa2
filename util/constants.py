from typing import Final

# Node 0 holding exactly these two bytes freezes its whole scope.
IMMUTABLE_SENTINEL: Final[bytes] = b"\xde\xad"
SENTINEL_NODE_ID: Final[int] = 0
MAX_NODE_ID: Final[int] = 2**64 - 1

REQUESTER_HEADER: Final[str] = "X-Requester"


class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    SCOPE = V1 + "/scopes/{owner}"
    NODES = SCOPE + "/nodes"
    NODE = NODES + "/{node_id}"
    OBJECT = SCOPE + "/object"
    IMMUTABLE = SCOPE + "/immutable"
    LOCK = SCOPE + "/lock"
