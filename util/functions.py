from util.constants import IMMUTABLE_SENTINEL, MAX_NODE_ID


def check_node_id(node_id: int) -> int:
    """
    - Node ids are unsigned 64-bit integers.
    - Raises ValueError for anything outside [0, 2**64 - 1] (bools included).
    """
    if isinstance(node_id, bool) or not isinstance(node_id, int):
        raise ValueError(f"node id must be an integer, got {type(node_id).__name__}")
    if node_id < 0 or node_id > MAX_NODE_ID:
        raise ValueError(f"node id out of u64 range: {node_id}")
    return node_id


def is_sentinel(data: bytes | None) -> bool:
    return data is not None and bytes(data) == IMMUTABLE_SENTINEL
