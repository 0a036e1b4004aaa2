# core/chunking.py
from typing import Final, Iterable, Iterator, Tuple
from util.functions import check_node_id

# Comfortable per-node payload for a single write unit.
DEFAULT_CHUNK_SIZE: Final[int] = 8192


def split_chunks(
    data: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE, first_id: int = 0
) -> Iterator[Tuple[int, bytes]]:
    """
    Caller-side convention for objects bigger than one node:
    - yields (node_id, chunk) over contiguous ids starting at first_id
    - empty data still yields one empty chunk, so the object has a node
    The store never looks at this layout; it only sees independent nodes.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
    check_node_id(first_id)
    view = memoryview(bytes(data))
    count = max(1, -(-len(view) // chunk_size))
    check_node_id(first_id + count - 1)
    for n in range(count):
        yield first_id + n, bytes(view[n * chunk_size : (n + 1) * chunk_size])


def join_chunks(chunks: Iterable[Tuple[int, bytes]]) -> bytes:
    """Reassemble (node_id, chunk) pairs; ids must form one contiguous run."""
    ordered = sorted(chunks, key=lambda c: c[0])
    for (prev, _), (cur, _) in zip(ordered, ordered[1:]):
        if cur != prev + 1:
            raise ValueError(f"chunk ids not contiguous: {prev} -> {cur}")
    return b"".join(chunk for _, chunk in ordered)
