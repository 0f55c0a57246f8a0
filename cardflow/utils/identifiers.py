"""ID generation for nodes and edges."""

import uuid


def generate_node_id(prefix: str = "node") -> str:
    """Generate a stable node id for a newly added card, e.g. ``node-1f3a9c0b``."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def edge_id(source: str, target: str, n: int = 0) -> str:
    """Edge id ``e-{source}-{target}``, suffixed ``-{n}`` for the n-th parallel edge."""
    base = f"e-{source}-{target}"
    return base if n == 0 else f"{base}-{n}"


class EdgeIdAllocator:
    """Hands out unique edge ids, numbering repeated (source, target) pairs."""

    def __init__(self) -> None:
        self._counts: dict[tuple[str, str], int] = {}

    def next_id(self, source: str, target: str) -> str:
        n = self._counts.get((source, target), 0)
        self._counts[(source, target)] = n + 1
        return edge_id(source, target, n)
