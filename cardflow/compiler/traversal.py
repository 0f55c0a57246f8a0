"""Breadth-first traversal helpers shared by the validator, linearizer and builder."""

from collections import deque
from collections.abc import Iterable

from cardflow.models.flowchart import END_NODE_ID, START_NODE_ID


def outgoing_map(pairs: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
    """Adjacency map ``source -> [targets]`` in edge insertion order."""
    adjacency: dict[str, list[str]] = {}
    for source, target in pairs:
        adjacency.setdefault(source, []).append(target)
    return adjacency


def reachable_from(root: str, adjacency: dict[str, list[str]]) -> set[str]:
    """All node ids reachable from ``root`` (``root`` included)."""
    reached = {root}
    queue = deque([root])
    while queue:
        node_id = queue.popleft()
        for target in adjacency.get(node_id, []):
            if target not in reached:
                reached.add(target)
                queue.append(target)
    return reached


def ordered_content_ids(adjacency: dict[str, list[str]]) -> list[str]:
    """Node ids in BFS discovery order from start, excluding start and end.

    Expansion stops at the end node. Each node is emitted at most once, so
    cycles among content nodes are harmless.
    """
    ordered: list[str] = []
    visited = {START_NODE_ID}
    queue = deque(adjacency.get(START_NODE_ID, []))
    while queue:
        node_id = queue.popleft()
        if node_id == END_NODE_ID or node_id in visited:
            continue
        visited.add(node_id)
        ordered.append(node_id)
        queue.extend(t for t in adjacency.get(node_id, []) if t not in visited)
    return ordered
