"""Utility functions for cardflow."""

from cardflow.utils.identifiers import (
    EdgeIdAllocator,
    edge_id,
    generate_node_id,
)

__all__ = [
    "EdgeIdAllocator",
    "edge_id",
    "generate_node_id",
]
