"""Card-form flow graph compiler.

Validates graphs, linearizes them into the flat field schema, builds graphs
from a schema (with or without an edge list) and merges schema edits back in.
"""

from cardflow.compiler.builders import (
    build_flowchart_from_schema_and_edges,
    schema_to_flowchart,
)
from cardflow.compiler.editing import add_node, default_piping_key, delete_node, reorder_nodes
from cardflow.compiler.linearize import flowchart_to_schema
from cardflow.compiler.merge import merge_flowchart_with_schema
from cardflow.compiler.nodes import normalize_node
from cardflow.compiler.validation import (
    is_valid_flowchart_graph,
    parse_flowchart_graph,
    validate_flowchart_graph,
)

__all__ = [
    # Validation
    "validate_flowchart_graph",
    "is_valid_flowchart_graph",
    "parse_flowchart_graph",
    # Graph -> schema
    "flowchart_to_schema",
    # Schema -> graph
    "build_flowchart_from_schema_and_edges",
    "schema_to_flowchart",
    # Merge and edits
    "merge_flowchart_with_schema",
    "normalize_node",
    "add_node",
    "default_piping_key",
    "delete_node",
    "reorder_nodes",
]
