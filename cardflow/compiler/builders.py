"""Build canonical graphs from the flat schema.

``build_flowchart_from_schema_and_edges`` is the only path that turns
externally supplied content (an AI generator, a minimal import payload) into
node objects. Raw nodes from outside are never accepted: nodes, positions
and reserved ids are always synthesized here.

``schema_to_flowchart`` is the fallback for forms that only ever existed as a
flat schema: a straight chain start -> field 1 -> ... -> end.
"""

import logging

from cardflow.compiler.nodes import FIRST_CONTENT_Y, STEP_Y, end_node, node_from_field, start_node
from cardflow.compiler.traversal import ordered_content_ids, outgoing_map, reachable_from
from cardflow.models.flowchart import (
    END_NODE_ID,
    START_NODE_ID,
    AnyNode,
    EdgeSpec,
    FlowchartEdge,
    FlowchartGraph,
    Viewport,
)
from cardflow.models.form_field import FormField
from cardflow.utils.identifiers import EdgeIdAllocator


logger = logging.getLogger(__name__)


def _layout_chain(fields: list[FormField]) -> list[AnyNode]:
    """Start node, one node per field stepping down the column, then end."""
    nodes: list[AnyNode] = [start_node()]
    seen = {START_NODE_ID, END_NODE_ID}
    y = FIRST_CONTENT_Y
    for field in fields:
        if field.id in seen:
            logger.warning("skipping field %r: id is reserved or already used", field.id)
            continue
        seen.add(field.id)
        nodes.append(node_from_field(field, y))
        y += STEP_Y
    nodes.append(end_node(y))
    return nodes


def _reached(specs: list[EdgeSpec]) -> set[str]:
    return reachable_from(START_NODE_ID, outgoing_map((s.source, s.target) for s in specs))


def build_flowchart_from_schema_and_edges(
    schema: list[FormField],
    edge_specs: list[EdgeSpec],
    viewport: Viewport | None = None,
) -> FlowchartGraph:
    """Build a valid graph from the reduced representation (schema + edge list).

    Fields are laid out in BFS order from start over ``edge_specs``; fields
    the edges never reach are not emitted. Edge specs pointing at ids that did
    not become nodes are dropped. A laid-out node that start no longer
    reaches is linked from the node laid out before it, and when end is still
    unreachable the last laid-out node is linked to end.
    """
    fields_by_id = {field.id: field for field in schema}
    adjacency = outgoing_map((spec.source, spec.target) for spec in edge_specs)

    ordered = [
        fields_by_id[node_id]
        for node_id in ordered_content_ids(adjacency)
        if node_id in fields_by_id
    ]
    nodes = _layout_chain(ordered)
    node_ids = {node.id for node in nodes}

    kept: list[EdgeSpec] = []
    for spec in edge_specs:
        if spec.source in node_ids and spec.target in node_ids:
            kept.append(spec)
        else:
            logger.debug("dropping edge %s -> %s: endpoint is not a node", spec.source, spec.target)

    # a node only reached through dropped edges is linked from the node laid out before it
    reached = _reached(kept)
    tail = START_NODE_ID
    for node in nodes[1:-1]:
        if node.id not in reached:
            logger.debug("relinking %s after dropped edges: %s -> %s", node.id, tail, node.id)
            kept.append(EdgeSpec(source=tail, target=node.id))
            reached = _reached(kept)
        tail = node.id

    if END_NODE_ID not in reached:
        logger.debug("end not reachable from start; linking %s -> %s", tail, END_NODE_ID)
        kept.append(EdgeSpec(source=tail, target=END_NODE_ID))

    ids = EdgeIdAllocator()
    edges = [
        FlowchartEdge(
            id=ids.next_id(spec.source, spec.target),
            source=spec.source,
            target=spec.target,
            data=spec.data.model_copy(deep=True) if spec.data is not None else None,
        )
        for spec in kept
    ]
    return FlowchartGraph(nodes=nodes, edges=edges, viewport=viewport)


def schema_to_flowchart(
    schema: list[FormField],
    viewport: Viewport | None = None,
) -> FlowchartGraph:
    """Default graph for a schema with no authored graph: a linear chain."""
    nodes = _layout_chain(schema)
    ids = EdgeIdAllocator()
    edges = [
        FlowchartEdge(id=ids.next_id(prev.id, node.id), source=prev.id, target=node.id)
        for prev, node in zip(nodes, nodes[1:])
    ]
    return FlowchartGraph(nodes=nodes, edges=edges, viewport=viewport)
