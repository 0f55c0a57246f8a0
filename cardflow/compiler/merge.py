"""Refresh a stored graph's field content from a newer schema.

The graph owns topology and layout; the schema owns field content. Merging
never adds or removes nodes or edges: it only rewrites the payload of nodes
whose field id appears in the schema, so a content-only edit made elsewhere
reaches the graph while branches the schema doesn't know about survive.
"""

from cardflow.compiler.nodes import normalize_node
from cardflow.models.flowchart import AnyNode, FlowchartGraph, QuestionNode, StatementNode
from cardflow.models.form_field import FormField


def _merge_node(node: AnyNode, fields_by_id: dict[str, FormField]) -> AnyNode:
    if isinstance(node, QuestionNode) and node.data.field_id:
        updated = fields_by_id.get(node.data.field_id)
        if updated is None:
            return node
        field = updated.model_copy(deep=True)
        # linearized fields carry the node-level media; keep the field's own
        if node.data.media is not None and field.media == node.data.media:
            field.media = node.data.field.media
        data = node.data.model_copy(update={"field": field})
        return normalize_node(node.model_copy(update={"data": data}))

    if isinstance(node, StatementNode):
        updated = fields_by_id.get(node.data.field_id or node.id)
        if updated is None or not updated.is_statement:
            return node
        # the linear schema keeps the statement's display label in placeholder
        data = node.data.model_copy(
            update={
                "statement_text": updated.label,
                "label": updated.placeholder if updated.placeholder is not None else updated.label,
            }
        )
        return node.model_copy(update={"data": data})

    return node


def merge_flowchart_with_schema(graph: FlowchartGraph, schema: list[FormField]) -> FlowchartGraph:
    """Return a copy of ``graph`` with question/statement content taken from ``schema``.

    Positions, edges, viewport and every node absent from the schema are
    carried over unchanged.
    """
    fields_by_id = {field.id: field for field in schema}
    merged = graph.model_copy(deep=True)
    merged.nodes = [_merge_node(node, fields_by_id) for node in merged.nodes]
    return merged
