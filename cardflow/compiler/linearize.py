"""Graph -> linear field schema.

The schema is a projection: one straight-line pass over the graph in BFS
discovery order from start. For a non-branching graph that is the authored
top-to-bottom order; for a branching graph it is one deterministic
linearization (first discovered, first emitted) and says nothing about which
branch a respondent will take.
"""

from cardflow.compiler.traversal import ordered_content_ids, outgoing_map
from cardflow.models.flowchart import FlowchartGraph, QuestionNode, StatementNode
from cardflow.models.form_field import FormField


def _question_field(node: QuestionNode) -> FormField:
    # the denormalized fieldType wins so half-synced editor state still renders
    update: dict = {}
    if node.data.field_type is not None:
        update["type"] = node.data.field_type
    if node.data.media is not None:
        update["media"] = node.data.media
    return node.data.field.model_copy(update=update, deep=True)


def _statement_field(node: StatementNode) -> FormField:
    data = node.data
    return FormField(
        id=data.field_id,
        type="statement",
        label=data.statement_text,
        placeholder=data.label,
        required=False,
        media=data.media.model_copy(deep=True) if data.media is not None else None,
    )


def flowchart_to_schema(graph: FlowchartGraph) -> list[FormField]:
    """Build the linear ``FormField`` list the public form renders.

    Expects a validated graph; unknown node ids reached through edges are
    skipped. Success cards are left out since they belong to the
    post-submission flow.
    """
    adjacency = outgoing_map((edge.source, edge.target) for edge in graph.edges)
    nodes_by_id = graph.node_map()

    schema: list[FormField] = []
    for node_id in ordered_content_ids(adjacency):
        node = nodes_by_id.get(node_id)
        if isinstance(node, QuestionNode):
            schema.append(_question_field(node))
        elif isinstance(node, StatementNode):
            if node.data.is_success_card:
                continue
            schema.append(_statement_field(node))
    return schema
