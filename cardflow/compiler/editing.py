"""Graph edits made by the card builder: add, delete and reorder cards.

Each operation returns a new graph and leaves its input alone. Nodes written
here pass through ``normalize_node`` like every other mutator.
"""

from typing import Literal

from cardflow.compiler.linearize import flowchart_to_schema
from cardflow.compiler.nodes import (
    FIRST_CONTENT_Y,
    LAYOUT_X,
    STEP_Y,
    end_node,
    normalize_node,
    question_data,
    start_node,
)
from cardflow.models.flowchart import (
    END_NODE_ID,
    START_NODE_ID,
    AnyNode,
    FlowchartEdge,
    FlowchartGraph,
    Position,
    QuestionNode,
    StatementData,
    StatementNode,
)
from cardflow.models.form_field import FormField
from cardflow.utils.identifiers import EdgeIdAllocator, edge_id, generate_node_id


NEW_QUESTION_LABEL = "New question"
NEW_STATEMENT_TEXT = "New statement"
DEFAULT_PIPING_KEY = "question"


def default_piping_key(graph: FlowchartGraph) -> str:
    """First of ``question``, ``question_1``, ... not already used as a piping token."""
    used = {field.piping_token for field in flowchart_to_schema(graph)}
    key = DEFAULT_PIPING_KEY
    n = 1
    while key in used:
        key = f"{DEFAULT_PIPING_KEY}_{n}"
        n += 1
    return key


def _new_content_node(
    kind: Literal["question", "statement"],
    node_id: str,
    y: float,
    piping_key: str | None = None,
) -> AnyNode:
    position = Position(x=LAYOUT_X, y=y)
    if kind == "statement":
        return StatementNode(
            id=node_id,
            position=position,
            data=StatementData(
                field_id=node_id,
                label=NEW_STATEMENT_TEXT,
                statement_text=NEW_STATEMENT_TEXT,
            ),
        )
    field = FormField(
        id=node_id,
        type="radio",
        label=NEW_QUESTION_LABEL,
        required=False,
        options=["Option 1", "Option 2"],
        piping_key=piping_key,
    )
    return QuestionNode(id=node_id, position=position, data=question_data(field))


def add_node(
    graph: FlowchartGraph,
    kind: Literal["question", "statement"] = "question",
    node_id: str | None = None,
) -> FlowchartGraph:
    """Append a new card after the last content node.

    The new node is linked from the last content node (or start) and takes
    over the edge that used to enter end. Missing start/end sentinels are
    recreated.
    """
    node_id = node_id or generate_node_id()
    if graph.get_node(node_id) is not None:
        raise ValueError(f"node id already in use: {node_id}")

    updated = graph.model_copy(deep=True)
    nodes = [normalize_node(node) for node in updated.nodes]
    if not any(node.id == START_NODE_ID for node in nodes):
        nodes.append(start_node())
    if not any(node.id == END_NODE_ID for node in nodes):
        nodes.append(end_node((len(graph.nodes) + 1) * 100))

    content = updated.content_nodes()
    last = content[-1] if content else None
    y = last.position.y + STEP_Y if last is not None else FIRST_CONTENT_Y
    piping_key = default_piping_key(graph) if kind == "question" else None
    new_node = _new_content_node(kind, node_id, y, piping_key)

    source = last.id if last is not None else START_NODE_ID
    entering_end = next((e for e in updated.edges if e.target == END_NODE_ID), None)
    edges = [e for e in updated.edges if e.target != END_NODE_ID]
    edges.append(FlowchartEdge(id=edge_id(source, node_id), source=source, target=node_id))
    if entering_end is not None:
        edges.append(
            entering_end.model_copy(
                update={"id": edge_id(node_id, END_NODE_ID), "source": node_id}
            )
        )
    else:
        edges.append(
            FlowchartEdge(id=edge_id(node_id, END_NODE_ID), source=node_id, target=END_NODE_ID)
        )

    updated.nodes = [*nodes, new_node]
    updated.edges = edges
    return updated


def delete_node(graph: FlowchartGraph, node_id: str) -> FlowchartGraph:
    """Remove a content node and every edge touching it. Sentinels cannot be deleted."""
    updated = graph.model_copy(deep=True)
    if node_id in (START_NODE_ID, END_NODE_ID):
        return updated
    updated.nodes = [normalize_node(n) for n in updated.nodes if n.id != node_id]
    updated.edges = [e for e in updated.edges if e.source != node_id and e.target != node_id]
    return updated


def reorder_nodes(graph: FlowchartGraph, ordered_ids: list[str]) -> FlowchartGraph:
    """Replace all edges with a straight chain through ``ordered_ids``.

    ``ordered_ids`` is the full card order including the start and end
    sentinels; unknown ids are ignored. Positions are left alone.
    """
    known = graph.node_map()
    chain = [node_id for node_id in ordered_ids if node_id in known]

    updated = graph.model_copy(deep=True)
    updated.nodes = [normalize_node(node) for node in updated.nodes]
    ids = EdgeIdAllocator()
    if len(chain) >= 2:
        updated.edges = [
            FlowchartEdge(id=ids.next_id(source, target), source=source, target=target)
            for source, target in zip(chain, chain[1:])
        ]
    else:
        updated.edges = []
    return updated
