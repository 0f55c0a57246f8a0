"""Data model for the card-form flow graph.

The graph is the authoritative representation of a card form: topology,
branching and per-edge conditions live here, and the linear field schema is
only ever derived from it. Nodes are a tagged union keyed by ``type``.
"""

from typing import Annotated, Any, Literal

from pydantic import Field, model_validator

from cardflow.models.form_field import CardMedia, FormField
from cardflow.models.wire import WireModel


# reserved sentinel ids
START_NODE_ID = "start"
END_NODE_ID = "end"

NodeType = Literal["start", "end", "question", "statement"]
NODE_TYPES: frozenset[str] = frozenset({"start", "end", "question", "statement"})


class Position(WireModel):
    """editor coordinates, carried through untouched."""

    x: int | float
    y: int | float


class Viewport(WireModel):
    x: int | float
    y: int | float
    zoom: int | float


class SentinelData(WireModel):
    """empty payload of start/end nodes."""


class QuestionData(WireModel):
    """Payload of a question node.

    ``field`` is the authoritative definition. ``field_id``, ``label`` and
    ``field_type`` are denormalized copies for the editor; mutators refresh
    them through ``cardflow.compiler.nodes.normalize_node``.
    """

    field: FormField
    field_id: str | None = None
    label: str | None = None
    field_type: str | None = None
    media: CardMedia | None = None


class StatementData(WireModel):
    """payload of a non-input informational card."""

    field_id: str
    label: str
    statement_text: str
    is_success_card: bool = False  # shown only after submission
    media: CardMedia | None = None


class StartNode(WireModel):
    id: str = START_NODE_ID
    type: Literal["start"] = "start"
    position: Position
    data: SentinelData = Field(default_factory=SentinelData)


class EndNode(WireModel):
    id: str = END_NODE_ID
    type: Literal["end"] = "end"
    position: Position
    data: SentinelData = Field(default_factory=SentinelData)


class QuestionNode(WireModel):
    id: str = Field(min_length=1)
    type: Literal["question"] = "question"
    position: Position
    data: QuestionData


class StatementNode(WireModel):
    id: str = Field(min_length=1)
    type: Literal["statement"] = "statement"
    position: Position
    data: StatementData


AnyNode = StartNode | EndNode | QuestionNode | StatementNode

FlowchartNode = Annotated[
    AnyNode,
    Field(discriminator="type"),
]

ContentNode = QuestionNode | StatementNode


class EdgeData(WireModel):
    """optional edge payload; no condition means unconditional."""

    condition: Any = None  # boolean expression over prior answers
    label: str | None = None


class FlowchartEdge(WireModel):
    """a directed connection between two node ids."""

    id: str
    source: str
    target: str
    data: EdgeData | None = None

    @model_validator(mode="before")
    @classmethod
    def default_edge_id(cls, values: Any) -> Any:
        """Fill in ``e-{source}-{target}`` when the producer left the id out."""
        if isinstance(values, dict) and "id" not in values:
            source, target = values.get("source"), values.get("target")
            if isinstance(source, str) and isinstance(target, str):
                values = {**values, "id": f"e-{source}-{target}"}
        return values

    @property
    def is_conditional(self) -> bool:
        return self.data is not None and self.data.condition is not None


class EdgeSpec(WireModel):
    """a bare source/target pair from the reduced representation."""

    source: str
    target: str
    data: EdgeData | None = None


class FlowchartGraph(WireModel):
    """the full graph as stored on a card form template."""

    nodes: list[FlowchartNode]
    edges: list[FlowchartEdge]
    viewport: Viewport | None = None

    def node_map(self) -> dict[str, AnyNode]:
        """Index nodes by id (last one wins on duplicates)."""
        return {node.id: node for node in self.nodes}

    def get_node(self, node_id: str) -> AnyNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def content_nodes(self) -> list[ContentNode]:
        """Question and statement nodes in stored order."""
        return [n for n in self.nodes if isinstance(n, (QuestionNode, StatementNode))]
