"""Node construction and the denormalized-copy sync helper.

Question nodes keep ``fieldId``, ``label`` and ``fieldType`` next to the full
``field`` definition. Every path that writes ``data.field`` goes through
``question_data`` or ``normalize_node`` so the copies never drift.
"""

from cardflow.models.flowchart import (
    END_NODE_ID,
    START_NODE_ID,
    AnyNode,
    ContentNode,
    EndNode,
    Position,
    QuestionData,
    QuestionNode,
    StartNode,
    StatementData,
    StatementNode,
)
from cardflow.models.form_field import CardMedia, FormField


# synthesized layout: one column, start on top, content stepping down
LAYOUT_X = 400
START_Y = 0
FIRST_CONTENT_Y = 100
STEP_Y = 120


def start_node() -> StartNode:
    return StartNode(id=START_NODE_ID, position=Position(x=LAYOUT_X, y=START_Y))


def end_node(y: float) -> EndNode:
    return EndNode(id=END_NODE_ID, position=Position(x=LAYOUT_X, y=y))


def question_data(field: FormField, media: CardMedia | None = None) -> QuestionData:
    """Build a question payload with its denormalized copies taken from ``field``."""
    return QuestionData(
        field=field.model_copy(deep=True),
        field_id=field.id,
        label=field.label,
        field_type=field.type,
        media=media,
    )


def statement_data(field: FormField) -> StatementData:
    return StatementData(
        field_id=field.id,
        label=field.label,
        statement_text=field.label,
        is_success_card=False,
        media=field.media,
    )


def node_from_field(field: FormField, y: float) -> ContentNode:
    """Turn one schema field into a question or statement node at ``(LAYOUT_X, y)``."""
    position = Position(x=LAYOUT_X, y=y)
    if field.is_statement:
        return StatementNode(id=field.id, position=position, data=statement_data(field))
    return QuestionNode(
        id=field.id,
        position=position,
        data=question_data(field, media=field.media),
    )


def normalize_node(node: AnyNode) -> AnyNode:
    """Return ``node`` with its denormalized question copies re-derived from ``data.field``.

    Non-question nodes come back unchanged.
    """
    if not isinstance(node, QuestionNode):
        return node
    field = node.data.field
    if (
        node.data.field_id == field.id
        and node.data.label == field.label
        and node.data.field_type == field.type
    ):
        return node
    data = node.data.model_copy(
        update={"field_id": field.id, "label": field.label, "field_type": field.type}
    )
    return node.model_copy(update={"data": data})
