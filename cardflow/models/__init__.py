"""Data models for card-form flow graphs and templates."""

from cardflow.models.card_form_template import (
    CARD_FORM_TEMPLATE_JSON_VERSION,
    FLOWCHART_GRAPH_KEY,
    FLOWCHART_VIEWPORT_KEY,
    CardFormTemplateJson,
    FormTemplateRecord,
)
from cardflow.models.flowchart import (
    END_NODE_ID,
    NODE_TYPES,
    START_NODE_ID,
    AnyNode,
    ContentNode,
    EdgeData,
    EdgeSpec,
    EndNode,
    FlowchartEdge,
    FlowchartGraph,
    FlowchartNode,
    Position,
    QuestionData,
    QuestionNode,
    SentinelData,
    StartNode,
    StatementData,
    StatementNode,
    Viewport,
)
from cardflow.models.form_field import (
    FORM_FIELD_TYPES,
    OPTION_FIELD_TYPES,
    CardMedia,
    Condition,
    ConditionalLogic,
    ConditionGroup,
    FieldOption,
    FormField,
    FormFieldType,
)

__all__ = [
    # Form fields
    "FORM_FIELD_TYPES",
    "OPTION_FIELD_TYPES",
    "CardMedia",
    "Condition",
    "ConditionalLogic",
    "ConditionGroup",
    "FieldOption",
    "FormField",
    "FormFieldType",
    # Flowchart graph
    "END_NODE_ID",
    "NODE_TYPES",
    "START_NODE_ID",
    "AnyNode",
    "ContentNode",
    "EdgeData",
    "EdgeSpec",
    "EndNode",
    "FlowchartEdge",
    "FlowchartGraph",
    "FlowchartNode",
    "Position",
    "QuestionData",
    "QuestionNode",
    "SentinelData",
    "StartNode",
    "StatementData",
    "StatementNode",
    "Viewport",
    # Templates
    "CARD_FORM_TEMPLATE_JSON_VERSION",
    "FLOWCHART_GRAPH_KEY",
    "FLOWCHART_VIEWPORT_KEY",
    "CardFormTemplateJson",
    "FormTemplateRecord",
]
