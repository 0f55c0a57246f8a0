"""Cardflow - flow graph compiler for branching card forms."""

from cardflow.compiler import (
    add_node,
    build_flowchart_from_schema_and_edges,
    delete_node,
    flowchart_to_schema,
    merge_flowchart_with_schema,
    normalize_node,
    parse_flowchart_graph,
    reorder_nodes,
    schema_to_flowchart,
    validate_flowchart_graph,
)
from cardflow.errors import FlowchartGraphError, TemplateImportError
from cardflow.models import (
    END_NODE_ID,
    START_NODE_ID,
    CardFormTemplateJson,
    EdgeSpec,
    FlowchartEdge,
    FlowchartGraph,
    FormField,
    FormTemplateRecord,
)
from cardflow.templates import (
    apply_card_form_template,
    export_card_form_template,
    extract_card_form_json_from_text,
    import_card_form_template,
    is_card_form_template_json,
    load_template_graph,
    prepare_template_save,
)

__all__ = [
    # Models
    "START_NODE_ID",
    "END_NODE_ID",
    "FormField",
    "FlowchartEdge",
    "FlowchartGraph",
    "EdgeSpec",
    "CardFormTemplateJson",
    "FormTemplateRecord",
    # Errors
    "FlowchartGraphError",
    "TemplateImportError",
    # Compiler
    "validate_flowchart_graph",
    "parse_flowchart_graph",
    "flowchart_to_schema",
    "build_flowchart_from_schema_and_edges",
    "schema_to_flowchart",
    "merge_flowchart_with_schema",
    "normalize_node",
    "add_node",
    "delete_node",
    "reorder_nodes",
    # Templates
    "is_card_form_template_json",
    "import_card_form_template",
    "extract_card_form_json_from_text",
    "load_template_graph",
    "prepare_template_save",
    "export_card_form_template",
    "apply_card_form_template",
]
