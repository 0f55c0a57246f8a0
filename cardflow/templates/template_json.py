"""Card form template JSON: shape guard, import and export.

The guard accepts a graph-shaped ``flowchartGraph`` or a non-empty
``schema`` array. The AI path (schema + edges only) and the full manual
export (complete graph) both come in through it. Whether the graph inside
is internally consistent is checked by ``import_card_form_template``.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from cardflow.compiler.builders import build_flowchart_from_schema_and_edges, schema_to_flowchart
from cardflow.compiler.linearize import flowchart_to_schema
from cardflow.compiler.validation import parse_flowchart_graph
from cardflow.errors import FlowchartGraphError, TemplateImportError, validation_error_messages
from cardflow.models.card_form_template import (
    CARD_FORM_TEMPLATE_JSON_VERSION,
    FLOWCHART_GRAPH_KEY,
    FLOWCHART_VIEWPORT_KEY,
    CardFormTemplateJson,
    FormTemplateRecord,
)
from cardflow.models.flowchart import FlowchartGraph


logger = logging.getLogger(__name__)


def is_card_form_template_json(value: Any) -> bool:
    """True when ``value`` looks like a card form template envelope.

    Never raises; a rejected value is simply False.
    """
    if not isinstance(value, Mapping):
        return False
    graph = value.get(FLOWCHART_GRAPH_KEY)
    if (
        isinstance(graph, Mapping)
        and isinstance(graph.get("nodes"), list)
        and isinstance(graph.get("edges"), list)
    ):
        return True
    schema = value.get("schema")
    return isinstance(schema, list) and len(schema) > 0


def expand_reduced_form(envelope: CardFormTemplateJson) -> FlowchartGraph:
    """Graph for an envelope that only carries schema (+ optional edge list)."""
    schema = envelope.form_schema or []
    if envelope.flowchart_edges:
        return build_flowchart_from_schema_and_edges(schema, envelope.flowchart_edges)
    return schema_to_flowchart(schema)


def import_card_form_template(value: Any) -> CardFormTemplateJson:
    """Turn an imported or generated envelope into a typed one with a valid graph.

    A supplied ``flowchartGraph`` is validated as-is. Otherwise the reduced
    ``schema`` + ``flowchartEdges`` form is expanded through the builder.
    The returned envelope always has ``flowchart_graph`` set and its
    ``form_schema`` refreshed from that graph.

    Raises:
        TemplateImportError: the value is not envelope-shaped.
        FlowchartGraphError: the graph (or another section) is invalid.
    """
    if not is_card_form_template_json(value):
        raise TemplateImportError(
            "Invalid card form JSON: must include flowchartGraph (nodes + edges) "
            "or a non-empty schema"
        )

    raw = dict(value)
    graph: FlowchartGraph | None = None
    raw_graph = raw.pop(FLOWCHART_GRAPH_KEY, None)
    if raw_graph is not None:
        graph = parse_flowchart_graph(raw_graph)

    try:
        envelope = CardFormTemplateJson.model_validate(
            {**raw, FLOWCHART_GRAPH_KEY: graph} if graph is not None else raw
        )
    except ValidationError as exc:
        raise FlowchartGraphError(validation_error_messages(exc)) from exc

    if envelope.flowchart_graph is None:
        envelope.flowchart_graph = expand_reduced_form(envelope)
        logger.debug(
            "expanded reduced card form (%d fields) into %d nodes",
            len(envelope.form_schema or []),
            len(envelope.flowchart_graph.nodes),
        )

    envelope.form_schema = flowchart_to_schema(envelope.flowchart_graph)
    envelope.flowchart_edges = None
    return envelope


def build_card_form_template(
    record: FormTemplateRecord,
    graph: FlowchartGraph,
) -> CardFormTemplateJson:
    """Wrap a template's display settings and graph into one exportable envelope.

    The graph keys are stripped from ``cardSettings`` since the graph travels
    as the top-level ``flowchartGraph``.
    """
    card_settings = {
        key: value
        for key, value in record.card_settings.items()
        if key not in (FLOWCHART_GRAPH_KEY, FLOWCHART_VIEWPORT_KEY)
    }
    return CardFormTemplateJson(
        version=CARD_FORM_TEMPLATE_JSON_VERSION,
        title=record.title,
        subtitle=record.subtitle,
        submit_button_text=record.submit_button_text,
        success_message=record.success_message,
        flowchart_graph=graph.model_copy(deep=True),
        card_settings=card_settings or None,
        styling=record.styling,
        profile_estimation=record.profile_estimation,
    )
