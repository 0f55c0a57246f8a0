"""Load/save hooks the template persistence layer calls.

On load, the stored graph is merged with the stored schema (or generated from
the schema when no graph was ever authored). On save, the graph is validated
and linearized, and the schema and graph are written back together so a
reader never sees a schema that does not match its graph.
"""

import logging
from collections.abc import Mapping
from typing import Any

from cardflow.compiler.builders import schema_to_flowchart
from cardflow.compiler.linearize import flowchart_to_schema
from cardflow.compiler.merge import merge_flowchart_with_schema
from cardflow.compiler.validation import parse_flowchart_graph
from cardflow.models.card_form_template import (
    FLOWCHART_GRAPH_KEY,
    FLOWCHART_VIEWPORT_KEY,
    CardFormTemplateJson,
    FormTemplateRecord,
)
from cardflow.models.flowchart import FlowchartGraph, Viewport
from cardflow.templates.template_json import build_card_form_template, expand_reduced_form


logger = logging.getLogger(__name__)


def _stored_viewport(record: FormTemplateRecord) -> Viewport | None:
    viewport = record.card_settings.get(FLOWCHART_VIEWPORT_KEY)
    if isinstance(viewport, Mapping):
        return Viewport.model_validate(viewport)
    return None


def load_template_graph(record: FormTemplateRecord) -> FlowchartGraph:
    """Graph to open in the editor for a stored template.

    Raises:
        FlowchartGraphError: the stored graph does not validate.
    """
    stored = record.card_settings.get(FLOWCHART_GRAPH_KEY)
    if stored is None:
        return schema_to_flowchart(record.form_schema, viewport=_stored_viewport(record))
    graph = parse_flowchart_graph(stored)
    return merge_flowchart_with_schema(graph, record.form_schema)


def prepare_template_save(
    record: FormTemplateRecord,
    graph: FlowchartGraph | Mapping[str, Any],
) -> FormTemplateRecord:
    """Return ``record`` with schema and graph refreshed together from ``graph``.

    Raises:
        FlowchartGraphError: with every validation error when ``graph`` is invalid.
    """
    graph = parse_flowchart_graph(graph)
    schema = flowchart_to_schema(graph)

    card_settings = {**record.card_settings, FLOWCHART_GRAPH_KEY: graph.to_wire()}
    if graph.viewport is not None:
        card_settings[FLOWCHART_VIEWPORT_KEY] = graph.viewport.to_wire()
    else:
        card_settings.pop(FLOWCHART_VIEWPORT_KEY, None)

    logger.debug("prepared card form save: %d nodes, %d fields", len(graph.nodes), len(schema))
    return record.model_copy(update={"form_schema": schema, "card_settings": card_settings})


def export_card_form_template(record: FormTemplateRecord) -> CardFormTemplateJson:
    """Full card form JSON for a stored template."""
    return build_card_form_template(record, load_template_graph(record))


def apply_card_form_template(
    record: FormTemplateRecord,
    envelope: CardFormTemplateJson,
) -> FormTemplateRecord:
    """Apply an imported envelope to a template record, then prepare it for saving.

    Display strings, styling and scoring only override when the envelope sets
    them; ``cardSettings`` are merged key by key.
    """
    update: dict[str, Any] = {}
    for name in (
        "title",
        "subtitle",
        "submit_button_text",
        "success_message",
        "styling",
        "profile_estimation",
    ):
        value = getattr(envelope, name)
        if value is not None:
            update[name] = value
    update["card_settings"] = {**record.card_settings, **(envelope.card_settings or {})}

    graph = envelope.flowchart_graph or expand_reduced_form(envelope)
    return prepare_template_save(record.model_copy(update=update), graph)
