"""Tests for the template load/save hooks."""

import pytest

from cardflow.compiler import flowchart_to_schema, parse_flowchart_graph
from cardflow.errors import FlowchartGraphError
from cardflow.models import CardFormTemplateJson, FormField, FormTemplateRecord
from cardflow.templates import (
    apply_card_form_template,
    export_card_form_template,
    load_template_graph,
    prepare_template_save,
)

from conftest import raw_edge


def _stored(graph) -> FormTemplateRecord:
    """A record as the persistence layer would hold it after a save."""
    return prepare_template_save(FormTemplateRecord(title="Leads"), graph)


class TestLoadTemplateGraph:
    """Test opening a stored template in the editor."""

    def test_generates_graph_when_none_stored(self, sample_schema):
        record = FormTemplateRecord(
            form_schema=sample_schema,
            card_settings={"flowchartViewport": {"x": 5, "y": 6, "zoom": 2}},
        )
        graph = load_template_graph(record)
        assert [n.id for n in graph.nodes] == ["start", "welcome", "name", "interest", "contact", "end"]
        assert graph.viewport.zoom == 2

    def test_stored_graph_merged_with_schema(self, branching_graph):
        record = _stored(branching_graph)
        record.form_schema[0] = FormField(id="welcome", type="statement", label="Hello!")

        graph = load_template_graph(record)
        assert graph.get_node("welcome").data.statement_text == "Hello!"
        assert graph.get_node("thanks").data.is_success_card is True
        assert [e.id for e in graph.edges] == [e.id for e in branching_graph.edges]

    def test_invalid_stored_graph(self, branching_raw):
        branching_raw["edges"] = []
        record = FormTemplateRecord(card_settings={"flowchartGraph": branching_raw})
        with pytest.raises(FlowchartGraphError):
            load_template_graph(record)


class TestPrepareTemplateSave:
    """Test writing schema and graph back together."""

    def test_schema_and_graph_written_together(self, branching_graph):
        record = FormTemplateRecord(title="Leads", card_settings={"showProgress": True})
        saved = prepare_template_save(record, branching_graph)

        assert [f.id for f in saved.form_schema] == ["welcome", "interest", "budget", "address"]
        assert saved.card_settings["flowchartGraph"] == branching_graph.to_wire()
        assert saved.card_settings["flowchartViewport"] == {"x": 0, "y": 0, "zoom": 1}
        assert saved.card_settings["showProgress"] is True

        stored = parse_flowchart_graph(saved.card_settings["flowchartGraph"])
        assert flowchart_to_schema(stored) == saved.form_schema

    def test_accepts_raw_graph(self, branching_raw):
        saved = prepare_template_save(FormTemplateRecord(), branching_raw)
        assert saved.card_settings["flowchartGraph"] == branching_raw

    def test_record_not_mutated(self, branching_graph):
        record = FormTemplateRecord(title="Leads")
        prepare_template_save(record, branching_graph)
        assert record.form_schema == []
        assert record.card_settings == {}

    def test_invalid_graph_blocks_save(self, branching_raw):
        branching_raw["edges"].append(raw_edge("budget", "ghost"))
        with pytest.raises(FlowchartGraphError) as exc_info:
            prepare_template_save(FormTemplateRecord(), branching_raw)
        assert exc_info.value.errors == ['edges[7]: target "ghost" does not match any node id']

    def test_stale_viewport_removed(self, branching_raw):
        del branching_raw["viewport"]
        record = FormTemplateRecord(card_settings={"flowchartViewport": {"x": 1, "y": 1, "zoom": 1}})
        saved = prepare_template_save(record, branching_raw)
        assert "flowchartViewport" not in saved.card_settings


class TestExportCardFormTemplate:
    """Test exporting a stored template."""

    def test_export(self, branching_graph):
        record = _stored(branching_graph)
        record.card_settings["showProgress"] = True
        wire = export_card_form_template(record).to_wire()

        assert wire["title"] == "Leads"
        assert wire["flowchartGraph"] == branching_graph.to_wire()
        assert wire["cardSettings"] == {"showProgress": True}

    def test_export_without_graph(self, sample_schema):
        envelope = export_card_form_template(FormTemplateRecord(form_schema=sample_schema))
        assert len(envelope.flowchart_graph.nodes) == len(sample_schema) + 2


class TestApplyCardFormTemplate:
    """Test applying an imported envelope to a record."""

    def test_overrides_only_what_is_set(self, branching_graph):
        record = FormTemplateRecord(
            title="Old title",
            subtitle="Keep me",
            card_settings={"showProgress": True, "theme": "light"},
        )
        envelope = CardFormTemplateJson(
            title="New title",
            flowchart_graph=branching_graph,
            card_settings={"theme": "dark"},
        )
        applied = apply_card_form_template(record, envelope)

        assert applied.title == "New title"
        assert applied.subtitle == "Keep me"
        assert applied.submit_button_text == "Submit"
        assert applied.card_settings["showProgress"] is True
        assert applied.card_settings["theme"] == "dark"
        assert applied.card_settings["flowchartGraph"] == branching_graph.to_wire()
        assert [f.id for f in applied.form_schema] == ["welcome", "interest", "budget", "address"]

    def test_reduced_envelope(self):
        envelope = CardFormTemplateJson.model_validate(
            {"schema": [{"id": "q1", "type": "text", "label": "Name"}]}
        )
        applied = apply_card_form_template(FormTemplateRecord(), envelope)
        assert [f.id for f in applied.form_schema] == ["q1"]
        assert "flowchartGraph" in applied.card_settings
