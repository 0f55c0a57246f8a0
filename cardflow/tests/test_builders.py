"""Tests for building graphs from the flat schema."""

import pytest

from cardflow.compiler import (
    build_flowchart_from_schema_and_edges,
    flowchart_to_schema,
    schema_to_flowchart,
    validate_flowchart_graph,
)
from cardflow.models import EdgeData, EdgeSpec, FormField, QuestionNode, StatementNode, Viewport


def _field(field_id: str, field_type: str = "text", **extra) -> FormField:
    return FormField(id=field_id, type=field_type, label=field_id.title(), **extra)


def _specs(*pairs: tuple[str, str]) -> list[EdgeSpec]:
    return [EdgeSpec(source=s, target=t) for s, t in pairs]


def _layout(graph) -> list[tuple[str, float, float]]:
    return [(n.id, n.position.x, n.position.y) for n in graph.nodes]


def _edge_ids(graph) -> list[str]:
    return [e.id for e in graph.edges]


class TestSchemaToFlowchart:
    """Test the default straight-line graph."""

    def test_two_question_chain(self):
        """Concrete layout, ids and round trip for a two-question form."""
        schema = [
            FormField(id="q1", type="text", label="Name", required=True),
            FormField(id="q2", type="select", label="Plan", options=["A", "B"], required=True),
        ]
        graph = schema_to_flowchart(schema)

        assert _layout(graph) == [
            ("start", 400, 0),
            ("q1", 400, 100),
            ("q2", 400, 220),
            ("end", 400, 340),
        ]
        assert _edge_ids(graph) == ["e-start-q1", "e-q1-q2", "e-q2-end"]
        assert [f.to_wire() for f in flowchart_to_schema(graph)] == [f.to_wire() for f in schema]

    def test_shape_and_validity(self, sample_schema):
        graph = schema_to_flowchart(sample_schema)
        assert len(graph.nodes) == len(sample_schema) + 2
        assert len(graph.edges) == len(sample_schema) + 1
        assert validate_flowchart_graph(graph) == []

    def test_round_trip_with_statement(self, sample_schema):
        schema = flowchart_to_schema(schema_to_flowchart(sample_schema))
        assert [f.id for f in schema] == [f.id for f in sample_schema]
        assert [f.label for f in schema] == [f.label for f in sample_schema]
        assert [f.type for f in schema] == [f.type for f in sample_schema]

    def test_empty_schema(self):
        graph = schema_to_flowchart([])
        assert _layout(graph) == [("start", 400, 0), ("end", 400, 100)]
        assert _edge_ids(graph) == ["e-start-end"]
        assert validate_flowchart_graph(graph) == []

    def test_viewport_carried(self):
        graph = schema_to_flowchart([_field("a")], viewport=Viewport(x=10, y=20, zoom=0.5))
        assert graph.viewport.zoom == 0.5

    def test_statement_node(self):
        graph = schema_to_flowchart([FormField(id="hi", type="statement", label="Hello")])
        node = graph.get_node("hi")
        assert isinstance(node, StatementNode)
        assert node.data.statement_text == "Hello"
        assert node.data.label == "Hello"
        assert node.data.is_success_card is False

    def test_question_node_copies(self):
        """Denormalized copies match the field, and the field is a copy."""
        field = _field("plan", "radio", options=["A", "B"])
        graph = schema_to_flowchart([field])
        node = graph.get_node("plan")

        assert isinstance(node, QuestionNode)
        assert node.data.field_id == "plan"
        assert node.data.label == "Plan"
        assert node.data.field_type == "radio"

        field.label = "Edited"
        assert node.data.field.label == "Plan"

    def test_reserved_and_duplicate_ids_skipped(self):
        graph = schema_to_flowchart([_field("start"), _field("a"), _field("a"), _field("end")])
        assert [n.id for n in graph.nodes] == ["start", "a", "end"]
        assert validate_flowchart_graph(graph) == []


class TestBuildFromSchemaAndEdges:
    """Test the reduced-form builder."""

    def test_matches_default_chain(self, sample_schema):
        ids = ["start", *[f.id for f in sample_schema], "end"]
        specs = _specs(*zip(ids, ids[1:]))
        built = build_flowchart_from_schema_and_edges(sample_schema, specs)
        assert built.to_wire() == schema_to_flowchart(sample_schema).to_wire()

    def test_bfs_order_not_schema_order(self):
        """Nodes are laid out in edge order; fields the edges never reach are dropped."""
        graph = build_flowchart_from_schema_and_edges(
            [_field("a"), _field("b"), _field("c")],
            _specs(("start", "c"), ("c", "a"), ("a", "end")),
        )
        assert _layout(graph) == [
            ("start", 400, 0),
            ("c", 400, 100),
            ("a", 400, 220),
            ("end", 400, 340),
        ]
        assert _edge_ids(graph) == ["e-start-c", "e-c-a", "e-a-end"]

    def test_branches(self):
        graph = build_flowchart_from_schema_and_edges(
            [_field("a"), _field("b")],
            _specs(("start", "a"), ("start", "b"), ("a", "end"), ("b", "end")),
        )
        assert _layout(graph) == [
            ("start", 400, 0),
            ("a", 400, 100),
            ("b", 400, 220),
            ("end", 400, 340),
        ]
        assert validate_flowchart_graph(graph) == []

    def test_content_after_early_end_edge(self):
        """An edge to end listed first doesn't hide content discovered later."""
        graph = build_flowchart_from_schema_and_edges(
            [_field("a"), _field("b")],
            _specs(("start", "end"), ("start", "a"), ("a", "b"), ("b", "end")),
        )
        assert [n.id for n in graph.nodes] == ["start", "a", "b", "end"]

    def test_parallel_edges_numbered(self):
        graph = build_flowchart_from_schema_and_edges(
            [_field("a")],
            _specs(("start", "a"), ("a", "end"), ("a", "end")),
        )
        assert _edge_ids(graph) == ["e-start-a", "e-a-end", "e-a-end-1"]

    def test_edge_data_carried(self):
        spec = EdgeSpec(source="a", target="end", data=EdgeData(condition={"equals": "Yes"}, label="Yes"))
        graph = build_flowchart_from_schema_and_edges(
            [_field("a")],
            [EdgeSpec(source="start", target="a"), spec],
        )
        edge = graph.edges[1]
        assert edge.is_conditional
        assert edge.data.label == "Yes"
        assert edge.data is not spec.data

    def test_end_linked_when_unreachable(self):
        graph = build_flowchart_from_schema_and_edges(
            [_field("a"), _field("b")],
            _specs(("start", "a"), ("a", "b")),
        )
        assert _edge_ids(graph) == ["e-start-a", "e-a-b", "e-b-end"]
        assert validate_flowchart_graph(graph) == []

    def test_no_edges(self):
        graph = build_flowchart_from_schema_and_edges([_field("a")], [])
        assert [n.id for n in graph.nodes] == ["start", "end"]
        assert _edge_ids(graph) == ["e-start-end"]

    def test_dangling_edges_dropped(self):
        graph = build_flowchart_from_schema_and_edges(
            [_field("a")],
            _specs(("start", "a"), ("a", "ghost"), ("ghost", "end"), ("a", "end")),
        )
        assert _edge_ids(graph) == ["e-start-a", "e-a-end"]

    def test_relinks_fields_behind_unknown_ids(self):
        """A field reached only through an id outside the schema is chained back in."""
        graph = build_flowchart_from_schema_and_edges(
            [_field("q1")],
            _specs(("start", "ghost"), ("ghost", "q1")),
        )
        assert [n.id for n in graph.nodes] == ["start", "q1", "end"]
        assert _edge_ids(graph) == ["e-start-q1", "e-q1-end"]
        assert validate_flowchart_graph(graph) == []

    def test_relinks_after_last_reached_field(self):
        graph = build_flowchart_from_schema_and_edges(
            [_field("a"), _field("b"), _field("c")],
            _specs(("start", "a"), ("start", "ghost"), ("ghost", "b"), ("b", "c"), ("c", "end")),
        )
        assert _edge_ids(graph) == ["e-start-a", "e-b-c", "e-c-end", "e-a-b"]
        assert validate_flowchart_graph(graph) == []

    def test_reserved_field_ids_ignored(self):
        graph = build_flowchart_from_schema_and_edges(
            [_field("end"), _field("a")],
            _specs(("start", "a"), ("a", "end")),
        )
        assert [n.id for n in graph.nodes] == ["start", "a", "end"]
        assert graph.get_node("end").type == "end"

    @pytest.mark.parametrize(
        "pairs",
        [
            [],
            [("start", "a")],
            [("a", "b"), ("b", "end")],
            [("start", "a"), ("a", "a")],
            [("start", "b"), ("b", "a"), ("a", "b")],
            [("start", "ghost"), ("end", "a")],
            [("start", "a"), ("a", "b"), ("b", "start")],
            [("start", "ghost"), ("ghost", "a")],
            [("start", "ghost"), ("ghost", "b"), ("b", "a"), ("a", "ghost")],
        ],
    )
    def test_output_always_valid(self, pairs):
        """Whatever the edge list, the built graph validates."""
        graph = build_flowchart_from_schema_and_edges(
            [_field("a"), _field("b", "statement")],
            _specs(*pairs),
        )
        assert validate_flowchart_graph(graph) == []
