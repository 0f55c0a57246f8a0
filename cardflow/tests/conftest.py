"""Shared graph and schema builders for the cardflow tests.

The ``raw_*`` helpers return wire-shaped dicts, the same JSON the editor and
the import feature send, so tests can break them on purpose.
"""

import pytest

from cardflow.models.flowchart import FlowchartGraph
from cardflow.models.form_field import FormField


def raw_start(y: float = 0) -> dict:
    return {"id": "start", "type": "start", "position": {"x": 400, "y": y}, "data": {}}


def raw_end(y: float = 340) -> dict:
    return {"id": "end", "type": "end", "position": {"x": 400, "y": y}, "data": {}}


def raw_question(
    node_id: str,
    y: float = 100,
    field_type: str = "text",
    label: str = "Question",
    x: float = 400,
    **field_extra,
) -> dict:
    field = {"id": node_id, "type": field_type, "label": label, **field_extra}
    return {
        "id": node_id,
        "type": "question",
        "position": {"x": x, "y": y},
        "data": {"field": field, "fieldId": node_id, "label": label, "fieldType": field_type},
    }


def raw_statement(
    node_id: str,
    y: float = 100,
    text: str = "Hello there",
    label: str | None = None,
    success: bool = False,
) -> dict:
    return {
        "id": node_id,
        "type": "statement",
        "position": {"x": 400, "y": y},
        "data": {
            "fieldId": node_id,
            "label": label if label is not None else text,
            "statementText": text,
            "isSuccessCard": success,
        },
    }


def raw_edge(source: str, target: str, **data) -> dict:
    edge = {"id": f"e-{source}-{target}", "source": source, "target": target}
    if data:
        edge["data"] = data
    return edge


def raw_graph(nodes: list, edges: list, viewport: dict | None = None) -> dict:
    graph = {"nodes": nodes, "edges": edges}
    if viewport is not None:
        graph["viewport"] = viewport
    return graph


def make_graph(nodes: list, edges: list, viewport: dict | None = None) -> FlowchartGraph:
    return FlowchartGraph.model_validate(raw_graph(nodes, edges, viewport))


def chain_edges(*ids: str) -> list[dict]:
    """Edges linking ``ids`` in order."""
    return [raw_edge(s, t) for s, t in zip(ids, ids[1:])]


@pytest.fixture
def sample_schema() -> list[FormField]:
    """a small lead-capture form: intro card, then three questions."""
    return [
        FormField(id="welcome", type="statement", label="Welcome! This takes two minutes."),
        FormField(id="name", type="text", label="Your name", required=True),
        FormField(
            id="interest",
            type="radio",
            label="What brings you here?",
            options=["Buying", "Selling"],
            required=True,
        ),
        FormField(id="contact", type="email", label="Email", required=True),
    ]


@pytest.fixture
def branching_raw() -> dict:
    """Intro, one radio question that branches, and a success card on one branch.

    Linearized order: welcome, interest, budget, address.
    """
    return raw_graph(
        nodes=[
            raw_start(),
            raw_statement("welcome", y=100, text="Welcome!", label="Intro"),
            raw_question(
                "interest",
                y=220,
                field_type="radio",
                label="What brings you here?",
                options=["Buying", "Selling"],
                required=True,
            ),
            raw_question("budget", y=340, label="What is your budget?", x=250),
            raw_question("address", y=340, label="Property address?", x=550),
            raw_statement("thanks", y=460, text="Thanks, talk soon!", success=True),
            raw_end(y=580),
        ],
        edges=[
            raw_edge("start", "welcome"),
            raw_edge("welcome", "interest"),
            raw_edge("interest", "budget", condition={"equals": "Buying"}, label="Buying"),
            raw_edge("interest", "address", condition={"equals": "Selling"}, label="Selling"),
            raw_edge("budget", "thanks"),
            raw_edge("address", "end"),
            raw_edge("thanks", "end"),
        ],
        viewport={"x": 0, "y": 0, "zoom": 1},
    )


@pytest.fixture
def branching_graph(branching_raw) -> FlowchartGraph:
    return FlowchartGraph.model_validate(branching_raw)
