"""API routes for flow graph compilation.

Every route is a pure transformation of its request body; nothing is stored.
"""

from typing import Any

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel, Field

from cardflow.compiler import (
    build_flowchart_from_schema_and_edges,
    flowchart_to_schema,
    merge_flowchart_with_schema,
    parse_flowchart_graph,
    schema_to_flowchart,
    validate_flowchart_graph,
)
from cardflow.errors import FlowchartGraphError
from cardflow.models.flowchart import EdgeSpec, FlowchartGraph, Viewport
from cardflow.models.form_field import FormField, fields_to_wire
from cardflow.models.wire import WireModel

router = APIRouter()


# --- Request/Response Models ---


class ValidateResponse(BaseModel):
    """result of validating a graph."""

    valid: bool
    errors: list[str]


class FromSchemaRequest(WireModel):
    """request body for generating the default graph of a schema."""

    form_schema: list[FormField] = Field(alias="schema")
    viewport: Viewport | None = None


class BuildRequest(WireModel):
    """request body for building a graph from schema + edge list."""

    form_schema: list[FormField] = Field(alias="schema")
    edges: list[EdgeSpec]
    viewport: Viewport | None = None


class MergeRequest(WireModel):
    """request body for refreshing a graph from a newer schema."""

    graph: dict[str, Any]
    form_schema: list[FormField] = Field(alias="schema")


# --- Helper Functions ---


def load_graph_or_422(graph: Any) -> FlowchartGraph:
    """Parse a raw graph, turning validation errors into a 422."""
    try:
        return parse_flowchart_graph(graph)
    except FlowchartGraphError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": "invalid flowchart graph", "errors": exc.errors},
        ) from exc


# --- Routes ---


@router.post("/flowcharts/validate")
def validate_graph(graph: Any = Body(...)) -> ValidateResponse:
    """validate a graph and list every structural problem.

    Graph content never produces an error status; the editor shows the list.
    """
    errors = validate_flowchart_graph(graph)
    return ValidateResponse(valid=not errors, errors=errors)


@router.post("/flowcharts/schema")
def graph_to_schema(graph: Any = Body(...)) -> list[dict[str, Any]]:
    """linearize a valid graph into the field schema."""
    return fields_to_wire(flowchart_to_schema(load_graph_or_422(graph)))


@router.post("/flowcharts/from-schema")
def graph_from_schema(request: FromSchemaRequest) -> dict[str, Any]:
    """default straight-line graph for a schema."""
    return schema_to_flowchart(request.form_schema, viewport=request.viewport).to_wire()


@router.post("/flowcharts/build")
def build_graph(request: BuildRequest) -> dict[str, Any]:
    """canonical graph from the reduced schema + edges form."""
    graph = build_flowchart_from_schema_and_edges(
        request.form_schema,
        request.edges,
        viewport=request.viewport,
    )
    return graph.to_wire()


@router.post("/flowcharts/merge")
def merge_graph(request: MergeRequest) -> dict[str, Any]:
    """refresh a graph's field content from a schema."""
    graph = load_graph_or_422(request.graph)
    return merge_flowchart_with_schema(graph, request.form_schema).to_wire()
