"""Structural validation of card-form flow graphs.

``validate_flowchart_graph`` checks that a graph matches the canonical shape
every consumer relies on (the linearizer, the editor, card settings and the
public form) and returns every problem it finds as a human-readable string.
It never raises: callers decide whether to block a save, warn, or repair.

Checks, in order:
1. the graph is an object with ``nodes`` and ``edges`` arrays
2. each node has a unique non-empty string id, a known type and a numeric position
3. question nodes carry a well-formed ``data.field``; statement nodes carry
   ``data.fieldId``, ``data.statementText`` and ``data.label``
4. exactly one start node with id "start" and exactly one end node with id "end"
5. each edge has string ``source``/``target`` that resolve to node ids
6. end is reachable from start (skipped when check 4 failed)
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from cardflow.compiler.traversal import outgoing_map, reachable_from
from cardflow.errors import FlowchartGraphError, validation_error_messages
from cardflow.models.flowchart import END_NODE_ID, NODE_TYPES, START_NODE_ID, FlowchartGraph
from cardflow.models.form_field import FORM_FIELD_TYPES, OPTION_FIELD_TYPES


_NODE_TYPES_TEXT = "start, end, question, statement"
_FIELD_TYPES_TEXT = ", ".join(sorted(FORM_FIELD_TYPES))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_raw(graph: Any) -> Any:
    """Validate models through their wire shape so both inputs share one code path."""
    if isinstance(graph, BaseModel):
        return graph.model_dump(mode="json", by_alias=True, exclude_none=True)
    return graph


def _check_question(i: int, data: Mapping, errors: list[str]) -> None:
    field = data.get("field")
    if not isinstance(field, Mapping):
        errors.append(f"nodes[{i}] (question): missing 'data.field' (full FormField object)")
        return

    field_id = field.get("id")
    if not isinstance(field_id, str) or field_id == "":
        errors.append(f"nodes[{i}].data.field: missing id")

    field_type = field.get("type")
    if not isinstance(field_type, str):
        errors.append(f"nodes[{i}].data.field: missing type")
    elif field_type not in FORM_FIELD_TYPES:
        errors.append(f"nodes[{i}].data.field: type must be one of: {_FIELD_TYPES_TEXT}")

    if not isinstance(field.get("label"), str):
        errors.append(f"nodes[{i}].data.field: missing label")

    if (
        isinstance(field_type, str)
        and field_type in OPTION_FIELD_TYPES
        and "options" in field
        and field["options"] is not None
        and not isinstance(field["options"], list)
    ):
        errors.append(f'nodes[{i}].data.field: options must be an array for type "{field_type}"')


def _check_statement(i: int, data: Mapping, errors: list[str]) -> None:
    if not isinstance(data.get("fieldId"), str):
        errors.append(f"nodes[{i}] (statement): missing data.fieldId")
    if not isinstance(data.get("statementText"), str):
        errors.append(f"nodes[{i}] (statement): missing data.statementText")
    if not isinstance(data.get("label"), str):
        errors.append(f"nodes[{i}] (statement): missing data.label")


def _check_nodes(nodes: list, errors: list[str]) -> set[str]:
    """Per-node checks; returns the set of valid node ids."""
    node_ids: set[str] = set()
    for i, node in enumerate(nodes):
        if not isinstance(node, Mapping):
            errors.append(f"nodes[{i}]: must be an object")
            continue

        node_id = node.get("id")
        if not isinstance(node_id, str) or node_id == "":
            errors.append(f"nodes[{i}]: missing or invalid 'id' (string required)")
        else:
            if node_id in node_ids:
                errors.append(f'nodes[{i}]: duplicate node id "{node_id}"')
            node_ids.add(node_id)

        node_type = node.get("type")
        if not isinstance(node_type, str) or node_type not in NODE_TYPES:
            errors.append(
                f"nodes[{i}] (id={node_id}): type must be one of: {_NODE_TYPES_TEXT} (lowercase)"
            )

        position = node.get("position")
        if (
            not isinstance(position, Mapping)
            or not _is_number(position.get("x"))
            or not _is_number(position.get("y"))
        ):
            errors.append(f"nodes[{i}] (id={node_id}): position must be {{ x: number, y: number }}")

        data = node.get("data")
        if not isinstance(data, Mapping):
            data = {}
        if node_type == "question":
            _check_question(i, data, errors)
        elif node_type == "statement":
            _check_statement(i, data, errors)
    return node_ids


def _check_sentinels(nodes: list, errors: list[str]) -> bool:
    """Start/end identity checks; returns True when they all passed."""
    ok = True
    counts = {"start": 0, "end": 0}
    reserved = {"start": START_NODE_ID, "end": END_NODE_ID}
    for node in nodes:
        if not isinstance(node, Mapping):
            continue
        node_type = node.get("type")
        node_id = node.get("id")
        if isinstance(node_type, str) and node_type in counts:
            counts[node_type] += 1
            if node_id != reserved[node_type]:
                ok = False
                errors.append(
                    f'Node with type "{node_type}" must have id "{reserved[node_type]}" (found "{node_id}")'
                )
        elif node_id in (START_NODE_ID, END_NODE_ID):
            ok = False
            errors.append(f'Node id "{node_id}" is reserved for the {node_id} node (found type "{node_type}")')

    for node_type, count in counts.items():
        if count != 1:
            ok = False
            errors.append(f'Exactly one "{node_type}" node required (found {count})')
    return ok


def _check_edges(edges: list, node_ids: set[str], errors: list[str]) -> list[tuple[str, str]]:
    """Per-edge checks; returns the (source, target) pairs that are well-typed."""
    pairs: list[tuple[str, str]] = []
    for i, edge in enumerate(edges):
        if not isinstance(edge, Mapping):
            errors.append(f"edges[{i}]: must be an object")
            continue

        source = edge.get("source")
        target = edge.get("target")
        if not isinstance(source, str):
            errors.append(f"edges[{i}]: missing or invalid 'source' (use source/target, not from/to)")
        elif source not in node_ids:
            errors.append(f'edges[{i}]: source "{source}" does not match any node id')

        if not isinstance(target, str):
            errors.append(f"edges[{i}]: missing or invalid 'target'")
        elif target not in node_ids:
            errors.append(f'edges[{i}]: target "{target}" does not match any node id')

        if isinstance(source, str) and isinstance(target, str):
            pairs.append((source, target))
    return pairs


def validate_flowchart_graph(graph: Any) -> list[str]:
    """Validate a flow graph (raw JSON-like dict or ``FlowchartGraph``).

    Returns:
        Every structural error found; an empty list means the graph is valid.
    """
    errors: list[str] = []
    graph = _as_raw(graph)

    if not isinstance(graph, Mapping):
        errors.append("flowchartGraph must be an object")
        return errors

    nodes = graph.get("nodes")
    edges = graph.get("edges")
    if not isinstance(nodes, list):
        errors.append("flowchartGraph.nodes must be an array")
        nodes = []
    if not isinstance(edges, list):
        errors.append("flowchartGraph.edges must be an array")
        edges = []

    node_ids = _check_nodes(nodes, errors)
    sentinels_ok = _check_sentinels(nodes, errors)
    pairs = _check_edges(edges, node_ids, errors)

    if sentinels_ok:
        reached = reachable_from(START_NODE_ID, outgoing_map(pairs))
        if END_NODE_ID not in reached:
            errors.append("No path from start node to end node (graph is disconnected)")

    return errors


def is_valid_flowchart_graph(graph: Any) -> bool:
    return not validate_flowchart_graph(graph)


def parse_flowchart_graph(graph: Any) -> FlowchartGraph:
    """Validate and then load a raw graph into the typed model.

    Raises:
        FlowchartGraphError: with the full error list when the graph is invalid
            or a payload does not fit the typed model.
    """
    if isinstance(graph, FlowchartGraph):
        raw = _as_raw(graph)
    else:
        raw = graph
    errors = validate_flowchart_graph(raw)
    if errors:
        raise FlowchartGraphError(errors)
    try:
        return FlowchartGraph.model_validate(raw)
    except ValidationError as exc:
        raise FlowchartGraphError(validation_error_messages(exc)) from exc
