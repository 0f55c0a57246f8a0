"""HTTP client for a running cardflow API.

Usage from a persistence service or script:

    from cardflow.sdk.client import CardflowClient
    with CardflowClient("http://localhost:8000") as client:
        errors = client.validate(graph)
"""

from __future__ import annotations

from typing import Any

import httpx

from cardflow.errors import FlowchartGraphError, TemplateImportError
from cardflow.models.card_form_template import CardFormTemplateJson, FormTemplateRecord
from cardflow.models.flowchart import EdgeSpec, FlowchartGraph
from cardflow.models.form_field import FormField, fields_to_wire


def _graph_payload(graph: FlowchartGraph | dict[str, Any]) -> Any:
    return graph.to_wire() if isinstance(graph, FlowchartGraph) else graph


class CardflowClient:
    """Thin wrapper over the ``/api/flowcharts`` and ``/api/templates`` routes.

    Pass ``client`` to reuse an existing ``httpx.Client`` (for example a
    FastAPI ``TestClient``); otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def __enter__(self) -> CardflowClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _post(self, path: str, payload: Any) -> httpx.Response:
        return self._client.post(f"/api{path}", json=payload)

    @staticmethod
    def _raise_for_graph(response: httpx.Response) -> None:
        if response.status_code == 422:
            detail = response.json().get("detail")
            if isinstance(detail, dict) and "errors" in detail:
                raise FlowchartGraphError(detail["errors"])
        response.raise_for_status()

    def validate(self, graph: FlowchartGraph | dict[str, Any]) -> list[str]:
        """Structural errors for ``graph`` (empty when valid)."""
        response = self._post("/flowcharts/validate", _graph_payload(graph))
        response.raise_for_status()
        return response.json()["errors"]

    def to_schema(self, graph: FlowchartGraph | dict[str, Any]) -> list[FormField]:
        response = self._post("/flowcharts/schema", _graph_payload(graph))
        self._raise_for_graph(response)
        return [FormField.model_validate(f) for f in response.json()]

    def build(self, schema: list[FormField], edges: list[EdgeSpec]) -> FlowchartGraph:
        response = self._post(
            "/flowcharts/build",
            {"schema": fields_to_wire(schema), "edges": [e.to_wire() for e in edges]},
        )
        response.raise_for_status()
        return FlowchartGraph.model_validate(response.json())

    def import_template(self, payload: dict[str, Any]) -> CardFormTemplateJson:
        """Import a card form JSON document.

        Raises:
            TemplateImportError: the server rejected the document shape.
            FlowchartGraphError: the graph inside is invalid.
        """
        response = self._post("/templates/import", payload)
        if response.status_code == 400:
            raise TemplateImportError(response.json().get("detail", "invalid card form JSON"))
        self._raise_for_graph(response)
        return CardFormTemplateJson.model_validate(response.json()["template"])

    def extract_template(self, text: str) -> CardFormTemplateJson | None:
        """Card form JSON found in ``text``, or None when there is none."""
        response = self._post("/templates/extract", {"text": text})
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return CardFormTemplateJson.model_validate(response.json())

    def export_template(self, record: FormTemplateRecord) -> CardFormTemplateJson:
        response = self._post("/templates/export", record.to_wire())
        self._raise_for_graph(response)
        return CardFormTemplateJson.model_validate(response.json())
