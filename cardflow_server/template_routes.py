"""API routes for card form template import, export and AI text extraction."""

import os
from typing import Any

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel

from cardflow.errors import FlowchartGraphError, TemplateImportError
from cardflow.models.card_form_template import FormTemplateRecord
from cardflow.models.form_field import fields_to_wire
from cardflow.templates import (
    export_card_form_template,
    extract_card_form_json_from_text,
    import_card_form_template,
)

router = APIRouter()

# upper bound on chat text scanned for a template
MAX_EXTRACT_CHARS = int(os.getenv("CARDFLOW_MAX_EXTRACT_CHARS", "200000"))


class ExtractRequest(BaseModel):
    """request body for pulling a template out of free-form text."""

    text: str


def _invalid_graph(exc: FlowchartGraphError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": "invalid flowchart graph", "errors": exc.errors},
    )


@router.post("/templates/import")
def import_template(payload: Any = Body(...)) -> dict[str, Any]:
    """import a card form JSON (full graph or schema + edges)."""
    try:
        envelope = import_card_form_template(payload)
    except TemplateImportError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except FlowchartGraphError as exc:
        raise _invalid_graph(exc) from exc
    return {
        "template": envelope.to_wire(),
        "schema": fields_to_wire(envelope.form_schema or []),
    }


@router.post("/templates/extract")
def extract_template(request: ExtractRequest) -> dict[str, Any]:
    """find the card form JSON in an AI reply."""
    if len(request.text) > MAX_EXTRACT_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"Text too long: {len(request.text)} > {MAX_EXTRACT_CHARS} characters",
        )
    envelope = extract_card_form_json_from_text(request.text)
    if envelope is None:
        raise HTTPException(status_code=404, detail="No card form JSON found in text")
    return envelope.to_wire()


@router.post("/templates/export")
def export_template(record: FormTemplateRecord) -> dict[str, Any]:
    """full card form JSON for a stored template record."""
    try:
        envelope = export_card_form_template(record)
    except FlowchartGraphError as exc:
        raise _invalid_graph(exc) from exc
    return envelope.to_wire()
