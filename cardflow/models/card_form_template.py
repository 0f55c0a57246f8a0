"""Card form template envelope and the stored template record.

The envelope is the one JSON document used for import, export and AI
generation. It carries either a complete ``flowchartGraph`` or the reduced
``schema`` + ``flowchartEdges`` form, plus display strings, card behaviour
settings, styling and scoring configuration.
"""

from typing import Any, Self

from pydantic import Field, model_validator

from cardflow.models.flowchart import EdgeSpec, FlowchartGraph
from cardflow.models.form_field import FormField
from cardflow.models.wire import WireModel


CARD_FORM_TEMPLATE_JSON_VERSION = 1

# cardSettings keys that hold the stored graph
FLOWCHART_GRAPH_KEY = "flowchartGraph"
FLOWCHART_VIEWPORT_KEY = "flowchartViewport"


class CardFormTemplateJson(WireModel):
    """importable/exportable card form document."""

    version: int = CARD_FORM_TEMPLATE_JSON_VERSION

    # display strings
    title: str | None = None
    subtitle: str | None = None
    submit_button_text: str | None = None
    success_message: str | None = None

    # flow: a full graph, or the reduced schema + edge list
    flowchart_graph: FlowchartGraph | None = None
    form_schema: list[FormField] | None = Field(default=None, alias="schema")
    flowchart_edges: list[EdgeSpec] | None = None

    # opaque passthrough sections
    card_settings: dict[str, Any] | None = None
    styling: dict[str, Any] | None = None
    profile_estimation: dict[str, Any] | None = None

    @model_validator(mode="after")
    def require_flow(self) -> Self:
        """An envelope must carry a graph or a non-empty schema."""
        if self.flowchart_graph is None and not self.form_schema:
            raise ValueError(
                "card form template must contain 'flowchartGraph' or a non-empty 'schema'"
            )
        return self


class FormTemplateRecord(WireModel):
    """The parts of a persisted form template the compiler reads and writes.

    Any other columns of the stored record (id, slug, tenant, ...) ride along
    as extra keys and are never looked at.
    """

    form_schema: list[FormField] = Field(default_factory=list, alias="schema")
    title: str = ""
    subtitle: str | None = None
    submit_button_text: str = "Submit"
    success_message: str = "Thank you for your submission!"
    card_settings: dict[str, Any] = Field(default_factory=dict)
    styling: dict[str, Any] | None = None
    profile_estimation: dict[str, Any] | None = None
