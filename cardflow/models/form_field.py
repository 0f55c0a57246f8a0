"""Linear form field definitions.

A FormField is one card of the flat, ordered schema consumed by the public
form renderer. Question fields carry their full input definition; statement
fields only carry display text.
"""

from typing import Any, Literal, get_args

from pydantic import Field

from cardflow.models.wire import WireModel


FormFieldType = Literal[
    "text",
    "email",
    "phone",
    "textarea",
    "select",
    "checkbox",
    "radio",
    "file",
    "image",
    "statement",
]

# every value a field's "type" may take
FORM_FIELD_TYPES: frozenset[str] = frozenset(get_args(FormFieldType))

# field kinds whose options must be a list when present
OPTION_FIELD_TYPES: frozenset[str] = frozenset({"select", "radio", "checkbox"})

ConditionOperator = Literal[
    "equals",
    "not_equals",
    "contains",
    "not_contains",
    "greater_than",
    "less_than",
    "is_empty",
    "is_not_empty",
    "starts_with",
    "ends_with",
]

ConditionValue = str | int | float | bool | list[str]


class CardMedia(WireModel):
    """image/video/gif/icon shown with a card."""

    type: Literal["image", "video", "gif", "icon"]
    url: str | None = None
    alt_text: str | None = None
    position: Literal["above", "below", "background", "left", "right"]
    video_type: Literal["youtube", "vimeo", "upload"] | None = None
    video_id: str | None = None


class FieldOption(WireModel):
    """an option with an image attached, used instead of a plain string."""

    value: str
    image_url: str | None = None
    alt_text: str | None = None


class Condition(WireModel):
    """a single comparison against a previous answer."""

    field_id: str
    operator: ConditionOperator
    value: ConditionValue


class ConditionGroup(WireModel):
    """conditions joined with AND / OR."""

    operator: Literal["AND", "OR"]
    conditions: list[Condition]


class JumpRule(WireModel):
    conditions: ConditionGroup
    target_field_id: str


class DynamicLabel(WireModel):
    conditions: ConditionGroup
    label: str


class ConditionalLogic(WireModel):
    """Conditional display rules for a field.

    These are evaluated by the form-filling runtime, never at authoring time.
    """

    show_if: ConditionGroup | None = None
    hide_if: ConditionGroup | None = None
    jump_to: list[JumpRule] | None = None
    dynamic_label: list[DynamicLabel] | None = None


class FormField(WireModel):
    """one entry in the linear field schema."""

    id: str = Field(min_length=1)
    type: FormFieldType
    label: str
    placeholder: str | None = None
    options: list[str | FieldOption] | None = None
    required: bool | None = None
    media: CardMedia | None = None
    conditional_logic: ConditionalLogic | None = None
    enable_piping: bool | None = None  # insert previous answers via {{fieldId}}
    piping_key: str | None = None

    @property
    def is_statement(self) -> bool:
        return self.type == "statement"

    @property
    def piping_token(self) -> str:
        """token that inserts this answer elsewhere: the pipingKey, else the id."""
        if self.piping_key and self.piping_key.strip():
            return self.piping_key.strip()
        return self.id


def fields_to_wire(schema: list[FormField]) -> list[dict[str, Any]]:
    """Dump a schema to its JSON-ready list form."""
    return [field.to_wire() for field in schema]
