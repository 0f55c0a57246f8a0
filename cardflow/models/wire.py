"""Shared base for models that travel as camelCase JSON.

The editor, the import/export feature and the public form renderer all speak
camelCase keys, so every model here aliases its snake_case attributes.
"""

from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """base model with camelCase aliases that keeps unknown keys."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "allow",
    }

    def to_wire(self) -> dict[str, Any]:
        """Dump to the JSON-ready camelCase shape, leaving out unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
