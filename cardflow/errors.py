"""Exceptions raised by caller-policy helpers.

The validator itself never raises; these exist for the load/save/import
paths that must refuse an invalid graph or envelope.
"""

from pydantic import ValidationError


class FlowchartGraphError(ValueError):
    """a flow graph failed structural validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        summary = "; ".join(self.errors[:3])
        if len(self.errors) > 3:
            summary += f" (+{len(self.errors) - 3} more)"
        super().__init__(f"invalid flowchart graph: {summary}")


class TemplateImportError(ValueError):
    """a value is not shaped like a card form template envelope."""


def validation_error_messages(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into ``"loc.path: message"`` strings."""
    return [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
