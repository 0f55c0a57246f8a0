"""Card form template import/export and persistence hooks."""

from cardflow.templates.extraction import extract_card_form_json_from_text
from cardflow.templates.service import (
    apply_card_form_template,
    export_card_form_template,
    load_template_graph,
    prepare_template_save,
)
from cardflow.templates.template_json import (
    build_card_form_template,
    expand_reduced_form,
    import_card_form_template,
    is_card_form_template_json,
)

__all__ = [
    "is_card_form_template_json",
    "import_card_form_template",
    "build_card_form_template",
    "expand_reduced_form",
    "extract_card_form_json_from_text",
    "load_template_graph",
    "prepare_template_save",
    "export_card_form_template",
    "apply_card_form_template",
]
