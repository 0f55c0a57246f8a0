"""Find a card form template inside free-form text such as an AI chat reply.

The scan is best effort: the text may hold zero, one or many JSON-looking
fragments. Fenced code blocks are tried first, then bare JSON objects. Parse
and validation failures only mean "not this fragment".
"""

import json
import logging
import re
from collections.abc import Iterator
from itertools import chain
from typing import Any

from cardflow.errors import FlowchartGraphError, TemplateImportError
from cardflow.models.card_form_template import CardFormTemplateJson
from cardflow.templates.template_json import import_card_form_template, is_card_form_template_json


logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\r?\n?(.*?)```", re.DOTALL)

# bare objects are only worth decoding when one of these keys shows up
_ENVELOPE_MARKERS = ('"flowchartGraph"', '"schema"')


def _fenced_candidates(text: str) -> Iterator[Any]:
    for match in _FENCED_BLOCK.finditer(text):
        body = match.group(1).strip()
        if not body:
            continue
        try:
            yield json.loads(body)
        except (json.JSONDecodeError, RecursionError) as exc:
            logger.debug("skipping fenced block at %d: %s", match.start(), exc)


def _bare_candidates(text: str) -> Iterator[Any]:
    if not any(marker in text for marker in _ENVELOPE_MARKERS):
        return
    decoder = json.JSONDecoder()
    idx = text.find("{")
    while idx != -1:
        try:
            value, _ = decoder.raw_decode(text, idx)
        except (json.JSONDecodeError, RecursionError):
            value = None
        if isinstance(value, dict):
            yield value
        # keep scanning from the next brace so nested envelopes are found too
        idx = text.find("{", idx + 1)


def extract_card_form_json_from_text(text: str) -> CardFormTemplateJson | None:
    """Return the first card form template found in ``text``, or None.

    A fragment counts when it passes the envelope guard and imports cleanly
    (valid graph, or a schema the builder can expand).
    """
    if not text:
        return None
    for candidate in chain(_fenced_candidates(text), _bare_candidates(text)):
        if not is_card_form_template_json(candidate):
            continue
        try:
            return import_card_form_template(candidate)
        except (TemplateImportError, FlowchartGraphError) as exc:
            logger.debug("skipping envelope-shaped fragment: %s", exc)
    return None
