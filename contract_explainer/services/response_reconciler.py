"""
Response Reconciler
Recovers the classified-clauses JSON object from a free-form model reply.

The model is asked for JSON only, but replies often wrap it in prose or a
```json fence. The first balanced {...} region is taken as the payload; if
there is none, fences are stripped and the whole reply is parsed.
"""

import json
import logging
import re
from typing import Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from contract_explainer.core.exceptions import ReconciliationError
from contract_explainer.schemas.contract_analysis import ClassifiedSummary

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def _balanced_end(text: str, start: int) -> Optional[int]:
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def find_first_object_span(text: str) -> Optional[Tuple[int, int]]:
    """
    Locate the first balanced ``{...}`` region in ``text``.

    Braces inside JSON string literals are ignored, so values such as
    ``"resumo": "multa {10%}"`` do not end the region early. An opening brace
    that is never closed (stray prose before the payload) is skipped and the
    scan resumes at the next one.

    Returns:
        ``(start, end)`` slice bounds, or None if no opening brace is ever closed
    """
    start = text.find("{")
    while start != -1:
        end = _balanced_end(text, start)
        if end is not None:
            return start, end
        start = text.find("{", start + 1)
    return None


def _decode(raw_text: str) -> object:
    span = find_first_object_span(raw_text)
    if span is not None:
        return json.loads(raw_text[span[0]:span[1]])
    return json.loads(_CODE_FENCE.sub("", raw_text).strip())


def parse_classification(raw_text: str) -> ClassifiedSummary:
    """
    Turn a model reply into a ClassifiedSummary.

    Args:
        raw_text: Reply text as returned by the model

    Returns:
        Parsed and validated summary

    Raises:
        ReconciliationError: If no valid payload is found; carries raw_text verbatim
    """
    try:
        payload = _decode(raw_text)
    except json.JSONDecodeError as e:
        logger.warning(f"Model reply is not valid JSON: {e}")
        raise ReconciliationError(f"No JSON payload found in model reply: {e}", raw_text) from e

    if not isinstance(payload, dict):
        raise ReconciliationError(
            f"Expected a JSON object, got {type(payload).__name__}", raw_text
        )

    try:
        return ClassifiedSummary.model_validate(payload)
    except PydanticValidationError as e:
        logger.warning(f"Model reply does not match the classified summary shape: {e}")
        raise ReconciliationError(f"Invalid classified summary: {e}", raw_text) from e
