"""
Structured Extractor

Recovers a single JSON value from free text returned by the vision model.
Strategies are tried in order and each one must parse as-is; broken JSON
is never repaired.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from analysis.errors import ExtractionFailure

logger = logging.getLogger(__name__)

WHOLE_TEXT = "whole_text"
JSON_FENCE = "json_fence"
BRACE_SCAN = "brace_scan"

_JSON_FENCE_RE = re.compile(r"```json([\s\S]*?)```")


@dataclass(frozen=True)
class ExtractedPayload:
    data: Any
    strategy: str


_UNPARSED = object()


def _try_parse(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return _UNPARSED


def _fenced_block(text: str) -> Optional[str]:
    match = _JSON_FENCE_RE.search(text)
    return match.group(1) if match else None


def _brace_span(text: str) -> Optional[str]:
    first_open = text.find("{")
    last_close = text.rfind("}")
    if first_open == -1 or last_close == -1 or first_open > last_close:
        return None
    return text[first_open:last_close + 1]


def extract_structured(raw_text: str) -> ExtractedPayload:
    """
    Recover one JSON value from model output.

    Order:
        1. the whole text
        2. the interior of the first ```json fence
        3. the span from the first '{' to the last '}'

    Args:
        raw_text: Text exactly as returned by the model

    Returns:
        ExtractedPayload with the parsed value and the strategy that worked

    Raises:
        ExtractionFailure: if no strategy yields valid JSON
    """
    if not isinstance(raw_text, str):
        raise ExtractionFailure(f"Model response is not text ({type(raw_text).__name__})")

    candidates = (
        (WHOLE_TEXT, raw_text),
        (JSON_FENCE, _fenced_block(raw_text)),
        (BRACE_SCAN, _brace_span(raw_text)),
    )
    for strategy, candidate in candidates:
        if candidate is None:
            continue
        parsed = _try_parse(candidate)
        if parsed is not _UNPARSED:
            logger.debug("Recovered model output via %s", strategy)
            return ExtractedPayload(data=parsed, strategy=strategy)

    preview = raw_text[:80].replace("\n", " ")
    raise ExtractionFailure(f"Model output malformed JSON: {preview!r}")
