"""
Schema Validator

Turns the loosely typed object recovered from the model into an
AnalysisRecord. Shape problems become SchemaViolation with the dotted path
of the offending field; values are never coerced or clamped here.
"""

import logging
from typing import Any, Dict, Tuple, Union

from pydantic import ValidationError

from analysis.errors import SchemaViolation
from analysis.extractor import extract_structured
from analysis.models import AnalysisRecord

logger = logging.getLogger(__name__)


def format_path(loc: Tuple[Union[str, int], ...]) -> str:
    """('alerts', 0, 'category') -> 'alerts[0].category'"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "$"


def _violation_from(exc: ValidationError) -> SchemaViolation:
    error = exc.errors()[0]
    path = format_path(error.get("loc", ()))
    if error.get("type") == "missing":
        return SchemaViolation(path, "missing required field")
    return SchemaViolation(path, error.get("msg", "invalid value"))


def validate_record(data: Dict[str, Any]) -> AnalysisRecord:
    """
    Validate a recovered object against the analysis record contract.

    Raises:
        SchemaViolation: first offending field, e.g. 'halal_analysis.status'
    """
    if not isinstance(data, dict):
        raise SchemaViolation("$", f"expected an object, got {type(data).__name__}")

    try:
        return AnalysisRecord.model_validate(data)
    except ValidationError as e:
        violation = _violation_from(e)
        logger.warning("Schema violation at %s: %s", violation.path, violation.reason)
        raise violation from e


def recover_and_validate(raw_text: str) -> AnalysisRecord:
    """Extract the JSON payload from raw model text and validate it."""
    payload = extract_structured(raw_text)
    return validate_record(payload.data)
