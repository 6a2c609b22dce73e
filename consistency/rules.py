"""
Consistency Rule Engine

Deterministic corrections applied to a validated AnalysisRecord before it
reaches the caller. Rules never call the model and never raise; each one
returns a new record (or the same one when it does not trigger).

Order matters, later rules read the score earlier rules wrote:
    1. score range      - clamp health_score into 0..100
    2. sugar mismatch   - 0 g sugar but the text names a sugar source
    3. halal floor      - non-halal products are set to exactly 50 when above it
"""

import logging
from typing import Iterable

from analysis.models import Alert, AlertCategory, AnalysisRecord, HalalStatus, Severity
from consistency.constants import (
    ANOMALY_ALERT_NAME,
    ANOMALY_ALERT_RISK,
    MISMATCH_CONCLUSION,
    MISMATCH_SCORE_CAP,
    NON_HALAL_SCORE,
    SCORE_MAX,
    SCORE_MIN,
    SUGAR_INDICATOR_KEYWORDS,
)

logger = logging.getLogger(__name__)

ANOMALY_ALERT = Alert(
    name=ANOMALY_ALERT_NAME,
    category=AlertCategory.HEALTH,
    risk=ANOMALY_ALERT_RISK,
    severity=Severity.HIGH,
)


def clamp_score_range(record: AnalysisRecord) -> AnalysisRecord:
    score = min(max(record.health_score, SCORE_MIN), SCORE_MAX)
    if score == record.health_score:
        return record
    return record.model_copy(update={"health_score": score})


def find_sugar_indicators(record: AnalysisRecord, keywords: Iterable[str] = SUGAR_INDICATOR_KEYWORDS) -> list:
    """Return the lexicon terms found in the product name + ingredient transcript."""
    text = f"{record.product_name}{record.detected_ingredients_text}".lower()
    return [k for k in keywords if k.lower() in text]


def check_sugar_text_mismatch(
    record: AnalysisRecord,
    keywords: Iterable[str] = SUGAR_INDICATOR_KEYWORDS,
) -> AnalysisRecord:
    """
    Flag a record that reports 0 g sugar while its text names a sugar source.

    Caps the score at 30 (min, never raises it), replaces the conclusion and
    puts the anomaly alert first. The alert is not added again if it is
    already in first position.
    """
    if record.nutrition_summary.sugar_g != 0:
        return record

    hits = find_sugar_indicators(record, keywords)
    if not hits:
        return record

    alerts = record.alerts
    if not alerts or alerts[0] != ANOMALY_ALERT:
        alerts = (ANOMALY_ALERT,) + alerts

    logger.info("Sugar mismatch on %r: 0g sugar but found %s", record.product_name, hits)
    return record.model_copy(update={
        "health_score": min(record.health_score, MISMATCH_SCORE_CAP),
        "brief_conclusion": MISMATCH_CONCLUSION,
        "alerts": alerts,
    })


def check_halal_score_floor(record: AnalysisRecord) -> AnalysisRecord:
    """Non-halal products scoring above 50 are set to exactly 50."""
    if record.halal_analysis.status != HalalStatus.NON_HALAL:
        return record
    if record.health_score <= NON_HALAL_SCORE:
        return record

    logger.info(
        "Non-halal product %r scored %d, setting to %d",
        record.product_name, record.health_score, NON_HALAL_SCORE,
    )
    return record.model_copy(update={"health_score": NON_HALAL_SCORE})


def apply_rules(
    record: AnalysisRecord,
    keywords: Iterable[str] = SUGAR_INDICATOR_KEYWORDS,
) -> AnalysisRecord:
    """Run every consistency rule in order. Applying twice equals applying once."""
    keywords = tuple(keywords)
    record = clamp_score_range(record)
    record = check_sugar_text_mismatch(record, keywords)
    record = check_halal_score_floor(record)
    return record
