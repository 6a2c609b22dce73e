"""
Label analysis pipeline.

image -> vision model -> extract -> validate -> consistency rules -> record
"""

import logging
from typing import Union

from analysis.models import AnalysisRecord
from analysis.validator import recover_and_validate
from consistency.rules import apply_rules
from core.vision_analyzer import VisionLabelAnalyzer

logger = logging.getLogger(__name__)


def analyze_label(
    image: Union[str, bytes],
    analyzer: VisionLabelAnalyzer = None,
    mime_type: str = None,
) -> AnalysisRecord:
    """
    Analyze one label image end to end.

    Raises:
        UpstreamFailure, ExtractionFailure, SchemaViolation
    """
    analyzer = analyzer or VisionLabelAnalyzer()

    raw_text = analyzer.analyze(image, mime_type=mime_type)
    record = recover_and_validate(raw_text)
    final = apply_rules(record)

    logger.info(
        "Analyzed %r: score=%d halal=%s alerts=%d",
        final.product_name, final.health_score,
        final.halal_analysis.status.value, len(final.alerts),
    )
    return final
