from typing import Tuple

# Case-insensitive substrings that indicate a sugar source in the product
# name or ingredient transcript (English + Indonesian)
SUGAR_INDICATOR_KEYWORDS: Tuple[str, ...] = (
    "sugar", "gula",
    "syrup", "sirup",
    "chocolate", "coklat",
    "candy", "permen",
    "sweet",
)

SCORE_MIN = 0
SCORE_MAX = 100

# Sugar/text mismatch
MISMATCH_SCORE_CAP = 30
MISMATCH_CONCLUSION = (
    "CRITICAL WARNING: Data Mismatch. Product likely contains sugar despite 0g reading."
)
ANOMALY_ALERT_NAME = "Anomaly Detected"
ANOMALY_ALERT_RISK = (
    "AI detected 0g sugar but ingredients suggest otherwise. Verify physical label."
)

# Non-halal products never score above this
NON_HALAL_SCORE = 50
