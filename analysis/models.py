import math
from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


class HalalStatus(str, Enum):
    HALAL_SAFE = "Halal Safe"
    SYUBHAT = "Syubhat (Doubtful)"
    NON_HALAL = "Non-Halal"


class AlertCategory(str, Enum):
    HEALTH = "Health"
    HALAL = "Halal"
    ALLERGY = "Allergy"


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def _check_json_number(v):
    # bool is an int subclass; numeric strings are not coerced
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ValueError(f"expected a number, got {type(v).__name__}")
    if isinstance(v, float) and not math.isfinite(v):
        raise ValueError("expected a finite number")
    return v


class HalalAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: HalalStatus
    reason: str


class NutritionSummary(BaseModel):
    """Sugar metrics as reported by the model. Teaspoons are advisory only."""
    model_config = ConfigDict(frozen=True)

    sugar_g: float = Field(..., description="Sugar content in grams")
    sugar_teaspoons: float = Field(..., description="Sugar content in teaspoons")

    @field_validator("sugar_g", "sugar_teaspoons", mode="before")
    @classmethod
    def check_non_negative(cls, v):
        v = _check_json_number(v)
        if v < 0:
            raise ValueError("sugar value must be non-negative")
        return v


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: AlertCategory
    risk: str
    severity: Severity


class HealthyAlternative(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    reason: str


class AnalysisRecord(BaseModel):
    """
    Validated label analysis for one submitted image.

    Frozen once built: consistency rules hand back a new record
    (see consistency.rules) instead of editing this one.
    """
    model_config = ConfigDict(frozen=True)

    product_name: str
    detected_ingredients_text: str
    health_score: int = Field(..., description="0-100 once consistency rules have run")
    halal_analysis: HalalAnalysis
    allergen_list: Tuple[str, ...] = ()
    nutrition_summary: NutritionSummary
    alerts: Tuple[Alert, ...] = ()
    healthy_alternatives: Tuple[HealthyAlternative, ...] = ()
    brief_conclusion: str = ""

    @field_validator("health_score", mode="before")
    @classmethod
    def check_integral_score(cls, v):
        v = _check_json_number(v)
        if isinstance(v, float):
            if not v.is_integer():
                raise ValueError(f"health_score must be a whole number, got {v}")
            return int(v)
        return v
