import json

import pytest

from analysis.errors import ExtractionFailure, SchemaViolation
from analysis.models import AlertCategory, HalalStatus, Severity
from analysis.validator import format_path, recover_and_validate, validate_record


def test_valid_payload_builds_record(payload):
    record = validate_record(payload)
    assert record.product_name == "Crispy Potato Chips"
    assert record.health_score == 62
    assert record.halal_analysis.status is HalalStatus.HALAL_SAFE
    assert record.alerts[0].category is AlertCategory.HEALTH
    assert record.alerts[0].severity is Severity.MEDIUM
    assert record.allergen_list == ("Soy",)


def test_optional_collections_default(payload):
    for key in ("allergen_list", "alerts", "healthy_alternatives", "brief_conclusion"):
        del payload[key]
    record = validate_record(payload)
    assert record.allergen_list == ()
    assert record.alerts == ()
    assert record.healthy_alternatives == ()
    assert record.brief_conclusion == ""


def test_missing_health_score_names_field(payload):
    del payload["health_score"]
    with pytest.raises(SchemaViolation) as exc:
        validate_record(payload)
    assert exc.value.path == "health_score"
    assert "missing" in exc.value.reason


@pytest.mark.parametrize("parent,key", [
    ("halal_analysis", "status"),
    ("halal_analysis", "reason"),
    ("nutrition_summary", "sugar_g"),
    ("nutrition_summary", "sugar_teaspoons"),
])
def test_missing_nested_field_names_dotted_path(payload, parent, key):
    del payload[parent][key]
    with pytest.raises(SchemaViolation) as exc:
        validate_record(payload)
    assert exc.value.path == f"{parent}.{key}"


def test_unknown_halal_status_rejected(payload):
    payload["halal_analysis"]["status"] = "Probably Fine"
    with pytest.raises(SchemaViolation) as exc:
        validate_record(payload)
    assert exc.value.path == "halal_analysis.status"


def test_status_match_is_exact(payload):
    payload["halal_analysis"]["status"] = "Syubhat"
    with pytest.raises(SchemaViolation):
        validate_record(payload)

    payload["halal_analysis"]["status"] = "Syubhat (Doubtful)"
    assert validate_record(payload).halal_analysis.status is HalalStatus.SYUBHAT


def test_unknown_alert_severity_reports_index(payload):
    payload["alerts"].append({"name": "x", "category": "Health", "risk": "y", "severity": "Critical"})
    with pytest.raises(SchemaViolation) as exc:
        validate_record(payload)
    assert exc.value.path == "alerts[1].severity"


@pytest.mark.parametrize("score", ["80", True, None, 80.5])
def test_health_score_not_coerced(payload, score):
    payload["health_score"] = score
    with pytest.raises(SchemaViolation) as exc:
        validate_record(payload)
    assert exc.value.path == "health_score"


def test_integral_float_score_accepted(payload):
    payload["health_score"] = 80.0
    assert validate_record(payload).health_score == 80


def test_out_of_range_score_not_clamped_by_validation(payload):
    payload["health_score"] = 140
    assert validate_record(payload).health_score == 140


def test_negative_sugar_rejected(payload):
    payload["nutrition_summary"]["sugar_g"] = -1
    with pytest.raises(SchemaViolation) as exc:
        validate_record(payload)
    assert exc.value.path == "nutrition_summary.sugar_g"


def test_null_product_name_rejected(payload):
    payload["product_name"] = None
    with pytest.raises(SchemaViolation) as exc:
        validate_record(payload)
    assert exc.value.path == "product_name"


def test_top_level_must_be_object():
    with pytest.raises(SchemaViolation) as exc:
        validate_record([1, 2, 3])
    assert exc.value.path == "$"


def test_extra_model_keys_ignored(payload):
    payload["meta_agent_logs"] = {"visual_agent": "saw a bag of chips"}
    record = validate_record(payload)
    assert "meta_agent_logs" not in record.model_dump()


def test_format_path():
    assert format_path(("alerts", 0, "category")) == "alerts[0].category"
    assert format_path(()) == "$"


def test_recover_and_validate_from_prose(payload):
    raw = "Sure! Here you go:\n```json\n" + json.dumps(payload) + "\n```"
    assert recover_and_validate(raw).product_name == "Crispy Potato Chips"


def test_recover_and_validate_propagates_extraction_failure():
    with pytest.raises(ExtractionFailure):
        recover_and_validate("I cannot read this label")


def test_recover_and_validate_deeply_nested_reply():
    with pytest.raises(ExtractionFailure):
        recover_and_validate('{"a":' * 100000 + "1" + "}" * 100000)
