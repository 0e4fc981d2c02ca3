import pytest

from stress_detector.exceptions import ErrorKind
from stress_detector.response_contract import (
    RESPONSE_SCHEMA,
    AnalysisResult,
    ClassificationLevel,
    validate_reply,
)


def test_valid_reply_is_accepted(valid_reply):
    checked = validate_reply(valid_reply)
    assert checked["ok"] is True
    result = checked["result"]
    assert isinstance(result, AnalysisResult)
    assert result.level is ClassificationLevel.HIGH
    assert result.confidence == 87
    assert result.keywords[1].phrase == "stressed"
    assert result.keywords[1].intensity == 9
    assert result.reasoning.emotional_tone == -60


def test_to_dict_returns_wire_form(valid_reply):
    result = validate_reply(valid_reply)["result"]
    assert result.to_dict() == valid_reply


@pytest.mark.parametrize("level", ["Extreme Stress", "high", "", None, 3, ["High Stress"]])
def test_unknown_level_is_rejected(valid_reply, level):
    valid_reply["stressLevel"] = level
    checked = validate_reply(valid_reply)
    assert checked["ok"] is False
    assert checked["kind"] is ErrorKind.INVALID_CLASSIFICATION


def test_missing_level_is_rejected(valid_reply):
    del valid_reply["stressLevel"]
    assert validate_reply(valid_reply)["kind"] is ErrorKind.INVALID_CLASSIFICATION


def test_missing_reasoning_object(valid_reply):
    del valid_reply["reasoningScores"]
    assert validate_reply(valid_reply)["kind"] is ErrorKind.MISSING_REASONING


@pytest.mark.parametrize("field", ["negativeWordScore", "emotionalTone", "cognitiveOverloadIndex"])
def test_missing_reasoning_field(valid_reply, field):
    del valid_reply["reasoningScores"][field]
    checked = validate_reply(valid_reply)
    assert checked["kind"] is ErrorKind.MISSING_REASONING
    assert field in checked["error"]


def test_wrong_typed_reasoning_field(valid_reply):
    valid_reply["reasoningScores"]["emotionalTone"] = "negative"
    assert validate_reply(valid_reply)["kind"] is ErrorKind.MISSING_REASONING


def test_classification_checked_before_reasoning(valid_reply):
    valid_reply["stressLevel"] = "Unknown"
    del valid_reply["reasoningScores"]
    assert validate_reply(valid_reply)["kind"] is ErrorKind.INVALID_CLASSIFICATION


def test_out_of_range_values_pass_through_unchanged(valid_reply):
    valid_reply["confidenceScore"] = 140
    valid_reply["stressfulKeywords"][0]["intensity"] = 15
    valid_reply["reasoningScores"]["emotionalTone"] = -250
    result = validate_reply(valid_reply)["result"]
    assert result.confidence == 140
    assert result.keywords[0].intensity == 15
    assert result.reasoning.emotional_tone == -250


def test_empty_suggestions_accepted_for_high_level(valid_reply):
    valid_reply["suggestions"] = []
    checked = validate_reply(valid_reply)
    assert checked["ok"] is True
    assert checked["result"].suggestions == ()


def test_non_object_reply_is_malformed():
    assert validate_reply(["High Stress"])["kind"] is ErrorKind.MALFORMED_REPLY


@pytest.mark.parametrize("field, value", [
    ("confidenceScore", "high"),
    ("explanation", ""),
    ("explanation", None),
    ("stressfulKeywords", "overwhelmed"),
    ("stressfulKeywords", [{"word": "", "intensity": 3}]),
    ("stressfulKeywords", [{"word": "tired"}]),
    ("suggestions", "rest more"),
])
def test_wrong_typed_fields_are_malformed(valid_reply, field, value):
    valid_reply[field] = value
    assert validate_reply(valid_reply)["kind"] is ErrorKind.MALFORMED_REPLY


def test_schema_enumerates_exactly_the_levels():
    levels = RESPONSE_SCHEMA["properties"]["stressLevel"]["enum"]
    assert levels == ["Low Stress", "Medium Stress", "High Stress"]
    assert set(RESPONSE_SCHEMA["required"]) == set(RESPONSE_SCHEMA["properties"])
    assert RESPONSE_SCHEMA["properties"]["reasoningScores"]["required"] == [
        "negativeWordScore", "emotionalTone", "cognitiveOverloadIndex"
    ]


def test_level_ordering():
    assert ClassificationLevel.LOW.rank < ClassificationLevel.MEDIUM.rank < ClassificationLevel.HIGH.rank
    assert ClassificationLevel.MEDIUM.short_label == "Medium"
