"""Tests for blessing request validation."""

import pytest

from blessing_api.models.request import ScenarioType
from blessing_api.services.validator import validate_blessing_params
from blessing_api.utils.exceptions import ValidationError


def test_weather_scenario_passes():
    request = validate_blessing_params({"type": "weather", "temp": "25", "weather": "晴"})
    assert request.scenario == ScenarioType.WEATHER
    assert request.temp == "25"
    assert request.weather == "晴"


def test_weather_missing_condition_is_named():
    with pytest.raises(ValidationError) as exc_info:
        validate_blessing_params({"type": "weather", "temp": "25"})
    assert exc_info.value.missing_fields == ["weather"]
    assert "weather" in exc_info.value.message


def test_all_missing_fields_are_reported():
    with pytest.raises(ValidationError) as exc_info:
        validate_blessing_params({"type": "mbti"})
    assert exc_info.value.missing_fields == ["mbtiType", "relationship"]
    assert exc_info.value.message == "Missing required parameters: mbtiType, relationship"


def test_empty_value_counts_as_missing():
    with pytest.raises(ValidationError) as exc_info:
        validate_blessing_params({"type": "birthday", "name": ""})
    assert exc_info.value.missing_fields == ["name"]


@pytest.mark.parametrize("scenario", [None, "", "holiday", "WEATHER"])
def test_unknown_scenario_rejected(scenario):
    with pytest.raises(ValidationError) as exc_info:
        validate_blessing_params({"type": scenario, "temp": "1", "weather": "雨"})
    assert exc_info.value.message == "Invalid scenario type"
    assert exc_info.value.missing_fields == []


def test_birthday_keeps_optional_age():
    request = validate_blessing_params({"type": "birthday", "name": "小明", "age": "18"})
    assert request.name == "小明"
    assert request.age == "18"


def test_mbti_fields_and_request_is_frozen():
    request = validate_blessing_params(
        {"type": "mbti", "mbtiType": "INTJ", "relationship": "朋友", "name": "ignored"}
    )
    assert request.mbti_type == "INTJ"
    assert request.relationship == "朋友"
    assert request.name is None
    with pytest.raises(Exception):
        request.relationship = "同事"
