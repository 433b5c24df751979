from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ScenarioType(str, Enum):
    """Greeting scenarios the generator knows how to prompt for"""
    WEATHER = "weather"
    BIRTHDAY = "birthday"
    MBTI = "mbti"


# Fields that must be present and non-empty for each scenario
REQUIRED_FIELDS: Dict[ScenarioType, List[str]] = {
    ScenarioType.WEATHER: ["temp", "weather"],
    ScenarioType.BIRTHDAY: ["name"],
    ScenarioType.MBTI: ["mbtiType", "relationship"],
}


class BlessingRequest(BaseModel):
    """A validated generation request. Immutable once built."""
    scenario: ScenarioType
    temp: Optional[str] = None
    weather: Optional[str] = None
    name: Optional[str] = None
    age: Optional[str] = None
    mbti_type: Optional[str] = Field(default=None, alias="mbtiType")
    relationship: Optional[str] = None

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"scenario": "weather", "temp": "25", "weather": "晴"},
                {"scenario": "birthday", "name": "小明", "age": "18"},
                {"scenario": "mbti", "mbtiType": "INTJ", "relationship": "朋友"},
            ]
        },
    )


class WeatherType(str, Enum):
    LIVE = "live"
    FORECAST = "forecast"
