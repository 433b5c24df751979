from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from blessing_api.models.request import ScenarioType, WeatherType


class BlessingResult(BaseModel):
    """Complete (non-streamed) greeting"""

    model_config = ConfigDict(populate_by_name=True)

    type: ScenarioType
    content: str
    generated_at: str = Field(alias="generatedAt")


class LiveWeather(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: int
    weather: str
    wind_direction: str = Field(alias="windDirection")
    wind_power: str = Field(alias="windPower")
    humidity: int


class ForecastDay(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    week: str
    day_weather: str = Field(alias="dayWeather")
    night_weather: str = Field(alias="nightWeather")
    day_temp: int = Field(alias="dayTemp")
    night_temp: int = Field(alias="nightTemp")
    # Not every Amap forecast payload carries humidity
    day_humidity: Optional[int] = Field(default=None, alias="dayHumidity")
    night_humidity: Optional[int] = Field(default=None, alias="nightHumidity")


class WeatherData(BaseModel):
    """Weather report normalized from the Amap payload"""

    model_config = ConfigDict(populate_by_name=True)

    type: WeatherType
    city: str
    report_time: str = Field(alias="reportTime")
    live: Optional[LiveWeather] = None
    forecast: Optional[List[ForecastDay]] = None
