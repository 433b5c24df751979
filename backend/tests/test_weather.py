"""Tests for the Amap weather client."""

import httpx
import pytest

from blessing_api.models.request import WeatherType
from blessing_api.services.weather import WeatherService
from blessing_api.utils.exceptions import WeatherServiceError

LIVE_PAYLOAD = {
    "status": "1",
    "count": "1",
    "info": "OK",
    "infocode": "10000",
    "lives": [
        {
            "province": "广东",
            "city": "广州市",
            "adcode": "440100",
            "weather": "晴",
            "temperature": "25",
            "winddirection": "东南",
            "windpower": "≤3",
            "humidity": "60",
            "reporttime": "2025-03-01 10:00:00",
        }
    ],
}

FORECAST_PAYLOAD = {
    "status": "1",
    "count": "1",
    "info": "OK",
    "infocode": "10000",
    "forecasts": [
        {
            "city": "深圳市",
            "adcode": "440300",
            "reporttime": "2025-03-01 11:00:00",
            "casts": [
                {
                    "date": "2025-03-01",
                    "week": "6",
                    "dayweather": "多云",
                    "nightweather": "小雨",
                    "daytemp": "26",
                    "nighttemp": "19",
                    "daywind": "南",
                    "nightwind": "南",
                    "daypower": "1-3",
                    "nightpower": "1-3",
                }
            ],
        }
    ],
}


def _service(handler, api_key="amap-key") -> WeatherService:
    return WeatherService(api_key=api_key, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_live_weather_is_normalized():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["path"] = request.url.path
        return httpx.Response(200, json=LIVE_PAYLOAD)

    data = await _service(handler).fetch(WeatherType.LIVE)

    assert seen["path"] == "/v3/weather/weatherInfo"
    assert seen["params"] == {"key": "amap-key", "city": "440100", "extensions": "base"}
    assert data.city == "广州市"
    assert data.report_time == "2025-03-01 10:00:00"
    assert data.live.temperature == 25
    assert data.live.humidity == 60
    assert data.live.wind_direction == "东南"
    assert data.forecast is None


@pytest.mark.asyncio
async def test_forecast_is_normalized():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=FORECAST_PAYLOAD)

    data = await _service(handler).fetch(WeatherType.FORECAST, city="440300")

    assert seen["params"]["extensions"] == "all"
    assert seen["params"]["city"] == "440300"
    assert data.type == WeatherType.FORECAST
    day = data.forecast[0]
    assert (day.day_temp, day.night_temp) == (26, 19)
    assert day.night_weather == "小雨"
    assert day.day_humidity is None


@pytest.mark.asyncio
async def test_amap_error_status_raises():
    def handler(request):
        return httpx.Response(200, json={"status": "0", "info": "INVALID_USER_KEY", "infocode": "10001"})

    with pytest.raises(WeatherServiceError) as exc_info:
        await _service(handler).fetch(WeatherType.LIVE)
    assert exc_info.value.message == (
        "Weather service unavailable: Amap API error: INVALID_USER_KEY (status code: 10001)"
    )


@pytest.mark.asyncio
async def test_http_failure_raises():
    def handler(request):
        return httpx.Response(502)

    with pytest.raises(WeatherServiceError) as exc_info:
        await _service(handler).fetch(WeatherType.LIVE)
    assert exc_info.value.message.startswith("Weather service unavailable: ")


@pytest.mark.asyncio
async def test_empty_result_raises():
    def handler(request):
        return httpx.Response(200, json={"status": "1", "lives": []})

    with pytest.raises(WeatherServiceError):
        await _service(handler).fetch(WeatherType.LIVE)


@pytest.mark.asyncio
async def test_missing_key_raises_without_request():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(WeatherServiceError) as exc_info:
        await _service(handler, api_key=None).fetch(WeatherType.LIVE)
    assert "AMAP_KEY" in exc_info.value.message
