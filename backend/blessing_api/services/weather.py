"""
Amap (Gaode) weather client.

Fetches live conditions or a multi-day forecast for a city code and
normalizes the payload into WeatherData. Amap returns every value as a
string; numeric fields are parsed to integers here.
"""

import logging
from typing import Optional

import httpx

from blessing_api.models.request import WeatherType
from blessing_api.models.response import ForecastDay, LiveWeather, WeatherData
from blessing_api.utils.exceptions import WeatherServiceError

logger = logging.getLogger(__name__)

WEATHER_ENDPOINT = "/weather/weatherInfo"
ERROR_PREFIX = "Weather service unavailable: "
DEFAULT_CITY = "440100"  # Guangzhou


def _to_int(value: Optional[str]) -> int:
    """Parse an Amap numeric string; tolerates decimals like "23.0"."""
    if value is None or value == "":
        raise ValueError("missing numeric value")
    return int(float(value))


def _to_optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    return _to_int(value)


class WeatherService:
    """Async client for the Amap weatherInfo endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://restapi.amap.com/v3",
        default_city: str = DEFAULT_CITY,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.default_city = default_city
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def fetch(self, weather_type: WeatherType, city: Optional[str] = None) -> WeatherData:
        """
        Fetch and normalize weather data.

        Args:
            weather_type: live conditions or forecast
            city: Amap adcode; defaults to the configured city

        Raises:
            WeatherServiceError: missing key, HTTP failure, or an error/empty payload
        """
        params = {
            "key": self.api_key,
            "city": city or self.default_city,
            "extensions": "base" if weather_type == WeatherType.LIVE else "all",
        }

        try:
            if not self.is_configured():
                raise WeatherServiceError("Amap API key (AMAP_KEY) is not configured")

            response = await self._client.get(WEATHER_ENDPOINT, params=params)
            response.raise_for_status()
            data = response.json()

            if data.get("status") != "1":
                raise WeatherServiceError(
                    f"Amap API error: {data.get('info')} (status code: {data.get('infocode')})"
                )

            if weather_type == WeatherType.LIVE:
                return self._parse_live(data)
            return self._parse_forecast(data)

        except WeatherServiceError as e:
            logger.error(f"Weather fetch failed: {e.message}")
            raise WeatherServiceError(f"{ERROR_PREFIX}{e.message}") from e
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Weather fetch failed: {e!r}")
            raise WeatherServiceError(f"{ERROR_PREFIX}{e}") from e

    def _parse_live(self, data: dict) -> WeatherData:
        lives = data.get("lives") or []
        if not lives:
            raise WeatherServiceError("no live weather data in response")
        live = lives[0]
        return WeatherData(
            type=WeatherType.LIVE,
            city=live["city"],
            report_time=live["reporttime"],
            live=LiveWeather(
                temperature=_to_int(live.get("temperature")),
                weather=live["weather"],
                wind_direction=live.get("winddirection", ""),
                wind_power=live.get("windpower", ""),
                humidity=_to_int(live.get("humidity")),
            ),
        )

    def _parse_forecast(self, data: dict) -> WeatherData:
        forecasts = data.get("forecasts") or []
        if not forecasts:
            raise WeatherServiceError("no forecast data in response")
        forecast = forecasts[0]
        return WeatherData(
            type=WeatherType.FORECAST,
            city=forecast["city"],
            report_time=forecast["reporttime"],
            forecast=[
                ForecastDay(
                    date=cast["date"],
                    week=cast["week"],
                    day_weather=cast["dayweather"],
                    night_weather=cast["nightweather"],
                    day_temp=_to_int(cast.get("daytemp")),
                    night_temp=_to_int(cast.get("nighttemp")),
                    day_humidity=_to_optional_int(cast.get("dayhumidity")),
                    night_humidity=_to_optional_int(cast.get("nighthumidity")),
                )
                for cast in forecast.get("casts", [])
            ],
        )

    async def cleanup(self):
        """Cleanup HTTP client resources."""
        await self._client.aclose()
