from typing import Optional

from fastapi import APIRouter, Depends, Query

from blessing_api.models.request import WeatherType
from blessing_api.services.weather import WeatherService
from blessing_api.dependencies import get_weather_service
from blessing_api.utils.exceptions import WeatherServiceError, bad_request, internal_error

router = APIRouter()

ERROR_CODE = "WEATHER_API_ERROR"


@router.get("/weather")
async def weather(
    weather_type: Optional[str] = Query(default=None, alias="type"),
    city: Optional[str] = None,
    service: WeatherService = Depends(get_weather_service),
):
    """
    GET /api/weather?type=live|forecast&city=<adcode>

    `type` is required; `city` defaults to the configured city code.
    """
    try:
        kind = WeatherType(weather_type)
    except ValueError:
        return bad_request("Missing or invalid type parameter (must be live or forecast)")

    try:
        data = await service.fetch(kind, city or None)
    except WeatherServiceError as e:
        return internal_error(e.message, code=ERROR_CODE)
    return {"success": True, "data": data.model_dump(mode="json", by_alias=True, exclude_none=True)}
