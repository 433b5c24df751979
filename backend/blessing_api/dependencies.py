"""
FastAPI dependencies for the shared services.

Routes never reach for module globals directly, so tests can swap any of
these through `app.dependency_overrides`.
"""

from fastapi import Request

from blessing_api.config import Settings, settings
from blessing_api.providers.registry import provider_registry
from blessing_api.services.blessing import BlessingService
from blessing_api.services.weather import WeatherService


def get_settings() -> Settings:
    return settings


def get_blessing_service() -> BlessingService:
    return BlessingService(provider_registry.get_provider())


def get_weather_service(request: Request) -> WeatherService:
    return request.app.state.weather_service
