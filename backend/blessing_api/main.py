import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from blessing_api.config import settings

logger = logging.getLogger(__name__)
from blessing_api.routes import blessing, health, weather
from blessing_api.providers.registry import provider_registry
from blessing_api.services.weather import WeatherService


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle events"""
    # Startup: build the generation provider and the weather client from settings
    provider = provider_registry.initialize(settings)
    logger.info(f"Generation provider: {provider.name} ({provider.model})")

    app.state.weather_service = WeatherService(
        api_key=settings.amap_key,
        base_url=settings.amap_base_url,
        default_city=settings.default_city,
        timeout=float(settings.weather_timeout),
    )
    if not app.state.weather_service.is_configured():
        logger.warning("AMAP_KEY is not set; /api/weather requests will fail")

    yield

    # Shutdown: Cleanup resources
    await provider_registry.cleanup()
    await app.state.weather_service.cleanup()


app = FastAPI(
    title="Blessing Backend API",
    description="Greeting generation relayed from an LLM provider with SSE streaming",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware (useful for dev)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(blessing.router, prefix="/api", tags=["blessing"])
app.include_router(weather.router, prefix="/api", tags=["weather"])


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "blessing_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
