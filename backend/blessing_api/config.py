import logging
import sys

from pydantic_settings import BaseSettings
from typing import Optional


def setup_logging(level: int = logging.INFO):
    """Configure application logging."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# Initialize logging on import
setup_logging()

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Generation provider (server-side only)
    llm_provider: str = "deepseek"
    deepseek_api_key: Optional[str] = None
    deepseek_base_url: str = "https://api.deepseek.com/v1"
    deepseek_model: str = "deepseek-reasoner"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4.1"
    generation_temperature: float = 1.5

    # Amap (Gaode) weather provider
    amap_key: Optional[str] = None
    amap_base_url: str = "https://restapi.amap.com/v3"
    default_city: str = "440100"

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Timeout settings (seconds)
    provider_timeout: int = 60
    weather_timeout: int = 10

    # Interval between SSE keep-alive comments (seconds)
    heartbeat_interval: float = 5.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
