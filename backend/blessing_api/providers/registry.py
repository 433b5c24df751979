import logging
from typing import Dict, Optional, Type

from blessing_api.config import Settings
from blessing_api.providers.base import BaseProvider
from blessing_api.providers.deepseek import DeepSeekProvider
from blessing_api.providers.openai import OpenAIProvider

logger = logging.getLogger(__name__)


# Mapping of provider types to their classes
PROVIDER_CLASSES: Dict[str, Type[BaseProvider]] = {
    "deepseek": DeepSeekProvider,
    "openai": OpenAIProvider,
}


class ProviderRegistry:
    """Holds the generation provider selected by configuration"""

    def __init__(self):
        self._provider: Optional[BaseProvider] = None

    def initialize(self, settings: Settings) -> BaseProvider:
        """Build the configured provider, replacing any previous one."""
        provider_class = PROVIDER_CLASSES.get(settings.llm_provider)
        if not provider_class:
            raise ValueError(f"Unknown provider type '{settings.llm_provider}'")

        if provider_class is DeepSeekProvider:
            provider = DeepSeekProvider(
                api_key=settings.deepseek_api_key,
                model=settings.deepseek_model,
                temperature=settings.generation_temperature,
                timeout=float(settings.provider_timeout),
                base_url=settings.deepseek_base_url,
            )
        else:
            provider = provider_class(
                api_key=settings.openai_api_key,
                model=settings.openai_model,
                temperature=settings.generation_temperature,
                timeout=float(settings.provider_timeout),
            )

        if not provider.is_configured():
            logger.warning(f"Provider '{provider.name}' has no API key; generation requests will fail")
        self._provider = provider
        return provider

    def register(self, provider: BaseProvider) -> None:
        """Install an already-built provider (used by tests and embedding apps)."""
        self._provider = provider

    def get_provider(self) -> BaseProvider:
        if self._provider is None:
            raise RuntimeError("Provider registry has not been initialized")
        return self._provider

    @property
    def provider_name(self) -> Optional[str]:
        return self._provider.name if self._provider else None

    async def cleanup(self):
        """Close the active provider's HTTP client."""
        if self._provider is None:
            return
        try:
            await self._provider.cleanup()
        except Exception as e:
            logger.warning(f"Error cleaning up provider {self._provider.name}: {e}")
        self._provider = None


# Singleton instance
provider_registry = ProviderRegistry()
