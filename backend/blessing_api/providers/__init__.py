from blessing_api.providers.base import BaseProvider, OpenAIFormatProvider
from blessing_api.providers.registry import provider_registry

__all__ = ["BaseProvider", "OpenAIFormatProvider", "provider_registry"]
