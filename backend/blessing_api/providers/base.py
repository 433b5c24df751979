import logging
from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional

import httpx
import orjson

from blessing_api.utils.exceptions import UpstreamError, normalize_error

logger = logging.getLogger(__name__)

# Constants
SSE_DATA_PREFIX = "data: "
SSE_DONE_SIGNAL = "data: [DONE]"
DEFAULT_TIMEOUT = 60.0


class BaseProvider(ABC):
    """Abstract base class for text generation providers"""

    name: str  # Provider identifier: "deepseek", "openai"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        temperature: float = 1.0,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    @abstractmethod
    def stream_completion(
        self, system_prompt: str, prompt: str
    ) -> AsyncIterator[str]:
        """
        Stream a completion as non-empty text fragments, in order.

        The sequence is finite and cannot be restarted. Any failure is
        raised as UpstreamError, possibly after some fragments were yielded.
        """

    async def complete(self, system_prompt: str, prompt: str) -> str:
        """Drive the stream to completion and return the full text."""
        parts = []
        async for fragment in self.stream_completion(system_prompt, prompt):
            parts.append(fragment)
        return "".join(parts)

    async def cleanup(self):
        """Cleanup HTTP client resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def is_configured(self) -> bool:
        """Check if provider has valid API key"""
        return bool(self.api_key)

    def _log_json_error(self, error: Exception) -> None:
        """Log JSON parse error at debug level."""
        logger.debug(f"JSON parse error in {self.name}: {error}")


class OpenAIFormatProvider(BaseProvider):
    """Base class for providers using OpenAI-compatible API format.

    Subclasses only need to set `name` and `base_url` class attributes.
    """

    name: str = ""  # Override in subclass
    base_url: str = ""  # Override in subclass

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        temperature: float = 1.0,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(api_key, model, temperature, timeout)
        if base_url:
            self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
            transport=transport,
        )

    def _extract_content(self, data: dict) -> str | None:
        """Extract text content from an OpenAI-format stream chunk."""
        choices = data.get("choices") or []
        if not choices:
            return None
        # Reasoning models also stream `reasoning_content`; only the answer is relayed
        return (choices[0].get("delta") or {}).get("content")

    async def stream_completion(
        self, system_prompt: str, prompt: str
    ) -> AsyncIterator[str]:
        """Stream chat completion using OpenAI API format."""
        if not self.is_configured():
            raise UpstreamError(f"Provider '{self.name}' is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "stream": True,
            "temperature": self.temperature,
        }

        try:
            async with self._client.stream(
                "POST", "/chat/completions", json=payload
            ) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line.startswith(SSE_DATA_PREFIX):
                        continue
                    if line == SSE_DONE_SIGNAL:
                        return
                    try:
                        data = orjson.loads(line[len(SSE_DATA_PREFIX):])
                    except orjson.JSONDecodeError as e:
                        self._log_json_error(e)
                        continue
                    content = self._extract_content(data)
                    if content:
                        yield content
        except httpx.HTTPStatusError as e:
            logger.warning(f"{self.name} returned HTTP {e.response.status_code}")
            raise UpstreamError(normalize_error(e), status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.warning(f"{self.name} request failed: {e!r}")
            raise UpstreamError(normalize_error(e)) from e
