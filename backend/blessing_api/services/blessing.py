"""
Greeting generation on top of the configured provider.
"""

import logging
from typing import AsyncIterator

from blessing_api.models.request import BlessingRequest
from blessing_api.models.response import BlessingResult
from blessing_api.providers.base import BaseProvider
from blessing_api.services.prompts import SYSTEM_PROMPT, build_prompt
from blessing_api.utils.exceptions import UpstreamError, normalize_error
from blessing_api.utils.time import isoformat_utc

logger = logging.getLogger(__name__)


class BlessingService:
    """Builds prompts for validated requests and drives the provider."""

    def __init__(self, provider: BaseProvider):
        self.provider = provider

    def stream(self, request: BlessingRequest) -> AsyncIterator[str]:
        """Lazy fragment sequence for the request. Nothing is sent until iterated."""
        prompt = build_prompt(request)
        logger.debug(f"Streaming {request.scenario.value} blessing via {self.provider.name}")
        return self.provider.stream_completion(SYSTEM_PROMPT, prompt)

    async def generate(self, request: BlessingRequest) -> BlessingResult:
        """
        Non-streaming path: consume the same fragment sequence to completion.

        Raises:
            UpstreamError: Any failure while collecting; no partial text is returned.
        """
        parts = []
        try:
            async for fragment in self.stream(request):
                parts.append(fragment)
        except UpstreamError:
            raise
        except Exception as e:
            logger.exception(f"Blessing generation failed for {request.scenario.value}")
            raise UpstreamError(normalize_error(e)) from e

        return BlessingResult(
            type=request.scenario,
            content="".join(parts),
            generated_at=isoformat_utc(),
        )
