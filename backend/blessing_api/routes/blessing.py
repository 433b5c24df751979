"""
Greeting generation routes.

GET /api/blessing streams the greeting as server-sent events by default;
`stream=false` returns the complete text in one JSON envelope.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from blessing_api.config import Settings
from blessing_api.dependencies import get_blessing_service, get_settings
from blessing_api.services.blessing import BlessingService
from blessing_api.services.relay import SSE_HEADERS, SSE_MEDIA_TYPE, RelaySession
from blessing_api.services.validator import validate_blessing_params
from blessing_api.utils.exceptions import (
    UpstreamError,
    ValidationError,
    bad_request,
    internal_error,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_CODE = "BLESSING_API_ERROR"


@router.get("/blessing")
async def blessing(
    request: Request,
    stream: bool = True,
    service: BlessingService = Depends(get_blessing_service),
    config: Settings = Depends(get_settings),
):
    """
    GET /api/blessing?type=weather|birthday|mbti&...

    Required parameters per scenario:
    - weather: temp, weather
    - birthday: name (age optional)
    - mbti: mbtiType, relationship

    Validation runs before anything is streamed; failures are a 400
    `{success: false, error}` listing every missing parameter.

    Streaming response events:
    - data: {"text": "..."} for each generated fragment
    - ":" comments as keep-alive while generation is slow
    - data: { text: [DONE] } on completion
    - event: error / data: {"message": "..."} on upstream failure
    """
    try:
        blessing_request = validate_blessing_params(request.query_params)
    except ValidationError as e:
        return bad_request(e.message)

    if not stream:
        try:
            result = await service.generate(blessing_request)
        except UpstreamError as e:
            return internal_error(e.message, code=ERROR_CODE)
        return {"success": True, "data": result.model_dump(mode="json", by_alias=True)}

    session = RelaySession(
        service.stream(blessing_request),
        heartbeat_interval=config.heartbeat_interval,
        is_disconnected=request.is_disconnected,
    )
    return StreamingResponse(
        session.frames(),
        media_type=SSE_MEDIA_TYPE,
        headers=SSE_HEADERS,
    )
