"""
Request validation for greeting generation.

Runs to completion before any response is started: once an event stream
has begun, the HTTP status can no longer change.
"""

import logging
from typing import Mapping, Optional

from blessing_api.models.request import REQUIRED_FIELDS, BlessingRequest, ScenarioType
from blessing_api.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

SCENARIO_PARAM = "type"
OPTIONAL_FIELDS = ["age"]


def validate_blessing_params(params: Mapping[str, Optional[str]]) -> BlessingRequest:
    """
    Validate raw query parameters and build a BlessingRequest.

    Args:
        params: Raw parameter mapping; the scenario is read from ``type``.

    Returns:
        The validated, immutable request.

    Raises:
        ValidationError: Unknown scenario, or one or more required fields
            missing. Every missing field is reported, not just the first.
    """
    raw_scenario = params.get(SCENARIO_PARAM)
    try:
        scenario = ScenarioType(raw_scenario)
    except ValueError:
        logger.info(f"Rejected blessing request with scenario {raw_scenario!r}")
        raise ValidationError("Invalid scenario type")

    required = REQUIRED_FIELDS[scenario]
    missing = [field for field in required if not params.get(field)]
    if missing:
        logger.info(f"Rejected {scenario.value} request, missing: {', '.join(missing)}")
        raise ValidationError(missing_fields=missing)

    fields = {
        field: params.get(field)
        for field in required + OPTIONAL_FIELDS
        if params.get(field)
    }
    return BlessingRequest(scenario=scenario, **fields)
