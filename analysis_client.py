import logging
from typing import Any, Dict, List, Optional, Union

import requests
from pydantic import ValidationError as SchemaValidationError

from errors import AnalysisServiceError
from schemas import CTA, CampaignAnalysisResult, CampaignGoalDetails

logger = logging.getLogger(__name__)

# (connect, read) - the read side waits on the oracle
TIMEOUT = (10, 180)
ANALYZE_PATH = "/api/analyze"


def _as_payload(value):
    if isinstance(value, (CTA, CampaignGoalDetails)):
        return value.model_dump(by_alias=True, exclude_none=True)
    return value


def _failure(details: str, status_code: Optional[int] = None) -> AnalysisServiceError:
    return AnalysisServiceError(
        "Failed to communicate with the analysis service. Please try again later. "
        f"Details: {details}",
        status_code=status_code,
    )


def analyze_campaigns_remote(
    base_url: str,
    campaigns: List[str],
    keywords: List[str],
    ctas: List[Union[CTA, Dict[str, Any]]],
    objective: str,
    details: Union[CampaignGoalDetails, Dict[str, Any]],
    timeout=TIMEOUT,
    session: Optional[requests.Session] = None,
) -> List[CampaignAnalysisResult]:
    """POST the inputs to a running analyzer and return its result records."""
    url = base_url.rstrip("/") + ANALYZE_PATH
    payload = {
        "campaigns": campaigns,
        "keywords": keywords,
        "ctas": [_as_payload(cta) for cta in ctas],
        "objective": objective,
        "details": _as_payload(details),
    }
    http = session or requests

    try:
        response = http.post(url, json=payload, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error(f"Error calling backend API {url}: {e}")
        raise _failure(str(e))

    if not response.ok:
        try:
            message = response.json().get("error")
        except (ValueError, AttributeError):
            message = None
        message = message or f"Server responded with status: {response.status_code}"
        logger.error(f"Backend API error {response.status_code}: {message}")
        raise _failure(message, status_code=response.status_code)

    try:
        return [CampaignAnalysisResult.model_validate(item) for item in response.json()]
    except (ValueError, TypeError, SchemaValidationError) as e:
        raise _failure(f"Malformed response: {e}", status_code=response.status_code)
