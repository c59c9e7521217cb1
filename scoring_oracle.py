import logging
from typing import Any, Dict, List, Optional

import openai
from openai import OpenAI

from errors import ConfigurationError, OracleResponseError, OracleTransportError
from prompt_builder import SYSTEM_PROMPT
from schemas import COMPONENT_SCORE_FIELDS
from utils import parse_llm_json

logger = logging.getLogger(__name__)

# Output contract declared to the oracle for each campaign message
ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "campaignMessage": {"type": "string"},
        **{field: {"type": "number"} for field in COMPONENT_SCORE_FIELDS},
        "weightedCampaignConfidenceScore": {"type": "number"},
        "recommendation": {"type": "string"},
    },
    "required": ["campaignMessage", *COMPONENT_SCORE_FIELDS, "weightedCampaignConfidenceScore", "recommendation"],
    "additionalProperties": False,
}

RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "campaign_analysis",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "results": {"type": "array", "items": ANALYSIS_SCHEMA},
            },
            "required": ["results"],
            "additionalProperties": False,
        },
    },
}


class ScoringOracle:
    """
    Adapter around the OpenAI chat completions API.
    Configuration is passed in at construction; nothing is read from the
    environment here.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        timeout: float = 120,
        client: Optional[OpenAI] = None,
    ):
        if client is None:
            if not api_key:
                raise ConfigurationError("OPENAI_API_KEY environment variable not set on the server.")
            # No retries: a failure surfaces to the caller immediately
            client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.client = client
        self.model = model
        self.temperature = temperature

    def score(self, prompt: str) -> List[Dict[str, Any]]:
        """Send the prompt and return the raw list of per-message result objects."""
        logger.info(f"🧠 Calling scoring oracle ({self.model}), prompt {len(prompt)} chars")
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                response_format=RESPONSE_FORMAT,
            )
        except openai.AuthenticationError as e:
            logger.error(f"❌ Scoring oracle rejected the credential: {e}")
            raise ConfigurationError(f"Scoring oracle rejected the API key: {e}")
        except openai.APIError as e:
            logger.error(f"❌ Scoring oracle request failed: {e}")
            raise OracleTransportError(f"Scoring oracle request failed: {e}")

        if not response or not response.choices:
            raise OracleResponseError("Empty response from the scoring oracle.")

        content = response.choices[0].message.content
        return parse_results(content)


def parse_results(content: Optional[str]) -> List[Dict[str, Any]]:
    parsed = parse_llm_json(content)
    if not isinstance(parsed, dict) or not isinstance(parsed.get("results"), list):
        raise OracleResponseError("Invalid response structure from the scoring oracle.")

    results = parsed["results"]
    for index, item in enumerate(results):
        if not isinstance(item, dict):
            raise OracleResponseError(f"Result {index} from the scoring oracle is not an object.")
        missing = [field for field in COMPONENT_SCORE_FIELDS if field not in item]
        if missing:
            raise OracleResponseError(f"Result {index} is missing scores: {', '.join(missing)}")
    return results
